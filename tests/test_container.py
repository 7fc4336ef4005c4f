"""Tests for container wiring."""

from listings_admin.containers import build_container
from listings_admin.domain.listings import RENTAL


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    manager = container.record_manager("rental")

    assert manager.kind is RENTAL
    assert container.access_guard.login_path == "/login"
    assert container.session_provider("token").token_store.get_token() == "token"


def test_sign_in_client_is_separate_from_shared_client(settings) -> None:
    container = build_container(settings)
    auth_client = container.auth_client

    session_client = auth_client.client_factory()

    assert session_client is not auth_client.client
    assert session_client is not auth_client.client_factory()
    assert session_client.auth is not auth_client.client.auth
