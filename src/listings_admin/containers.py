"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import Client, ClientOptions, create_client

from listings_admin.adapters.supabase_auth_client import SupabaseAuthClient
from listings_admin.adapters.supabase_record_repository import (
    SupabaseRecordRepository,
)
from listings_admin.adapters.supabase_storage import SupabaseObjectStorage
from listings_admin.config import Settings
from listings_admin.domain.listings import get_entity_kind
from listings_admin.services.guard import AccessGuard
from listings_admin.services.media import MediaAttachmentService
from listings_admin.services.records import RecordManager, RecordRepository
from listings_admin.services.session import AuthClient, SessionProvider
from listings_admin.services.tokens import InMemoryTokenStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_client: AuthClient
    record_repository: RecordRepository
    media_service: MediaAttachmentService
    access_guard: AccessGuard

    def session_provider(self, token: str | None) -> SessionProvider:
        """Create a session provider for a credential token."""
        return SessionProvider(
            auth_client=self.auth_client,
            token_store=InMemoryTokenStore(token),
        )

    def record_manager(self, kind_key: str) -> RecordManager:
        """Create a record manager for an entity kind."""
        return RecordManager(
            kind=get_entity_kind(kind_key),
            repository=self.record_repository,
            media=self.media_service,
        )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )

    def session_client() -> Client:
        return create_client(
            resolved_settings.supabase_url,
            resolved_settings.supabase_key,
            ClientOptions(auto_refresh_token=False, persist_session=False),
        )

    return AppContainer(
        settings=resolved_settings,
        auth_client=SupabaseAuthClient(supabase_client, session_client),
        record_repository=SupabaseRecordRepository(supabase_client),
        media_service=MediaAttachmentService(SupabaseObjectStorage(supabase_client)),
        access_guard=AccessGuard(login_path=resolved_settings.login_path),
    )
