"""Supabase Auth adapter."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

from supabase import Client

from listings_admin.domain.auth import AuthSession, Identity
from listings_admin.services.session import AuthClient, SessionCallback, Subscription

ClientFactory = Callable[[], Client]


@dataclass
class SupabaseAuthClient(AuthClient):
    """Auth client backed by Supabase Auth.

    ``client`` is shared by every request and never holds a signed-in
    session: lookups and sign-outs pass the caller's token explicitly, and
    password sign-in runs on a fresh client from ``client_factory``.
    """

    client: Client
    client_factory: ClientFactory

    async def get_user(self, token: str) -> Identity | None:
        """Resolve the user for an access token."""
        # An empty jwt makes the SDK fall back to the client's stored session.
        if not token:
            return None
        response = await asyncio.to_thread(self.client.auth.get_user, token)
        if response is None or response.user is None:
            return None
        return _identity(response.user)

    def on_session_change(self, callback: SessionCallback) -> Subscription:
        """Forward auth state changes as identities."""

        def _listener(_event, session) -> None:  # type: ignore[no-untyped-def]
            user = getattr(session, "user", None)
            callback(_identity(user) if user is not None else None)

        return self.client.auth.on_auth_state_change(_listener)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Sign in with email and password."""
        session_client = self.client_factory()
        response = await asyncio.to_thread(
            session_client.auth.sign_in_with_password,
            {"email": email, "password": password},
        )
        if response.session is None or response.user is None:
            raise PermissionError("Sign-in returned no session")
        return AuthSession(
            identity=_identity(response.user),
            access_token=response.session.access_token,
        )

    async def sign_out(self, token: str) -> None:
        """Revoke the session behind an access token."""
        if not token:
            return
        await asyncio.to_thread(self.client.auth.admin.sign_out, token)


def _identity(user) -> Identity:  # type: ignore[no-untyped-def]
    return Identity(id=str(user.id), email=getattr(user, "email", None))
