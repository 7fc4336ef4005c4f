"""Session provider tracking the authenticated staff identity."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from listings_admin.domain.auth import AuthSession, Identity, SessionState, SessionView
from listings_admin.services.tokens import TokenStore

_logger = logging.getLogger(__name__)

SessionCallback = Callable[[Identity | None], None]


class Subscription(Protocol):
    """Handle for a session-change subscription."""

    def unsubscribe(self) -> None:
        """Stop receiving session-change events."""


class AuthClient(Protocol):
    """Interface for the backend auth service."""

    async def get_user(self, token: str) -> Identity | None:
        """Resolve the identity for a credential token."""

    def on_session_change(self, callback: SessionCallback) -> Subscription:
        """Subscribe to session transitions."""

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Sign in and return the new session."""

    async def sign_out(self, token: str) -> None:
        """Revoke the session behind a credential token."""


@dataclass
class SessionProvider:
    """Resolves and tracks the current identity.

    The identity is only surfaced once the provider has initialized, either by
    the initial token lookup or by a session-change event. After ``teardown``
    no late completion or event touches the state.
    """

    auth_client: AuthClient
    token_store: TokenStore
    state: SessionState = field(default_factory=SessionState)
    _subscription: Subscription | None = field(default=None, init=False, repr=False)
    _mounted: bool = field(default=False, init=False, repr=False)

    @property
    def user(self) -> Identity | None:
        return self.state.identity if self.state.initialized else None

    def view(self) -> SessionView:
        """Return the read-only session view."""
        return SessionView(
            user=self.user,
            loading=self.state.loading,
            is_initialized=self.state.initialized,
            error=self.state.error,
        )

    async def start(self) -> SessionView:
        """Subscribe to session changes and resolve the initial identity."""
        self._mounted = True
        self._subscription = self.auth_client.on_session_change(
            self._handle_session_change
        )
        await self._load_initial_session()
        return self.view()

    async def _load_initial_session(self) -> None:
        token = self.token_store.get_token()
        try:
            if not token:
                raise PermissionError("No credential token")
            identity = await self.auth_client.get_user(token)
            if identity is None:
                raise PermissionError("No user for credential token")
        except Exception as exc:
            if not self._mounted:
                return
            _logger.info("Session lookup failed: %s", exc)
            self.state = SessionState(
                identity=None, loading=False, initialized=True, error=exc
            )
            return
        if self._mounted:
            self.state = SessionState(
                identity=identity, loading=False, initialized=True, error=None
            )

    def _handle_session_change(self, identity: Identity | None) -> None:
        if not self._mounted:
            return
        self.state = SessionState(
            identity=identity,
            loading=self.state.loading,
            initialized=True,
            error=self.state.error,
        )

    async def sign_in(self, email: str, password: str) -> Identity:
        """Sign in with a password and persist the credential token."""
        session = await self.auth_client.sign_in_with_password(email, password)
        self.token_store.set_token(session.access_token)
        if self._mounted:
            self.state = SessionState(
                identity=session.identity, loading=False, initialized=True
            )
        _logger.info("Signed in: user=%s", session.identity.id)
        return session.identity

    async def sign_out(self) -> None:
        """Sign out and forget the stored credential token."""
        token = self.token_store.get_token()
        if token:
            await self.auth_client.sign_out(token)
        self.token_store.clear_token()
        if self._mounted:
            self.state = SessionState(identity=None, loading=False, initialized=True)

    def teardown(self) -> None:
        """Unsubscribe and ignore any later state updates."""
        self._mounted = False
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self.state = SessionState(identity=None, loading=False, initialized=False)
