"""Domain models for staff authentication."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Authenticated staff member."""

    id: str
    email: str | None = None


@dataclass(frozen=True)
class AuthSession:
    """Result of a successful sign-in."""

    identity: Identity
    access_token: str


@dataclass
class SessionState:
    """Mutable session state owned by the session provider."""

    identity: Identity | None = None
    loading: bool = True
    initialized: bool = False
    error: Exception | None = None


@dataclass(frozen=True)
class SessionView:
    """Read-only view of the session exposed to consumers."""

    user: Identity | None
    loading: bool
    is_initialized: bool
    error: Exception | None
