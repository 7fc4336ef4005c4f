"""Access guard for protected dashboard views."""

from dataclasses import dataclass
from enum import Enum

from listings_admin.domain.auth import SessionView


class GuardDecision(Enum):
    """What a protected view should do for the current session."""

    LOADING = "loading"
    REDIRECT = "redirect"
    RENDER = "render"
    NOTHING = "nothing"


@dataclass(frozen=True)
class GuardOutcome:
    decision: GuardDecision
    location: str | None = None


@dataclass(frozen=True)
class AccessGuard:
    """Gates protected views on the session provider state."""

    login_path: str = "/login"

    def evaluate(self, session: SessionView) -> GuardOutcome:
        """Return the guard decision for a session view."""
        if session.loading:
            return GuardOutcome(GuardDecision.LOADING)
        if session.user is not None:
            return GuardOutcome(GuardDecision.RENDER)
        if session.is_initialized:
            return GuardOutcome(GuardDecision.REDIRECT, location=self.login_path)
        return GuardOutcome(GuardDecision.NOTHING)
