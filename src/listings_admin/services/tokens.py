"""Credential token storage."""

from dataclasses import dataclass
from typing import Protocol


class TokenStore(Protocol):
    """Storage for the persisted credential token."""

    def get_token(self) -> str | None:
        """Return the stored token, if any."""

    def set_token(self, token: str) -> None:
        """Persist a token."""

    def clear_token(self) -> None:
        """Forget the stored token."""


@dataclass
class InMemoryTokenStore(TokenStore):
    """Token store scoped to a single request or console."""

    token: str | None = None

    def get_token(self) -> str | None:
        return self.token

    def set_token(self, token: str) -> None:
        self.token = token

    def clear_token(self) -> None:
        self.token = None
