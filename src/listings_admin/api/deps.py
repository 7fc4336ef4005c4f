"""Request dependencies shared by the API routers."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from fastapi import Header, HTTPException, Request, status

from listings_admin.services.guard import GuardDecision
from listings_admin.services.records import RecordManager
from listings_admin.services.session import SessionProvider

if TYPE_CHECKING:
    from listings_admin.containers import AppContainer


async def require_session(
    request: Request, x_auth_token: str | None = Header(default=None)
) -> AsyncIterator[SessionProvider]:
    """Resolve the caller's session and apply the access guard."""
    container: AppContainer = request.app.state.container
    provider = container.session_provider(x_auth_token)
    try:
        view = await provider.start()
        outcome = container.access_guard.evaluate(view)
        if outcome.decision is GuardDecision.LOADING:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
        if outcome.decision is GuardDecision.REDIRECT:
            raise HTTPException(
                status_code=status.HTTP_303_SEE_OTHER,
                headers={"Location": outcome.location or "/"},
            )
        if outcome.decision is GuardDecision.NOTHING:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
        yield provider
    finally:
        provider.teardown()


async def get_manager(kind: str, request: Request) -> AsyncIterator[RecordManager]:
    """Create a record manager for the requested listing type."""
    container: AppContainer = request.app.state.container
    manager = container.record_manager(kind)
    try:
        yield manager
    finally:
        manager.dispose()
