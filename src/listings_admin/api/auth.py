"""Sign-in and sign-out endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from listings_admin.api.deps import require_session
from listings_admin.api.models import LoginRequest
from listings_admin.services.session import SessionProvider

if TYPE_CHECKING:
    from listings_admin.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])
_logger = logging.getLogger(__name__)


@router.post("/login")
async def login(payload: LoginRequest, request: Request) -> dict[str, object]:
    """Exchange email and password for a credential token."""
    container: AppContainer = request.app.state.container
    provider = container.session_provider(None)
    try:
        identity = await provider.sign_in(payload.email, payload.password)
        token = provider.token_store.get_token()
    except Exception as exc:
        _logger.warning("Sign-in failed: email=%s error=%s", payload.email, exc)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED) from exc
    finally:
        provider.teardown()
    return {"token": token, "user": {"id": identity.id, "email": identity.email}}


@router.post("/logout")
async def logout(
    provider: SessionProvider = Depends(require_session),
) -> dict[str, str]:
    """End the caller's session."""
    await provider.sign_out()
    return {"status": "signed_out"}


@router.get("/me")
async def me(provider: SessionProvider = Depends(require_session)) -> dict[str, object]:
    """Return the signed-in identity."""
    user = provider.user
    return {"id": user.id if user else None, "email": user.email if user else None}
