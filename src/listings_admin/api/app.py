"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from listings_admin.api.auth import router as auth_router
from listings_admin.api.console import router as console_router
from listings_admin.api.dashboard import router as dashboard_router
from listings_admin.app_logging import configure_logging
from listings_admin.containers import AppContainer
from listings_admin.domain.errors import (
    BackendError,
    DeleteNotConfirmedError,
    RecordNotFoundError,
    UnknownEntityKindError,
    ValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(console_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(ValidationError)
    async def validation_error(_request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc), "errors": exc.field_errors},
        )

    @app.exception_handler(BackendError)
    async def backend_error(request: Request, exc: BackendError) -> JSONResponse:
        logger.warning("Backend request failed: path=%s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
        )

    @app.exception_handler(UnknownEntityKindError)
    @app.exception_handler(RecordNotFoundError)
    async def not_found(_request: Request, exc: LookupError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(DeleteNotConfirmedError)
    async def not_confirmed(
        _request: Request, exc: DeleteNotConfirmedError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
        )

    return app
