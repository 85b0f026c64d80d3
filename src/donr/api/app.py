"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from donr.api.centers import router as centers_router
from donr.api.donations import router as donations_router
from donr.api.food_requests import router as food_requests_router
from donr.api.notifications import router as notifications_router
from donr.api.users import router as users_router
from donr.app_logging import configure_logging
from donr.containers import AppContainer
from donr.domain.errors import DonrError, UpstreamError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(users_router)
    app.include_router(donations_router)
    app.include_router(food_requests_router)
    app.include_router(centers_router)
    app.include_router(notifications_router)

    @app.exception_handler(DonrError)
    async def handle_domain_error(request: Request, exc: DonrError) -> JSONResponse:
        if isinstance(exc, UpstreamError):
            logger.error(
                "Upstream failure on %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
            )
            return _error_response(container, exc.status_code, exc.message, exc)
        logger.warning(
            "Request rejected on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
        )
        return _error_response(container, exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if exc.status_code == 404 and message == "Not Found":
            message = "Route not found"
        return _error_response(container, exc.status_code, message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(container, 400, "Invalid request payload", exc)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path
        )
        return _error_response(container, 500, "Internal server error", exc)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_response(
    container: AppContainer,
    status_code: int,
    message: str,
    exc: Exception | None = None,
) -> JSONResponse:
    """Build the structured failure body, with debug detail in local envs."""
    content: dict[str, object] = {"success": False, "error": message}
    if exc is not None and container.settings.debug:
        content["debug"] = f"{type(exc).__name__}: {exc}".strip()
    return JSONResponse(status_code=status_code, content=content)
