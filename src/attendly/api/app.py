"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from attendly.api.classes import router as classes_router
from attendly.api.profiles import router as profiles_router
from attendly.app_logging import configure_logging
from attendly.containers import AppContainer
from attendly.domain.errors import AttendlyError, InternalError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Attendly")
    app.state.container = container

    app.include_router(classes_router)
    app.include_router(profiles_router)

    @app.exception_handler(AttendlyError)
    async def attendly_error_handler(
        request: Request, exc: AttendlyError
    ) -> JSONResponse:
        if isinstance(exc, InternalError):
            logger.error(
                "Request failed: %s %s", request.method, request.url.path, exc_info=exc
            )
        return _failure(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _failure(exc.status_code, str(exc.detail), exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _failure(400, _describe_validation_error(exc))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error: %s %s", request.method, request.url.path)
        return _failure(500, "Internal server error")

    @app.get("/health")
    async def health(request: Request) -> dict[str, str]:
        """Simple health check endpoint."""
        state_container: AppContainer = request.app.state.container
        return {"status": "ok", "backend": state_container.backend.mode}

    return app


def _failure(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = str(first.get("msg", "Invalid value"))
    return f"{location}: {message}" if location else message
