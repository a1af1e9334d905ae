"""Exception handlers that turn errors into JSON responses.

Every error body carries an ``error`` field. Internal detail is only exposed
in the development environment.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from flodaz_community.core.errors import AppError, UnknownError
from flodaz_community.core.settings import Settings

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = "Route not found"


def _describe_validation(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else str(message)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Install the application's error-to-response mapping."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _describe_validation(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code in {
            status.HTTP_404_NOT_FOUND,
            status.HTTP_405_METHOD_NOT_ALLOWED,
        } and exc.detail in {"Not Found", "Method Not Allowed"}:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"error": ROUTE_NOT_FOUND},
            )
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        unknown = UnknownError(str(exc) or None)
        return JSONResponse(
            status_code=unknown.status_code,
            content={
                "error": UnknownError.public_message,
                "message": unknown.message if settings.is_development else "Internal server error",
            },
        )
