"""Structured JSON error handlers for the backend API."""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from showcase.config import ApiSettings
from showcase.domain import domain_utc_timestamp

from .middleware import RequestBodyTooLargeError, api_body_too_large_payload

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def api_register_error_handlers(application: FastAPI, settings: ApiSettings) -> None:
    """Register not-found, payload and unhandled-error handlers.

    Unknown paths and unsupported methods on known paths both map to a
    structured 404. Unhandled exceptions map to a structured 500 whose message
    carries the exception text only in development mode. Route failures are
    caught by `UnhandledErrorMiddleware`; the application-level handler only
    sees failures raised by the outer middleware themselves.

    Args:
        application: Application receiving the handlers.
        settings: Runtime settings that gate error detail exposure.

    Raises:
        ValueError: Raised when application or settings is None.
    """

    if application is None:
        raise ValueError("application must not be None")
    if settings is None:
        raise ValueError("settings must not be None")

    @application.exception_handler(StarletteHTTPException)
    async def api_http_error(request: Request, error: StarletteHTTPException) -> JSONResponse:
        if error.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            payload = {
                "error": "Not Found",
                "message": f"Cannot {request.method} {request.url.path}",
                "timestamp": domain_utc_timestamp(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_404_NOT_FOUND)

        payload = {
            "error": _api_status_phrase(error.status_code),
            "message": str(error.detail),
            "timestamp": domain_utc_timestamp(),
        }
        return JSONResponse(content=payload, status_code=error.status_code, headers=error.headers)

    @application.exception_handler(RequestBodyTooLargeError)
    async def api_body_too_large(_request: Request, error: RequestBodyTooLargeError) -> JSONResponse:
        return JSONResponse(
            content=api_body_too_large_payload(error.limit_bytes),
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        )

    @application.exception_handler(Exception)
    async def api_unhandled_error(request: Request, error: Exception) -> JSONResponse:
        return api_internal_error_response(request, error, development_mode=settings.development_mode)


def _api_status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Turn exceptions escaping a route into the structured 500 response.

    Installed innermost so the response still passes through the security
    header and CORS middleware on its way out.
    """

    def __init__(self, app: ASGIApp, development_mode: bool):
        super().__init__(app)
        self._development_mode = development_mode

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as error:
            return api_internal_error_response(request, error, development_mode=self._development_mode)


def api_internal_error_response(request: Request, error: Exception, development_mode: bool) -> JSONResponse:
    """Log an unhandled exception and build the structured 500 response.

    Args:
        request: Request that failed.
        error: Exception raised while serving it.
        development_mode: Whether the exception text may be returned to the client.

    Returns:
        JSONResponse: 500 response with `error`, `message` and `timestamp`.
    """

    logger.error("[ERROR] %s %s: %s", request.method, request.url.path, error, exc_info=error)
    payload = {
        "error": "Internal Server Error",
        "message": str(error) if development_mode else UNEXPECTED_ERROR_MESSAGE,
        "timestamp": domain_utc_timestamp(),
    }
    return JSONResponse(content=payload, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
