"""HTTP middleware shared by the backend API and the marketing site."""

from __future__ import annotations

import logging
from typing import Mapping

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach a fixed set of security headers to every response.

    Headers already set by a handler are left untouched.
    """

    def __init__(self, app: ASGIApp, headers: Mapping[str, str]):
        super().__init__(app)
        self._headers = dict(headers)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for header_name, header_value in self._headers.items():
            response.headers.setdefault(header_name, header_value)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path and client address of each request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        client_host = request.client.host if request.client else "-"
        logger.info("%s %s - %s", request.method, request.url.path, client_host)
        return await call_next(request)
