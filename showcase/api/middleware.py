"""Backend API middleware for CORS origin checks and request body limits."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from showcase.domain import domain_utc_timestamp

logger = logging.getLogger(__name__)

API_CONTENT_SECURITY_POLICY = "; ".join(
    (
        "default-src 'self'",
        "script-src 'self'",
        "style-src 'self'",
        "img-src 'self'",
        "connect-src 'self'",
        "font-src 'self'",
        "object-src 'none'",
        "media-src 'self'",
        "frame-src 'none'",
        "base-uri 'self'",
        "form-action 'self'",
        "frame-ancestors 'self'",
        "script-src-attr 'none'",
        "upgrade-insecure-requests",
    )
)

API_SECURITY_HEADERS: Mapping[str, str] = {
    "Content-Security-Policy": API_CONTENT_SECURITY_POLICY,
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "cross-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class RequestBodyTooLargeError(ValueError):
    """Raised when a streamed request body exceeds the configured limit.

    Attributes:
        limit_bytes: Configured maximum body size.
    """

    def __init__(self, limit_bytes: int):
        super().__init__(f"request body exceeds {limit_bytes} bytes")
        self.limit_bytes = limit_bytes


class CorsOriginGuardMiddleware(BaseHTTPMiddleware):
    """Reject cross-origin requests whose `Origin` is not allow-listed.

    Requests without an `Origin` header (server-to-server calls, load balancer health checks) are
    always accepted. A `*` entry in the allow-list accepts every origin.
    """

    def __init__(self, app: ASGIApp, allowed_origins: Sequence[str]):
        super().__init__(app)
        self._allowed_origins = frozenset(allowed_origins)
        self._allow_any_origin = "*" in self._allowed_origins

    def api_origin_allowed(self, origin: str | None) -> bool:
        """Return whether a request origin passes the allow-list.

        Args:
            origin: Raw `Origin` header value, if present.

        Returns:
            bool: True when the request may proceed.
        """

        if not origin:
            return True
        return self._allow_any_origin or origin in self._allowed_origins

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        origin = request.headers.get("origin")
        if self.api_origin_allowed(origin):
            return await call_next(request)

        logger.warning("Rejected cross-origin request from %s to %s", origin, request.url.path)
        payload = {
            "error": "Forbidden",
            "message": "Not allowed by CORS",
            "timestamp": domain_utc_timestamp(),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_403_FORBIDDEN)


class RequestBodyLimitMiddleware:
    """Reject request bodies larger than a fixed byte limit.

    Declared `Content-Length` values are checked up front. Streamed bodies are
    counted as they are received and raise `RequestBodyTooLargeError` once the
    limit is crossed.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        if max_body_bytes <= 0:
            raise ValueError("max_body_bytes must be positive")
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared_length = _middleware_declared_content_length(scope)
        if declared_length is not None and declared_length > self.max_body_bytes:
            response = JSONResponse(
                content=api_body_too_large_payload(self.max_body_bytes),
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            )
            await response(scope, receive, send)
            return

        received_bytes = 0

        async def limited_receive() -> Message:
            nonlocal received_bytes
            message = await receive()
            if message["type"] == "http.request":
                received_bytes += len(message.get("body", b""))
                if received_bytes > self.max_body_bytes:
                    raise RequestBodyTooLargeError(self.max_body_bytes)
            return message

        await self.app(scope, limited_receive, send)


def api_body_too_large_payload(limit_bytes: int) -> dict[str, str]:
    """Build the structured 413 payload.

    Args:
        limit_bytes: Configured maximum body size.

    Returns:
        dict[str, str]: Error payload.
    """

    return {
        "error": "Payload Too Large",
        "message": f"Request body exceeds {limit_bytes} bytes",
        "timestamp": domain_utc_timestamp(),
    }


def _middleware_declared_content_length(scope: Scope) -> int | None:
    for header_name, header_value in scope.get("headers", []):
        if header_name == b"content-length":
            try:
                return int(header_value)
            except ValueError:
                return None
    return None
