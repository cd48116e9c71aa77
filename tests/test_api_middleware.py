"""Tests for backend security middleware.

These tests validate origin allow-listing, CORS response headers, security
headers, request body limits, compression and request logging.
"""

import logging

from fastapi.testclient import TestClient

from showcase.api import create_api_application
from showcase.api.middleware import CorsOriginGuardMiddleware
from showcase.config import ApiSettings
from showcase.domain import ProcessSnapshot

ALLOWED_ORIGIN = "http://localhost:3000"


class _ProcessMetricsStub:
    """Test double returning a fixed process snapshot."""

    def runtime_process_snapshot(self) -> ProcessSnapshot:
        return ProcessSnapshot(uptime_seconds=1.0, memory_used_bytes=1, platform="linux", runtime_version="3.12.1")


def _build_client(allowed_origins: str = ALLOWED_ORIGIN, **overrides) -> TestClient:
    settings = ApiSettings(
        _env_file=None,
        port=3001,
        node_env="production",
        allowed_origins=allowed_origins,
        **overrides,
    )
    return TestClient(create_api_application(settings, _ProcessMetricsStub()))


def test_api_allows_request_from_listed_origin() -> None:
    """Echo an allow-listed origin with credentials support.

    Raises:
        AssertionError: Raised when CORS headers are missing.
    """

    response = _build_client().get("/health", headers={"Origin": ALLOWED_ORIGIN})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
    assert response.headers["access-control-allow-credentials"] == "true"


def test_api_rejects_request_from_unlisted_origin() -> None:
    """Return HTTP 403 with a structured CORS rejection.

    Raises:
        AssertionError: Raised when an unlisted origin is served.
    """

    response = _build_client().get("/health", headers={"Origin": "https://evil.example"})

    assert response.status_code == 403
    payload = response.json()
    assert payload["error"] == "Forbidden"
    assert payload["message"] == "Not allowed by CORS"
    assert response.headers["x-content-type-options"] == "nosniff"


def test_api_accepts_requests_without_origin() -> None:
    """Serve server-to-server requests that carry no Origin header.

    Raises:
        AssertionError: Raised when origin-less requests are rejected.
    """

    response = _build_client().get("/hello")

    assert response.status_code == 200
    assert "access-control-allow-origin" not in response.headers


def test_api_wildcard_allow_list_accepts_any_origin() -> None:
    """Accept every origin when the allow-list contains `*`.

    Raises:
        AssertionError: Raised when a wildcard list rejects an origin.
    """

    response = _build_client(allowed_origins="*").get("/health", headers={"Origin": "https://anywhere.example"})

    assert response.status_code == 200


def test_api_answers_preflight_for_listed_origin() -> None:
    """Answer CORS preflight with allowed methods and cache lifetime.

    Raises:
        AssertionError: Raised when preflight headers are missing.
    """

    response = _build_client().options(
        "/health",
        headers={"Origin": ALLOWED_ORIGIN, "Access-Control-Request-Method": "GET"},
    )

    assert response.status_code == 200
    assert "GET" in response.headers["access-control-allow-methods"]
    assert response.headers["access-control-max-age"] == "86400"


def test_cors_origin_guard_checks_allow_list() -> None:
    """Accept listed or absent origins and reject everything else.

    Raises:
        AssertionError: Raised when guard decisions are wrong.
    """

    guard = CorsOriginGuardMiddleware(app=lambda scope, receive, send: None, allowed_origins=[ALLOWED_ORIGIN])

    assert guard.api_origin_allowed(None) is True
    assert guard.api_origin_allowed("") is True
    assert guard.api_origin_allowed(ALLOWED_ORIGIN) is True
    assert guard.api_origin_allowed("http://localhost:3001") is False


def test_api_sets_security_headers() -> None:
    """Attach the hardened header set to every response.

    Raises:
        AssertionError: Raised when a security header is missing.
    """

    response = _build_client().get("/health")

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "SAMEORIGIN"
    assert response.headers["strict-transport-security"].startswith("max-age=31536000")
    assert "default-src 'self'" in response.headers["content-security-policy"]
    assert response.headers["referrer-policy"] == "no-referrer"
    assert "x-powered-by" not in response.headers


def test_api_sets_security_headers_on_not_found() -> None:
    """Attach security headers to error responses as well.

    Raises:
        AssertionError: Raised when 404 responses lack headers.
    """

    response = _build_client().get("/missing")

    assert response.status_code == 404
    assert response.headers["x-content-type-options"] == "nosniff"


def test_api_rejects_oversized_request_body() -> None:
    """Return HTTP 413 when the declared body exceeds the limit.

    Raises:
        AssertionError: Raised when oversized bodies are accepted.
    """

    response = _build_client(request_body_limit_bytes=1024).post("/health", content=b"x" * 2048)

    assert response.status_code == 413
    assert response.json()["error"] == "Payload Too Large"


def test_api_compresses_large_responses() -> None:
    """Gzip responses above the compression threshold only.

    Raises:
        AssertionError: Raised when compression is applied incorrectly.
    """

    client = _build_client()
    client.app.add_api_route("/large", lambda: {"data": "x" * 4096})

    large_response = client.get("/large", headers={"Accept-Encoding": "gzip"})
    small_response = client.get("/api/info", headers={"Accept-Encoding": "gzip"})

    assert large_response.headers["content-encoding"] == "gzip"
    assert large_response.json()["data"] == "x" * 4096
    assert "content-encoding" not in small_response.headers


def test_api_logs_each_request(caplog) -> None:
    """Log method, path and client address for every request.

    Raises:
        AssertionError: Raised when the request line is missing.
    """

    client = _build_client()

    with caplog.at_level(logging.INFO, logger="showcase.runtime.middleware"):
        client.get("/health")

    assert "GET /health - testclient" in caplog.messages
