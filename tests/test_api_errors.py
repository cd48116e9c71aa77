"""Tests for structured backend error responses.

These tests validate the not-found mapping for unknown routes and
unsupported methods, and the environment-gated 500 message.
"""

import logging

from fastapi.testclient import TestClient

from showcase.api import create_api_application
from showcase.config import ApiSettings
from showcase.domain import ProcessSnapshot


class _HealthyProcessMetrics:
    """Test double returning a fixed process snapshot."""

    def runtime_process_snapshot(self) -> ProcessSnapshot:
        return ProcessSnapshot(uptime_seconds=1.0, memory_used_bytes=1, platform="linux", runtime_version="3.12.1")


class _FailingProcessMetrics:
    """Test double that simulates unreadable process metadata."""

    def runtime_process_snapshot(self) -> ProcessSnapshot:
        """Raise deterministic runtime error.

        Raises:
            RuntimeError: Always raised by this test double.
        """

        raise RuntimeError("process metrics are unavailable")


def _build_settings(node_env: str) -> ApiSettings:
    return ApiSettings(_env_file=None, port=3001, node_env=node_env, allowed_origins="http://localhost:3000")


def test_api_unknown_route_returns_structured_not_found() -> None:
    """Return HTTP 404 naming the method and path.

    Raises:
        AssertionError: Raised when response does not match expected payload.
    """

    client = TestClient(create_api_application(_build_settings("production"), _HealthyProcessMetrics()))

    response = client.get("/does-not-exist")

    assert response.status_code == 404
    payload = response.json()
    assert payload["error"] == "Not Found"
    assert payload["message"] == "Cannot GET /does-not-exist"
    assert payload["timestamp"].endswith("Z")


def test_api_unsupported_method_on_known_route_returns_not_found() -> None:
    """Map a method mismatch on an existing path to the same 404 shape.

    Raises:
        AssertionError: Raised when 405 leaks through.
    """

    client = TestClient(create_api_application(_build_settings("production"), _HealthyProcessMetrics()))

    response = client.delete("/health")

    assert response.status_code == 404
    assert response.json()["message"] == "Cannot DELETE /health"


def test_api_documentation_routes_are_disabled() -> None:
    """Serve no generated documentation endpoints.

    Raises:
        AssertionError: Raised when documentation routes are reachable.
    """

    client = TestClient(create_api_application(_build_settings("production"), _HealthyProcessMetrics()))

    assert client.get("/docs").status_code == 404
    assert client.get("/openapi.json").status_code == 404


def test_api_unhandled_error_hides_detail_in_production() -> None:
    """Return the generic 500 message outside development.

    Raises:
        AssertionError: Raised when error detail leaks in production.
    """

    application = create_api_application(_build_settings("production"), _FailingProcessMetrics())
    client = TestClient(application, raise_server_exceptions=False)

    response = client.get("/health")

    assert response.status_code == 500
    payload = response.json()
    assert payload["error"] == "Internal Server Error"
    assert payload["message"] == "An unexpected error occurred"
    assert payload["timestamp"].endswith("Z")


def test_api_unhandled_error_exposes_detail_in_development() -> None:
    """Return the exception text as the 500 message in development.

    Raises:
        AssertionError: Raised when development detail is missing.
    """

    application = create_api_application(_build_settings("development"), _FailingProcessMetrics())
    client = TestClient(application, raise_server_exceptions=False)

    response = client.get("/hello")

    assert response.status_code == 500
    assert response.json()["message"] == "process metrics are unavailable"


def test_api_unhandled_error_keeps_security_and_cors_headers() -> None:
    """Send the structured 500 through the security and CORS middleware.

    Raises:
        AssertionError: Raised when the 500 response lacks headers.
    """

    application = create_api_application(_build_settings("production"), _FailingProcessMetrics())
    client = TestClient(application, raise_server_exceptions=False)

    response = client.get("/health", headers={"Origin": "http://localhost:3000"})

    assert response.status_code == 500
    assert response.json()["message"] == "An unexpected error occurred"
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "SAMEORIGIN"
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_api_unhandled_error_is_logged(caplog) -> None:
    """Log unhandled route failures at error level with the request line.

    Raises:
        AssertionError: Raised when the failure is not logged.
    """

    application = create_api_application(_build_settings("production"), _FailingProcessMetrics())
    client = TestClient(application, raise_server_exceptions=False)

    with caplog.at_level(logging.ERROR, logger="showcase.api.errors"):
        client.get("/hello")

    assert any(
        record.levelno == logging.ERROR and "GET /hello" in record.getMessage() for record in caplog.records
    )
