"""Backend status API client and connection status checker for the site."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Final

import httpx

logger = logging.getLogger(__name__)

KNOWN_ENDPOINTS: Final[tuple[str, ...]] = ("health", "hello", "api/info")


class ConnectionStatus(str, Enum):
    """Lifecycle states of the backend status widget."""

    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"


class BackendStatusError(Exception):
    """Base exception for failed backend status calls."""


class BackendConnectionError(BackendStatusError, ConnectionError):
    """Transport-level failure while reaching the backend."""


class BackendTimeoutError(BackendStatusError, TimeoutError):
    """Backend call exceeded its timeout."""


class BackendResponseError(BackendStatusError, RuntimeError):
    """Backend answered with an unusable response.

    Attributes:
        status_code: HTTP status of the response, when one was received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class BackendResponse:
    """Decoded backend response.

    Attributes:
        status_code: HTTP status code.
        payload: Decoded JSON object.
    """

    status_code: int
    payload: dict[str, Any]

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class BackendApiClient:
    """Synchronous JSON client for the backend status API."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        transport: httpx.BaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize backend client.

        Args:
            base_url: Backend base URL without trailing slash.
            timeout_seconds: Timeout applied to each call.
            transport: Optional httpx transport, used by tests.
            clock: Monotonic time source for the call deadline.

        Raises:
            ValueError: Raised when base_url is blank or timeout is not positive.
        """

        if not base_url or not base_url.strip():
            raise ValueError("base_url must not be blank")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        self.base_url = base_url.strip().rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self._clock = clock

    def backend_get(self, endpoint: str) -> BackendResponse:
        """Issue one GET request against a backend endpoint.

        The timeout bounds the whole call. The body is streamed and the
        elapsed time is checked after every chunk, so a backend trickling
        bytes cannot stretch the call past the budget.

        Args:
            endpoint: Endpoint path relative to the base URL, such as `health`.

        Returns:
            BackendResponse: Status code and decoded JSON payload.

        Raises:
            BackendTimeoutError: Raised when the call exceeds the timeout.
            BackendConnectionError: Raised when the backend cannot be reached.
            BackendResponseError: Raised when the body is not a JSON object.
        """

        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        deadline = self._clock() + self._timeout_seconds
        body = bytearray()
        try:
            with httpx.Client(timeout=self._timeout_seconds, transport=self._transport) as client:
                with client.stream("GET", url, headers={"Content-Type": "application/json"}) as response:
                    for chunk in response.iter_bytes():
                        body.extend(chunk)
                        if self._clock() > deadline:
                            raise self._backend_timeout_error(url)
        except httpx.TimeoutException as error:
            raise self._backend_timeout_error(url) from error
        except httpx.HTTPError as error:
            raise BackendConnectionError(str(error) or f"Request to {url} failed") from error

        try:
            payload = json.loads(bytes(body))
        except ValueError as error:
            if not response.is_success:
                return BackendResponse(status_code=response.status_code, payload={})
            raise BackendResponseError(
                f"Invalid JSON from {url}: {response.status_code}",
                status_code=response.status_code,
            ) from error
        if not isinstance(payload, dict):
            raise BackendResponseError(f"Unexpected payload from {url}", status_code=response.status_code)
        return BackendResponse(status_code=response.status_code, payload=payload)

    def _backend_timeout_error(self, url: str) -> BackendTimeoutError:
        return BackendTimeoutError(f"Request to {url} timed out after {self._timeout_seconds:g}s")


@dataclass(frozen=True)
class BackendStatusSnapshot:
    """Immutable view of the checker state after a transition.

    Attributes:
        status: Current connection status.
        backend_url: Backend base URL being checked.
        health: Last health payload, if any.
        hello: Last hello payload, if any.
        error: Raw error message of the last failed check.
        last_checked: Completion time of the last check.
    """

    status: ConnectionStatus
    backend_url: str
    health: dict[str, Any] | None = None
    hello: dict[str, Any] | None = None
    error: str | None = None
    last_checked: datetime | None = None

    def status_as_payload(self) -> dict[str, Any]:
        """Serialize the snapshot for JSON responses."""

        return {
            "status": self.status.value,
            "backendUrl": self.backend_url,
            "health": self.health,
            "hello": self.hello,
            "error": self.error,
            "lastChecked": self.last_checked.isoformat() if self.last_checked else None,
        }


class BackendStatusChecker:
    """Run backend connectivity checks through the idle/connecting/connected/error states.

    Each check enters `connecting` first, calls `/health` then `/hello`
    sequentially, and finishes in `connected` or `error`. Failures are not
    retried. Listeners receive every snapshot as it is published.
    """

    def __init__(self, client: BackendApiClient, clock: Callable[[], datetime] | None = None):
        """Initialize checker in the `idle` state.

        Args:
            client: Backend API client.
            clock: Optional time source for `last_checked`.

        Raises:
            ValueError: Raised when client is None.
        """

        if client is None:
            raise ValueError("client must not be None")
        self._client = client
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._listeners: list[Callable[[BackendStatusSnapshot], None]] = []
        self._snapshot = BackendStatusSnapshot(status=ConnectionStatus.IDLE, backend_url=client.base_url)

    @property
    def snapshot(self) -> BackendStatusSnapshot:
        return self._snapshot

    def status_add_listener(self, listener: Callable[[BackendStatusSnapshot], None]) -> None:
        """Register a callback invoked on every state transition."""

        self._listeners.append(listener)

    def status_check(self) -> BackendStatusSnapshot:
        """Run one connectivity check against the backend.

        Returns:
            BackendStatusSnapshot: Final `connected` or `error` snapshot.
        """

        previous = self._snapshot
        self._status_publish(
            BackendStatusSnapshot(
                status=ConnectionStatus.CONNECTING,
                backend_url=previous.backend_url,
                health=previous.health,
                hello=previous.hello,
                last_checked=previous.last_checked,
            )
        )

        health_payload = previous.health
        try:
            health_response = self._client.backend_get("health")
            if not health_response.ok:
                raise BackendResponseError(
                    f"Health check failed: {health_response.status_code}",
                    status_code=health_response.status_code,
                )
            health_payload = health_response.payload

            hello_response = self._client.backend_get("hello")
            if not hello_response.ok:
                raise BackendResponseError(
                    f"Hello endpoint failed: {hello_response.status_code}",
                    status_code=hello_response.status_code,
                )
        except BackendStatusError as error:
            return self._status_publish(
                BackendStatusSnapshot(
                    status=ConnectionStatus.ERROR,
                    backend_url=previous.backend_url,
                    health=health_payload,
                    hello=previous.hello,
                    error=str(error) or "Unknown error occurred",
                    last_checked=self._clock(),
                )
            )

        return self._status_publish(
            BackendStatusSnapshot(
                status=ConnectionStatus.CONNECTED,
                backend_url=previous.backend_url,
                health=health_payload,
                hello=hello_response.payload,
                last_checked=self._clock(),
            )
        )

    def _status_publish(self, snapshot: BackendStatusSnapshot) -> BackendStatusSnapshot:
        self._snapshot = snapshot
        for listener in self._listeners:
            listener(snapshot)
        return snapshot


def status_log_transition(snapshot: BackendStatusSnapshot) -> None:
    """Log one checker state transition; failed checks log at warning level."""

    if snapshot.status is ConnectionStatus.ERROR:
        logger.warning("Backend status %s for %s: %s", snapshot.status.value, snapshot.backend_url, snapshot.error)
        return
    logger.info("Backend status %s for %s", snapshot.status.value, snapshot.backend_url)
