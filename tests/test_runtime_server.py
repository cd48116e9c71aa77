"""Tests for graceful shutdown handling and the startup banner.

These tests validate the forced-exit timer armed by the first termination
signal, and the shutdown of a real backend process on SIGTERM.
"""

import os
import signal
import socket
import subprocess
import sys
import threading
import time
from pathlib import Path

import httpx
import pytest
import uvicorn
from fastapi import FastAPI

from showcase.runtime import GracefulShutdownServer, runtime_build_banner

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SHUTDOWN_TIMEOUT_SECONDS = 5.0


def _build_server(shutdown_timeout_seconds: float, exit_callback) -> GracefulShutdownServer:
    config = uvicorn.Config(FastAPI(), log_config=None)
    return GracefulShutdownServer(
        config,
        shutdown_timeout_seconds=shutdown_timeout_seconds,
        exit_callback=exit_callback,
    )


def test_runtime_server_forces_exit_after_timeout() -> None:
    """Invoke the exit callback with status 1 once the drain overruns.

    Raises:
        AssertionError: Raised when forced exit is not triggered.
    """

    exit_statuses: list[int] = []
    exited = threading.Event()

    def _record_exit(exit_status: int) -> None:
        exit_statuses.append(exit_status)
        exited.set()

    server = _build_server(0.05, _record_exit)

    server.handle_exit(signal.SIGTERM, None)

    assert server.should_exit is True
    assert exited.wait(timeout=5.0)
    assert exit_statuses == [1]


def test_runtime_server_arms_timer_only_once() -> None:
    """Keep the first timer when further signals arrive.

    Raises:
        AssertionError: Raised when a second timer is armed.
    """

    server = _build_server(60.0, lambda _status: None)

    server.handle_exit(signal.SIGTERM, None)
    first_timer = server.forced_exit_timer
    server.handle_exit(signal.SIGTERM, None)

    assert server.forced_exit_timer is first_timer
    server.runtime_cancel_forced_exit()


def test_runtime_server_cancel_prevents_forced_exit() -> None:
    """Skip forced exit when the drain completes in time.

    Raises:
        AssertionError: Raised when a cancelled timer still fires.
    """

    exit_statuses: list[int] = []
    server = _build_server(0.2, exit_statuses.append)

    server.handle_exit(signal.SIGINT, None)
    server.runtime_cancel_forced_exit()
    server.forced_exit_timer.join(timeout=1.0)

    assert exit_statuses == []


def test_runtime_server_cancel_without_signal_is_noop() -> None:
    """Allow cancellation before any signal was received.

    Raises:
        AssertionError: Raised when a timer exists without a signal.
    """

    server = _build_server(1.0, lambda _status: None)

    server.runtime_cancel_forced_exit()

    assert server.forced_exit_timer is None


def test_runtime_server_rejects_non_positive_timeout() -> None:
    """Raise for a zero shutdown timeout.

    Raises:
        AssertionError: Raised when invalid timeouts are accepted.
    """

    with pytest.raises(ValueError, match="shutdown_timeout_seconds must be positive"):
        _build_server(0.0, lambda _status: None)


def test_runtime_build_banner_lists_fields_in_order() -> None:
    """Render the title, a rule and one aligned line per field.

    Raises:
        AssertionError: Raised when banner layout drifts.
    """

    banner = runtime_build_banner("DevSecOps Backend API Server", {"Port": "3001", "Environment": "production"})
    lines = banner.splitlines()

    assert lines[0] == "DevSecOps Backend API Server"
    assert set(lines[1]) == {"-"}
    assert lines[2].split() == ["Port:", "3001"]
    assert lines[3].split() == ["Environment:", "production"]
    assert lines[2].index("3001") == lines[3].index("production")


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener_socket:
        listener_socket.bind(("127.0.0.1", 0))
        return listener_socket.getsockname()[1]


def _wait_until_serving(process: subprocess.Popen, base_url: str, timeout_seconds: float = 20.0) -> None:
    deadline = time.monotonic() + timeout_seconds
    while time.monotonic() < deadline:
        if process.poll() is not None:
            pytest.fail(f"backend exited during startup:\n{process.stdout.read()}")
        try:
            if httpx.get(f"{base_url}/health", timeout=0.5).status_code == 200:
                return
        except httpx.TransportError:
            time.sleep(0.1)
    pytest.fail("backend did not start serving in time")


@pytest.mark.skipif(sys.platform == "win32", reason="SIGTERM delivery requires a POSIX platform")
def test_backend_process_exits_cleanly_on_sigterm(tmp_path) -> None:
    """Drain, log and exit with status 0 within the shutdown timeout on SIGTERM.

    Raises:
        AssertionError: Raised when shutdown overruns or leaves the port open.
    """

    port = _free_port()
    base_url = f"http://127.0.0.1:{port}"
    environment = {
        **os.environ,
        "HOST": "127.0.0.1",
        "PORT": str(port),
        "NODE_ENV": "production",
        "LOG_LEVEL": "INFO",
        "SHUTDOWN_TIMEOUT_SECONDS": str(SHUTDOWN_TIMEOUT_SECONDS),
        "PYTHONUNBUFFERED": "1",
        "PYTHONPATH": os.pathsep.join(filter(None, [str(PROJECT_ROOT), os.environ.get("PYTHONPATH")])),
    }
    process = subprocess.Popen(
        [sys.executable, "-m", "showcase.main", "api"],
        cwd=tmp_path,
        env=environment,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    )
    try:
        _wait_until_serving(process, base_url)

        process.send_signal(signal.SIGTERM)
        exit_status = process.wait(timeout=SHUTDOWN_TIMEOUT_SECONDS)
        output = process.stdout.read()

        assert exit_status == 0, output
        assert "[SIGTERM] Graceful shutdown initiated..." in output
        assert "HTTP server closed" in output
        assert "Forced shutdown after timeout" not in output
        with pytest.raises(httpx.ConnectError):
            httpx.get(f"{base_url}/health", timeout=1.0)
    finally:
        if process.poll() is None:
            process.kill()
            process.wait()
        process.stdout.close()
