"""Uvicorn server wrapper with bounded graceful shutdown.

On SIGTERM or SIGINT uvicorn stops accepting connections and drains in-flight
requests. `GracefulShutdownServer` additionally arms a forced-exit timer on the
first signal so a stalled drain cannot keep the process alive past the
configured timeout.
"""

from __future__ import annotations

import logging
import os
import signal
import threading
from types import FrameType
from typing import Callable, Mapping

import uvicorn
from fastapi import FastAPI

logger = logging.getLogger(__name__)

FORCED_EXIT_STATUS = 1


class GracefulShutdownServer(uvicorn.Server):
    """Uvicorn server that force-exits when graceful shutdown overruns."""

    def __init__(
        self,
        config: uvicorn.Config,
        shutdown_timeout_seconds: float = 10.0,
        exit_callback: Callable[[int], None] = os._exit,
    ):
        """Initialize server wrapper.

        Args:
            config: Uvicorn server configuration.
            shutdown_timeout_seconds: Delay between the first exit signal and forced exit.
            exit_callback: Process exit function invoked with the forced-exit status.

        Raises:
            ValueError: Raised when shutdown_timeout_seconds is not positive.
        """

        if shutdown_timeout_seconds <= 0:
            raise ValueError("shutdown_timeout_seconds must be positive")
        super().__init__(config)
        self._shutdown_timeout_seconds = shutdown_timeout_seconds
        self._exit_callback = exit_callback
        self._timer_lock = threading.Lock()
        self.forced_exit_timer: threading.Timer | None = None

    def handle_exit(self, sig: int, frame: FrameType | None) -> None:
        """Start graceful shutdown and arm the forced-exit timer once.

        Args:
            sig: Received signal number.
            frame: Current stack frame, unused.
        """

        with self._timer_lock:
            if self.forced_exit_timer is None:
                logger.info("[%s] Graceful shutdown initiated...", _runtime_signal_name(sig))
                self.forced_exit_timer = threading.Timer(self._shutdown_timeout_seconds, self._runtime_force_exit)
                self.forced_exit_timer.daemon = True
                self.forced_exit_timer.start()
        super().handle_exit(sig, frame)

    async def shutdown(self, sockets=None) -> None:
        await super().shutdown(sockets=sockets)
        self.runtime_cancel_forced_exit()
        logger.info("HTTP server closed")

    def runtime_cancel_forced_exit(self) -> None:
        """Cancel a pending forced-exit timer after a completed drain."""

        with self._timer_lock:
            if self.forced_exit_timer is not None:
                self.forced_exit_timer.cancel()

    def _runtime_force_exit(self) -> None:
        logger.error("Forced shutdown after timeout")
        self._exit_callback(FORCED_EXIT_STATUS)


def _runtime_signal_name(sig: int) -> str:
    try:
        return signal.Signals(sig).name
    except ValueError:
        return str(sig)


def runtime_build_banner(title: str, fields: Mapping[str, str]) -> str:
    """Render the startup banner logged when a server begins listening.

    Args:
        title: Banner heading.
        fields: Ordered label/value pairs.

    Returns:
        str: Multi-line banner text.
    """

    label_width = max([len(label) for label in fields] + [0]) + 1
    lines = [title, "-" * max(len(title), 40)]
    lines.extend(f"{(label + ':').ljust(label_width + 1)} {value}" for label, value in fields.items())
    return "\n".join(lines)


def runtime_serve(
    application: FastAPI,
    host: str,
    port: int,
    shutdown_timeout_seconds: float,
    banner_title: str,
    banner_fields: Mapping[str, str],
) -> None:
    """Serve an application until a termination signal completes shutdown.

    Args:
        application: ASGI application to serve.
        host: Bind interface.
        port: Bind port.
        shutdown_timeout_seconds: Graceful drain budget before forced exit.
        banner_title: Heading of the startup banner.
        banner_fields: Label/value pairs logged at startup.
    """

    config = uvicorn.Config(
        application,
        host=host,
        port=port,
        server_header=False,
        access_log=False,
        log_config=None,
        timeout_graceful_shutdown=max(int(shutdown_timeout_seconds), 1),
    )
    server = GracefulShutdownServer(config, shutdown_timeout_seconds=shutdown_timeout_seconds)
    # uvicorn re-delivers the captured signal once the drain completes; the
    # handlers installed here turn that into a clean exit with status 0.
    for handled_signal in (signal.SIGINT, signal.SIGTERM):
        signal.signal(handled_signal, _runtime_exit_after_drain)
    logger.info("\n%s", runtime_build_banner(banner_title, {"Status": "Running", "Port": str(port), **banner_fields}))
    server.run()


def _runtime_exit_after_drain(_sig: int, _frame: FrameType | None) -> None:
    raise SystemExit(0)
