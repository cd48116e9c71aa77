"""Runtime layer for process metrics, logging, shared middleware and server lifecycle."""

from .interfaces import ProcessMetricsPort
from .logging_setup import runtime_configure_logging
from .middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from .process_metrics import PsutilProcessMetricsService
from .server import GracefulShutdownServer, runtime_build_banner, runtime_serve

__all__ = [
    "GracefulShutdownServer",
    "ProcessMetricsPort",
    "PsutilProcessMetricsService",
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "runtime_build_banner",
    "runtime_configure_logging",
    "runtime_serve",
]
