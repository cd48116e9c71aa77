"""Typed domain models shared across runtime layers.

This module provides simple data contracts for passing process metadata from
the runtime layer to the API response builders.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessSnapshot:
    """Point-in-time view of the serving process.

    Attributes:
        uptime_seconds: Seconds elapsed since the process started.
        memory_used_bytes: Resident memory currently used by the process.
        platform: Operating system platform identifier.
        runtime_version: Python interpreter version string.
    """

    uptime_seconds: float
    memory_used_bytes: int
    platform: str
    runtime_version: str


@dataclass(frozen=True)
class HealthChecks:
    """Individual health check outcomes reported by the health endpoint.

    Attributes:
        memory: `ok` below the memory ceiling, otherwise `warning`.
        uptime: `ok` once the process has a positive uptime, otherwise `error`.
    """

    memory: str
    uptime: str


@dataclass(frozen=True)
class ApiEndpoint:
    """One entry of the API endpoint directory.

    Attributes:
        method: HTTP method.
        path: Route path.
        description: Human-readable endpoint summary.
    """

    method: str
    path: str
    description: str
