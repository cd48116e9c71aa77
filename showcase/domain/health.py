"""Health check evaluation for process snapshots."""

from .models import HealthChecks, ProcessSnapshot


def domain_evaluate_health_checks(snapshot: ProcessSnapshot, memory_ceiling_bytes: int) -> HealthChecks:
    """Evaluate memory and uptime checks for one process snapshot.

    Args:
        snapshot: Current process metadata.
        memory_ceiling_bytes: Memory usage at or above this value is flagged.

    Returns:
        HealthChecks: Check outcomes for the health payload.

    Raises:
        ValueError: Raised when memory_ceiling_bytes is not positive.
    """

    if memory_ceiling_bytes <= 0:
        raise ValueError("memory_ceiling_bytes must be positive")

    memory_status = "ok" if snapshot.memory_used_bytes < memory_ceiling_bytes else "warning"
    uptime_status = "ok" if snapshot.uptime_seconds > 0 else "error"
    return HealthChecks(memory=memory_status, uptime=uptime_status)
