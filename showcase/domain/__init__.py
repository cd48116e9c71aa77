"""Domain models used across application layer boundaries."""

from .clock import domain_utc_timestamp
from .health import domain_evaluate_health_checks
from .models import ApiEndpoint, HealthChecks, ProcessSnapshot

__all__ = [
    "ApiEndpoint",
    "HealthChecks",
    "ProcessSnapshot",
    "domain_evaluate_health_checks",
    "domain_utc_timestamp",
]
