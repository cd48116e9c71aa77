"""Health endpoint router reporting process liveness metadata."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from showcase.config import ApiSettings
from showcase.domain import domain_evaluate_health_checks, domain_utc_timestamp
from showcase.runtime import ProcessMetricsPort


def api_create_health_router(settings: ApiSettings, process_metrics: ProcessMetricsPort) -> APIRouter:
    """Create health-check router with uptime and memory checks.

    Args:
        settings: Runtime settings for service identity and memory ceiling.
        process_metrics: Runtime-layer process metadata service.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if process_metrics is None:
        raise ValueError("process_metrics must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return process health state for load balancers and orchestrators.

        Returns:
            JSONResponse: Health payload computed from the current process snapshot.

        Raises:
            RuntimeError: Raised when process metadata cannot be read.
        """

        snapshot = process_metrics.runtime_process_snapshot()
        checks = domain_evaluate_health_checks(
            snapshot=snapshot,
            memory_ceiling_bytes=settings.memory_warning_threshold_bytes,
        )
        payload = {
            "status": "healthy",
            "timestamp": domain_utc_timestamp(),
            "service": settings.service_name,
            "version": settings.app_version,
            "uptime": snapshot.uptime_seconds,
            "environment": settings.node_env,
            "checks": {
                "memory": checks.memory,
                "uptime": checks.uptime,
            },
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
