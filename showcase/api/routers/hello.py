"""Hello endpoint router returning service and container metadata."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from showcase.config import ApiSettings
from showcase.domain import domain_utc_timestamp
from showcase.runtime import ProcessMetricsPort

HELLO_MESSAGE = "Hello from DevSecOps Backend!"


def api_create_hello_router(settings: ApiSettings, process_metrics: ProcessMetricsPort) -> APIRouter:
    """Create hello router.

    Args:
        settings: Runtime settings for service identity.
        process_metrics: Runtime-layer process metadata service.

    Returns:
        APIRouter: Router exposing `/hello` endpoint.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if process_metrics is None:
        raise ValueError("process_metrics must not be None")

    router = APIRouter(tags=["hello"])

    @router.get("/hello")
    def api_hello() -> JSONResponse:
        snapshot = process_metrics.runtime_process_snapshot()
        payload = {
            "message": HELLO_MESSAGE,
            "timestamp": domain_utc_timestamp(),
            "service": settings.service_name,
            "version": settings.app_version,
            "environment": settings.node_env,
            "securityHeaders": "enabled",
            "containerInfo": {
                "hostname": settings.hostname,
                "platform": snapshot.platform,
                "pythonVersion": snapshot.runtime_version,
            },
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
