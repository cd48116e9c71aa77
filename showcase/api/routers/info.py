"""API information router listing the available endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from showcase.config import ApiSettings
from showcase.domain import ApiEndpoint

API_ENDPOINTS = (
    ApiEndpoint(method="GET", path="/health", description="Health check endpoint"),
    ApiEndpoint(method="GET", path="/hello", description="Hello world endpoint with metadata"),
    ApiEndpoint(method="GET", path="/api/info", description="API information and documentation"),
)


def api_create_info_router(settings: ApiSettings) -> APIRouter:
    """Create API information router.

    Args:
        settings: Runtime settings providing the reported version.

    Returns:
        APIRouter: Router exposing `/api/info` endpoint.

    Raises:
        ValueError: Raised when settings is None.
    """

    if settings is None:
        raise ValueError("settings must not be None")

    router = APIRouter(prefix="/api", tags=["info"])

    @router.get("/info")
    def api_info() -> JSONResponse:
        """Return the static endpoint directory and security summary.

        Returns:
            JSONResponse: API documentation payload.
        """

        payload = {
            "name": "DevSecOps Backend API",
            "version": settings.app_version,
            "description": "A secure backend API for DevSecOps demonstration",
            "endpoints": [
                {"method": endpoint.method, "path": endpoint.path, "description": endpoint.description}
                for endpoint in API_ENDPOINTS
            ],
            "security": {
                "headers": "enabled",
                "cors": "restricted",
                "rateLimiting": "recommended for production",
            },
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
