"""Same-origin proxy router forwarding status calls to the backend."""

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from showcase.site.backend_client import KNOWN_ENDPOINTS, BackendApiClient, BackendStatusError


def site_create_proxy_router(backend_client: BackendApiClient) -> APIRouter:
    """Create proxy router used by browsers that cannot reach the backend directly.

    Args:
        backend_client: Client bound to the private backend URL.

    Returns:
        APIRouter: Router exposing `/api/backend`.

    Raises:
        ValueError: Raised when backend_client is None.
    """

    if backend_client is None:
        raise ValueError("backend_client must not be None")

    router = APIRouter(prefix="/api", tags=["proxy"])

    @router.get("/backend")
    def site_backend_proxy(endpoint: str = Query(default="health")) -> JSONResponse:
        """Forward one GET call to a known backend endpoint.

        Args:
            endpoint: Backend endpoint name: `health`, `hello` or `api/info`.

        Returns:
            JSONResponse: Backend payload, 400 for unknown endpoints, or 503 when unreachable.
        """

        if endpoint not in KNOWN_ENDPOINTS:
            payload = {
                "error": "Unknown endpoint",
                "message": f"endpoint must be one of: {', '.join(KNOWN_ENDPOINTS)}",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

        try:
            backend_response = backend_client.backend_get(endpoint)
        except BackendStatusError as error:
            payload = {
                "error": "Backend connection failed",
                "message": str(error) or "Unknown error",
                "backendUrl": backend_client.base_url,
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

        return JSONResponse(content=backend_response.payload, status_code=backend_response.status_code)

    return router
