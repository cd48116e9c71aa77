"""FastAPI application factory for the marketing site."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from fastapi import FastAPI, status
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import Response

from showcase.config import SiteSettings
from showcase.runtime import RequestLoggingMiddleware, SecurityHeadersMiddleware

from .backend_client import BackendApiClient, BackendStatusChecker, status_log_transition
from .routers import site_create_pages_router, site_create_proxy_router

SITE_DIRECTORY = Path(__file__).resolve().parent
TEMPLATES_DIRECTORY = SITE_DIRECTORY / "templates"
STATIC_DIRECTORY = SITE_DIRECTORY / "static"

SITE_SECURITY_HEADERS: Mapping[str, str] = {
    "X-DNS-Prefetch-Control": "on",
    "Strict-Transport-Security": "max-age=63072000; includeSubDomains; preload",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "origin-when-cross-origin",
}


def create_site_application(settings: SiteSettings, backend_client: BackendApiClient) -> FastAPI:
    """Create the FastAPI application serving the marketing site.

    Args:
        settings: Validated site settings.
        backend_client: Client for the backend status API.

    Returns:
        FastAPI: Site application with pages, proxy and static assets.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if backend_client is None:
        raise ValueError("backend_client must not be None")

    application = FastAPI(
        title="DevSecOps Pipeline Platform",
        version=settings.app_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    templates = Jinja2Templates(directory=str(TEMPLATES_DIRECTORY))

    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(SecurityHeadersMiddleware, headers=SITE_SECURITY_HEADERS)

    @application.exception_handler(StarletteHTTPException)
    async def site_http_error(request: Request, error: StarletteHTTPException) -> Response:
        if request.url.path.startswith("/api/"):
            payload = {"error": "Not Found" if error.status_code == 404 else str(error.detail)}
            return JSONResponse(content=payload, status_code=error.status_code)
        if error.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return templates.TemplateResponse(
                request,
                "not_found.html",
                {"settings": settings},
                status_code=status.HTTP_404_NOT_FOUND,
            )
        return HTMLResponse(content=str(error.detail), status_code=error.status_code)

    application.mount("/static", StaticFiles(directory=str(STATIC_DIRECTORY)), name="static")
    application.include_router(
        site_create_pages_router(
            settings=settings,
            templates=templates,
            status_checker_factory=lambda: site_create_status_checker(backend_client),
        )
    )
    application.include_router(site_create_proxy_router(backend_client=backend_client))

    return application


def site_create_status_checker(backend_client: BackendApiClient) -> BackendStatusChecker:
    """Build a status checker that logs every state transition.

    Args:
        backend_client: Client for the backend status API.

    Returns:
        BackendStatusChecker: Checker in the `idle` state.
    """

    checker = BackendStatusChecker(client=backend_client)
    checker.status_add_listener(status_log_transition)
    return checker
