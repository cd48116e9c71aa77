"""Page router rendering the marketing site and the status widget."""

from __future__ import annotations

from typing import Callable

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from showcase.config import SiteSettings
from showcase.site import content
from showcase.site.backend_client import BackendStatusChecker


def site_create_pages_router(
    settings: SiteSettings,
    templates: Jinja2Templates,
    status_checker_factory: Callable[[], BackendStatusChecker],
) -> APIRouter:
    """Create router for the landing page and status check endpoint.

    Args:
        settings: Site settings used for footer and widget metadata.
        templates: Jinja2 template renderer.
        status_checker_factory: Builds a fresh checker for each request.

    Returns:
        APIRouter: Router exposing `/` and `/api/status`.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if templates is None:
        raise ValueError("templates must not be None")
    if status_checker_factory is None:
        raise ValueError("status_checker_factory must not be None")

    router = APIRouter(tags=["pages"])

    @router.get("/", response_class=HTMLResponse)
    def site_index(
        request: Request,
        stage: str | None = Query(default=None),
        file_name: str | None = Query(default=None, alias="file"),
        policy: str | None = Query(default=None),
    ) -> HTMLResponse:
        """Render the landing page after one backend status check.

        Args:
            request: Incoming request, required by the template renderer.
            stage: Optional pipeline stage id to expand.
            file_name: Optional Terraform file tab to select.
            policy: Optional Rego policy tab to select.

        Returns:
            HTMLResponse: Fully rendered landing page.
        """

        backend_status = status_checker_factory().status_check()
        context = {
            "settings": settings,
            "content": content,
            "backend_status": backend_status,
            "selected_stage": content.content_find_stage(stage),
            "selected_file": content.content_select_sample(content.TERRAFORM_FILES, file_name),
            "selected_policy": content.content_select_sample(content.POLICIES, policy),
        }
        return templates.TemplateResponse(request, "index.html", context)

    @router.get("/api/status")
    def site_status_check() -> JSONResponse:
        """Run one backend status check and return the resulting snapshot.

        Returns:
            JSONResponse: Snapshot in `connected` or `error` state.
        """

        backend_status = status_checker_factory().status_check()
        return JSONResponse(content=backend_status.status_as_payload(), status_code=status.HTTP_200_OK)

    return router
