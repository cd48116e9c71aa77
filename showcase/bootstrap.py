"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from showcase.api import create_api_application
from showcase.config import config_load_api_settings, config_load_site_settings
from showcase.runtime import PsutilProcessMetricsService
from showcase.site import create_site_application
from showcase.site.backend_client import BackendApiClient


def bootstrap_create_api_application() -> FastAPI:
    """Assemble the backend status API after validating startup configuration.

    Returns:
        FastAPI: Fully initialized backend application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_api_settings()
    process_metrics = PsutilProcessMetricsService()
    return create_api_application(settings=settings, process_metrics=process_metrics)


def bootstrap_create_site_application() -> FastAPI:
    """Assemble the marketing site after validating startup configuration.

    Returns:
        FastAPI: Fully initialized site application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_site_settings()
    backend_client = BackendApiClient(
        base_url=settings.backend_url,
        timeout_seconds=settings.status_check_timeout_seconds,
    )
    return create_site_application(settings=settings, backend_client=backend_client)
