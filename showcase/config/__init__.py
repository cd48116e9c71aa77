"""Configuration package for runtime settings and startup validation."""

from .settings import (
    ApiSettings,
    SettingsLoadError,
    SiteSettings,
    config_load_api_settings,
    config_load_site_settings,
)

__all__ = [
    "ApiSettings",
    "SiteSettings",
    "SettingsLoadError",
    "config_load_api_settings",
    "config_load_site_settings",
]
