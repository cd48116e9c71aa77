"""Site router package for page and proxy composition."""

from .pages import site_create_pages_router
from .proxy import site_create_proxy_router

__all__ = ["site_create_pages_router", "site_create_proxy_router"]
