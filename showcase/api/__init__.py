"""API layer package for the backend status service."""

from .application import create_api_application

__all__ = ["create_api_application"]
