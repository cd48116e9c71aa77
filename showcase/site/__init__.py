"""Server-rendered marketing site for the DevSecOps pipeline showcase."""

from .application import create_site_application

__all__ = ["create_site_application"]
