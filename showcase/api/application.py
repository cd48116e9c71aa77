"""FastAPI application factory for the backend status service.

This module composes the security middleware stack, structured error
handlers and the three informational routers.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from showcase.config import ApiSettings
from showcase.runtime import ProcessMetricsPort, RequestLoggingMiddleware, SecurityHeadersMiddleware

from .errors import UnhandledErrorMiddleware, api_register_error_handlers
from .middleware import API_SECURITY_HEADERS, CorsOriginGuardMiddleware, RequestBodyLimitMiddleware
from .routers import api_create_health_router, api_create_hello_router, api_create_info_router

CORS_ALLOWED_METHODS = ("GET", "POST", "OPTIONS")
CORS_ALLOWED_HEADERS = ("Content-Type", "Authorization")
CORS_MAX_AGE_SECONDS = 86400
COMPRESSION_MINIMUM_BYTES = 1024


def create_api_application(settings: ApiSettings, process_metrics: ProcessMetricsPort) -> FastAPI:
    """Create the FastAPI application instance for the backend service.

    Middleware runs in this order for each request: security headers, CORS
    origin guard, CORS response headers, gzip compression, body size limit,
    request logging, unhandled error capture.

    Args:
        settings: Validated backend settings.
        process_metrics: Process metadata service used by status endpoints.

    Returns:
        FastAPI: Fully composed backend application.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if process_metrics is None:
        raise ValueError("process_metrics must not be None")

    application = FastAPI(
        title="DevSecOps Backend API",
        version=settings.app_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Added innermost first; the last middleware added wraps all others.
    application.add_middleware(UnhandledErrorMiddleware, development_mode=settings.development_mode)
    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(RequestBodyLimitMiddleware, max_body_bytes=settings.request_body_limit_bytes)
    application.add_middleware(GZipMiddleware, minimum_size=COMPRESSION_MINIMUM_BYTES)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_methods=list(CORS_ALLOWED_METHODS),
        allow_headers=list(CORS_ALLOWED_HEADERS),
        allow_credentials=True,
        max_age=CORS_MAX_AGE_SECONDS,
    )
    application.add_middleware(CorsOriginGuardMiddleware, allowed_origins=settings.allowed_origins)
    application.add_middleware(SecurityHeadersMiddleware, headers=API_SECURITY_HEADERS)

    api_register_error_handlers(application, settings)

    application.include_router(api_create_health_router(settings=settings, process_metrics=process_metrics))
    application.include_router(api_create_hello_router(settings=settings, process_metrics=process_metrics))
    application.include_router(api_create_info_router(settings=settings))

    return application
