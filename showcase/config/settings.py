"""Typed runtime settings with dotenv support and startup validation."""

from typing import Annotated, Any

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_ALLOWED_ORIGINS = ("http://localhost:3000",)


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class ApiSettings(BaseSettings):
    """Settings for the backend status API process.

    Environment variable names map directly to field names in uppercase.
    Example: `allowed_origins` reads from `ALLOWED_ORIGINS`.

    Attributes:
        host: Interface for web server binding.
        port: Web server port.
        node_env: Runtime environment label. `development` exposes error detail.
        allowed_origins: CORS allow-list parsed from a comma-separated value.
        service_name: Service identifier reported by status endpoints.
        app_version: Service version reported by status endpoints.
        hostname: Container hostname reported by the hello endpoint.
        log_level: Root logging level name.
        shutdown_timeout_seconds: Delay before a stalled graceful shutdown is forced.
        memory_warning_threshold_bytes: Memory ceiling for the health memory check.
        request_body_limit_bytes: Maximum accepted request body size.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, ge=1, le=65535)
    node_env: str = Field(default="development", min_length=1)
    allowed_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS))
    service_name: str = Field(default="devsecops-backend", min_length=1)
    app_version: str = Field(default="1.0.0", min_length=1)
    hostname: str = Field(default="local", min_length=1)
    log_level: str = Field(default="INFO")
    shutdown_timeout_seconds: float = Field(default=10.0, gt=0)
    memory_warning_threshold_bytes: int = Field(default=500 * 1024 * 1024, gt=0)
    request_body_limit_bytes: int = Field(default=10 * 1024, gt=0)

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_allowed_origins(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            value = value.split(",")
        origins = [str(origin).strip() for origin in value if str(origin).strip()]
        return origins or list(DEFAULT_ALLOWED_ORIGINS)

    @field_validator("node_env", "service_name", "app_version", "hostname")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def development_mode(self) -> bool:
        """Return whether error detail may be exposed to clients."""

        return self.node_env == "development"


class SiteSettings(BaseSettings):
    """Settings for the marketing site process.

    The backend URL and app version keep the public variable names used by
    the container deployment (`NEXT_PUBLIC_BACKEND_URL`, `NEXT_PUBLIC_APP_VERSION`).

    Attributes:
        host: Interface for web server binding.
        port: Web server port.
        node_env: Runtime environment label.
        backend_url: Base URL of the backend status API.
        app_version: Site version shown in the footer.
        status_check_timeout_seconds: Timeout applied to each backend status call.
        log_level: Root logging level name.
        shutdown_timeout_seconds: Delay before a stalled graceful shutdown is forced.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    node_env: str = Field(default="development", min_length=1)
    backend_url: str = Field(
        default="http://localhost:3001",
        validation_alias=AliasChoices("NEXT_PUBLIC_BACKEND_URL", "backend_url"),
    )
    app_version: str = Field(
        default="1.0.0",
        validation_alias=AliasChoices("NEXT_PUBLIC_APP_VERSION", "app_version"),
    )
    status_check_timeout_seconds: float = Field(default=5.0, gt=0)
    log_level: str = Field(default="INFO")
    shutdown_timeout_seconds: float = Field(default=10.0, gt=0)

    @field_validator("backend_url")
    @classmethod
    def _normalize_backend_url(cls, value: str) -> str:
        stripped_value = value.strip().rstrip("/")
        if not stripped_value:
            raise ValueError("backend_url must not be blank")
        if not stripped_value.startswith(("http://", "https://")):
            raise ValueError("backend_url must use http or https scheme")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


def config_load_api_settings() -> ApiSettings:
    """Load and validate backend API settings from environment and dotenv.

    Returns:
        ApiSettings: Validated backend settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return ApiSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Backend configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error


def config_load_site_settings() -> SiteSettings:
    """Load and validate marketing site settings from environment and dotenv.

    Returns:
        SiteSettings: Validated site settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return SiteSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Site configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
