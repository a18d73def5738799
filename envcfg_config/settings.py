"""
Library Settings (Pydantic Settings).

Controls envcfg's own logging, trace hook and metrics. Every variable is
namespaced with ENVCFG_ (ENVCFG_LOG_LEVEL, ENVCFG_TRACE_ENABLED, ...) so the
application's own LOG_LEVEL or ENVIRONMENT never reach these settings.
"""

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    envcfg settings loaded from ENVCFG_-prefixed environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENVCFG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # ========================================================================
    # LOGGING
    # ========================================================================
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FORMAT: str = Field(default="json", pattern="^(json|text)$")

    # ========================================================================
    # BIND TRACE HOOK
    # ========================================================================
    TRACE_ENABLED: bool = Field(
        default=False, description="Emit one event per successfully bound field"
    )
    TRACE_SINK: str = Field(
        default="log",
        description="log (structlog), otel (span events) or both",
        pattern="^(log|otel|both)$",
    )

    # ========================================================================
    # METRICS
    # ========================================================================
    METRICS_ENABLED: bool = Field(
        default=False, description="Count binds and field errors in Prometheus"
    )

    # ========================================================================
    # OPENTELEMETRY
    # ========================================================================
    OTEL_EXPORTER_OTLP_ENDPOINT: str = Field(default="http://localhost:4317")
    OTEL_SERVICE_NAME: str = Field(default="envcfg")
    OTEL_TRACES_ENABLED: bool = Field(default=False)

    # ========================================================================
    # DEPLOYMENT
    # ========================================================================
    ENVIRONMENT: str = Field(default="development", description="Reported on spans only")

    @field_validator("LOG_LEVEL", "LOG_FORMAT", "TRACE_SINK", mode="before")
    @classmethod
    def normalize_case(cls, value: object, info: ValidationInfo) -> object:
        if not isinstance(value, str):
            return value
        if info.field_name == "LOG_LEVEL":
            return value.strip().upper()
        return value.strip().lower()


_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Settings built once per process.

    Returns:
        Settings: shared instance (reset_settings() forces a rebuild)
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the shared instance; the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
