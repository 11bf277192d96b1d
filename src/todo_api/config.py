"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    The JWT key, issuer and audience have no defaults: constructing settings
    without them raises ``pydantic.ValidationError`` so the process refuses to
    start misconfigured.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Application
    app_name: str = Field(default="TodoApi", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Environment"
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Host to bind to")
    port: int = Field(default=8000, description="Port to bind to")
    reload: bool = Field(default=False, description="Auto-reload on code changes")

    # Database
    database_url: str = Field(
        default="sqlite:///./todo.db",
        description="Database connection URL (PostgreSQL, MySQL or SQLite)",
    )
    db_pool_size: int = Field(default=10, description="Database connection pool size")
    db_max_overflow: int = Field(default=20, description="Database max overflow connections")
    db_echo: bool = Field(default=False, description="Echo SQL statements")
    db_create_tables: bool = Field(
        default=True, description="Create missing tables on startup"
    )

    # JWT
    jwt_key: str = Field(
        ...,
        min_length=1,
        description="HMAC-SHA256 signing key; 32+ bytes recommended, PyJWT warns on shorter keys",
    )
    jwt_issuer: str = Field(..., min_length=1, description="Token issuer (iss)")
    jwt_audience: str = Field(..., min_length=1, description="Token audience (aud)")
    jwt_expire_minutes: int = Field(
        default=60, gt=0, description="Access token lifetime in minutes"
    )
    jwt_clock_skew_seconds: int = Field(
        default=0, ge=0, description="Leeway applied when checking exp/nbf"
    )

    # OpenTelemetry
    otel_enabled: bool = Field(default=True, description="Enable OpenTelemetry")
    otel_service_name: str = Field(default="todo-api", description="Service name for traces")
    otel_exporter_otlp_endpoint: str = Field(
        default="http://localhost:4318", description="OTLP exporter endpoint"
    )
    otel_exporter_otlp_headers: str = Field(
        default="", description="OTLP headers (comma-separated key=value pairs)"
    )
    otel_resource_attributes: str = Field(
        default="", description="Resource attributes (comma-separated key=value pairs)"
    )
    otel_traces_exporter: Literal["otlp", "console", "none"] = Field(
        default="otlp", description="Traces exporter"
    )
    otel_metrics_exporter: Literal["otlp", "console", "none"] = Field(
        default="otlp", description="Metrics exporter"
    )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def get_otlp_headers(self) -> dict[str, str]:
        """Parse OTLP headers from comma-separated string."""
        if not self.otel_exporter_otlp_headers:
            return {}
        return dict(
            item.split("=", 1)
            for item in self.otel_exporter_otlp_headers.split(",")
            if "=" in item
        )

    def get_resource_attributes(self) -> dict[str, str]:
        """Parse resource attributes from comma-separated string."""
        if not self.otel_resource_attributes:
            return {}
        return dict(
            item.split("=", 1) for item in self.otel_resource_attributes.split(",") if "=" in item
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
