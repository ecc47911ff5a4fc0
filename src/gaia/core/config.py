"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        description="SQLAlchemy async connection string (e.g. sqlite+aiosqlite:///gaia.db)",
    )

    # Reverse geocoding provider (Radar)
    radar_api_key: str = Field(
        min_length=1,
        description="Radar API key sent in the Authorization header",
    )
    radar_base_url: str = Field(
        default="https://api.radar.io/v1",
        description="Radar API base URL",
    )
    radar_timeout: float = Field(
        default=5.0,
        description="Radar request timeout in seconds",
        gt=0,
    )

    @field_validator("radar_base_url")
    @classmethod
    def validate_radar_base_url(cls, v: str) -> str:
        if not v.startswith("https://"):
            msg = "radar_base_url must use HTTPS"
            raise ValueError(msg)
        return v.rstrip("/")

    # Cache
    cache_hit_radius_meters: float = Field(
        default=40.0,
        description="Maximum distance in meters for a cached address to count as a hit",
        gt=0,
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins",
    )

    # Environment
    environment: str = Field(
        default="production",
        description="Deployment environment name (e.g. production, dev, staging)",
    )

    # Server
    bind_address: str = Field(
        default="0.0.0.0:8081",
        description="host:port the API server listens on",
    )

    @field_validator("bind_address")
    @classmethod
    def validate_bind_address(cls, v: str) -> str:
        host, sep, port = v.rpartition(":")
        if not sep or not host or not port.isdigit() or not 0 < int(port) < 65536:
            msg = f"Invalid bind_address {v!r}: expected host:port"
            raise ValueError(msg)
        return v

    @property
    def bind_host(self) -> str:
        """Host part of the bind address."""
        return self.bind_address.rpartition(":")[0]

    @property
    def bind_port(self) -> int:
        """Port part of the bind address."""
        return int(self.bind_address.rpartition(":")[2])

    # API
    api_v0_prefix: str = Field(
        default="/api/v0",
        description="API version prefix",
    )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]
