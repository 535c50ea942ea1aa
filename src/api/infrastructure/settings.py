"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tenancy.domain.value_objects import Hostname


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        HOSTMAP_DB_HOST: Database host (default: localhost)
        HOSTMAP_DB_PORT: Database port (default: 5432)
        HOSTMAP_DB_DATABASE: Database name (default: hostmap)
        HOSTMAP_DB_USERNAME: Database user (default: hostmap)
        HOSTMAP_DB_PASSWORD: Database password (required in production)
        HOSTMAP_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        HOSTMAP_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        HOSTMAP_DB_POOL_TIMEOUT_SECONDS: Wait for a pooled connection (default: 5)
        HOSTMAP_DB_COMMAND_TIMEOUT_SECONDS: Per-statement timeout (default: 5)
        HOSTMAP_DB_APPLICATION_NAME: Name reported to PostgreSQL (default: hostmap-api)
    """

    model_config = SettingsConfigDict(
        env_prefix="HOSTMAP_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="hostmap", description="Database name")
    username: str = Field(default="hostmap", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    pool_timeout_seconds: float = Field(
        default=5.0,
        description="Seconds to wait for a pooled connection",
        gt=0,
    )
    command_timeout_seconds: float = Field(
        default=5.0,
        description="asyncpg per-statement timeout in seconds",
        gt=0,
    )
    application_name: str = Field(
        default="hostmap-api",
        description="application_name reported to PostgreSQL",
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class TenancySettings(BaseSettings):
    """Host-based tenant resolution settings.

    Environment variables:
        HOSTMAP_TENANCY_ADMIN_DOMAIN: Administrative (non-tenant) host. Unset, blank
            or "none" disables admin resolution entirely.
        HOSTMAP_TENANCY_REJECT_UNKNOWN_HOSTS: Respond 404 for hosts matching
            neither a tenant nor the admin domain (default: true)
        HOSTMAP_TENANCY_EXEMPT_PATHS: JSON list of path prefixes served
            without resolution (default: health and API docs)
        HOSTMAP_TENANCY_LOOKUP_TIMEOUT_SECONDS: Upper bound on a single tenant
            lookup in seconds (default: 5.0). The value "none" disables the
            bound.
        HOSTMAP_TENANCY_ADMIN_BRAND_NAME: Brand shown on the admin host
        HOSTMAP_TENANCY_DEFAULT_COLOR: Colour used when a tenant has none
    """

    model_config = SettingsConfigDict(
        env_prefix="HOSTMAP_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_parse_none_str="none",
        extra="ignore",
    )

    admin_domain: str | None = Field(
        default=None,
        description="Administrative host that resolves to no tenant",
    )
    reject_unknown_hosts: bool = Field(
        default=True,
        description="Reject requests whose host matches no tenant or admin domain",
    )
    exempt_paths: list[str] = Field(
        default_factory=lambda: ["/health", "/docs", "/redoc", "/openapi.json"],
        description="Path prefixes that skip tenant resolution",
    )
    lookup_timeout_seconds: float | None = Field(
        default=5.0,
        description="Timeout for a single tenant lookup in seconds",
        gt=0,
    )
    admin_brand_name: str = Field(
        default="Hostmap Admin",
        description="Display name used for the admin host",
    )
    default_color: str = Field(
        default="#334155",
        description="Fallback presentation colour",
    )

    @field_validator("admin_domain", mode="before")
    @classmethod
    def normalize_admin_domain(cls, value: str | None) -> str | None:
        """Normalize the admin domain with the same policy as request hosts."""
        if value is None or not str(value).strip():
            return None
        return Hostname.parse(str(value)).value


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Hostmap API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenancy settings."""
        return get_tenancy_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings."""
    return TenancySettings()
