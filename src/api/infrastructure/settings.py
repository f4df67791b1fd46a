"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    The central database holds the tenants table. Each tenant's business data
    lives in its own database on the same server, reached with the same
    credentials; only the database name differs.

    Environment variables:
        LARASUITE_DB_HOST: Database host (default: localhost)
        LARASUITE_DB_PORT: Database port (default: 5432)
        LARASUITE_DB_DATABASE: Central database name (default: larasuite)
        LARASUITE_DB_USERNAME: Database user (default: larasuite)
        LARASUITE_DB_PASSWORD: Database password (required in production)
        LARASUITE_DB_POOL_MIN_CONNECTIONS: Minimum connections per pool (default: 2)
        LARASUITE_DB_POOL_MAX_CONNECTIONS: Maximum connections per pool (default: 10)
        LARASUITE_DB_ECHO: Log SQL statements (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="LARASUITE_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="larasuite", description="Central database name")
    username: str = Field(default="larasuite", description="Database username")
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
    echo: bool = Field(default=False, description="Log SQL statements")

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
    """Tenant resolution and context binding settings.

    Environment variables:
        LARASUITE_TENANCY_BASE_DOMAIN: Domain tenants are served under, e.g.
            "larasuite.app" so that "acme.larasuite.app" resolves to "acme".
            When unset, the first label of any host with three or more
            labels is used.
        LARASUITE_TENANCY_ALLOW_NESTED_BINDING: Allow binding a second tenant
            inside an active binding (default: false). When enabled, the
            inner binding shadows the outer one until it is released.
    """

    model_config = SettingsConfigDict(
        env_prefix="LARASUITE_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_domain: str | None = Field(
        default=None,
        description="Domain under which tenant subdomains are served",
    )
    allow_nested_binding: bool = Field(
        default=False,
        description="Allow stack-based nested tenant context binding",
    )

    @field_validator("base_domain")
    @classmethod
    def normalize_base_domain(cls, v: str | None) -> str | None:
        """Lowercase and strip dots so host comparison is exact."""
        if v is None:
            return None
        v = v.strip().strip(".").lower()
        return v or None


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Larasuite", description="Application name")
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
