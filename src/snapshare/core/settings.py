"""Application settings and configuration.

This module defines all configuration options for the SnapShare backend.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="SnapShare", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Relational post store
    database_url: str = Field(default="sqlite:///./snapshare.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Search document store (OpenSearch)
    opensearch_url: str = Field(default="http://localhost:9200", alias="OPENSEARCH_URL")
    opensearch_index: str = Field(default="feed", alias="OPENSEARCH_INDEX")
    # Passed through as the `refresh` parameter of index writes ("true", "false", "wait_for").
    opensearch_refresh: str = Field(default="false", alias="OPENSEARCH_REFRESH")
    opensearch_timeout_seconds: float = Field(default=10.0, alias="OPENSEARCH_TIMEOUT_SECONDS")
    search_min_should_match: str = Field(default="75%", alias="SEARCH_MIN_SHOULD_MATCH")

    # Startup index bootstrap
    search_sync_on_startup: bool = Field(default=True, alias="SEARCH_SYNC_ON_STARTUP")
    search_sync_fail_fast: bool = Field(default=False, alias="SEARCH_SYNC_FAIL_FAST")
    search_sync_batch_size: int = Field(default=500, ge=1, alias="SEARCH_SYNC_BATCH_SIZE")

    # Tag association collaborator
    association_service_url: str = Field(
        default="http://localhost:8001/associations",
        alias="ASSOCIATION_SERVICE_URL",
    )
    association_service_timeout_seconds: float = Field(
        default=5.0,
        alias="ASSOCIATION_SERVICE_TIMEOUT_SECONDS",
    )
    association_service_mock: bool = Field(default=False, alias="ASSOCIATION_SERVICE_MOCK")

    # Pagination
    default_page_size: int = Field(default=20, ge=1, alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(default=100, ge=1, alias="MAX_PAGE_SIZE")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def sqlalchemy_url(self) -> str:
        """Return DATABASE_URL with the legacy "postgres://" scheme normalised for SQLAlchemy."""
        if self.database_url.startswith("postgres://"):
            return "postgresql://" + self.database_url[len("postgres://"):]
        return self.database_url


settings = Settings()  # type: ignore[call-arg]
