"""Application settings and configuration.

This module defines all configuration options for the Campus Board service.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MILLISECONDS_PER_HOUR = 60 * 60 * 1000


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Campus Board", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(default="change-me", alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    admin_password: str = Field(default="admin123", alias="ADMIN_PASSWORD")

    # Database configuration
    database_url: str = Field(default="sqlite:///./campus_board.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Post lifetime and feed ranking
    post_ttl_hours: int = Field(default=24, alias="POST_TTL_HOURS")
    trending_window_hours: int = Field(default=6, alias="TRENDING_WINDOW_HOURS")
    trending_multiplier: int = Field(default=2, alias="TRENDING_MULTIPLIER")
    title_max_length: int = Field(default=100, alias="TITLE_MAX_LENGTH")
    content_max_length: int = Field(default=500, alias="CONTENT_MAX_LENGTH")
    admin_recent_limit: int = Field(default=10, alias="ADMIN_RECENT_LIMIT")

    # Store-side compaction of expired posts
    expiry_sweep_enabled: bool = Field(default=True, alias="EXPIRY_SWEEP_ENABLED")
    expiry_sweep_interval_seconds: float = Field(
        default=60.0,
        alias="EXPIRY_SWEEP_INTERVAL_SECONDS",
    )

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def post_ttl_ms(self) -> int:
        """Return the post time-to-live in milliseconds."""
        return self.post_ttl_hours * MILLISECONDS_PER_HOUR

    @property
    def trending_window_ms(self) -> int:
        """Return the trending recency window in milliseconds."""
        return self.trending_window_hours * MILLISECONDS_PER_HOUR


settings = Settings()
