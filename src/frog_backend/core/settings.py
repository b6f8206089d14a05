"""Application settings and configuration.

This module defines all configuration options for the FROG social backend.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="FROG Social Backend", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./frog.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Stacks chain API used to verify tip transactions
    stacks_api_base_url: str = Field(
        default="https://api.testnet.hiro.so",
        alias="STACKS_API_BASE_URL",
    )
    tips_contract_id: str = Field(
        default="ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM.frog-social-tips-v1",
        alias="TIPS_CONTRACT_ID",
    )
    tips_function_name: str = Field(default="tip-post", alias="TIPS_FUNCTION_NAME")
    chain_http_timeout_seconds: float = Field(
        default=10.0,
        alias="CHAIN_HTTP_TIMEOUT_SECONDS",
    )

    # Uploaded post images
    uploads_dir: str = Field(default="uploads", alias="UPLOADS_DIR")
    public_base_url: str | None = Field(default=None, alias="BACKEND_PUBLIC_BASE_URL")
    max_image_size_bytes: int = Field(default=5 * 1024 * 1024, alias="MAX_IMAGE_SIZE_BYTES")

    # Tip leaderboard
    leaderboard_limit: int = Field(default=10, alias="LEADERBOARD_LIMIT")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

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
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for Alembic."""
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url


settings = Settings()
