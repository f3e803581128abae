"""
Application Configuration

Centralized settings management using Pydantic BaseSettings.
All values are loaded from environment variables or .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable binding.

    Database (either):
        DATABASE_URL, or POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST,
        POSTGRES_DB (+ POSTGRES_PORT, default 5432)

    Optional env vars:
        ENVIRONMENT (development), DATABASE_SSL (on in production),
        DB_CONNECT_RETRIES (10), DB_CONNECT_DELAY (1.0),
        ENABLE_BULK_DELETE (False), CORS_ORIGINS (["*"]),
        HOST (0.0.0.0), PORT (3000), LOG_LEVEL (INFO)
    """

    PROJECT_NAME: str = "Mail Notes"
    ENVIRONMENT: str = "development"

    # Database
    DATABASE_URL: str | None = None
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "mail_notes"
    DATABASE_SSL: bool | None = None
    DB_CONNECT_RETRIES: int = 10
    DB_CONNECT_DELAY: float = 1.0

    # Legacy DELETE /notes wipes every note; ignored when ENVIRONMENT=production
    ENABLE_BULK_DELETE: bool = False

    # HTTP
    CORS_ORIGINS: list[str] = ["*"]
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",  # Silently ignore unknown env vars
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def async_database_url(self) -> str:
        """Async PostgreSQL connection string using asyncpg driver."""
        if self.DATABASE_URL:
            return normalize_database_url(self.DATABASE_URL)
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def use_ssl(self) -> bool:
        """TLS toward the store. Explicit DATABASE_SSL wins over the environment."""
        if self.DATABASE_SSL is not None:
            return self.DATABASE_SSL
        return self.is_production

    @property
    def bulk_delete_enabled(self) -> bool:
        return self.ENABLE_BULK_DELETE and not self.is_production


def normalize_database_url(url: str) -> str:
    """Rewrite plain postgres:// URLs to use the asyncpg driver."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


settings = Settings()
