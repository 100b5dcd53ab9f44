"""
Daily Five configuration.
Loads variables from the environment / .env file.
"""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Session tokens issued by the identity bridge
    SESSION_SECRET: SecretStr
    SESSION_TTL_HOURS: int = 168

    # Database URL (Railway/Render format)
    # If set, overrides PostgreSQL individual vars
    DATABASE_URL: str | None = None

    # PostgreSQL (individual vars, fallback if DATABASE_URL not set)
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "dailyfive"
    POSTGRES_USER: str = "dailyfive"
    POSTGRES_PASSWORD: SecretStr | None = None

    # Environment (development | production)
    ENVIRONMENT: str = "development"

    # Frontend origin for CORS
    FRONTEND_URL: str | None = None

    # Token for the external cron service (/api/cron/*)
    CRON_TOKEN: SecretStr | None = None

    # Streak sweep interval for the in-process scheduler
    STREAK_SWEEP_MINUTES: int = 60

    LEADERBOARD_DEFAULT_LIMIT: int = 100

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @property
    def database_url(self) -> str:
        """
        Get database URL based on environment.

        Priority:
        1. DATABASE_URL env var (Railway/Render format)
        2. PostgreSQL individual vars (production)
        3. SQLite (development)
        """
        if self.DATABASE_URL:
            url = self.DATABASE_URL
            # Railway uses postgres://, asyncpg wants postgresql://
            if url.startswith("postgres://"):
                url = url.replace("postgres://", "postgresql://", 1)
            return url

        if self.ENVIRONMENT == "production":
            if not self.POSTGRES_PASSWORD:
                raise ValueError("POSTGRES_PASSWORD required for production")
            return (
                f"postgresql://{self.POSTGRES_USER}:"
                f"{self.POSTGRES_PASSWORD.get_secret_value()}"
                f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )

        return "sqlite://db.sqlite3"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


config = Settings()
