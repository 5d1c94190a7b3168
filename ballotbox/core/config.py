"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Union

from ballotbox.core.constants import DEFAULT_VOTE_OPTIONS


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Database
    DATABASE_URL: str = "sqlite:///data.db"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Ballot - Can be a list or comma-separated string
    VOTE_OPTIONS: Union[list, str] = list(DEFAULT_VOTE_OPTIONS)

    # CORS - Can be a list or comma-separated string
    CORS_ORIGINS: Union[list, str] = ["*"]  # In production, specify your domain

    @field_validator('VOTE_OPTIONS', 'CORS_ORIGINS', mode='before')
    @classmethod
    def parse_comma_separated(cls, v):
        """Parse comma-separated strings into lists."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(',') if item.strip()]
        return v

    # Application
    APP_TITLE: str = "Ballotbox"
    APP_DESCRIPTION: str = "Single-choice voting with one vote per client address"
    APP_VERSION: str = "1.0.0"

    # Environment
    ENVIRONMENT: str = "development"  # development, staging, production

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_JSON: bool = False

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_VOTE: str = "30/minute"

    # Server-Sent Events: seconds between results pushes
    SSE_RESULTS_INTERVAL: int = 3

    # Database connection pool (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    # Seconds a SQLite writer waits for the lock before failing
    DB_BUSY_TIMEOUT: float = 15.0

    def get_database_url(self) -> str:
        """Return DATABASE_URL, rewriting Heroku's postgres:// scheme."""
        if self.DATABASE_URL.startswith("postgres://"):
            return self.DATABASE_URL.replace("postgres://", "postgresql://", 1)
        return self.DATABASE_URL

    def validate_production_config(self) -> None:
        """Validate that production-critical settings are properly configured."""
        if self.ENVIRONMENT != "production":
            return

        issues = []
        if self.CORS_ORIGINS == ["*"]:
            issues.append("CORS_ORIGINS should be restricted to specific domains")
        if ":memory:" in self.DATABASE_URL:
            issues.append("DATABASE_URL must point at durable storage")
        if not self.VOTE_OPTIONS:
            issues.append("VOTE_OPTIONS must list at least one option")

        if issues:
            raise ValueError(
                "Production configuration errors:\n" +
                "\n".join(f"  - {issue}" for issue in issues)
            )


settings = Settings()
