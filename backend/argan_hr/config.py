"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded for production)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Lockout and rate-limit thresholds are settings so tests can shrink them
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    environment: str = "development"

    # Database
    database_url: str = (
        "postgresql+asyncpg://argan:argan@db:5432/argan_hr"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Sessions (signed cookie)
    session_secret: str = "change-me-in-production"
    session_cookie_name: str = "admin_session"
    session_max_age_seconds: int = 8 * 60 * 60
    session_https_only: bool = False

    # Passwords (werkzeug method string)
    password_hash_method: str = "pbkdf2:sha256:600000"

    # Login lockout
    login_max_attempts: int = 10
    login_window_minutes: int = 15
    login_lockout_minutes: int = 15

    # External API rate limit
    external_rate_limit_requests: int = 100
    external_rate_limit_window_seconds: int = 60

    # Dashboard
    renewal_window_days: int = 30

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
