"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded beyond dev placeholders)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://storefront:storefront@db:5432/storefront"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Identity
    jwt_secret: str = "dev-only-change-me"
    jwt_algorithm: str = "HS256"
    session_token_ttl_seconds: int = 3600
    session_cookie_name: str = "session_token"
    session_cookie_secure: bool = False
    bcrypt_rounds: int = 12

    # Password reset
    password_reset_ttl_minutes: int = 60
    password_reset_url: str = "http://localhost:3000/reset-password"

    # Transactions (simulated ledger)
    ledger_seed: int | None = None

    # API
    cors_origins: list[str] = ["http://localhost:3000"]
    admin_api_requires_auth: bool = False
    expose_internal_errors: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
