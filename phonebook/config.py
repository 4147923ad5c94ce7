"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - use_in_memory_database wins over database_url when both are set

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults work out of the box with a local SQLite file
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

IN_MEMORY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # API
    api_title: str = "PhoneBook API"
    api_version: str = "1.0.0"
    cors_origins: list[str] = ["http://localhost:5173"]
    request_timeout_seconds: float = 30.0

    # Database
    database_url: str = "sqlite+aiosqlite:///./phonebook.db"
    use_in_memory_database: bool = False

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs come as postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def effective_database_url(self) -> str:
        """URL actually used by the engine (volatile backend when switched on)."""
        if self.use_in_memory_database:
            return IN_MEMORY_DATABASE_URL
        return self.database_url


@lru_cache
def get_settings() -> Settings:
    return Settings()
