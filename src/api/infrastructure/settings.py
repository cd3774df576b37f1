"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set the store path explicitly.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

IN_MEMORY_PATH = ":memory:"


class StoreSettings(BaseSettings):
    """Persistent store settings.

    Environment variables:
        FORUM_STORE_PATH: SQLite database file (default: forum_store.db).
            Use ":memory:" for a throwaway store.
        FORUM_STORE_ECHO: Log every SQL statement (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="FORUM_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    path: str = Field(default="forum_store.db", description="SQLite database file")
    echo: bool = Field(default=False, description="Echo SQL statements")

    @field_validator("path")
    @classmethod
    def validate_path(cls, value: str) -> str:
        """Reject blank paths, which SQLite would silently treat as temporary."""
        if not value.strip():
            raise ValueError("path must not be empty")
        return value

    @property
    def is_in_memory(self) -> bool:
        """Whether the store lives only for the lifetime of the process."""
        return self.path == IN_MEMORY_PATH

    @property
    def url(self) -> str:
        """Render the SQLAlchemy URL for the configured database."""
        database = None if self.is_in_memory else self.path
        return URL.create(drivername="sqlite", database=database).render_as_string()


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Forum Store", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def store(self) -> StoreSettings:
        """Get store settings."""
        return get_store_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_store_settings() -> StoreSettings:
    """Get cached store settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return StoreSettings()
