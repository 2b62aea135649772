"""
Database configuration settings.

Manages the SQLite file location for the session table.
The async URL targets aiosqlite so the ORM can be used from request handlers.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """SQLite database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DATABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    path: str = Field(
        default="./sqlite.db",
        validation_alias=AliasChoices("DATABASE_URL", "DATABASE_PATH"),
        description="SQLite database file path",
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    @property
    def async_database_url(self) -> str:
        """
        Construct async SQLite connection URL.

        Accepts either a bare file path or a full SQLAlchemy URL.

        Returns:
            str: SQLAlchemy async-compatible database URL
        """
        if "://" in self.path:
            return self.path
        return f"sqlite+aiosqlite:///{self.path}"
