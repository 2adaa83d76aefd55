"""
Filmovi API — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the application factory, the database layer and __main__.
When:  Loaded once at module import time; validated before app starts.

Environment variables keep the names the service has always used
(DB_HOST, DB_USER, DB_PASSWORD, DB_DATABASE, PORT), so an existing .env
file works unchanged. DATABASE_URL, when set, wins over the DB_* parts.
"""

from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: SQLAlchemy async dialect+driver used to build the connection URL
    # Format: <dialect>+<async driver>, e.g. postgresql+asyncpg
    db_driver: str = Field(default="postgresql+asyncpg")
    db_host: str = Field(default="localhost")
    db_port: Optional[int] = Field(default=None, ge=1, le=65535)
    db_user: str = Field(default="")
    db_password: str = Field(default="")
    db_database: str = Field(default="filmovi")

    # What: Full connection URL; overrides every DB_* part above when set
    # Used by tests (sqlite+aiosqlite) and by deployments that hand out a DSN
    database_url: Optional[str] = Field(default=None)

    # What: Connection pool bounds
    # 10 persistent connections and no overflow keeps the pool strictly bounded
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=0, ge=0, le=50)

    # What: Seconds a request waits for a free pooled connection before failing
    db_pool_timeout: int = Field(default=30, ge=1, le=600)

    # What: Validates connections before use by sending a lightweight query
    # Catches stale connections (e.g., after DB restart) before they cause errors
    db_pool_pre_ping: bool = Field(default=True)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # What: Controls verbosity of application logging
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_HOST and db_host both work
        "extra": "ignore",
    }

    @property
    def sqlalchemy_url(self) -> URL:
        """
        What: The connection URL handed to create_async_engine().
        How:  DATABASE_URL verbatim if given, otherwise assembled from the
              DB_* parts with URL.create (escapes special characters in the
              password, which string formatting would not).
        """
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            drivername=self.db_driver,
            username=self.db_user or None,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_database,
        )

    @property
    def engine_options(self) -> Dict[str, Any]:
        """
        Keyword arguments for create_async_engine().

        SQLite (used for local runs and tests) does not use a sized queue
        pool, so the sizing options are only passed to pooled backends.
        """
        options: Dict[str, Any] = {
            "echo": self.log_level == "DEBUG",
        }
        if self.sqlalchemy_url.get_backend_name() != "sqlite":
            options.update(
                pool_size=self.db_pool_size,
                max_overflow=self.db_max_overflow,
                pool_timeout=self.db_pool_timeout,
                pool_pre_ping=self.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return options


# Singleton instance, imported throughout the application
settings = Settings()
