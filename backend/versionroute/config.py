"""
versionroute — Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, middleware and routers.
When:  Loaded once at module import time; validated before app starts.

Version header:
    ``version_header`` is the default header routers read the client's
    version from. Routers receive it explicitly at construction time, so two
    routers in one app may read different headers.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from versionroute.versioning.constraint import DEFAULT_VERSION_HEADER


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    """

    # ── Service ───────────────────────────────────────────────────────────
    app_name: str = Field(default="versionroute")

    # ── Versioning ────────────────────────────────────────────────────────
    # What: Request header carrying the client's semantic version (X.Y.Z)
    # Header names are case-insensitive on the wire; stored lowercase.
    version_header: str = Field(
        default=DEFAULT_VERSION_HEADER,
        description="Default request header used for version routing",
    )

    @field_validator("version_header")
    @classmethod
    def validate_version_header(cls, v: str) -> str:
        """Header must be a single non-empty token."""
        name = v.strip().lower()
        if not name or any(ch.isspace() or ch == ":" for ch in name):
            raise ValueError(f"Invalid version_header {v!r}: must be a non-empty header token")
        return name

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

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
        "case_sensitive": False,
    }


# Singleton instance — imported throughout the application
settings = Settings()
