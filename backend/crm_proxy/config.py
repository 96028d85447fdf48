"""
CRM Proxy — Application Configuration
======================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have working defaults; the proxy runs against the public
    HubSpot API out of the box.
    """

    # ── Upstream CRM ──────────────────────────────────────────────────────
    # Root of the HubSpot API; object paths are appended by the descriptor table
    hubspot_base_url: str = Field(
        default="https://api.hubapi.com",
        description="Base URL of the upstream CRM REST API",
    )

    # Deadline applied to each upstream call, 0 disables it
    upstream_timeout_seconds: float = Field(default=30.0, ge=0, le=600)

    @field_validator("hubspot_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Object paths always start with '/', so the base must not end with one."""
        return v.rstrip("/")

    @property
    def upstream_timeout(self) -> Optional[float]:
        """Timeout value as httpx expects it (None means wait forever)."""
        return self.upstream_timeout_seconds or None

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows any caller
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1, le=65535)

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
