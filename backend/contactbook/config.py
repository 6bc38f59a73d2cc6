"""
Contactbook API — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

All defaults reproduce the service's historical behaviour: listen on every
interface at port 8081, 30-second read timeout, and client errors reported
with the default 200 status.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8081, ge=1, le=65535)

    # What: Seconds allowed for reading a request body.
    # Also passed to uvicorn as the keep-alive timeout for idle connections.
    read_timeout: float = Field(default=30.0, gt=0, le=600)

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

    # ── Error Reporting ───────────────────────────────────────────────────
    # What: Status-code policy for client errors.
    #   False (compat): "invalid payload", "invalid id" and "method not allowed"
    #                   bodies are sent with status 200.
    #   True (strict):  the same bodies are sent with 400 / 400 / 405.
    # The response bodies are identical in both modes.
    strict_status_codes: bool = Field(default=False)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # BACKEND_PORT and backend_port both work
    }

    @property
    def listen_address(self) -> str:
        """Human-readable host:port pair used in startup logs."""
        return f"{self.backend_host}:{self.backend_port}"


# Singleton instance — imported throughout the application
settings = Settings()
