"""
MockAPI — Application Configuration
====================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings

# Seed data bundled with the package
DEFAULT_DATA_FILE = Path(__file__).resolve().parent / "data" / "db.json"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local frontend development.
    Attributes are grouped by concern.
    """

    # ── Runtime Environment ───────────────────────────────────────────────
    # What: "production" switches off simulated latency and quiets the access log
    environment: str = Field(default="development")

    # ── Data ──────────────────────────────────────────────────────────────
    # What: JSON file holding the seeded collections (top-level object of lists)
    data_file: str = Field(default=str(DEFAULT_DATA_FILE))

    # What: Value of the X-API-Version response header
    api_version: str = Field(default="1.0")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (split by cors_origins_list)
    cors_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Simulated Latency ─────────────────────────────────────────────────
    # What: Random delay added to every request to mimic a real network API
    # Unset means "on everywhere except production"
    latency_enabled: Optional[bool] = Field(default=None)
    latency_min_ms: int = Field(default=200, ge=0, le=60_000)
    latency_max_ms: int = Field(default=700, ge=0, le=60_000)

    @model_validator(mode="after")
    def validate_latency_range(self) -> "Settings":
        """Ensures the latency window is not inverted."""
        if self.latency_min_ms > self.latency_max_ms:
            raise ValueError(
                f"latency_min_ms ({self.latency_min_ms}) must not exceed "
                f"latency_max_ms ({self.latency_max_ms})"
            )
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def simulate_latency(self) -> bool:
        if self.latency_enabled is None:
            return not self.is_production
        return self.latency_enabled

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001, ge=1, le=65535)

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
        "case_sensitive": False,  # DATA_FILE and data_file both work
    }


# Singleton instance — imported throughout the application
settings = Settings()
