"""
Zone Gallery — Application Configuration
=========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and produces one frozen `Settings` value.
Who:   Built once by `get_settings()` and passed explicitly into
       `create_app()` and the media search client.
When:  At process start; never mutated afterwards.

Environment variables keep the names the deployment already uses:
    CLOUD_NAME, CLOUD_API_KEY, CLOUD_API_SECRET, PORT
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults except the Cloudinary credentials,
    which must be provided for the search endpoints to work.

    Attributes are grouped by concern for readability.
    """

    # ── Cloudinary ────────────────────────────────────────────────────────
    # What: Account credentials for the hosted media service
    # Required: YES (search calls fail with 401 without them)
    cloud_name: str = Field(default="", description="Cloudinary cloud name")
    cloud_api_key: str = Field(default="", description="Cloudinary API key")
    cloud_api_secret: str = Field(default="", description="Cloudinary API secret")

    # What: Base URL of the Cloudinary Admin API (cloud name is appended)
    cloudinary_api_base_url: str = Field(default="https://api.cloudinary.com/v1_1")

    # ── Taxonomy ──────────────────────────────────────────────────────────
    # What: Literal label of segment 0 in every asset identifier
    root_folder: str = Field(default="Zones", min_length=1)

    # ── Search ────────────────────────────────────────────────────────────
    # What: Upper bound on assets returned by a single search call
    # Valid range: 1-500 (Cloudinary's per-request maximum)
    search_max_results: int = Field(default=100, ge=1, le=500)

    # What: Seconds before a search call is abandoned (UpstreamTimeoutError)
    search_timeout: float = Field(default=10.0, gt=0, le=120)

    # What: Seconds a Cloudinary ping result is reused by /health (0 pings every time)
    health_cache_ttl: float = Field(default=30.0, ge=0, le=3600)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)

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

    @field_validator("root_folder")
    @classmethod
    def strip_root_folder(cls, v: str) -> str:
        """Drops leading/trailing slashes so the label is a single segment."""
        stripped = v.strip("/")
        if not stripped:
            raise ValueError("root_folder must contain at least one character besides '/'")
        return stripped

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # CLOUD_NAME and cloud_name both work
        "extra": "ignore",
        "frozen": True,
    }

    @property
    def search_url(self) -> str:
        """Endpoint of the Cloudinary Search API for the configured cloud."""
        return f"{self.cloudinary_api_base_url.rstrip('/')}/{self.cloud_name}/resources/search"

    @property
    def ping_url(self) -> str:
        """Endpoint of the Cloudinary Admin API ping for the configured cloud."""
        return f"{self.cloudinary_api_base_url.rstrip('/')}/{self.cloud_name}/ping"

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the Cloudinary credentials are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every missing value and raises one ValueError.
        """
        errors = []
        if not self.cloud_name:
            errors.append("CLOUD_NAME is not set.")
        if not self.cloud_api_key:
            errors.append("CLOUD_API_KEY is not set.")
        if not self.cloud_api_secret:
            errors.append("CLOUD_API_SECRET is not set.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


@lru_cache
def get_settings() -> Settings:
    """Builds the process-wide settings value on first call."""
    return Settings()
