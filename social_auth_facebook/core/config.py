"""Application configuration using pydantic-settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SOCIAL_AUTH_FACEBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Social Auth Facebook"
    version: str = "0.1.0"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=8080, description="Server port")

    # Site
    base_url: str | None = Field(
        default=None,
        description=(
            "Public base URL of the site (e.g., https://example.com). "
            "When unset it is derived from the incoming request."
        ),
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./social_auth_facebook.db",
        description="Database connection URL",
    )

    # CORS
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )


# Global settings instance
settings = Settings()
