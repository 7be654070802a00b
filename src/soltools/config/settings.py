"""Application settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SOL Tools configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Application
    app_name: str = Field(default="SOL Tools", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Log level"
    )

    # Server (local only, the UI is a desktop tool)
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=7860, ge=1, le=65535, description="Server port")

    # Helius
    helius_api_url: str = Field(
        default="https://api.helius.xyz", description="Helius API base URL"
    )
    helius_api_key: SecretStr = Field(
        default=SecretStr(""), description="Default Helius API key for the UI field"
    )
    request_timeout: float = Field(
        default=30.0, gt=0, description="Per-request timeout in seconds"
    )

    # UI
    ui_refresh_seconds: float = Field(
        default=0.5, gt=0, le=10, description="Seconds between UI status refreshes"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """Accept log level names in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("helius_api_url")
    @classmethod
    def validate_helius_api_url(cls, v: str) -> str:
        """Validate Helius URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Helius API URL must start with http:// or https://")
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
