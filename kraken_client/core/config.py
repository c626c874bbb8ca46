"""
Core configuration module for the Twitch Kraken client.

This module defines all configuration settings for the client using Pydantic Settings.
Configuration values are loaded from environment variables with sensible defaults.
"""

from typing import Optional, Literal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    All settings can be overridden via environment variables or a .env file.
    The settings are validated using Pydantic's type system.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Twitch Credentials
    twitch_client_id: Optional[str] = Field(
        default=None, description="Twitch API client ID"
    )
    twitch_client_secret: Optional[str] = Field(
        default=None, description="Twitch API client secret"
    )

    # Twitch Endpoints
    twitch_kraken_base_url: str = Field(
        default="https://api.twitch.tv/kraken", description="Twitch Kraken API base URL"
    )
    twitch_private_api_base_url: str = Field(
        default="http://api.twitch.tv/api",
        description="Twitch private API base URL (channel access tokens)",
    )
    twitch_usher_base_url: str = Field(
        default="http://usher.twitch.tv/api/channel/hls",
        description="Twitch Usher HLS manifest base URL",
    )
    twitch_accept_header: str = Field(
        default="application/vnd.twitchtv.v5+json",
        description="Versioned Accept header sent with every request",
    )
    twitch_request_timeout: float = Field(
        default=30.0, description="Total HTTP request timeout in seconds"
    )

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )

    @field_validator(
        "twitch_kraken_base_url", "twitch_private_api_base_url", "twitch_usher_base_url"
    )
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs so paths can be appended with a single slash."""
        return v.rstrip("/")

    @field_validator("twitch_request_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Reject non-positive timeouts."""
        if v <= 0:
            raise ValueError("twitch_request_timeout must be positive")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    This function returns a cached instance of the Settings class,
    ensuring that environment variables are only read once.

    Returns:
        Settings: Client settings instance
    """
    return Settings()
