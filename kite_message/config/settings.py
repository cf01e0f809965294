"""
Configuration settings using Pydantic Settings.

Validation behaviour toggles are loaded from environment variables or a
local .env file. All defaults mirror the chat platform's own behaviour.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Validation behaviour
    strict_image_urls: bool = Field(
        False,
        description="Also require a known image file extension on image URLs",
        alias="KITE_STRICT_IMAGE_URLS",
    )
    strict_embed_total: bool = Field(
        False,
        description="Reject embeds whose combined text exceeds the platform budget",
        alias="KITE_STRICT_EMBED_TOTAL",
    )
    near_limit_ratio: float = Field(
        0.9,
        ge=0.0,
        le=1.0,
        description="Fraction of a length limit above which a warning is emitted",
        alias="KITE_NEAR_LIMIT_RATIO",
    )

    # Application Configuration
    app_env: str = Field("development", alias="APP_ENV")
    app_log_level: str = Field("INFO", alias="APP_LOG_LEVEL")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
