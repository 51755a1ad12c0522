"""Configuration Management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Engine settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="DRIVENUI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Parsed document cache
    enable_cache: bool = Field(default=True, description="Cache parsed documents in memory")
    cache_size: int = Field(default=32, gt=0, description="Max cached documents")
    cache_ttl: int = Field(default=3600, gt=0, description="Cache TTL (seconds)")

    # Parser limits
    max_markup_size: int = Field(
        default=2 * 1024 * 1024, gt=0, description="Max size of a single markup section (bytes)"
    )
    max_component_depth: int = Field(default=30, gt=0, description="Max component nesting depth")

    # Rendering hints
    default_theme: Literal["light", "dark"] = Field(default="light", description="Color theme")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
