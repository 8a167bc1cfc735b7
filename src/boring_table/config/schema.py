"""
Configuration schema for boring-table.

Settings come from explicit arguments, BORING_TABLE_* environment variables
and a .env file, in that order of precedence.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# ==============================================================================
# NESTED CONFIG MODELS (use BaseModel, not BaseSettings)
# ==============================================================================


class GeneralConfig(BaseModel):
    """General settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    rich_logging: bool = True


class EngineConfig(BaseModel):
    """Table engine settings."""

    # Queued cycles one outer dispatch may drain before giving up
    max_chained_dispatches: int = Field(default=100, gt=0)
    check_extension_keys: bool = True


class TracingConfig(BaseModel):
    """OpenTelemetry tracing of dispatch cycles."""

    enabled: bool = False
    export_to_file: bool = False
    traces_file: Path | None = None


# ==============================================================================
# MAIN SETTINGS CLASS
# ==============================================================================


class BoringTableSettings(BaseSettings):
    """
    Unified boring-table configuration.

    Configuration precedence (highest to lowest):
    1. Explicit init arguments
    2. Environment variables (BORING_TABLE_*)
    3. .env file
    4. Field defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="BORING_TABLE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    tracing: TracingConfig = Field(default_factory=TracingConfig)


# Global settings
_settings: BoringTableSettings | None = None


def get_settings() -> BoringTableSettings:
    """
    Get global settings instance.

    Returns:
        Global BoringTableSettings
    """
    global _settings

    if _settings is None:
        _settings = BoringTableSettings()

    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings

    _settings = None
