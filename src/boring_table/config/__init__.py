"""
boring-table configuration module.
"""

from .schema import (
    BoringTableSettings,
    EngineConfig,
    GeneralConfig,
    TracingConfig,
    get_settings,
    reset_settings,
)

__all__ = [
    "BoringTableSettings",
    "EngineConfig",
    "GeneralConfig",
    "TracingConfig",
    "get_settings",
    "reset_settings",
]
