"""Configuration package."""

from splitbill.config.settings import (
    LoggingSettings,
    ProcessingSettings,
    Settings,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "ProcessingSettings",
    "Settings",
    "get_settings",
]
