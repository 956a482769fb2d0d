"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    BridgeSettings,
    HttpSettings,
    LoggingSettings,
    ServerSettings,
    WcagSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "BridgeSettings",
    "HttpSettings",
    "LoggingSettings",
    "ServerSettings",
    "WcagSettings",
    "clear_settings_cache",
    "get_settings",
]
