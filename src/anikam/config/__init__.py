"""AniKam Configuration Module

This module provides unified access to configuration models and settings
management for the AniKam application.

- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: App, Logging, API (Jikan, network probe) and Cache settings
"""

from __future__ import annotations

from .models import (
    APISettings,
    AppSettings,
    CacheSettings,
    JikanSettings,
    LoggingSettings,
    NetworkMonitorSettings,
    Settings,
)
from .loader import get_config, load_settings, reload_config

__all__ = [
    "APISettings",
    "AppSettings",
    "CacheSettings",
    "JikanSettings",
    "LoggingSettings",
    "NetworkMonitorSettings",
    "Settings",
    "get_config",
    "load_settings",
    "reload_config",
]
