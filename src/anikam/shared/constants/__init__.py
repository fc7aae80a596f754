"""
AniKam Constants Module

This module provides centralized constants for the AniKam application.
All magic values and configuration constants are defined here to ensure
consistency and maintainability across the codebase.
"""

from .cache import Cache
from .cli import CLIDefaults, CLIHelp, CLIMessages
from .http_codes import HTTPStatusCodes
from .media import (
    AgeRatingTable,
    GenreTable,
    MediaLimits,
    MediaText,
    PlatformTable,
    QueryValues,
    StatusText,
)
from .network import (
    JikanAPIConfig,
    JikanEndpoints,
    NetworkMonitorConfig,
    UserMessages,
)
from .system import BASE_MINUTE, BASE_SECOND, Application

__all__ = [
    "BASE_MINUTE",
    "BASE_SECOND",
    "AgeRatingTable",
    "Application",
    "CLIDefaults",
    "CLIHelp",
    "CLIMessages",
    "Cache",
    "GenreTable",
    "HTTPStatusCodes",
    "JikanAPIConfig",
    "JikanEndpoints",
    "MediaLimits",
    "MediaText",
    "NetworkMonitorConfig",
    "PlatformTable",
    "QueryValues",
    "StatusText",
    "UserMessages",
]
