"""Settings loader and singleton manager.

This module handles:
- Environment variable loading from .env files
- Configuration file loading from TOML
- Thread-safe singleton pattern for Settings instance
"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path

import toml
from dotenv import load_dotenv
from pydantic import ValidationError

from anikam.config.models.settings import Settings
from anikam.shared.errors import (
    ApplicationError,
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    create_config_error,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS: tuple[Path, ...] = (
    Path("config/anikam.toml"),
    Path("anikam.toml"),
    Path.home() / ".anikam" / "config.toml",
)


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking pattern to ensure thread-safety
    while minimizing lock overhead.
    """

    _instance: Settings | None = None
    _lock: threading.RLock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance (thread-safe).

        Returns:
            The global Settings instance, loading it if necessary.
        """
        # First check (without lock for performance)
        if self._instance is None:
            # Second check (with lock for thread-safety)
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self) -> Settings:
        """Reload the global settings instance from configuration files.

        Returns:
            The reloaded Settings instance.
        """
        with self._lock:
            self._instance = load_settings()

        return self._instance

    def reset(self) -> None:
        """Drop the cached instance so the next access reloads it."""
        with self._lock:
            self._instance = None


def _env_file_path() -> Path:
    # For a frozen executable, look next to the binary
    if getattr(sys, "frozen", False):
        return Path(sys.executable).parent / ".env"
    return Path(".env")


def _load_env_file(env_file: Path | None = None) -> bool:
    """Load environment variables from a .env file when one exists.

    The Jikan API needs no credentials, so a missing file is not an error.
    Variables already present in the environment are not overridden.

    Args:
        env_file: Path to the .env file (defaults to ./.env)

    Returns:
        True when a file was found and loaded.

    Raises:
        InfrastructureError: If the file exists but cannot be read
    """
    env_file = env_file or _env_file_path()
    if not env_file.exists():
        return False

    try:
        load_dotenv(env_file, override=False)
    except OSError as e:
        raise InfrastructureError(
            code=ErrorCode.FILE_READ_ERROR,
            message=f"Failed to read .env file: {e}",
            context=ErrorContext(
                operation="load_env",
                additional_data={"file_name": env_file.name},
            ),
            original_error=e,
        ) from e

    logger.debug("Loaded environment from %s", env_file)
    return True


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to a TOML configuration file. If None,
            the default locations are tried before falling back to
            environment variables and defaults.

    Returns:
        Settings instance loaded from the specified source

    Raises:
        ApplicationError: If the configuration file is not valid TOML or
            fails validation
        FileNotFoundError: If ``config_path`` is given but does not exist
    """
    _load_env_file()

    try:
        if config_path:
            return Settings.from_toml_file(config_path)

        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return Settings.from_toml_file(default_path)

        return Settings()
    except toml.TomlDecodeError as e:
        raise create_config_error(
            f"Malformed configuration file: {e}",
            config_key=str(config_path or ""),
            operation="load_settings",
            original_error=e,
        ) from e
    except ValidationError as e:
        raise ApplicationError(
            code=ErrorCode.CONFIG_INVALID,
            message=f"Invalid configuration: {e.error_count()} validation error(s)",
            context=ErrorContext(
                operation="load_settings",
                additional_data={"config_path": str(config_path or "")},
            ),
            original_error=e,
        ) from e


# Global loader instance
_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe).

    Returns:
        The global Settings instance, loading it if necessary.
    """
    return _loader.get_config()


def reload_config() -> Settings:
    """Reload the global settings instance from configuration files.

    Returns:
        The reloaded Settings instance.
    """
    return _loader.reload_config()


__all__ = [
    "SettingsLoader",
    "get_config",
    "load_settings",
    "reload_config",
]
