"""
Configuration settings for the application.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from fsgate.exceptions import ConfigurationError
from fsgate.utils.paths import normalize_dir

DEFAULT_HISTORY_FILE = "~/.fsgate_history"
DEFAULT_HISTORY_MAX = 1000
DEFAULT_LOG_LEVEL = "WARNING"


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self, base_dir: Optional[str] = None):
        """
        Args:
            base_dir: Overrides FSGATE_BASE_DIR when given (e.g. from the command line)
        """
        self.base_dir: str = normalize_dir(
            base_dir or self._get_env("FSGATE_BASE_DIR", os.getcwd())
        )
        self.history_file: str = self._get_env("FSGATE_HISTORY_FILE", DEFAULT_HISTORY_FILE)
        self.history_max_entries: int = self._get_int_env(
            "FSGATE_HISTORY_MAX", DEFAULT_HISTORY_MAX
        )
        self.log_level: str = self._get_log_level_env("FSGATE_LOG_LEVEL", DEFAULT_LOG_LEVEL)

    def _get_env(self, key: str, default: str) -> str:
        """Get an environment variable with a default value."""
        return os.getenv(key, default)

    def _get_int_env(self, key: str, default: int) -> int:
        value = os.getenv(key)
        if value is None or value.strip() == "":
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(f"Environment variable {key} must be an integer, got {value!r}")

    def _get_log_level_env(self, key: str, default: str) -> str:
        value = self._get_env(key, default).strip().upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ConfigurationError(f"Environment variable {key} is not a logging level: {value!r}")
        return value


def load_settings(base_dir: Optional[str] = None) -> Settings:
    """Load .env (if present) and build the settings."""
    _ = load_dotenv()
    return Settings(base_dir)
