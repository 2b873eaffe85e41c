#!/usr/bin/env python3
"""
Configuration Manager

Handles TOML settings loading for the DDNS daemon. Provider credentials are
not part of this file; they live in the database (see store.py).

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import logging
import os
import tomllib
from typing import Dict, Any

# Internal imports
from .api import DDNS_UPDATE_URL, DEFAULT_TIMEOUT
from .daemon import DEFAULT_INTERVAL
from .exceptions import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

################################################################################
# CONFIGURATION MANAGER CLASS - TOML Settings
################################################################################

class ConfigManager:
    """Settings handler for logging, provider API, daemon and database sections."""

    def __init__(self, current_dir: str, config_path: str) -> None:
        """Load TOML settings and resolve paths relative to current_dir."""
        self.config_path = config_path
        self.config = self.load_config(config_path)

        self._load_debug_config()
        self._load_api_config()
        self._load_daemon_config()
        self._load_database_config(current_dir)

    ################################################################################
    # PUBLIC INTERFACE - Configuration Loading
    ################################################################################

    def load_config(self, path: str) -> Dict[str, Any]:
        """Load configuration from TOML file."""
        try:
            with open(path, "rb") as f:
                return tomllib.load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Configuration file not found: {path}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Error loading configuration from {path}: {e}") from e

    @property
    def log_level_value(self) -> int:
        """Numeric logging level for the configured level name."""
        return getattr(logging, self.log_level, logging.INFO)

    ################################################################################
    # PRIVATE METHODS - Section Loaders
    ################################################################################

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.config.get(name, {})
        if not isinstance(section, dict):
            raise ConfigError(f"[{name}] must be a table")
        return section

    def _load_debug_config(self) -> None:
        """Load debug config from [debug] section."""
        self.log_level = str(self._section("debug").get("level", "INFO")).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid log level '{self.log_level}' (expected one of {', '.join(LOG_LEVELS)})")
        self.console_colors = self._section("debug").get("console_colors", True)

    def _load_api_config(self) -> None:
        """Load API config from [provider_api] section."""
        self.provider_update_url = self._section("provider_api").get("update_url", DDNS_UPDATE_URL)
        self.provider_api_timeout = self._positive_number("provider_api", "timeout", DEFAULT_TIMEOUT)

    def _load_daemon_config(self) -> None:
        """Load daemon config from [daemon] section."""
        self.daemon_check_interval = self._positive_number("daemon", "check_interval", DEFAULT_INTERVAL)

    def _load_database_config(self, current_dir: str) -> None:
        """Load database config from [database] section, resolve paths."""
        database = self._section("database")
        db_path = database.get("db_path", "db.db")
        self.db_path = db_path if os.path.isabs(db_path) else os.path.join(current_dir, db_path)

        self.encrypt_password = bool(database.get("encrypt_password", True))

        key_file = database.get("encryption_key_path", ".encryption_key")
        if not os.path.isabs(key_file):
            db_dir = os.path.dirname(os.path.abspath(self.db_path))
            self.encryption_key_path = os.path.join(db_dir, key_file)
        else:
            self.encryption_key_path = key_file

    def _positive_number(self, section: str, key: str, default: float) -> float:
        value = self._section(section).get(key, default)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ConfigError(f"[{section}] {key} must be a positive number, got {value!r}")
        return value
