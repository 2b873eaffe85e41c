#!/usr/bin/env python3
"""
DDNS Manager

Façade used by the hosting application: settings round-trips through
config()/set_config() and a single background update loop per database.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT

This program is free software: you can redistribute it and/or modify
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import logging
import os
import threading
from typing import Optional, Dict, Any, Callable

# Project imports
from .api import DDNS_UPDATE_URL, DEFAULT_TIMEOUT, HTTPTransport, Transport, UpdateClient
from .daemon import DEFAULT_INTERVAL, Scheduler
from .database import Database
from .encryption import EncryptionManager
from .exceptions import EncryptionError, StorageConnectionError
from .logger import SUCCESS_LEVEL
from .store import Config, ConfigStore

# One update loop per database file for the whole process
_schedulers: Dict[str, Scheduler] = {}
_schedulers_lock = threading.Lock()

################################################################################
# MANAGER CLASS - Public DDNS Interface
################################################################################

class Manager:
    """Stateless handle bound to a database path. Copies observe the same stored record."""

    def __init__(self, db_path: str, update_url: str = DDNS_UPDATE_URL, timeout: float = DEFAULT_TIMEOUT,
                 interval: float = DEFAULT_INTERVAL, encryption_key_path: Optional[str] = None,
                 transport: Optional[Transport] = None, logger: Optional[Any] = None,
                 wait: Optional[Callable[[float], bool]] = None) -> None:
        """
        Initialize manager.

        Args:
            db_path: Path to the SQLite database holding the credential record
            update_url: Provider update endpoint
            timeout: HTTP request timeout in seconds
            interval: Seconds between two update attempts
            encryption_key_path: Fernet key file; when set the password is stored encrypted
            transport: HTTP capability used by the update client
            logger: Logger instance
            wait: Sleep function handed to the scheduler
        """
        self.db_path = db_path
        self.update_url = update_url
        self.timeout = timeout
        self.interval = interval
        self.encryption_key_path = encryption_key_path
        self.logger = logger if logger else logging.getLogger(__name__)
        self.transport = transport if transport else HTTPTransport(timeout=timeout, logger=self.logger)
        self._wait = wait

    @classmethod
    def from_settings(cls, settings: Any, logger: Optional[Any] = None, **kwargs: Any) -> "Manager":
        """Build a manager from a ConfigManager instance."""
        return cls(
            settings.db_path,
            update_url=settings.provider_update_url,
            timeout=settings.provider_api_timeout,
            interval=settings.daemon_check_interval,
            encryption_key_path=settings.encryption_key_path if settings.encrypt_password else None,
            logger=logger,
            **kwargs
        )

    ################################################################################
    # PUBLIC INTERFACE - Credential Record
    ################################################################################

    def config(self) -> Config:
        """Return the stored DDNS credentials. Raises StorageConnectionError or DatabaseError."""
        return self._store().read()

    def set_config(self, new_config: Config) -> None:
        """Overwrite the stored DDNS credentials. Raises StorageConnectionError or DatabaseError."""
        self._store().write(new_config)

    ################################################################################
    # PUBLIC INTERFACE - Updates
    ################################################################################

    def update_my_ip(self) -> None:
        """Run one update attempt.

        Skips silently when host or username is empty (not yet configured).

        Raises:
            StorageConnectionError, DatabaseError: credential record unavailable
            UpdateQueryFailed: provider rejected the request
            UpdateQueryTransport: provider unreachable
        """
        config = self.config()
        if not config.is_configured():
            self.logger.debug("Skipping DDNS update because credentials are missing")
            return

        client = UpdateClient(self.update_url, transport=self.transport, logger=self.logger)
        client.update(config.host, config.username, config.password)
        self.logger.log(SUCCESS_LEVEL, f"DDNS record '{config.host}' updated")

    def begin_periodic_updates(self) -> Scheduler:
        """Start the background update loop and return immediately.

        Only one loop runs per database file; further calls from any handle
        bound to the same file return the loop that is already running.
        """
        key = self._registry_key()
        with _schedulers_lock:
            scheduler = _schedulers.get(key)
            if scheduler and scheduler.is_running():
                self.logger.warning(f"Periodic DDNS updates already running for {self.db_path}")
                return scheduler

            scheduler = Scheduler(self.update_my_ip, interval=self.interval, logger=self.logger, wait=self._wait)
            _schedulers[key] = scheduler
            scheduler.start()
            return scheduler

    def stop_periodic_updates(self, timeout: Optional[float] = 30) -> bool:
        """Stop the background loop for this database. Returns False if none was running."""
        with _schedulers_lock:
            scheduler = _schedulers.pop(self._registry_key(), None)

        if not scheduler:
            self.logger.warning(f"No periodic DDNS updates running for {self.db_path}")
            return False

        return scheduler.stop(timeout=timeout)

    ################################################################################
    # PRIVATE METHODS - Internal Implementation
    ################################################################################

    def _store(self) -> ConfigStore:
        """Build a store for one operation; nothing is kept open between calls."""
        database = Database(self.db_path, logger=self.logger)

        encryption = None
        if self.encryption_key_path:
            try:
                encryption = EncryptionManager(self.encryption_key_path, self.logger)
            except EncryptionError as e:
                raise StorageConnectionError(f"Encryption key unavailable: {e}") from e

        return ConfigStore(database, encryption=encryption, logger=self.logger)

    def _registry_key(self) -> str:
        return os.path.realpath(self.db_path)
