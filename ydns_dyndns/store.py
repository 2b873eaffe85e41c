#!/usr/bin/env python3
"""
Credential Store

Reads and overwrites the single DDNS credential record. The record itself is
created by provisioning (Database.provision); this module never inserts or
deletes it.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import logging
from dataclasses import dataclass, asdict
from typing import Optional, Any, Dict

# Internal imports
from .database import Database, DDNS_CONFIG_TABLE
from .encryption import EncryptionManager
from .exceptions import DatabaseError, EncryptionError

################################################################################
# DATA MODEL
################################################################################

@dataclass(frozen=True)
class Config:
    """DDNS credentials: hostname to keep updated plus provider account and secret."""
    host: str = ""
    username: str = ""
    password: str = ""

    def is_configured(self) -> bool:
        """Host and username are both required; an empty password is accepted by some providers."""
        return bool(self.host) and bool(self.username)

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    def __repr__(self) -> str:
        return f"Config(host={self.host!r}, username={self.username!r}, password='***')"

################################################################################
# CONFIG STORE CLASS - Singleton Record Access
################################################################################

class ConfigStore:
    """Point read and in-place overwrite of the singleton credential row."""

    def __init__(self, database: Database, encryption: Optional[EncryptionManager] = None,
                 logger: Optional[Any] = None) -> None:
        self.database = database
        self.encryption = encryption
        self.logger = logger if logger else logging.getLogger(__name__)

    def read(self) -> Config:
        """Return the stored Config. Raises StorageConnectionError or DatabaseError."""
        rows = self.database.execute_query(
            f"SELECT host, username, password FROM {DDNS_CONFIG_TABLE} LIMIT 1"
        )
        if not rows:
            raise DatabaseError("DDNS configuration record not found")

        row = rows[0]
        try:
            return Config(
                host=self._as_text(row["host"]),
                username=self._as_text(row["username"]),
                password=self._decrypt(self._as_text(row["password"])),
            )
        except EncryptionError as e:
            raise DatabaseError(f"Stored DDNS password could not be decrypted: {e}") from e

    def write(self, config: Config) -> None:
        """Overwrite all three fields of the stored record. Raises StorageConnectionError or DatabaseError."""
        try:
            password = self._encrypt(config.password)
        except EncryptionError as e:
            raise DatabaseError(f"DDNS password could not be encrypted: {e}") from e

        affected = self.database.execute_update(
            f"UPDATE {DDNS_CONFIG_TABLE} SET host = ?, username = ?, password = ?",
            (config.host, config.username, password)
        )
        if affected == 0:
            raise DatabaseError("DDNS configuration record not found")

        self.logger.debug(f"DDNS configuration saved for host '{config.host}'")

    ################################################################################
    # PRIVATE METHODS - Internal Implementation
    ################################################################################

    def _encrypt(self, value: str) -> str:
        return self.encryption.encrypt(value) if self.encryption else value

    def _decrypt(self, value: str) -> str:
        return self.encryption.decrypt(value) if self.encryption else value

    @staticmethod
    def _as_text(value: Any) -> str:
        if not isinstance(value, str):
            raise DatabaseError(f"Corrupt DDNS configuration record: expected text, got {type(value).__name__}")
        return value
