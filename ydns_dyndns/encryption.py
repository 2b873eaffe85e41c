#!/usr/bin/env python3
"""
Encryption Manager

Keeps the provider password encrypted at rest using Fernet (AES-128 CBC).

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

import os
import tempfile
from typing import Optional, Any
from cryptography.fernet import Fernet, InvalidToken
from .exceptions import EncryptionError

################################################################################
# ENCRYPTION MANAGER CLASS
################################################################################

class EncryptionManager:
    """Manages encryption/decryption using Fernet (AES-128 CBC + HMAC-SHA256). Auto-generates key, enforces 0o600 permissions."""

    def __init__(self, key_file_path: str, logger: Optional[Any] = None) -> None:
        """Initialize encryption manager. Creates key file if not exists. Raises EncryptionError if setup fails."""
        self.key_file = key_file_path
        self.logger = logger
        self._cipher: Optional[Fernet] = None

        self._setup_encryption()

    ################################################################################
    # PUBLIC METHODS - Encryption and Decryption
    ################################################################################

    def encrypt(self, data: str) -> str:
        """Encrypt string data. Empty input stays empty so an unset password remains recognisable."""
        if not data:
            return ""

        try:
            return self._cipher.encrypt(data.encode()).decode()
        except Exception as e:
            if self.logger:
                self.logger.error(f"Encryption failed: {e}")
            raise EncryptionError(f"Encryption failed: {e}") from e

    def decrypt(self, encrypted_data: str) -> str:
        """Decrypt Fernet token. Empty input decrypts to empty string. Raises EncryptionError."""
        if not encrypted_data:
            return ""

        try:
            return self._cipher.decrypt(encrypted_data.encode()).decode()
        except (InvalidToken, ValueError) as e:
            if self.logger:
                self.logger.error(f"Decryption failed: {e!r}")
            raise EncryptionError(f"Decryption failed: {e!r}") from e

    ################################################################################
    # PRIVATE METHODS - Encryption Setup and Key Management
    ################################################################################

    def _setup_encryption(self) -> None:
        """Load or generate the key, enforce 0o600 permissions and initialize the cipher."""
        try:
            if not os.path.exists(self.key_file):
                self._create_key_file()

            with open(self.key_file, 'rb') as f:
                key = f.read().strip()

            current_perms = os.stat(self.key_file).st_mode & 0o777
            if current_perms != 0o600:
                os.chmod(self.key_file, 0o600)
                if self.logger:
                    self.logger.warning(f"Fixed encryption key permissions: {self.key_file}")

            # Fernet keys are always 32 bytes URL-safe base64 (44 chars)
            if len(key) != 44:
                raise ValueError(f"Invalid encryption key length: {len(key)} (expected 44)")

            self._cipher = Fernet(key)

        except (OSError, ValueError) as e:
            if self.logger:
                self.logger.error(f"Encryption setup failed: {e}")
            raise EncryptionError(f"Failed to setup encryption: {e}") from e

    def _create_key_file(self) -> None:
        """Publish a new key at key_file unless another writer got there first.

        The key is written to a private temp file and hard-linked into place, so
        key_file only ever appears complete and the first link wins.
        """
        key_dir = os.path.dirname(self.key_file)
        if key_dir and not os.path.exists(key_dir):
            os.makedirs(key_dir, mode=0o700, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(prefix='.key-', dir=key_dir or os.curdir)
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(Fernet.generate_key())
                f.flush()
                os.fsync(f.fileno())

            try:
                os.link(tmp_path, self.key_file)
            except FileExistsError:
                return
        finally:
            os.unlink(tmp_path)

        if self.logger:
            self.logger.info(f"Generated new encryption key: {self.key_file}")
