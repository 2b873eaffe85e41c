"""
Custom Exception Classes for YDNS DynDNS.

Exception Hierarchy:
    DynDNSException (Base)
    ├─ StorageConnectionError - Database file could not be opened
    ├─ DatabaseError          - Credential record missing or unreadable/unwritable
    ├─ UpdateQueryFailed      - Provider answered with a non-2xx status code
    ├─ UpdateQueryTransport   - Provider could not be reached (DNS, TLS, timeout)
    ├─ ConfigError            - Settings file issues (TOML parsing, bad values)
    └─ EncryptionError        - Encryption/Decryption failures
"""


class DynDNSException(Exception):
    """Base exception for all YDNS DynDNS errors."""
    pass


class StorageConnectionError(DynDNSException):
    """Could not acquire a database connection (path invalid, file locked)."""
    pass


class DatabaseError(DynDNSException):
    """Database operation failed (record missing, SQLite errors)."""
    pass


class UpdateQueryFailed(DynDNSException):
    """DDNS update query failed with an HTTP status code."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"DDNS update query failed with HTTP status code `{status_code}`")


class UpdateQueryTransport(DynDNSException):
    """DDNS update query failed due to a transport error."""

    def __init__(self) -> None:
        super().__init__("DDNS update query failed due to a transport error")


class ConfigError(DynDNSException):
    """Configuration error (TOML parsing, missing file, invalid values)."""
    pass


class EncryptionError(DynDNSException):
    """Encryption/Decryption operation failed."""
    pass
