#!/usr/bin/env python3
"""
Database Manager

Handles SQLite access for the DDNS credential record. Every operation opens
its own connection and closes it before returning, so no connection (and no
lock) is held across operations or across daemon cycles.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import logging
import sqlite3
from contextlib import contextmanager
from typing import Optional, List, Any, Iterator

# Internal imports
from .exceptions import DatabaseError, StorageConnectionError

################################################################################
# SCHEMA
################################################################################

DDNS_CONFIG_TABLE = "ddns_config"

# id is pinned to 1 so the table can never hold more than one row
DDNS_CONFIG_COLUMNS = [
    ("id", "INTEGER PRIMARY KEY CHECK (id = 1)"),
    ("host", "TEXT NOT NULL DEFAULT ''"),
    ("username", "TEXT NOT NULL DEFAULT ''"),
    ("password", "TEXT NOT NULL DEFAULT ''"),
]

################################################################################
# DATABASE CLASS - SQLite with Per-Operation Connections
################################################################################

class Database:
    """Database handler for SQLite operations. Opens one connection per operation."""

    def __init__(self, db_file: str, timeout: float = 30.0, logger: Optional[Any] = None) -> None:
        """Initialize database handler.

        Args:
            db_file: Path to SQLite database file
            timeout: Seconds SQLite waits on a locked database (default: 30)
            logger: Logger instance
        """
        self.db_file = db_file
        self.timeout = timeout
        self.logger = logger if logger else logging.getLogger(__name__)

    ################################################################################
    # PUBLIC CONNECTION INTERFACE - Context Manager
    ################################################################################

    @contextmanager
    def get_connection(self) -> Iterator[sqlite3.Connection]:
        """Open a fresh connection, yield it and always close it afterwards."""
        conn = self._create_connection()
        try:
            yield conn
        except Exception:
            try:
                conn.rollback()
            except sqlite3.Error as e:
                self.logger.debug(f"Rollback failed: {e}")
            raise
        finally:
            conn.close()

    ################################################################################
    # QUERY EXECUTION METHODS - Public Database Operations
    ################################################################################

    def execute_query(self, query: str, params: Optional[tuple] = None) -> List[sqlite3.Row]:
        """Execute a SELECT query and return results."""
        with self.get_connection() as conn:
            try:
                cursor = conn.execute(query, params or ())
                return cursor.fetchall()
            except sqlite3.Error as e:
                raise DatabaseError(f"Query failed: {e}") from e

    def execute_update(self, query: str, params: Optional[tuple] = None) -> int:
        """Execute an INSERT/UPDATE/DELETE query. Returns number of affected rows."""
        with self.get_connection() as conn:
            try:
                cursor = conn.execute(query, params or ())
                conn.commit()
                return cursor.rowcount
            except sqlite3.Error as e:
                raise DatabaseError(f"Update failed: {e}") from e

    ################################################################################
    # TABLE MANAGEMENT - Schema Creation and Provisioning
    ################################################################################

    def provision(self) -> None:
        """Create the credential table and seed its single row with empty fields (idempotent)."""
        self.create_table(DDNS_CONFIG_TABLE, DDNS_CONFIG_COLUMNS)

        inserted = self.execute_update(
            f"INSERT OR IGNORE INTO {DDNS_CONFIG_TABLE} (id, host, username, password) VALUES (1, '', '', '')"
        )
        if inserted:
            self.logger.info("Provisioned empty DDNS configuration record")

        # WAL lets the settings UI read while the daemon writes
        self.execute_query("PRAGMA journal_mode=WAL")

    def create_table(self, table_name: str, columns: List[tuple]) -> None:
        """Create a table if it does not exist."""
        columns_sql = ", ".join([f"{name} {type_}" for name, type_ in columns])
        sql = f"CREATE TABLE IF NOT EXISTS {table_name} ({columns_sql});"

        self.execute_update(sql)

    ################################################################################
    # PRIVATE METHODS - Internal Implementation
    ################################################################################

    def _create_connection(self) -> sqlite3.Connection:
        """Create a new database connection with proper settings."""
        try:
            conn = sqlite3.connect(self.db_file, timeout=self.timeout)
        except sqlite3.Error as e:
            raise StorageConnectionError(f"Could not acquire database connection to {self.db_file}: {e}") from e

        conn.row_factory = sqlite3.Row

        try:
            # Wait and retry while another handle holds the write lock
            conn.execute(f"PRAGMA busy_timeout = {int(self.timeout * 1000)}")
        except sqlite3.Error as e:
            conn.close()
            raise StorageConnectionError(f"Could not configure database connection to {self.db_file}: {e}") from e

        return conn
