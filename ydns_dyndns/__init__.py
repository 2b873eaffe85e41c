#!/usr/bin/env python3
"""
YDNS-DYNDNS

Dynamic DNS Client for ydns.io

Created: 2025-10-29
Author: Manuel Ziel
License: MIT
"""

# Package metadata
__version__ = "1.0.0"
__author__ = "Manuel Ziel"
__email__ = "manuelziel@gmail.com"
__description__ = "Dynamic DNS Client for ydns.io"
__software_name__ = "YDNS-DYNDNS"
__syslog_identifier__ = "ydns-dyndns"  # Used for systemd journal logging

# Package imports
from .exceptions import (
    DynDNSException,
    StorageConnectionError,
    DatabaseError,
    UpdateQueryFailed,
    UpdateQueryTransport,
    ConfigError,
    EncryptionError,
)
from .config import ConfigManager
from .database import Database
from .store import Config, ConfigStore
from .api import HTTPTransport, UpdateClient
from .daemon import Scheduler
from .manager import Manager
from .logger import LoggerManager

__all__ = [
    'DynDNSException',
    'StorageConnectionError',
    'DatabaseError',
    'UpdateQueryFailed',
    'UpdateQueryTransport',
    'ConfigError',
    'EncryptionError',
    'ConfigManager',
    'Database',
    'Config',
    'ConfigStore',
    'HTTPTransport',
    'UpdateClient',
    'Scheduler',
    'Manager',
    'LoggerManager',
]
