#!/usr/bin/env python3
"""
Logger Module

Logging setup with ANSI color formatting for the console and systemd journal
integration when python-systemd is installed.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT

This program is free software: you can redistribute it and/or modify
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

import os
import sys
import logging
import threading
from typing import Dict, Any

from . import __syslog_identifier__

SYSLOG_IDENTIFIER = os.environ.get('SYSLOG_IDENTIFIER', __syslog_identifier__)

# Between INFO (20) and WARNING (30)
SUCCESS_LEVEL = 25
logging.addLevelName(SUCCESS_LEVEL, 'SUCCESS')

################################################################################
# ANSI COLORS - Console Level Styling
################################################################################

RESET = '\033[0m'

LOG_COLORS = {
    'DEBUG': '\033[0;34m',
    'INFO': RESET,
    'SUCCESS': '\033[0;32m',
    'WARNING': '\033[1;33m',
    'ERROR': '\033[0;31m',
    'CRITICAL': '\033[1;31m',
}

LOG_SYMBOLS = {
    'DEBUG': 'd',
    'INFO': 'ℹ',
    'SUCCESS': '✓',
    'WARNING': '✗',
    'ERROR': '✗',
    'CRITICAL': '✗',
}

################################################################################
# FORMATTER CLASSES - ANSI Color Formatting
################################################################################

class ColoredFormatter(logging.Formatter):
    """Console formatter prefixing each message with a level color and symbol."""

    def __init__(self, include_timestamp: bool = True, use_colors: bool = True) -> None:
        self.use_colors = use_colors
        format_string = '%(asctime)s - %(message)s' if include_timestamp else '%(message)s'
        super().__init__(format_string, datefmt='%H:%M:%S')

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors and symbols."""
        line = super().format(record)

        symbol = LOG_SYMBOLS.get(record.levelname, '')
        if symbol:
            line = f"{symbol} {line}"

        if self.use_colors:
            line = f"{LOG_COLORS.get(record.levelname, '')}{line}{RESET}"

        return line


class LoggerManager:
    """Logger factory with console and systemd journal handlers."""

    _loggers: Dict[str, logging.Logger] = {}
    _lock = threading.Lock()

    ################################################################################
    # PUBLIC CLASS METHODS - Logger Factory
    ################################################################################

    @classmethod
    def get_logger(cls, name: str, **kwargs: Any) -> logging.Logger:
        """Get or create logger instance (thread-safe). Use daemon_mode=True to skip console output."""
        with cls._lock:
            if name not in cls._loggers:
                cls._loggers[name] = cls._create_logger(name, **kwargs)
            return cls._loggers[name]

    ################################################################################
    # PRIVATE CLASS METHODS - Logger Configuration
    ################################################################################

    @classmethod
    def _create_logger(cls, name: str, **kwargs: Any) -> logging.Logger:
        """Create and configure a logger. Level comes from kwargs or the DEBUG env var."""
        daemon_mode = kwargs.get('daemon_mode', False)
        use_colors = kwargs.get('use_colors', True)
        log_level = kwargs.get('level', None)

        if log_level is None:
            log_level = logging.DEBUG if os.getenv('DEBUG', '0') == '1' else logging.INFO

        logger = logging.getLogger(name)
        logger.setLevel(log_level)

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

        if not daemon_mode:
            cls._setup_console_handler(logger, log_level, use_colors)

        cls._setup_journal_handler(logger, log_level)

        return logger

    @classmethod
    def _setup_console_handler(cls, logger: logging.Logger, level: int, use_colors: bool) -> None:
        """Setup console handler with ANSI colors."""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(ColoredFormatter(use_colors=use_colors and sys.stdout.isatty()))
        logger.addHandler(console_handler)

    @classmethod
    def _setup_journal_handler(cls, logger: logging.Logger, level: int) -> None:
        """Setup systemd journal handler when python-systemd is installed."""
        try:
            from systemd import journal
        except ImportError:
            return

        journal_handler = journal.JournalHandler(SYSLOG_IDENTIFIER=SYSLOG_IDENTIFIER)
        journal_handler.setLevel(level)
        journal_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logger.addHandler(journal_handler)
