"""Tests for logger setup and formatting."""

from __future__ import annotations

import logging

from ydns_dyndns.logger import SUCCESS_LEVEL, ColoredFormatter, LoggerManager


def _record(level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord("test", level, __file__, 1, message, None, None)


def test_success_level_is_registered() -> None:
    assert logging.getLevelName(SUCCESS_LEVEL) == "SUCCESS"


def test_plain_formatter_adds_symbol() -> None:
    formatter = ColoredFormatter(include_timestamp=False, use_colors=False)
    assert formatter.format(_record(SUCCESS_LEVEL, "updated")) == "✓ updated"
    assert formatter.format(_record(logging.ERROR, "failed")) == "✗ failed"


def test_colored_formatter_wraps_in_ansi() -> None:
    formatter = ColoredFormatter(include_timestamp=False, use_colors=True)
    line = formatter.format(_record(logging.ERROR, "failed"))
    assert line.startswith("\033[0;31m")
    assert line.endswith("\033[0m")


def test_message_with_braces_and_percent() -> None:
    formatter = ColoredFormatter(include_timestamp=False, use_colors=False)
    assert formatter.format(_record(logging.INFO, "{host} at 100%")) == "ℹ {host} at 100%"


def test_get_logger_is_cached() -> None:
    first = LoggerManager.get_logger("ydns-test", level=logging.DEBUG)
    second = LoggerManager.get_logger("ydns-test", level=logging.ERROR)

    assert first is second
    assert first.level == logging.DEBUG


def test_daemon_mode_skips_console() -> None:
    logger = LoggerManager.get_logger("ydns-test-daemon", daemon_mode=True)
    assert not any(type(h) is logging.StreamHandler for h in logger.handlers)
