"""Shared pytest fixtures for ydns_dyndns tests."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

import pytest
import requests

from ydns_dyndns.database import Database
from ydns_dyndns.manager import Manager


class FakeTransport:
    """Records every request and answers with a fixed status or raises."""

    def __init__(self, status_code: int = 200, error: Optional[Exception] = None) -> None:
        self.status_code = status_code
        self.error = error
        self.calls: list[dict] = []
        self.called = threading.Event()

    def send(self, method, url, params=None, headers=None) -> int:
        self.calls.append({"method": method, "url": url, "params": params, "headers": headers})
        self.called.set()
        if self.error is not None:
            raise self.error
        return self.status_code


class FakeClock:
    """Wait function for Scheduler that advances virtual time instead of sleeping."""

    def __init__(self, stop_after: int) -> None:
        self.now = 0.0
        self.waits: list[float] = []
        self.stop_after = stop_after

    def __call__(self, interval: float) -> bool:
        self.waits.append(interval)
        self.now += interval
        return len(self.waits) >= self.stop_after


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """Provisioned database with an empty credential record."""
    path = str(tmp_path / "ddns.db")
    Database(path).provision()
    return path


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def manager(db_path: str, transport: FakeTransport) -> Manager:
    m = Manager(db_path, transport=transport)
    yield m
    m.stop_periodic_updates(timeout=5)


@pytest.fixture
def refused_transport() -> FakeTransport:
    return FakeTransport(error=requests.exceptions.ConnectionError("connection refused"))
