"""Tests for the host entry point: subcommands and daemon startup."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path

import pytest
import yaml

from conftest import FakeClock, FakeTransport
from ydns_dyndns import main as entry
from ydns_dyndns.config import ConfigManager
from ydns_dyndns.logger import LoggerManager
from ydns_dyndns.manager import Manager
from ydns_dyndns.store import Config


@pytest.fixture
def base_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.delenv(entry.CONFIG_ENV_VAR, raising=False)
    (tmp_path / "config.toml").write_text('[debug]\nlevel = "DEBUG"\n')
    return tmp_path


def _settings(base_dir: Path) -> ConfigManager:
    return ConfigManager(str(base_dir), str(base_dir / "config.toml"))


class TestSubcommands:
    def test_import_then_export(self, base_dir: Path) -> None:
        creds = base_dir / "creds.yaml"
        creds.write_text(yaml.safe_dump({"ddns": {"host": "home.ydns.eu", "username": "alice", "password": "s3cret"}}))
        out = base_dir / "backup.json"

        assert entry.main(str(base_dir), ["import", str(creds)]) == 0
        assert entry.main(str(base_dir), ["export", "--output", str(out), "--format", "json", "--include-password"]) == 0

        assert json.loads(out.read_text())["ddns"] == {"host": "home.ydns.eu", "username": "alice", "password": "s3cret"}

    def test_import_stores_password_encrypted(self, base_dir: Path) -> None:
        creds = base_dir / "creds.json"
        creds.write_text(json.dumps({"ddns": {"host": "home.ydns.eu", "username": "alice", "password": "s3cret"}}))

        assert entry.main(str(base_dir), ["import", str(creds)]) == 0

        conn = sqlite3.connect(base_dir / "db.db")
        try:
            (stored,) = conn.execute("SELECT password FROM ddns_config").fetchone()
        finally:
            conn.close()
        assert stored not in ("", "s3cret")
        assert (base_dir / ".encryption_key").exists()

    def test_import_of_missing_file_fails(self, base_dir: Path) -> None:
        assert entry.main(str(base_dir), ["import", str(base_dir / "missing.json")]) == 1

    def test_version_flag(self, base_dir: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            entry.main(str(base_dir), ["--version"])
        assert exc_info.value.code == 0


class TestDaemonStartup:
    def test_prepare_storage_creates_record_and_key(self, base_dir: Path) -> None:
        settings = _settings(base_dir)

        entry.prepare_storage(settings, LoggerManager.get_logger("ydns-test-main"))

        assert Manager.from_settings(settings).config() == Config()
        assert (base_dir / ".encryption_key").stat().st_mode & 0o777 == 0o600

    def test_start_daemon_runs_first_cycle_with_stored_credentials(self, base_dir: Path) -> None:
        settings = _settings(base_dir)
        logger = LoggerManager.get_logger("ydns-test-main")
        entry.prepare_storage(settings, logger)
        Manager.from_settings(settings).set_config(Config("home.ydns.eu", "alice", "s3cret"))
        transport = FakeTransport()

        scheduler = entry.start_daemon(settings, logger, transport=transport, wait=FakeClock(stop_after=1))
        scheduler.join(timeout=5)

        assert [c["params"] for c in transport.calls] == [{"host": "home.ydns.eu"}]
        assert not scheduler.get_status()["thread_alive"]

    def test_start_daemon_keeps_stored_record(self, base_dir: Path) -> None:
        settings = _settings(base_dir)
        logger = LoggerManager.get_logger("ydns-test-main")
        entry.prepare_storage(settings, logger)
        Manager.from_settings(settings).set_config(Config("home.ydns.eu", "alice", "s3cret"))

        entry.start_daemon(settings, logger, transport=FakeTransport(), wait=FakeClock(stop_after=1)).join(timeout=5)

        assert Manager.from_settings(settings).config() == Config("home.ydns.eu", "alice", "s3cret")

    def test_main_returns_after_shutdown_signal(self, base_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        installed = []

        def stop_immediately(scheduler, logger) -> None:
            installed.append(scheduler)
            scheduler.stop(timeout=5)

        monkeypatch.setattr(entry, "install_signal_handlers", stop_immediately)

        assert entry.main(str(base_dir), []) == 0

        assert len(installed) == 1
        assert not installed[0].get_status()["thread_alive"]
        assert Manager.from_settings(_settings(base_dir)).config() == Config()
