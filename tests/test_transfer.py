"""Tests for credential import/export."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from ydns_dyndns.exceptions import ConfigError
from ydns_dyndns.manager import Manager
from ydns_dyndns.store import Config
from ydns_dyndns.transfer import ConfigExporter, ConfigImporter


@pytest.fixture
def configured(manager: Manager) -> Manager:
    manager.set_config(Config("home.ydns.eu", "alice", "s3cret"))
    return manager


class TestExport:
    def test_yaml_without_password(self, configured: Manager, tmp_path: Path) -> None:
        out = tmp_path / "export.yaml"
        ConfigExporter(configured).export_to_file(str(out))

        data = yaml.safe_load(out.read_text())
        assert data["version"] == "1.0"
        assert data["ddns"] == {"host": "home.ydns.eu", "username": "alice"}

    def test_json_with_password(self, configured: Manager, tmp_path: Path) -> None:
        out = tmp_path / "export.json"
        ConfigExporter(configured).export_to_file(str(out), format="json", include_password=True)

        data = json.loads(out.read_text())
        assert data["ddns"] == {"host": "home.ydns.eu", "username": "alice", "password": "s3cret"}

    def test_stdout(self, configured: Manager, capsys: pytest.CaptureFixture[str]) -> None:
        ConfigExporter(configured).export_to_file(format="json")
        assert json.loads(capsys.readouterr().out)["ddns"]["host"] == "home.ydns.eu"

    def test_unknown_format(self, configured: Manager) -> None:
        with pytest.raises(ConfigError):
            ConfigExporter(configured).export_to_file(format="xml")


class TestImport:
    def test_yaml_import_overwrites_record(self, manager: Manager, tmp_path: Path) -> None:
        src = tmp_path / "import.yml"
        src.write_text("ddns:\n  host: new.ydns.eu\n  username: bob\n  password: pw\n")

        imported = ConfigImporter(manager).import_from_file(str(src))

        assert imported == Config("new.ydns.eu", "bob", "pw")
        assert manager.config() == imported

    def test_missing_password_keeps_stored_one(self, configured: Manager, tmp_path: Path) -> None:
        src = tmp_path / "import.json"
        src.write_text(json.dumps({"ddns": {"host": "new.ydns.eu", "username": "bob"}}))

        ConfigImporter(configured).import_from_file(str(src))

        assert configured.config() == Config("new.ydns.eu", "bob", "s3cret")

    def test_export_then_import(self, configured: Manager, tmp_path: Path) -> None:
        out = tmp_path / "backup.yaml"
        ConfigExporter(configured).export_to_file(str(out), include_password=True)
        configured.set_config(Config())

        ConfigImporter(configured).import_from_file(str(out))

        assert configured.config() == Config("home.ydns.eu", "alice", "s3cret")

    @pytest.mark.parametrize(
        "content",
        [
            "[]",
            '{"zones": []}',
            '{"ddns": {"username": "bob"}}',
            '{"ddns": {"host": 1, "username": "bob"}}',
            "{not json",
        ],
    )
    def test_invalid_content(self, manager: Manager, tmp_path: Path, content: str) -> None:
        src = tmp_path / "bad.json"
        src.write_text(content)
        with pytest.raises(ConfigError):
            ConfigImporter(manager).import_from_file(str(src))
        assert manager.config() == Config()

    def test_missing_file(self, manager: Manager, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            ConfigImporter(manager).import_from_file(str(tmp_path / "absent.yaml"))

    def test_unsupported_extension(self, manager: Manager, tmp_path: Path) -> None:
        src = tmp_path / "creds.txt"
        src.write_text("host=x")
        with pytest.raises(ConfigError):
            ConfigImporter(manager).import_from_file(str(src))
