#!/usr/bin/env python3
"""
Configuration Import/Export

Moves the DDNS credential record to and from YAML/JSON files.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import json
import os
import sys
from datetime import datetime, timezone
from typing import Optional, Dict, Any

# Third-party imports
import yaml

# Internal imports
from .exceptions import ConfigError
from .store import Config

EXPORT_VERSION = "1.0"
CONFIG_FIELDS = ("host", "username", "password")

################################################################################
# DYNDNS CONFIGURATION EXPORTER
################################################################################

class ConfigExporter:
    """Export the DDNS credential record to YAML/JSON."""

    def __init__(self, manager: Any, logger: Optional[Any] = None) -> None:
        self.manager = manager
        self.logger = logger if logger else manager.logger

    def export_to_file(self, output_file: Optional[str] = None, format: str = 'yaml',
                       include_password: bool = False) -> None:
        """Export the record to output_file, or stdout when no file is given."""
        if format not in ('yaml', 'json'):
            raise ConfigError(f"Unsupported export format: {format}")

        data = self._build_export_data(include_password)

        if format == 'json':
            output = json.dumps(data, indent=2)
        else:
            output = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)

        if output_file:
            try:
                with open(output_file, 'w') as f:
                    f.write(output)
            except OSError as e:
                raise ConfigError(f"Cannot write to file {output_file}: {e}") from e
            self.logger.info(f"Configuration exported to {output_file}")
        else:
            sys.stdout.write(output)

    def _build_export_data(self, include_password: bool) -> Dict[str, Any]:
        """Build export structure."""
        ddns = self.manager.config().to_dict()
        if not include_password:
            del ddns['password']

        return {
            'version': EXPORT_VERSION,
            'exported_at': datetime.now(timezone.utc).isoformat(),
            'ddns': ddns,
        }

################################################################################
# DYNDNS CONFIGURATION IMPORTER
################################################################################

class ConfigImporter:
    """Import the DDNS credential record from YAML/JSON. A missing password keeps the stored one."""

    def __init__(self, manager: Any, logger: Optional[Any] = None) -> None:
        self.manager = manager
        self.logger = logger if logger else manager.logger

    def import_from_file(self, file_path: str) -> Config:
        """Overwrite the stored record with the file contents. Returns the imported Config."""
        self.logger.info(f"Importing configuration from {file_path}")

        data = self._parse_file(file_path)
        ddns = self._validate_import_data(data)

        if 'password' not in ddns:
            ddns['password'] = self.manager.config().password

        config = Config(host=ddns['host'], username=ddns['username'], password=ddns['password'])
        self.manager.set_config(config)
        self.logger.info(f"Configuration imported for host '{config.host}'")
        return config

    def _parse_file(self, file_path: str) -> Any:
        """Parse YAML or JSON file, chosen by extension."""
        extension = os.path.splitext(file_path)[1].lower()
        if extension not in ('.json', '.yaml', '.yml'):
            raise ConfigError(f"Unsupported import file type: {file_path}")

        try:
            with open(file_path, 'r') as f:
                if extension == '.json':
                    return json.load(f)
                return yaml.safe_load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Import file not found: {file_path}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON format: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML format: {e}") from e

    def _validate_import_data(self, data: Any) -> Dict[str, str]:
        """Validate import data structure and return the 'ddns' mapping."""
        if not isinstance(data, dict) or not isinstance(data.get('ddns'), dict):
            raise ConfigError("Missing or invalid 'ddns' section")

        ddns = {k: v for k, v in data['ddns'].items() if k in CONFIG_FIELDS}
        for field in ('host', 'username'):
            if field not in ddns:
                raise ConfigError(f"'ddns' section missing '{field}'")

        for field, value in ddns.items():
            if not isinstance(value, str):
                raise ConfigError(f"'ddns.{field}' must be a string")

        return ddns
