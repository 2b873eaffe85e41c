#!/usr/bin/env python3
"""
Daemon Entry Point

Loads settings, provisions the credential store and runs periodic DDNS
updates until SIGTERM/SIGINT. The import/export subcommands move the
credential record in and out of YAML/JSON files.

Created: 2025-10-27
Author: Manuel Ziel
License: MIT

This program is free software: you can redistribute it and/or modify
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import argparse
import logging
import os
import sys
from typing import Optional, List, Any

# Project imports
from . import __version__, __software_name__
from .config import ConfigManager
from .daemon import Scheduler, install_signal_handlers
from .database import Database
from .encryption import EncryptionManager
from .exceptions import DynDNSException
from .logger import LoggerManager
from .manager import Manager
from .transfer import ConfigExporter, ConfigImporter

CONFIG_ENV_VAR = "YDNS_DYNDNS_CONFIG"

################################################################################
# ARGUMENT PARSING - Command-Line Interface
################################################################################

def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments with subcommands (import, export). No subcommand runs the daemon."""
    parser = argparse.ArgumentParser(
        description='YDNS-DYNDNS - Dynamic DNS Client for ydns.io',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                  # Run periodic updates until stopped
  %(prog)s import credentials.yaml          # Store host/username/password
  %(prog)s export --output backup.yaml      # Export stored credentials
        """
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    parser_import = subparsers.add_parser('import', help='Import credentials from YAML/JSON file')
    parser_import.add_argument('file', type=str, help='Path to credentials file (YAML or JSON)')

    parser_export = subparsers.add_parser('export', help='Export stored credentials')
    parser_export.add_argument('--output', type=str, default=None, help='Output file path (default: stdout)')
    parser_export.add_argument('--format', type=str, choices=['yaml', 'json'], default='yaml', help='Output format: yaml or json (default: yaml)')
    parser_export.add_argument('--include-password', action='store_true', help='Include the password in the export')

    return parser.parse_args(argv)

################################################################################
# CLI COMMAND HANDLERS - Subcommand Processing
################################################################################

def handle_cli_command(args: argparse.Namespace, manager: Manager, logger: logging.Logger) -> int:
    """Handle CLI subcommands (import, export). Returns: Exit code (0=success)."""
    if args.command == 'import':
        try:
            ConfigImporter(manager, logger).import_from_file(args.file)
            logger.info("Configuration imported successfully")
            return 0
        except DynDNSException as e:
            logger.error(f"Import failed: {e}")
            return 1

    elif args.command == 'export':
        try:
            ConfigExporter(manager, logger).export_to_file(output_file=args.output, format=args.format,
                                                           include_password=args.include_password)
            return 0
        except DynDNSException as e:
            logger.error(f"Export failed: {e}")
            return 1

    return 0

################################################################################
# STARTUP - Store Provisioning and Update Loop
################################################################################

def prepare_storage(settings: ConfigManager, logger: Any) -> None:
    """Create the database record and, when enabled, the encryption key before any handle uses them."""
    logger.debug(f"Provisioning database {settings.db_path}...")
    Database(settings.db_path, logger=logger).provision()

    if settings.encrypt_password:
        EncryptionManager(settings.encryption_key_path, logger)


def start_daemon(settings: ConfigManager, logger: Any, **manager_kwargs: Any) -> Scheduler:
    """Provision storage and start the periodic update loop. Returns the running scheduler."""
    prepare_storage(settings, logger)
    manager = Manager.from_settings(settings, logger=logger, **manager_kwargs)
    return manager.begin_periodic_updates()

################################################################################
# MAIN APPLICATION - Entry Point and Initialization
################################################################################

def main(base_dir: Optional[str] = None, argv: Optional[List[str]] = None) -> int:
    """Initialize settings/logger, handle CLI commands or run the update loop. Returns: Exit code (0=success)."""
    args = parse_arguments(argv)

    base_dir = base_dir or os.getcwd()
    config_path = os.environ.get(CONFIG_ENV_VAR) or os.path.join(base_dir, "config.toml")

    settings = ConfigManager(base_dir, config_path)
    daemon_mode = os.getenv('INVOCATION_ID') is not None  # set by systemd
    logger = LoggerManager.get_logger(__software_name__, level=settings.log_level_value,
                                      daemon_mode=daemon_mode, use_colors=settings.console_colors)

    if args.command:
        prepare_storage(settings, logger)
        return handle_cli_command(args, Manager.from_settings(settings, logger=logger), logger)

    logger.info(f"{__software_name__} starting...")
    logger.info(f"Version: {__version__}")
    logger.info(f"Log level: {settings.log_level}")

    scheduler = start_daemon(settings, logger)
    install_signal_handlers(scheduler, logger)

    # Short joins keep the main thread responsive to signals
    while scheduler.get_status()['thread_alive']:
        scheduler.join(timeout=1.0)

    logger.info(f"{__software_name__} stopped")
    return 0


def run() -> None:
    """Console script wrapper around main()."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
    except DynDNSException as e:
        logger = LoggerManager.get_logger(__software_name__)
        logger.error(f"Startup failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger = LoggerManager.get_logger(__software_name__)
        logger.error(f"Unexpected error: {e}", exc_info=True)
        sys.exit(1)
