#!/usr/bin/env python3
"""
YDNS-DYNDNS - Dynamic DNS Client for ydns.io

Keeps a ydns.io host pointed at this machine's public IP address. Settings
are read from config.toml next to this script (or $YDNS_DYNDNS_CONFIG).

Created: 2025-10-27
Author: Manuel Ziel
License: MIT

This program is free software: you can redistribute it and/or modify
"""

import os
import sys

from ydns_dyndns.main import main
from ydns_dyndns.logger import LoggerManager
from ydns_dyndns import __software_name__

################################################################################
# ENTRY POINT - Script Execution Handler
################################################################################

if __name__ == "__main__":
    try:
        exit_code = main(os.path.dirname(os.path.abspath(__file__)))
        sys.exit(exit_code)
    except KeyboardInterrupt:
        logger = LoggerManager.get_logger(__software_name__)
        logger.warning("Application interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger = LoggerManager.get_logger(__software_name__)
        logger.error(f"Unexpected error: {e}", exc_info=True)
        sys.exit(1)
