"""
Central configuration for BitPermission.

This module contains all package-wide constants and the few configuration
values that may be overridden through environment variables.
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Package metadata
APP_NAME = "BitPermission"
APP_VERSION = "1.0.0"

# Logging
LOGGER_NAME = "bitpermission"
LOG_LEVEL = os.environ.get("BITPERMISSION_LOG_LEVEL", "INFO")
LOG_FOLDER = os.environ.get("BITPERMISSION_LOG_FOLDER") or None

# Bitmask text encoding (bit i set <=> permission at ordinal i granted)
BITMASK_RADIX = 32
BITMASK_DIGITS = "0123456789abcdefghijklmnopqrstuv"

# Wire format: {"<domain>@<revision>": "<bitmask>"}
DOMAIN_AND_REVISION_DIVIDER = "@"
