"""
Tests for environment driven configuration.
"""

import importlib
import os
import unittest
from unittest import mock

from bitpermission import config


class TestConfig(unittest.TestCase):
    """Test constants and environment overrides."""

    def tearDown(self):
        importlib.reload(config)

    def test_bitmask_constants(self):
        self.assertEqual(config.BITMASK_RADIX, 32)
        self.assertEqual(len(config.BITMASK_DIGITS), config.BITMASK_RADIX)
        self.assertEqual(config.DOMAIN_AND_REVISION_DIVIDER, "@")
        self.assertEqual(config.APP_NAME, "BitPermission")

    def test_environment_overrides(self):
        with mock.patch.dict(
            os.environ,
            {"BITPERMISSION_LOG_LEVEL": "DEBUG", "BITPERMISSION_LOG_FOLDER": "/tmp/bitpermission-logs"},
        ):
            importlib.reload(config)
            self.assertEqual(config.LOG_LEVEL, "DEBUG")
            self.assertEqual(config.LOG_FOLDER, "/tmp/bitpermission-logs")

    def test_empty_log_folder_means_console_only(self):
        with mock.patch.dict(os.environ, {"BITPERMISSION_LOG_FOLDER": ""}):
            importlib.reload(config)
            self.assertIsNone(config.LOG_FOLDER)


if __name__ == "__main__":
    unittest.main(verbosity=2)
