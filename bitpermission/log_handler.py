"""
Log Handler Module

Provides logging management utilities for applications embedding BitPermission.

Usage:
    from bitpermission.log_handler import LogManager

    log_manager = LogManager("MyService", "DEBUG", log_folder="logs")
    logger = log_manager.get_logger("permissions")

    service = BitPermissionService({MyPermissions}, logger=logger)
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from . import config

LOG_FORMAT = "[%(asctime)s] [PID:%(process)-8d] [%(levelname)-8s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogManager:
    """
    Manages logging configuration.
    """

    def __init__(
        self,
        app_name: str = config.LOGGER_NAME,
        log_level: str = config.LOG_LEVEL,
        log_folder: Optional[str] = config.LOG_FOLDER,
    ):
        """
        Initialize the log manager.

        Args:
            app_name: Application name for the logger
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_folder: Directory to store log files; console only when None
        """
        self.app_name = app_name
        self.log_folder = log_folder
        self.log_level = getattr(logging, log_level.upper(), logging.INFO)
        self.logger = None

    def setup(self) -> logging.Logger:
        """
        Set up and configure the logger.

        Returns:
            Configured logger instance
        """
        logger = logging.getLogger(self.app_name)
        logger.setLevel(self.log_level)

        # Remove existing handlers to avoid duplicates
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if self.log_folder:
            os.makedirs(self.log_folder, exist_ok=True)
            log_file = os.path.join(self.log_folder, f"{self.app_name}.log")
            file_handler = RotatingFileHandler(
                log_file, maxBytes=10 * 1024 * 1024, backupCount=5  # 10 MB
            )
            file_handler.setLevel(self.log_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        self.logger = logger
        return logger

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """
        Get the configured logger instance or a child logger.

        Args:
            name: Optional name for a child logger

        Returns:
            Logger instance or child logger
        """
        if self.logger is None:
            self.setup()

        assert self.logger is not None, "Logger should be initialized"

        if name and name != self.app_name:
            return self.logger.getChild(name)
        return self.logger

    def close(self) -> None:
        """Detach and close every handler installed by setup()."""
        if self.logger is None:
            return
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()
