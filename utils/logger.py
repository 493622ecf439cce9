"""
logger.py

Logging for PortProbe. Records go to stderr so that report output on
stdout stays machine-readable; a rotating file log is optional.
"""

import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from utils.config import config

LOGGER_NAME = "PortProbe"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LoggerSetup:
    """
    Builds the PortProbe logger from the logging.* and paths.logs_dir settings.
    """

    _initialized = False

    @staticmethod
    def _file_handler(logs_dir: str) -> RotatingFileHandler:
        logs_path = Path(logs_dir)
        logs_path.mkdir(parents=True, exist_ok=True)

        return RotatingFileHandler(
            logs_path / f"portprobe_{datetime.now().strftime('%Y%m%d')}.log",
            maxBytes=config.get("logging.max_log_size_mb", 10) * 1024 * 1024,
            backupCount=config.get("logging.backup_count", 5),
            encoding="utf-8",
        )

    @classmethod
    def setup(cls) -> logging.Logger:
        """Configure the logger once and return it."""
        logger = logging.getLogger(LOGGER_NAME)

        if cls._initialized:
            return logger

        level_name = str(config.get("logging.level", "WARNING")).upper()
        logger.setLevel(getattr(logging, level_name, logging.WARNING))

        handlers = []
        if config.get("logging.console_output", True):
            handlers.append(logging.StreamHandler(sys.stderr))
        if config.get("logging.file_output", False):
            handlers.append(cls._file_handler(config.get("paths.logs_dir", "logs")))

        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        cls._initialized = True
        logger.debug("Logging system initialized")

        return logger

    @staticmethod
    def set_verbosity(verbose: bool = False, quiet: bool = False) -> Optional[int]:
        """
        Apply the CLI -v / -q switches. Returns the new level, or None when
        neither switch is set and the configured level stays.
        """
        if verbose:
            level = logging.DEBUG
        elif quiet:
            level = logging.WARNING
        else:
            return None

        logging.getLogger(LOGGER_NAME).setLevel(level)
        return level


app_logger = LoggerSetup.setup()
