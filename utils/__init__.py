"""
utils package

Settings (config.yaml) and the PortProbe logger.
"""

from utils.config import config
from utils.logger import LoggerSetup, app_logger

__all__ = ["LoggerSetup", "app_logger", "config"]
