"""Configuration module for BioGraph Records.

Handles record configuration, application settings, and logging.
"""

from .settings import RecordConfig, Settings, get_settings, configure_settings, reset_settings
from .logging_config import setup_logging, get_logger

__all__ = [
    "RecordConfig",
    "Settings",
    "get_settings",
    "configure_settings",
    "reset_settings",
    "setup_logging",
    "get_logger",
]
