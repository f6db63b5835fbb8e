"""SrcExport Infrastructure Layer.

This layer provides services used by the export pipeline:
- ConfigManager: Layered configuration backed by YAML files
- Logger: Structured logging and export events
"""

from .config_manager import ConfigError, ConfigManager, ConfigSource, load_settings, save_settings
from .logger import LogCategory, Logger, LogLevel

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "LogCategory",
    # ConfigManager exports
    "ConfigSource",
    "ConfigError",
    "ConfigManager",
    "load_settings",
    "save_settings",
]
