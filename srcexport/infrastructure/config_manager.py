#!/usr/bin/env python3
"""Layered configuration manager for SrcExport.

This module provides configuration management with:
- 4-level precedence hierarchy
- YAML configuration files
- Environment variable overrides for toggles
- Validation into an ExportSettings instance
- Saving settings back to YAML

A loaded configuration file replaces the compiled defaults entirely: a
file that lists no filter rules exports with no filter rules.

Example:
    >>> config = ConfigManager()
    >>> config.load_file("export.yaml")
    >>> settings = config.get_settings()
"""

import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from srcexport.core.constants import BOOLEAN_TOGGLES, ConfigKey, ErrorCode
from srcexport.core.settings import ExportSettings, default_settings
from srcexport.core.validators import ValidationError

ENV_PREFIX = "SRCEXPORT_"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    USER_CONFIG = 2
    ENVIRONMENT = 3
    RUNTIME = 4  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Thread-safe layered configuration manager.

    Manages configuration from multiple sources with precedence:
    1. Compiled defaults (lowest, dropped once a file is loaded)
    2. User config file (YAML)
    3. Environment variables (SRCEXPORT_*)
    4. Runtime updates such as CLI flags (highest)
    """

    def __init__(self, config_file: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        """Initialize configuration manager.

        Args:
            config_file: Optional config file to load
            environ: Environment mapping (defaults to os.environ)
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()

        self._config[ConfigSource.COMPILED_DEFAULTS] = default_settings().to_dict()

        if config_file:
            self.load_file(config_file)

        self._load_environment(os.environ if environ is None else environ)

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        path = Path(file_path).expanduser().resolve()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

        if config_data is None:
            config_data = {}

        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        self.load_dict(config_data, source)

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from dictionary.

        Args:
            config_data: Configuration dictionary
            source: Configuration source level
        """
        with self._lock:
            self._config[source] = dict(config_data)

    def _load_environment(self, environ: Dict[str, str]) -> None:
        """Load toggle overrides from environment variables.

        Environment variables in format: SRCEXPORT_<TOGGLE>=value
        Example: SRCEXPORT_COMPUTE_HASH=false
        """
        env_config: Dict[str, Any] = {}

        known = set(BOOLEAN_TOGGLES) | {ConfigKey.OUTPUT_READ_ONLY}
        for key, value in environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            name = key[len(ENV_PREFIX):].lower()
            if name not in known:
                continue

            env_config[name] = self._parse_env_value(value)

        if env_config:
            with self._lock:
                self._config[ConfigSource.ENVIRONMENT] = env_config

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value.

        Args:
            value: String value from environment

        Returns:
            Parsed value (bool, None, or str)
        """
        lowered = value.strip().lower()
        if lowered in ("true", "yes", "1"):
            return True
        if lowered in ("false", "no", "0"):
            return False
        if lowered in ("null", "none", ""):
            return None
        return value

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Configuration key
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            self._config.setdefault(source, {})[key] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources.

        Returns:
            Merged configuration dictionary
        """
        with self._lock:
            merged: Dict[str, Any] = {}

            for source in sorted(self._config.keys(), key=lambda s: s.value):
                if source == ConfigSource.COMPILED_DEFAULTS and ConfigSource.USER_CONFIG in self._config:
                    continue
                merged.update(self._config[source])

            return merged

    def get_settings(self) -> ExportSettings:
        """Build validated export settings from the merged configuration.

        Returns:
            Export settings

        Raises:
            ConfigError: If the merged configuration is invalid
        """
        try:
            return ExportSettings.from_dict(self.get_all())
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}", e.error_code)



def load_settings(config_file: Optional[str] = None) -> ExportSettings:
    """Load export settings from a file, or the defaults when none is given.

    Args:
        config_file: Optional YAML configuration file

    Returns:
        Export settings

    Raises:
        ConfigError: If the file cannot be loaded or is invalid
    """
    return ConfigManager(config_file).get_settings()


def save_settings(settings: ExportSettings, file_path: str) -> None:
    """Write export settings as a YAML configuration document.

    Args:
        settings: Settings to write
        file_path: Destination file

    Raises:
        ConfigError: If the file cannot be written
    """
    try:
        with open(file_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(settings.to_dict(), f, sort_keys=False, allow_unicode=True)
    except OSError as e:
        raise ConfigError(f"Error writing config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)
