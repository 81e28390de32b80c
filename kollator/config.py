"""
Configuration management for Kollator.

This module handles loading and accessing configuration values from config.yaml.
It provides a centralized way to manage the collation settings and makes it easy
to tune deduplication without changing code.
"""

import yaml
from pathlib import Path
from typing import Any, Dict
import logging


DEFAULT_THRESHOLD = 0.85
DEFAULT_DELIMITER = "---8<---"


class InvalidConfigurationError(ValueError):
    """
    Raised when a configuration value is outside its accepted domain.

    Carries the offending field name and the value that was received so the
    caller can report both.
    """

    def __init__(self, field: str, value: Any, reason: str = ""):
        self.field = field
        self.value = value
        message = f"Invalid configuration for '{field}': {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


def validate_threshold(value: Any, field: str = "collation.threshold") -> float:
    """
    Validate a similarity threshold.

    Args:
        value: The received threshold value
        field: Name of the field, used in the error message

    Returns:
        The threshold as a float

    Raises:
        InvalidConfigurationError: If the value is not a number in [0, 1]
    """
    # bool is an int subclass; True/False are never meaningful thresholds
    if isinstance(value, bool):
        raise InvalidConfigurationError(field, value, "expected a number in [0, 1]")

    try:
        threshold = float(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(field, value, "expected a number in [0, 1]")

    if not 0.0 <= threshold <= 1.0:
        raise InvalidConfigurationError(field, value, "must be between 0 and 1")

    return threshold


def validate_delimiter(value: Any, field: str = "collation.delimiter") -> str:
    """
    Validate a block delimiter marker.

    Raises:
        InvalidConfigurationError: If the marker is not a non-blank string
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidConfigurationError(field, value, "expected a non-blank marker")
    return value.strip()


class ConfigManager:
    """
    Manages configuration loading and access for Kollator.
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            logging.debug(f"Configuration file not found: {self.config_path}, using defaults")
            self._config = self._get_default_config()
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}

            if not isinstance(loaded, dict):
                raise yaml.YAMLError(f"expected a mapping at the top level, got {type(loaded).__name__}")

            self._config = self._merge(self._get_default_config(), loaded)
            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    @staticmethod
    def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively overlay user settings on top of the defaults."""
        merged = dict(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = ConfigManager._merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "collation": {
                "threshold": DEFAULT_THRESHOLD,
                "delimiter": DEFAULT_DELIMITER
            },
            "import": {
                "file_pattern": "*.md"
            },
            "paths": {
                "log_file": "kollator.log"
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "collation.threshold")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("collation.threshold")  # Returns 0.85
            config.get("logging.level")  # Returns "INFO"
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def threshold(self) -> float:
        """Get the validated similarity threshold."""
        return validate_threshold(self.get("collation.threshold", DEFAULT_THRESHOLD))

    @property
    def delimiter(self) -> str:
        """Get the validated block delimiter marker."""
        return validate_delimiter(self.get("collation.delimiter", DEFAULT_DELIMITER))

    @property
    def file_pattern(self) -> str:
        """Get the glob pattern used when importing a directory."""
        return self.get("import.file_pattern", "*.md")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "kollator.log")


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
