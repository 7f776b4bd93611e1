"""
Configuration utility for the style engine.
"""

import copy
import json
import logging
import os
import threading
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "parser": {
        "strict_integers": False,
        "legacy_box_shorthands": False
    },
    "logging": {
        "console_level": "WARNING",
        "file_level": "DEBUG",
        "log_file": None
    }
}


def get_default_config_path() -> str:
    """
    Get the default configuration file path.

    Returns:
        str: ~/.wink_style/config.json
    """
    return os.path.join(os.path.expanduser("~"), ".wink_style", "config.json")


class Config:
    """Configuration manager for the style engine."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the config file
        """
        self.config_path = config_path or get_default_config_path()
        self.config: Dict[str, Any] = {}
        self._lock = threading.Lock()

        self.load()

        logger.debug(f"Configuration initialized (config_path: {self.config_path})")

    def load(self) -> None:
        """Load configuration from file, falling back to defaults."""
        try:
            if os.path.exists(self.config_path):
                with open(self.config_path, 'r') as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError("configuration root must be an object")
                with self._lock:
                    self.config = _merge(copy.deepcopy(DEFAULT_CONFIG), loaded)
                logger.debug(f"Configuration loaded from {self.config_path}")
            else:
                logger.debug(f"Configuration file not found at {self.config_path}, using defaults")
                self._set_defaults()
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration: {e}")
            self._set_defaults()

    def save(self) -> None:
        """Save configuration to file."""
        try:
            with self._lock:
                config_copy = copy.deepcopy(self.config)

            config_dir = os.path.dirname(self.config_path)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)

            with open(self.config_path, 'w') as f:
                json.dump(config_copy, f, indent=4)

            logger.debug(f"Configuration saved to {self.config_path}")
        except OSError as e:
            logger.error(f"Error saving configuration: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'parser.strict_integers')
            default: Default value if key doesn't exist

        Returns:
            Any: Configuration value or default
        """
        with self._lock:
            if '.' in key:
                parts = key.split('.')
                config = self.config

                for part in parts[:-1]:
                    if part not in config or not isinstance(config[part], dict):
                        return default
                    config = config[part]

                return config.get(parts[-1], default)
            else:
                return self.config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key (can be nested using dots, e.g. 'parser.strict_integers')
            value: Configuration value
        """
        with self._lock:
            if '.' in key:
                parts = key.split('.')
                config = self.config

                for part in parts[:-1]:
                    if not isinstance(config.get(part), dict):
                        config[part] = {}
                    config = config[part]

                config[parts[-1]] = value
            else:
                self.config[key] = value

    def remove(self, key: str) -> bool:
        """
        Remove a configuration value.

        Args:
            key: Configuration key

        Returns:
            bool: True if key was removed
        """
        with self._lock:
            parts = key.split('.')
            config = self.config

            for part in parts[:-1]:
                if part not in config or not isinstance(config[part], dict):
                    return False
                config = config[part]

            if parts[-1] in config:
                del config[parts[-1]]
                return True
            return False

    def get_all(self) -> Dict[str, Any]:
        """
        Get all configuration values.

        Returns:
            Dict[str, Any]: Copy of all configuration values
        """
        with self._lock:
            return copy.deepcopy(self.config)

    def _set_defaults(self) -> None:
        """Set default configuration values."""
        with self._lock:
            self.config = copy.deepcopy(DEFAULT_CONFIG)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay ``override`` onto ``base``."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base
