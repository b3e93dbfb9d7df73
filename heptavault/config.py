"""
Configuration management for Heptavault.

This module handles loading and accessing configuration values from config.yaml.
Every value has a built-in default, so the exporter also runs without a file.
"""

import copy
import yaml
from pathlib import Path
from typing import Any, Dict
import logging


DEFAULT_CONFIG: Dict[str, Any] = {
    "export": {
        "cards_path": "Cards/",
        "cards_archive": "Cards.zip",
        "canvas_archive": "Canvas.zip",
        "output_format": "zip"
    },
    "paths": {
        "output_dir": "export",
        "log_file": "heptavault.log"
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    }
}


class ConfigManager:
    """
    Manages configuration loading and access for Heptavault.
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
        """Load configuration from YAML file, layered over the defaults."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        if not self.config_path.exists():
            logging.debug(f"No configuration file at {self.config_path}, using defaults")
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logging.error(f"Failed to load configuration: {e}")
            return

        if not isinstance(loaded, dict):
            logging.error(f"Ignoring configuration file {self.config_path}: top level is not a mapping")
            return

        _merge(self._config, loaded)
        logging.info(f"Configuration loaded from {self.config_path}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "export.cards_path")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("export.cards_path")  # Returns "Cards/"
            config.get("paths.output_dir")   # Returns "export"
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
    def cards_path(self) -> str:
        """Get the vault folder prefix used in canvas file nodes."""
        return self.get("export.cards_path", "Cards/")

    @property
    def output_dir(self) -> str:
        """Get the directory exports are written to."""
        return self.get("paths.output_dir", "export")

    @property
    def output_format(self) -> str:
        """Get the output format ("zip" or "directory")."""
        return self.get("export.output_format", "zip")

    @property
    def cards_archive(self) -> str:
        """Get the file name of the Markdown archive."""
        return self.get("export.cards_archive", "Cards.zip")

    @property
    def canvas_archive(self) -> str:
        """Get the file name of the canvas archive."""
        return self.get("export.canvas_archive", "Canvas.zip")

    @property
    def log_filename(self) -> str:
        """Get log file name."""
        return self.get("paths.log_file", "heptavault.log")


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge `override` into `base` in place."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value


# Global configuration instance
config = ConfigManager()


def get_config() -> ConfigManager:
    """
    Get the global configuration instance.

    Returns:
        The global ConfigManager instance
    """
    return config
