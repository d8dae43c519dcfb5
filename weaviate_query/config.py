"""
Configuration module for the Weaviate query client.

This module provides a Config class for loading and accessing configuration values
from a YAML file, with support for ${VAR} environment variable substitution. Variables
from a local .env file are loaded before substitution.
"""

import os
from pathlib import Path
import yaml
import logging
from dotenv import load_dotenv

DEFAULT_CONFIG_PATH = "./config/config.yaml"

class Config:
    """
    Provides access to configuration values loaded from a dictionary.

    Supports nested access using dot notation (e.g., 'WEAVIATE.BASE_URL').
    """
    def __init__(self, config_data: dict):
        """
        Initialize the Config object.

        Args:
            config_data: Dictionary containing configuration data.
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._config = config_data or {}

    def get_nested(self, path: str, default=None):
        """
        Retrieve a nested configuration value using dot notation.

        Args:
            path: Configuration path using dot notation (e.g., 'LOGGING.LEVEL').
            default: Value to return if the path does not exist.

        Returns:
            The configuration value at the specified path, or the default if not found.
        """
        current = self._config
        for key in path.split('.'):
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                self.logger.debug(f"Config.get_nested({path}) not found, returning default={default!r}")
                return default
        return current

def _substitute_env(value):
    """Replace '${VAR}' strings with the environment value, recursing into dicts and lists."""
    if isinstance(value, dict):
        return {key: _substitute_env(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_substitute_env(item) for item in value]
    if isinstance(value, str) and value.startswith('${') and value.endswith('}'):
        return os.getenv(value[2:-1])
    return value

def get_config(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
    """
    Load configuration from a YAML file and return a Config object.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Config: An instance of the Config class with loaded configuration data.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
        yaml.YAMLError: If the configuration file is invalid YAML.
    """
    logger = logging.getLogger(__name__)
    logger.info(f"Called get_config(config_path={config_path})")
    config_path = Path(config_path) if config_path else Path(DEFAULT_CONFIG_PATH)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    load_dotenv()
    with open(config_path) as f:
        config_data = yaml.safe_load(f) or {}

    return Config(_substitute_env(config_data))
