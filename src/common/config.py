import json
import os
import logging

from src.policer.errors import ConfigError

DEFAULT_CONFIG = {
    "policy": None,
    "log_level": "WARNING",
    "log_file": None,
}


class ConfigManager:
    """JSON configuration file overlaid onto default values"""

    def __init__(self, config_file=None, default_config=None):
        self.config_file = config_file
        self.default_config = dict(DEFAULT_CONFIG if default_config is None else default_config)
        self.config = self.load_config()

    def load_config(self):
        """Loads configuration from the JSON file, if one was given"""
        config = dict(self.default_config)
        if not self.config_file:
            return config

        path = os.path.expanduser(self.config_file)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logging.error(f"Error loading config file {self.config_file}: {e}")
            raise ConfigError(f"error loading config file {self.config_file}: {e}") from e

        if not isinstance(loaded, dict):
            logging.error(f"Config file {self.config_file} does not contain a JSON object")
            raise ConfigError(f"config file {self.config_file} must contain a JSON object")

        config.update(loaded)
        return config

    def get(self, key, default=None):
        """Gets a configuration value"""
        value = self.config.get(key)
        return default if value is None else value
