"""
Configuration management for icogen.
Handles reading and writing the default source, output and size list.
"""
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILE = "icogen_config.json"

DEFAULT_CONFIG = {
    "source": "assets/icon.png",
    "output": "assets/icon.ico",
    "sizes": [16, 32, 48, 256],
    "log_level": "INFO",
}


class IconConfig:
    def __init__(self, config_path=None):
        if config_path is None:
            self.config_path = self._find_config_file()
        else:
            self.config_path = Path(config_path)

        self.config = self._load_config()

    def _find_config_file(self):
        """Find the config file in the current directory."""
        return Path.cwd() / CONFIG_FILE

    def _load_config(self):
        """Load configuration from file, falling back to defaults."""
        if not self.config_path.exists():
            return dict(DEFAULT_CONFIG)
        try:
            with open(self.config_path, 'r') as f:
                config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Error loading config %s: %s; using defaults", self.config_path, e)
            return dict(DEFAULT_CONFIG)
        if not isinstance(config, dict):
            logger.warning("Config %s is not a JSON object; using defaults", self.config_path)
            return dict(DEFAULT_CONFIG)
        # Merge with defaults to ensure all keys exist
        merged = dict(DEFAULT_CONFIG)
        merged.update(config)
        return merged

    def save_config(self, config=None):
        """Save configuration to file."""
        if config is not None:
            self.config = config
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=4)

    def get(self, key, default=None):
        """Get a configuration value."""
        return self.config.get(key, default)

    def set(self, key, value):
        """Set a configuration value."""
        self.config[key] = value

    def get_source(self):
        return Path(self.config.get('source', DEFAULT_CONFIG['source']))

    def get_output(self):
        return Path(self.config.get('output', DEFAULT_CONFIG['output']))

    def get_sizes(self):
        """Get the configured size list; entries are validated by the builder."""
        sizes = self.config.get('sizes', DEFAULT_CONFIG['sizes'])
        if not isinstance(sizes, list):
            logger.warning("Config 'sizes' must be a list, got %r; using defaults", sizes)
            return list(DEFAULT_CONFIG['sizes'])
        return list(sizes)

    def get_log_level(self):
        return str(self.config.get('log_level', 'INFO')).upper()
