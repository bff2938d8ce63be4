# src/regionsnap/utils/config.py

"""
Manages application configuration settings.

This module provides a ConfigManager class that handles loading settings from a
JSON file, providing default values, and saving changes. This allows for
persistent, user-configurable settings like the global hotkey and where
captures are written.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

# Constants
APP_NAME = "regionsnap"
CONFIG_FILE_NAME = "config.json"

# Default settings for the application
DEFAULT_CONFIG = {
    "hotkey": "<ctrl>+<alt>+s",
    "overlay_opacity": 0.3,
    "selection_border_color": "#ffffff",
    "min_selection_size": 1,
    "save_directory": "~/Pictures/RegionSnap",
    "image_format": "png",
    "filename_prefix": "capture",
    "ask_save_location": True,
    "copy_path_to_clipboard": True,
    "notice_duration_ms": 4000,
    "log_level": "INFO",
}

# Set up a logger for this module
logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """
    Determines the appropriate application configuration directory based on the OS.

    Returns:
        Path: The absolute path to the configuration directory.
    """
    if sys.platform == "win32":
        # Windows: %APPDATA%/regionsnap
        return Path.home() / "AppData" / "Roaming" / APP_NAME
    elif sys.platform == "darwin":
        # macOS: ~/Library/Application Support/regionsnap
        return Path.home() / "Library" / "Application Support" / APP_NAME
    else:
        # Linux/other: ~/.config/regionsnap
        return Path.home() / ".config" / APP_NAME


class ConfigManager:
    """
    Handles loading, accessing, and saving application configuration.

    Settings are loaded from a file on startup and saved when changed. A
    missing file is created with defaults; a corrupted one is logged and
    replaced by defaults in memory.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initializes the ConfigManager, determines the config path, and loads the
        configuration.

        Args:
            config_dir (Path, optional): Directory holding config.json. Defaults
                                         to the per-user directory for this OS.
        """
        self.config_dir = Path(config_dir) if config_dir else get_config_dir()
        self.config_path = self.config_dir / CONFIG_FILE_NAME
        self.config = {}
        self.load_config()

    def load_config(self):
        """
        Loads configuration from the JSON file. If the file doesn't exist or is
        invalid, it falls back to the default settings.
        """
        # Start with defaults, then override with user's config
        self.config = DEFAULT_CONFIG.copy()

        if not self.config_path.exists():
            logger.info(f"Config file not found. Creating default config at: {self.config_path}")
            self.save_config()
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)
            if not isinstance(user_config, dict):
                raise ValueError(f"expected a JSON object, got {type(user_config).__name__}")
            # Merge user config into defaults to ensure all keys exist
            self.config.update(user_config)
            logger.info(f"Successfully loaded configuration from {self.config_path}")
        except json.JSONDecodeError:
            logger.error(
                f"Could not decode JSON from {self.config_path}. "
                "Using default configuration. The corrupted file will be overwritten on next save."
            )
        except (OSError, ValueError) as e:
            logger.error(f"Could not load config from {self.config_path}: {e}. Using defaults.")

    def save_config(self):
        """
        Saves the current configuration to the JSON file.
        """
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=4, sort_keys=True)
            logger.info(f"Configuration saved to {self.config_path}")
        except OSError as e:
            logger.error(f"Failed to save configuration to {self.config_path}: {e}")

    def get(self, key: str, default=None):
        """
        Retrieves a configuration value.

        Args:
            key (str): The configuration key to retrieve.
            default: The value to return if the key is not found.

        Returns:
            The value associated with the key, or the default value.
        """
        return self.config.get(key, default)

    def set(self, key: str, value):
        """
        Sets a configuration value and saves the configuration to the file.

        Args:
            key (str): The configuration key to set.
            value: The new value for the key.
        """
        self.config[key] = value
        self.save_config()

    @property
    def save_directory(self) -> Path:
        """The configured output directory with `~` expanded."""
        return Path(self.get("save_directory")).expanduser()


_config_manager: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """
    Returns the shared ConfigManager, creating it on first use.

    e.g., from regionsnap.utils.config import get_config
    """
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
