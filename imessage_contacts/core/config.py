"""
Configuration management for iMessage contact search
Handles loading and saving settings and configuring logging
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

CONFIG_DIR_ENV = "IMESSAGE_CONTACTS_CONFIG_DIR"
SOURCES_DIR_ENV = "IMESSAGE_CONTACTS_SOURCES_DIR"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Config:
    """Configuration manager for contact search"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize configuration manager

        Args:
            config_dir: Path to configuration directory (defaults to
                $IMESSAGE_CONTACTS_CONFIG_DIR or ~/.config/imessage-contacts)
        """
        if config_dir is None:
            config_dir = os.environ.get(CONFIG_DIR_ENV) or (
                Path.home() / ".config" / "imessage-contacts"
            )

        self.config_dir = Path(config_dir).expanduser()
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.settings_file = self.config_dir / "settings.json"
        self.settings = self._load_json(self.settings_file, self._default_settings())

    def _load_json(self, file_path: Path, default: Dict[str, Any]) -> Dict[str, Any]:
        """Load JSON file or return default if file doesn't exist"""
        if file_path.exists():
            with open(file_path, 'r') as f:
                loaded = json.load(f)
            # Keys added in newer versions fall back to their defaults
            return {**default, **loaded}
        else:
            # Create file with defaults
            self._save_json(file_path, default)
            return default

    def _save_json(self, file_path: Path, data: Dict[str, Any]) -> None:
        """Save data to JSON file"""
        with open(file_path, 'w') as f:
            json.dump(data, f, indent=2)

    def _default_settings(self) -> Dict[str, Any]:
        """Default settings"""
        return {
            "sources_directory": "~/Library/Application Support/AddressBook/Sources",
            "database_filename": "AddressBook-v22.abcddb",
            "default_limit": 50,
            "min_limit": 1,
            "max_limit": 200,
            "log_directory": "logs",
            "log_level": "INFO",
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value and save to disk"""
        self.settings[key] = value
        self._save_json(self.settings_file, self.settings)

    def _resolve(self, path_str: str) -> Path:
        path = Path(path_str).expanduser()
        if not path.is_absolute():
            path = self.config_dir / path
        return path

    def get_sources_directory(self) -> Path:
        """Get the AddressBook Sources directory, honoring the env override"""
        override = os.environ.get(SOURCES_DIR_ENV)
        return self._resolve(override or self.settings["sources_directory"])

    def get_database_filename(self) -> str:
        return self.settings["database_filename"]

    def get_log_directory(self) -> Path:
        """Get full path to log directory"""
        return self._resolve(self.settings["log_directory"])


def configure_logging(config: Config, log_name: str = "imessage_contacts.log") -> None:
    """
    Configure root logging with a file handler and a stderr stream handler.

    stdout is left untouched so the MCP stdio transport is not polluted.
    """
    log_dir = config.get_log_directory()
    log_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, str(config.get("log_level", "INFO")).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_dir / log_name),
            logging.StreamHandler()
        ]
    )
