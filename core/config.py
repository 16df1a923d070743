"""Configuration and cache file persistence.

This module handles:
- Locating the data and cache directories provided by the launcher
- Loading/saving JSON files with whole-file atomic replacement
- The persisted Config (hub address, username, cloud token)
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Fallback location when not running under the launcher
DEFAULT_DIR = Path.home() / '.hue_launcher'


def get_data_dir() -> Path:
    """Directory for persistent data (config file)."""
    return Path(os.environ.get('alfred_workflow_data') or DEFAULT_DIR)


def get_cache_dir() -> Path:
    """Directory for disposable data (cache file)."""
    return Path(os.environ.get('alfred_workflow_cache') or DEFAULT_DIR)


class JsonStore:
    """Load and save one JSON document at a fixed path."""

    def __init__(self, path: Path, private: bool = False):
        """
        Args:
            path: File to read and write
            private: If True, restrict file permissions to the user (600)
        """
        self.path = Path(path)
        self.private = private

    def load(self) -> dict:
        """Load the document, or an empty dict if missing or corrupt."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (ValueError, OSError) as e:
            logger.warning("Ignoring unreadable file %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a JSON object", self.path)
            return {}
        return data

    def save(self, data: dict):
        """Replace the file with data.

        Writes to a temporary file in the same directory then renames it over
        the target, so readers never see a half-written file.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f'.{self.path.name}.')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            if self.private:
                os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


@dataclass
class Config:
    """Hub connection and cloud credentials."""
    ip_address: str = ''
    username: str = ''
    api_token: str = ''

    @property
    def hub_configured(self) -> bool:
        return bool(self.ip_address and self.username)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        return cls(
            ip_address=data.get('IPAddress') or '',
            username=data.get('Username') or '',
            api_token=data.get('APIToken') or '',
        )

    def to_dict(self) -> dict:
        return {
            'IPAddress': self.ip_address,
            'Username': self.username,
            'APIToken': self.api_token,
        }


def config_store(data_dir: Path | None = None) -> JsonStore:
    return JsonStore((data_dir or get_data_dir()) / 'config.json', private=True)


def cache_store(cache_dir: Path | None = None) -> JsonStore:
    return JsonStore((cache_dir or get_cache_dir()) / 'cache.json')


def load_config(store: JsonStore) -> Config:
    """Load configuration, falling back to an empty Config."""
    return Config.from_dict(store.load())


def save_config(store: JsonStore, config: Config):
    """Save configuration to file."""
    store.save(config.to_dict())
