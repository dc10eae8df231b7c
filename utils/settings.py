"""Read-only access to the user's stored preferences."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from config import CONFIG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserSettings:
    """Structure for user settings."""

    language: str = ""


class SettingsManager:
    """Load user settings once; writing them back belongs to the host application."""

    _instance: SettingsManager | None = None
    _settings_file = Path(CONFIG.settings.settings_file)

    def __new__(cls) -> SettingsManager:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load()
        return cls._instance

    def _load(self) -> None:
        """Load settings from disk, then apply environment overrides."""
        self._data = UserSettings()

        if self._settings_file.exists():
            try:
                with open(self._settings_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Ignoring unreadable settings file %s: %s", self._settings_file, exc)
                data = {}
            if isinstance(data, dict):
                # Ignore keys this build does not know about
                known = {field.name for field in fields(UserSettings)}
                merged = asdict(UserSettings())
                merged.update({key: value for key, value in data.items() if key in known})
                self._data = UserSettings(**merged)

        override = os.environ.get(CONFIG.settings.language_env_var)
        if override:
            self._data = UserSettings(language=override)

    def reload(self) -> UserSettings:
        """Re-read settings from disk and the environment."""
        self._load()
        return self._data

    def get(self) -> UserSettings:
        """Get current settings."""
        return self._data


# Global instance
SETTINGS = SettingsManager()
