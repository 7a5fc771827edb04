"""User settings for starforge.

Settings are read from a JSON file in the platformdirs config location:
  Linux:   ~/.config/starforge/settings.json
  macOS:   ~/Library/Application Support/starforge/settings.json
  Windows: C:/Users/.../AppData/Local/starforge/settings.json

A missing or unreadable file yields the defaults from constants.py.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

from .constants import (
    APP_NAME,
    DEFAULT_TECH_LEVEL,
    DISK_ACCRETION_MAX_ROLL,
    NAME_SEQUENCE_FILE_NAME,
    SETTINGS_FILE_NAME,
)

CONFIG_DIR = Path(user_config_dir(APP_NAME))
DATA_DIR = Path(user_data_dir(APP_NAME))
SETTINGS_FILE = CONFIG_DIR / SETTINGS_FILE_NAME

DEFAULT_CHANNELS: dict[str, bool] = {
    "dice": False,
    "stars": True,
    "world": True,
    "bodies": True,
    "naming": False,
}

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Tunable knobs that callers may override without code changes."""

    default_tech_level: int = DEFAULT_TECH_LEVEL
    disk_accretion_max_roll: int = DISK_ACCRETION_MAX_ROLL
    log_level: str = "INFO"
    log_channels: dict[str, bool] = field(default_factory=lambda: DEFAULT_CHANNELS.copy())
    name_sequence_file: Path = DATA_DIR / NAME_SEQUENCE_FILE_NAME

    @classmethod
    def from_dict(cls, data: dict) -> Settings:
        channels = DEFAULT_CHANNELS.copy()
        channels.update(data.get("logChannels", {}))
        sequence_file = data.get("nameSequenceFile")
        return cls(
            default_tech_level=int(data.get("defaultTechLevel", DEFAULT_TECH_LEVEL)),
            disk_accretion_max_roll=int(data.get("diskAccretionMaxRoll", DISK_ACCRETION_MAX_ROLL)),
            log_level=str(data.get("logLevel", "INFO")).upper(),
            log_channels=channels,
            name_sequence_file=(
                Path(sequence_file) if sequence_file else DATA_DIR / NAME_SEQUENCE_FILE_NAME
            ),
        )


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk. Returns defaults if the file is absent or corrupt."""
    path = path or SETTINGS_FILE
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        logger.warning("Ignoring unreadable settings file %s", path)
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return Settings()
    try:
        return Settings.from_dict(data)
    except (TypeError, ValueError) as exc:
        logger.warning("Ignoring settings file %s: %s", path, exc)
        return Settings()
