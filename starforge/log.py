"""Logging setup with per-channel toggles.

Each generator module logs through ``logging.getLogger(__name__)``; a channel
name maps onto one or more of those module loggers so whole areas can be
silenced from settings.json.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .settings import DEFAULT_CHANNELS, Settings, load_settings

ROOT_LOGGER = "starforge"

CHANNEL_MODULES: dict[str, tuple[str, ...]] = {
    "dice": ("starforge.models.dice",),
    "stars": ("starforge.models.stars", "starforge.models.stellar", "starforge.models.system"),
    "world": (
        "starforge.models.world",
        "starforge.models.starport",
        "starforge.models.culture",
    ),
    "bodies": (
        "starforge.models.disks",
        "starforge.models.planets",
        "starforge.models.moons",
        "starforge.models.brown_dwarfs",
    ),
    "naming": ("starforge.models.naming",),
}

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class LoggerConfig:
    """Configuration for runtime logging."""

    level: int = logging.INFO
    channels: dict[str, bool] = field(default_factory=lambda: DEFAULT_CHANNELS.copy())

    @classmethod
    def from_settings(cls, settings: Settings) -> LoggerConfig:
        level = getattr(logging, settings.log_level.upper(), logging.INFO)
        if not isinstance(level, int):
            level = logging.INFO
        channels = DEFAULT_CHANNELS.copy()
        channels.update(settings.log_channels)
        return cls(level=level, channels=channels)


def set_channel_enabled(name: str, enabled: bool) -> None:
    """Silence or re-enable every module logger behind a channel."""
    for module in CHANNEL_MODULES.get(name, ()):
        logging.getLogger(module).disabled = not enabled


def configure_logging(config: LoggerConfig) -> logging.Logger:
    """Attach a stream handler to the package logger and apply channel toggles."""
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(config.level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
    for name, enabled in config.channels.items():
        set_channel_enabled(name, enabled)
    return root


def init_logging(settings_path: Path | None = None) -> logging.Logger:
    """Initialise logging from settings.json."""
    return configure_logging(LoggerConfig.from_settings(load_settings(settings_path)))
