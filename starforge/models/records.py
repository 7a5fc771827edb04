"""Shared bits of every generated record."""

from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone

from ..constants import ORBIT_POSITION_RANGE
from ..errors import DomainViolationError


class GenerationMethod(enum.Enum):
    """Whether a record came purely from dice or had caller overrides."""

    PROCEDURAL = "procedural"
    CUSTOM = "custom"


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_valid_orbit_position(position: int) -> bool:
    low, high = ORBIT_POSITION_RANGE
    return not isinstance(position, bool) and isinstance(position, int) and low <= position <= high


def check_orbit_position(position: int) -> int:
    """Orbit slots are numbered from 1 (innermost) to 20."""
    if not is_valid_orbit_position(position):
        low, high = ORBIT_POSITION_RANGE
        raise DomainViolationError(f"Orbit position must be {low}-{high}, got {position!r}")
    return position


def roll_errors(rolls: dict[str, int | None]) -> list[str]:
    """Messages for recorded 2D6 rolls outside 2-12. None means the stage was not rolled."""
    return [
        f"Invalid {stage.replace('_', ' ')} {roll} (must be 2-12)"
        for stage, roll in rolls.items()
        if roll is not None and not 2 <= roll <= 12
    ]
