"""Moon generation: type and size from 2D6, gravity scaled from Luna."""

from __future__ import annotations

import enum
import logging
import string
from dataclasses import asdict, dataclass, field
from datetime import datetime

from ..constants import MOON_GRAVITY_PER_LUNAR_MASS
from .dice import Dice
from .naming import to_roman
from .records import (
    GenerationMethod,
    check_orbit_position,
    is_valid_orbit_position,
    new_id,
    roll_errors,
    utc_now,
)
from .tables import expand_ranges, lookup_roll, midpoint

logger = logging.getLogger(__name__)


class MoonType(enum.Enum):
    CAPTURED_ASTEROID = "captured_asteroid"
    MINOR = "minor"
    MAJOR = "major"


@dataclass(frozen=True)
class MoonSizeEntry:
    min: float  # Lunar masses
    max: float
    label: str
    description: str


MOON_TYPE_TABLE: dict[int, MoonType] = expand_ranges([
    ((2, 2), MoonType.CAPTURED_ASTEROID),
    ((3, 6), MoonType.MINOR),
    ((7, 12), MoonType.MAJOR),
])

MOON_SIZE_TABLE: dict[int, MoonSizeEntry] = {
    2: MoonSizeEntry(0.01, 0.05, "Tiny", "Asteroid-sized (50-250 km diameter)"),
    3: MoonSizeEntry(0.05, 0.1, "Very Small", "Small captured body (250-500 km)"),
    4: MoonSizeEntry(0.1, 0.2, "Small", "Small moon (500-800 km)"),
    5: MoonSizeEntry(0.2, 0.4, "Below Average", "Medium-small moon (800-1,200 km)"),
    6: MoonSizeEntry(0.4, 0.6, "Average", "Medium moon (1,200-1,800 km)"),
    7: MoonSizeEntry(0.6, 0.8, "Above Average", "Medium-large moon (1,800-2,400 km)"),
    8: MoonSizeEntry(0.8, 1.0, "Large", "Large moon, Luna-sized (2,400-3,500 km)"),
    9: MoonSizeEntry(1.0, 1.3, "Very Large", "Very large moon (3,500-4,200 km)"),
    10: MoonSizeEntry(1.3, 1.6, "Huge", "Huge moon (4,200-4,800 km)"),
    11: MoonSizeEntry(1.6, 1.9, "Titan-sized", "Titan-sized moon (4,800-5,200 km)"),
    12: MoonSizeEntry(1.9, 2.2, "Ganymede-sized", "Ganymede-sized moon (5,200-5,600 km)"),
}


@dataclass(frozen=True)
class MoonDiceRolls:
    type_roll: int
    size_roll: int


@dataclass(frozen=True)
class MoonRecord:
    id: str
    name: str
    world_id: str
    star_system_id: str
    moon_type: MoonType
    size: float  # Lunar masses
    mass: float
    gravity: float  # G
    size_label: str
    generation_method: GenerationMethod
    dice_rolls: MoonDiceRolls
    orbit_position: int | None = None  # 1st, 2nd, ... moon of its world
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class MoonOptions:
    world_id: str
    star_system_id: str
    orbit_position: int | None = None
    name: str | None = None
    world_name: str | None = None  # Prefix default names with the parent world
    advantage: int = 0
    disadvantage: int = 0


def _ordinal(number: int, moon_type: MoonType) -> str:
    # Captured asteroids are lettered, regular moons numbered
    if moon_type is MoonType.CAPTURED_ASTEROID:
        letters = string.ascii_uppercase
        return letters[number - 1] if 1 <= number <= len(letters) else str(number)
    return to_roman(number) if number >= 1 else str(number)


def moon_name(number: int, moon_type: MoonType, world_name: str | None = None) -> str:
    ordinal = _ordinal(number, moon_type)
    if world_name:
        if moon_type is MoonType.CAPTURED_ASTEROID:
            return f"{world_name} Captured {ordinal}"
        return f"{world_name} {ordinal}"
    if moon_type is MoonType.CAPTURED_ASTEROID:
        return f"Captured Asteroid {ordinal}"
    return f"Moon {ordinal}"


def moon_gravity(size: float) -> float:
    return round(size * MOON_GRAVITY_PER_LUNAR_MASS, 3)


def generate_moon(dice: Dice, options: MoonOptions) -> MoonRecord:
    if options.orbit_position is not None:
        check_orbit_position(options.orbit_position)
    adv, dis = options.advantage, options.disadvantage
    type_roll = dice.roll_2d6(adv, dis).total
    moon_type = lookup_roll(MOON_TYPE_TABLE, type_roll, "moon type")
    size_roll = dice.roll_2d6(adv, dis).total
    entry = lookup_roll(MOON_SIZE_TABLE, size_roll, "moon size")
    size = midpoint(entry.min, entry.max)

    name = options.name or moon_name(options.orbit_position or 1, moon_type, options.world_name)
    logger.debug("Moon %s: %s, %.3f LM", name, moon_type.value, size)
    return MoonRecord(
        id=new_id(),
        name=name,
        world_id=options.world_id,
        star_system_id=options.star_system_id,
        moon_type=moon_type,
        size=size,
        mass=size,
        gravity=moon_gravity(size),
        size_label=entry.label,
        generation_method=GenerationMethod.PROCEDURAL,
        dice_rolls=MoonDiceRolls(type_roll=type_roll, size_roll=size_roll),
        orbit_position=options.orbit_position,
    )


def validate_moon(record: MoonRecord) -> list[str]:
    errors: list[str] = []
    if not record.name:
        errors.append("Missing moon name")
    if not record.world_id:
        errors.append("Missing world ID")
    if not record.star_system_id:
        errors.append("Missing star system ID")
    if record.orbit_position is not None and not is_valid_orbit_position(record.orbit_position):
        errors.append(f"Invalid orbit position {record.orbit_position!r} (must be 1-20)")
    errors.extend(roll_errors(asdict(record.dice_rolls)))
    if record.size <= 0:
        errors.append("Moon size must be positive")
    if record.gravity != moon_gravity(record.size):
        errors.append("Gravity does not match size")
    return errors
