"""Giant planets and belts."""

from __future__ import annotations

import enum
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime

from ..constants import ASTEROID_BELT_WIDTH_AU, PLANETOID_BELT_WIDTH_AU
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


class PlanetType(enum.Enum):
    GAS_GIANT = "gas_giant"
    ICE_GIANT = "ice_giant"
    ASTEROID_BELT = "asteroid_belt"
    PLANETOID_BELT = "planetoid_belt"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def is_belt(self) -> bool:
        return self in (PlanetType.ASTEROID_BELT, PlanetType.PLANETOID_BELT)


class BeltDensity(enum.Enum):
    SPARSE = "sparse"
    MODERATE = "moderate"
    DENSE = "dense"


@dataclass(frozen=True)
class GiantSizeEntry:
    min: float  # Jupiter masses
    max: float
    label: str
    description: str


PLANET_TYPE_TABLE: dict[int, PlanetType] = expand_ranges([
    ((2, 2), PlanetType.ASTEROID_BELT),
    ((3, 3), PlanetType.PLANETOID_BELT),
    ((4, 5), PlanetType.ICE_GIANT),
    ((6, 10), PlanetType.GAS_GIANT),
    ((11, 11), PlanetType.ICE_GIANT),
    ((12, 12), PlanetType.GAS_GIANT),
])

GAS_GIANT_SIZE_TABLE: dict[int, GiantSizeEntry] = {
    2: GiantSizeEntry(0.1, 0.3, "Small", "Saturn-sized (0.1-0.3 JM)"),
    3: GiantSizeEntry(0.3, 0.5, "Medium-Small", "Sub-Jovian (0.3-0.5 JM)"),
    4: GiantSizeEntry(0.5, 0.7, "Below Average", "Below Jovian (0.5-0.7 JM)"),
    5: GiantSizeEntry(0.7, 0.9, "Average", "Near-Jovian (0.7-0.9 JM)"),
    6: GiantSizeEntry(0.9, 1.1, "Jupiter-sized", "Jupiter-sized (0.9-1.1 JM)"),
    7: GiantSizeEntry(1.1, 1.5, "Large", "Super-Jovian (1.1-1.5 JM)"),
    8: GiantSizeEntry(1.5, 2.0, "Very Large", "Large Giant (1.5-2.0 JM)"),
    9: GiantSizeEntry(2.0, 3.0, "Huge", "Huge Giant (2.0-3.0 JM)"),
    10: GiantSizeEntry(3.0, 5.0, "Massive", "Massive Giant (3.0-5.0 JM)"),
    11: GiantSizeEntry(5.0, 8.0, "Super-Massive", "Super-Massive (5.0-8.0 JM)"),
    12: GiantSizeEntry(8.0, 13.0, "Sub-Brown Dwarf", "Near brown dwarf limit (8.0-13.0 JM)"),
}

ICE_GIANT_SIZE_TABLE: dict[int, GiantSizeEntry] = {
    2: GiantSizeEntry(0.02, 0.03, "Tiny", "Tiny ice giant (0.02-0.03 JM)"),
    3: GiantSizeEntry(0.03, 0.04, "Very Small", "Very small (0.03-0.04 JM)"),
    4: GiantSizeEntry(0.04, 0.045, "Small", "Uranus-sized (0.04-0.045 JM)"),
    5: GiantSizeEntry(0.045, 0.05, "Below Average", "Below average (0.045-0.05 JM)"),
    6: GiantSizeEntry(0.05, 0.055, "Average", "Neptune-sized (0.05-0.055 JM)"),
    7: GiantSizeEntry(0.055, 0.06, "Above Average", "Above average (0.055-0.06 JM)"),
    8: GiantSizeEntry(0.06, 0.07, "Large", "Large ice giant (0.06-0.07 JM)"),
    9: GiantSizeEntry(0.07, 0.08, "Very Large", "Very large (0.07-0.08 JM)"),
    10: GiantSizeEntry(0.08, 0.09, "Huge", "Huge ice giant (0.08-0.09 JM)"),
    11: GiantSizeEntry(0.09, 0.1, "Massive", "Massive ice giant (0.09-0.1 JM)"),
    12: GiantSizeEntry(0.1, 0.15, "Super-Massive", "Super ice giant (0.1-0.15 JM)"),
}

_GIANT_SIZE_TABLES: dict[PlanetType, dict[int, GiantSizeEntry]] = {
    PlanetType.GAS_GIANT: GAS_GIANT_SIZE_TABLE,
    PlanetType.ICE_GIANT: ICE_GIANT_SIZE_TABLE,
}

BELT_DENSITY_TABLE: dict[int, BeltDensity] = expand_ranges([
    ((2, 4), BeltDensity.SPARSE),
    ((5, 9), BeltDensity.MODERATE),
    ((10, 12), BeltDensity.DENSE),
])

_BELT_WIDTHS: dict[PlanetType, float] = {
    PlanetType.ASTEROID_BELT: ASTEROID_BELT_WIDTH_AU,
    PlanetType.PLANETOID_BELT: PLANETOID_BELT_WIDTH_AU,
}


@dataclass(frozen=True)
class PlanetDiceRolls:
    type_roll: int
    size_roll: int | None = None
    density_roll: int | None = None


@dataclass(frozen=True)
class PlanetRecord:
    """A giant (size and mass set) or a belt (width and density set)."""

    id: str
    name: str
    star_system_id: str
    orbit_position: int
    planet_type: PlanetType
    generation_method: GenerationMethod
    dice_rolls: PlanetDiceRolls
    size: float | None = None  # Jupiter masses
    mass: float | None = None
    size_label: str | None = None
    belt_width: float | None = None  # AU
    density: BeltDensity | None = None
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class PlanetOptions:
    star_system_id: str
    orbit_position: int
    name: str | None = None
    advantage: int = 0
    disadvantage: int = 0


def planet_name(orbit_position: int, planet_type: PlanetType) -> str:
    """Name like "Gas Giant IV"."""
    return f"{planet_type.label} {to_roman(orbit_position)}"


def generate_planet(dice: Dice, options: PlanetOptions) -> PlanetRecord:
    orbit = check_orbit_position(options.orbit_position)
    adv, dis = options.advantage, options.disadvantage

    type_roll = dice.roll_2d6(adv, dis).total
    planet_type = lookup_roll(PLANET_TYPE_TABLE, type_roll, "planet type")
    name = options.name or planet_name(orbit, planet_type)
    common = dict(
        id=new_id(),
        name=name,
        star_system_id=options.star_system_id,
        orbit_position=orbit,
        planet_type=planet_type,
        generation_method=GenerationMethod.PROCEDURAL,
    )

    if planet_type.is_belt:
        density_roll = dice.roll_2d6(adv, dis).total
        density = lookup_roll(BELT_DENSITY_TABLE, density_roll, "belt density")
        logger.debug("Belt %s: %s", name, density.value)
        return PlanetRecord(
            **common,
            dice_rolls=PlanetDiceRolls(type_roll=type_roll, density_roll=density_roll),
            belt_width=_BELT_WIDTHS[planet_type],
            density=density,
        )

    size_roll = dice.roll_2d6(adv, dis).total
    entry = lookup_roll(_GIANT_SIZE_TABLES[planet_type], size_roll, f"{planet_type.value} size")
    size = midpoint(entry.min, entry.max)
    logger.debug("Giant %s: %.3f JM (%s)", name, size, entry.label)
    return PlanetRecord(
        **common,
        dice_rolls=PlanetDiceRolls(type_roll=type_roll, size_roll=size_roll),
        size=size,
        mass=size,
        size_label=entry.label,
    )


def validate_planet(record: PlanetRecord) -> list[str]:
    """Giants carry size fields only and belts carry width and density only."""
    errors: list[str] = []
    if not record.name:
        errors.append("Missing planet name")
    if not record.star_system_id:
        errors.append("Missing star system ID")
    if not is_valid_orbit_position(record.orbit_position):
        errors.append(f"Invalid orbit position {record.orbit_position!r} (must be 1-20)")
    errors.extend(roll_errors(asdict(record.dice_rolls)))
    giant_fields = (record.size, record.mass, record.size_label, record.dice_rolls.size_roll)
    belt_fields = (record.belt_width, record.density, record.dice_rolls.density_roll)
    if record.planet_type.is_belt:
        if any(value is not None for value in giant_fields):
            errors.append("Belts cannot have a size or mass")
        if any(value is None for value in belt_fields):
            errors.append("Belts must have a width and density")
    else:
        if any(value is not None for value in belt_fields):
            errors.append("Giants cannot have a belt width or density")
        if any(value is None for value in giant_fields):
            errors.append("Giants must have a size and mass")
        elif record.size <= 0:
            errors.append("Giant size must be positive")
    return errors
