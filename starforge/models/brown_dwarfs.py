"""Brown dwarf generation: a mass band and a spectral band, each from 2D6."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime

from .dice import Dice
from .records import GenerationMethod, check_orbit_position, new_id, utc_now
from .tables import lookup_roll

logger = logging.getLogger(__name__)

MASS_LIMITS = (13.0, 80.0)  # Jupiter masses: deuterium burning to hydrogen fusion
TEMPERATURE_LIMITS = (300, 2500)  # Kelvin


class BrownDwarfSpectralType(enum.Enum):
    L = "L"
    T = "T"
    Y = "Y"


@dataclass(frozen=True)
class BrownDwarfMassEntry:
    min_mass: float
    max_mass: float
    label: str


@dataclass(frozen=True)
class BrownDwarfSpectralEntry:
    spectral_type: BrownDwarfSpectralType
    min_temp: int
    max_temp: int
    color: str
    description: str


BROWN_DWARF_MASS_TABLE: dict[int, BrownDwarfMassEntry] = {
    2: BrownDwarfMassEntry(13, 20, "Very Small"),
    3: BrownDwarfMassEntry(20, 25, "Small"),
    4: BrownDwarfMassEntry(25, 30, "Below Average"),
    5: BrownDwarfMassEntry(30, 35, "Moderately Small"),
    6: BrownDwarfMassEntry(35, 40, "Average"),
    7: BrownDwarfMassEntry(40, 45, "Standard"),
    8: BrownDwarfMassEntry(45, 50, "Above Average"),
    9: BrownDwarfMassEntry(50, 55, "Moderately Large"),
    10: BrownDwarfMassEntry(55, 65, "Large"),
    11: BrownDwarfMassEntry(65, 75, "Very Large"),
    12: BrownDwarfMassEntry(75, 80, "Near Stellar"),
}

_Y, _T, _L = BrownDwarfSpectralType.Y, BrownDwarfSpectralType.T, BrownDwarfSpectralType.L

BROWN_DWARF_SPECTRAL_TABLE: dict[int, BrownDwarfSpectralEntry] = {
    2: BrownDwarfSpectralEntry(_Y, 300, 400, "Dark Purple", "Very cool, ammonia clouds, barely visible"),
    3: BrownDwarfSpectralEntry(_Y, 400, 500, "Purple-Gray", "Cool, ammonia-dominated atmosphere"),
    4: BrownDwarfSpectralEntry(_Y, 500, 600, "Gray-Blue", "Cool, transitioning to T class"),
    5: BrownDwarfSpectralEntry(_T, 600, 800, "Magenta-Brown", "Moderate, strong methane absorption"),
    6: BrownDwarfSpectralEntry(_T, 800, 1000, "Brown-Red", "Moderate, methane bands prominent"),
    7: BrownDwarfSpectralEntry(_T, 1000, 1200, "Burgundy", "Warm T class, methane weakening"),
    8: BrownDwarfSpectralEntry(_T, 1200, 1300, "Deep Red", "Hot T class, transitioning to L"),
    9: BrownDwarfSpectralEntry(_L, 1300, 1600, "Crimson", "Hot, lithium present, faint glow"),
    10: BrownDwarfSpectralEntry(_L, 1600, 2000, "Bright Red", "Very hot, dust clouds forming"),
    11: BrownDwarfSpectralEntry(_L, 2000, 2300, "Orange-Red", "Near stellar, silicate clouds"),
    12: BrownDwarfSpectralEntry(_L, 2300, 2500, "Bright Orange", "Hottest brown dwarf, close to M dwarf"),
}


@dataclass(frozen=True)
class BrownDwarfDiceRolls:
    mass_roll: int
    spectral_roll: int


@dataclass(frozen=True)
class BrownDwarfRecord:
    id: str
    name: str
    star_system_id: str
    orbit_position: int
    mass: float  # Jupiter masses
    temperature: int  # Kelvin
    spectral_type: BrownDwarfSpectralType
    color: str
    generation_method: GenerationMethod
    dice_rolls: BrownDwarfDiceRolls
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class BrownDwarfOptions:
    star_system_id: str
    orbit_position: int
    name: str | None = None
    advantage: int = 0
    disadvantage: int = 0


def brown_dwarf_name(spectral_type: BrownDwarfSpectralType, orbit_position: int) -> str:
    return f"Brown Dwarf {spectral_type.value}{orbit_position}"


def generate_brown_dwarf(dice: Dice, options: BrownDwarfOptions) -> BrownDwarfRecord:
    orbit = check_orbit_position(options.orbit_position)
    adv, dis = options.advantage, options.disadvantage

    mass_roll = dice.roll_2d6(adv, dis).total
    mass_entry = lookup_roll(BROWN_DWARF_MASS_TABLE, mass_roll, "brown dwarf mass")
    mass = round(dice.rng.uniform(mass_entry.min_mass, mass_entry.max_mass), 1)

    spectral_roll = dice.roll_2d6(adv, dis).total
    spectral = lookup_roll(BROWN_DWARF_SPECTRAL_TABLE, spectral_roll, "brown dwarf spectral type")
    temperature = dice.rng.randint(spectral.min_temp, spectral.max_temp)

    name = options.name or brown_dwarf_name(spectral.spectral_type, orbit)
    logger.debug("Brown dwarf %s: %.1f MJ, %d K", name, mass, temperature)
    return BrownDwarfRecord(
        id=new_id(),
        name=name,
        star_system_id=options.star_system_id,
        orbit_position=orbit,
        mass=mass,
        temperature=temperature,
        spectral_type=spectral.spectral_type,
        color=spectral.color,
        generation_method=GenerationMethod.PROCEDURAL,
        dice_rolls=BrownDwarfDiceRolls(mass_roll=mass_roll, spectral_roll=spectral_roll),
    )


def validate_brown_dwarf(record: BrownDwarfRecord) -> list[str]:
    errors: list[str] = []
    if not MASS_LIMITS[0] <= record.mass <= MASS_LIMITS[1]:
        errors.append(f"Mass must be {MASS_LIMITS[0]:g}-{MASS_LIMITS[1]:g} Jupiter masses")
    if not TEMPERATURE_LIMITS[0] <= record.temperature <= TEMPERATURE_LIMITS[1]:
        errors.append(f"Temperature must be {TEMPERATURE_LIMITS[0]}-{TEMPERATURE_LIMITS[1]} K")
    return errors
