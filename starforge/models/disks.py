"""Circumstellar disk generation: mass, placement and type from three 2D6 rolls."""

from __future__ import annotations

import enum
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime

from ..constants import DISK_ACCRETION_MAX_ROLL
from ..errors import DomainViolationError
from .dice import Dice
from .records import GenerationMethod, new_id, roll_errors, utc_now
from .tables import expand_ranges, lookup_roll
from .zones import StellarZones, ZoneRange

logger = logging.getLogger(__name__)


class DiskType(enum.Enum):
    ACCRETION = "accretion"
    PROTOPLANETARY = "protoplanetary"


class DiskZone(enum.Enum):
    INFERNAL = "infernal"
    HOT = "hot"
    HABITABLE_INNER = "habitable_inner"
    HABITABLE_OUTER = "habitable_outer"
    COLD = "cold"
    OUTER = "outer"


@dataclass(frozen=True)
class DiskMassEntry:
    mass: float
    unit: str  # CM (Ceres), LM (Luna), EM (Earth) or JM (Jupiter)
    label: str
    description: str


DISK_MASS_TABLE: dict[int, DiskMassEntry] = {
    2: DiskMassEntry(0.01, "CM", "Trace", "Very sparse dust (0.01 Ceres masses)"),
    3: DiskMassEntry(0.1, "CM", "Sparse", "Thin dust disk (0.1 Ceres masses)"),
    4: DiskMassEntry(1, "CM", "Light", "Ceres-mass of material (1 CM)"),
    5: DiskMassEntry(0.01, "LM", "Moderate-Light", "10 Ceres masses (0.01 Lunar masses)"),
    6: DiskMassEntry(0.1, "LM", "Moderate", "Sub-lunar disk (0.1 Lunar masses)"),
    7: DiskMassEntry(1, "LM", "Substantial", "Lunar-mass disk (1 LM)"),
    8: DiskMassEntry(0.01, "EM", "Heavy", "10 Lunar masses (0.01 Earth masses)"),
    9: DiskMassEntry(0.1, "EM", "Very Heavy", "Sub-Earth disk (0.1 Earth masses)"),
    10: DiskMassEntry(1, "EM", "Massive", "Earth-mass disk (1 EM)"),
    11: DiskMassEntry(0.1, "JM", "Huge", "Sub-Jovian disk (0.1 Jupiter masses)"),
    12: DiskMassEntry(3, "JM", "Colossal", "Massive protoplanetary disk (3 Jupiter masses)"),
}

DISK_ZONE_TABLE: dict[int, DiskZone] = expand_ranges([
    ((2, 2), DiskZone.INFERNAL),
    ((3, 4), DiskZone.HOT),
    ((5, 6), DiskZone.HABITABLE_INNER),
    ((7, 8), DiskZone.HABITABLE_OUTER),
    ((9, 10), DiskZone.COLD),
    ((11, 12), DiskZone.OUTER),
])

_ZONE_SUFFIXES: dict[DiskZone, str] = {
    DiskZone.INFERNAL: "Infernal",
    DiskZone.HOT: "Inner",
    DiskZone.HABITABLE_INNER: "Habitable-Inner",
    DiskZone.HABITABLE_OUTER: "Habitable-Outer",
    DiskZone.COLD: "Cold",
    DiskZone.OUTER: "Outer",
}


def build_disk_type_table(accretion_max_roll: int = DISK_ACCRETION_MAX_ROLL) -> dict[int, DiskType]:
    """2D6 -> disk type. Rolls up to ``accretion_max_roll`` are accretion disks.

    The split is a tuning knob rather than a rule, so it comes from settings.
    """
    if not 1 <= accretion_max_roll <= 12:
        raise DomainViolationError(f"Accretion cut-off must be 1-12, got {accretion_max_roll}")
    return {roll: DiskType.ACCRETION if roll <= accretion_max_roll else DiskType.PROTOPLANETARY
            for roll in range(2, 13)}


DISK_TYPE_TABLE = build_disk_type_table()


@dataclass(frozen=True)
class DiskDiceRolls:
    mass_roll: int
    zone_roll: int
    type_roll: int


@dataclass(frozen=True)
class DiskRecord:
    id: str
    name: str
    star_system_id: str
    disk_type: DiskType
    disk_zone: DiskZone
    mass: float
    mass_unit: str
    inner_radius: float  # AU
    outer_radius: float  # AU
    orbit_position: float  # AU, midpoint of the disk
    generation_method: GenerationMethod
    dice_rolls: DiskDiceRolls
    created_at: datetime = field(default_factory=utc_now)


@dataclass
class DiskOptions:
    star_system_id: str
    zones: StellarZones
    name: str | None = None
    advantage: int = 0
    disadvantage: int = 0
    type_table: dict[int, DiskType] | None = None


def disk_extent(zone: DiskZone, zones: StellarZones) -> ZoneRange:
    """Radial span of a disk; the habitable zone is split at its midpoint."""
    habitable = zones.conservative_habitable
    if zone is DiskZone.INFERNAL:
        return zones.infernal
    if zone is DiskZone.HOT:
        return zones.hot
    if zone is DiskZone.HABITABLE_INNER:
        return ZoneRange(habitable.inner, habitable.midpoint)
    if zone is DiskZone.HABITABLE_OUTER:
        return ZoneRange(habitable.midpoint, habitable.outer)
    if zone is DiskZone.COLD:
        return zones.cold
    if zone is DiskZone.OUTER:
        return zones.outer
    raise DomainViolationError(f"Unknown disk zone {zone!r}")


def disk_name(disk_type: DiskType, zone: DiskZone) -> str:
    prefix = "Accretion" if disk_type is DiskType.ACCRETION else "Protoplanetary"
    return f"{prefix} Disk ({_ZONE_SUFFIXES[zone]})"


def generate_disk(dice: Dice, options: DiskOptions) -> DiskRecord:
    adv, dis = options.advantage, options.disadvantage
    type_table = options.type_table if options.type_table is not None else DISK_TYPE_TABLE

    mass_roll = dice.roll_2d6(adv, dis).total
    mass = lookup_roll(DISK_MASS_TABLE, mass_roll, "disk mass")
    zone_roll = dice.roll_2d6(adv, dis).total
    zone = lookup_roll(DISK_ZONE_TABLE, zone_roll, "disk zone")
    type_roll = dice.roll_2d6(adv, dis).total
    disk_type = lookup_roll(type_table, type_roll, "disk type")

    extent = disk_extent(zone, options.zones)
    name = options.name or disk_name(disk_type, zone)
    logger.debug("Disk %s: %s %s, %.3f-%.3f AU", name, mass.label, mass.unit, extent.inner, extent.outer)

    return DiskRecord(
        id=new_id(),
        name=name,
        star_system_id=options.star_system_id,
        disk_type=disk_type,
        disk_zone=zone,
        mass=mass.mass,
        mass_unit=mass.unit,
        inner_radius=extent.inner,
        outer_radius=extent.outer,
        orbit_position=extent.midpoint,
        generation_method=GenerationMethod.PROCEDURAL,
        dice_rolls=DiskDiceRolls(mass_roll=mass_roll, zone_roll=zone_roll, type_roll=type_roll),
    )


def validate_disk(record: DiskRecord) -> list[str]:
    errors: list[str] = []
    if not record.name:
        errors.append("Missing disk name")
    if not record.star_system_id:
        errors.append("Missing star system ID")
    errors.extend(roll_errors(asdict(record.dice_rolls)))
    if record.mass <= 0:
        errors.append("Disk mass must be positive")
    if record.mass_unit not in {entry.unit for entry in DISK_MASS_TABLE.values()}:
        errors.append(f"Unknown mass unit {record.mass_unit!r}")
    if not 0 <= record.inner_radius < record.outer_radius:
        errors.append("Inner radius must be below outer radius")
    elif not record.inner_radius <= record.orbit_position <= record.outer_radius:
        errors.append("Orbit position must lie within the disk")
    return errors
