"""Star system assembly: a primary, its companions and the zones they imply."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..constants import SYSTEM_NAME_PATTERN
from .dice import Dice
from .naming import NameSequence, next_name
from .records import new_id
from .stars import (
    CompanionGenerationResult,
    PrimaryStarOptions,
    StarRecord,
    generate_companion_stars,
    generate_primary_star,
)
from .stellar import DEFAULT_TABLE, StellarPropertySource
from .zones import (
    OrbitValidation,
    StellarZones,
    stable_planetary_orbit_limit,
    stellar_zones,
    validate_companion_orbit,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StarSystem:
    id: str
    name: str
    primary: StarRecord
    companions: CompanionGenerationResult
    zones: StellarZones
    orbit_checks: tuple[OrbitValidation, ...] = ()

    @property
    def stars(self) -> list[StarRecord]:
        return [self.primary, *self.companions.companions]

    @property
    def planetary_orbit_limit(self) -> float | None:
        """Outermost stable planetary orbit around the primary, if a companion bounds it."""
        distances = [c.orbital_distance for c in self.companions.companions if c.orbital_distance]
        if not distances:
            return None
        return stable_planetary_orbit_limit(min(distances))


def generate_star_system(
    dice: Dice,
    name: str | None = None,
    primary_options: PrimaryStarOptions | None = None,
    source: StellarPropertySource = DEFAULT_TABLE,
    naming: NameSequence | None = None,
) -> StarSystem:
    """Primary star, companions and zones in one call."""
    primary = generate_primary_star(dice, primary_options, source, naming)
    companions = generate_companion_stars(
        dice, primary.stellar_class, primary.stellar_grade, source, naming,
    )
    zones = stellar_zones(primary.properties.luminosity)
    checks = [validate_companion_orbit(c.orbital_distance, zones) for c in companions.companions]
    for companion, check in zip(companions.companions, checks):
        for warning in check.warnings:
            logger.info("%s: %s", companion.name, warning)

    system = StarSystem(
        id=new_id(),
        name=name or next_name(SYSTEM_NAME_PATTERN, "system", naming),
        primary=primary,
        companions=companions,
        zones=zones,
        orbit_checks=tuple(checks),
    )
    logger.debug(
        "System %s: %s with %d companion(s)",
        system.name, primary.class_grade, len(companions.companions),
    )
    return system
