"""Orbital zones derived from stellar luminosity.

Every boundary scales with sqrt(L). The five bands tile [0, frostline]
without gaps: infernal | hot | habitable | cold | outer.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from ..constants import (
    COLD_OUTER_MULTIPLIER,
    FROSTLINE_COEFFICIENT,
    HABITABLE_INNER_COEFFICIENT,
    HABITABLE_OUTER_COEFFICIENT,
    INFERNAL_OUTER_MULTIPLIER,
    OPTIMISTIC_INNER_COEFFICIENT,
    OPTIMISTIC_OUTER_COEFFICIENT,
)
from ..errors import DomainViolationError
from .stellar import DEFAULT_TABLE, StellarClass, StellarPropertySource, lookup_stellar_property


class OrbitalZone(enum.Enum):
    """Named orbital bands, plus everything past the frostline."""

    INFERNAL = "infernal"
    HOT = "hot"
    HABITABLE = "conservative_habitable"
    COLD = "cold"
    OUTER = "outer"
    BEYOND = "beyond"

    @property
    def label(self) -> str:
        return _ZONE_LABELS[self]

    @property
    def description(self) -> str:
        return _ZONE_DESCRIPTIONS[self]


_ZONE_LABELS: dict[OrbitalZone, str] = {
    OrbitalZone.INFERNAL: "Infernal Zone",
    OrbitalZone.HOT: "Hot Zone",
    OrbitalZone.HABITABLE: "Habitable Zone",
    OrbitalZone.COLD: "Cold Zone",
    OrbitalZone.OUTER: "Outer Zone",
    OrbitalZone.BEYOND: "Beyond Frostline",
}

_ZONE_DESCRIPTIONS: dict[OrbitalZone, str] = {
    OrbitalZone.INFERNAL: "Molten surface, extreme heat, no atmosphere retention",
    OrbitalZone.HOT: "Hot desert worlds, minimal water, challenging conditions",
    OrbitalZone.HABITABLE: "Liquid water possible, optimal for life",
    OrbitalZone.COLD: "Frozen surface, potential subsurface oceans",
    OrbitalZone.OUTER: "Gas giants and ice worlds, beyond habitable range",
    OrbitalZone.BEYOND: "Far outer system, comets and icy bodies",
}


@dataclass(frozen=True)
class ZoneRange:
    """An orbital band in AU."""

    inner: float
    outer: float

    @property
    def midpoint(self) -> float:
        return (self.inner + self.outer) / 2

    @property
    def width(self) -> float:
        return self.outer - self.inner


@dataclass(frozen=True)
class StellarZones:
    infernal: ZoneRange
    hot: ZoneRange
    conservative_habitable: ZoneRange
    cold: ZoneRange
    outer: ZoneRange
    frostline: float

    def bands(self) -> list[tuple[OrbitalZone, ZoneRange]]:
        """Bands in order from the star outward."""
        return [
            (OrbitalZone.INFERNAL, self.infernal),
            (OrbitalZone.HOT, self.hot),
            (OrbitalZone.HABITABLE, self.conservative_habitable),
            (OrbitalZone.COLD, self.cold),
            (OrbitalZone.OUTER, self.outer),
        ]


@dataclass(frozen=True)
class OrbitValidation:
    """Result of checking a companion's orbit against the primary's zones."""

    valid: bool
    zone: OrbitalZone
    warnings: tuple[str, ...] = ()

    @property
    def zone_label(self) -> str:
        return self.zone.label


def _check_luminosity(luminosity: float) -> float:
    if luminosity <= 0:
        raise DomainViolationError(f"Luminosity must be positive, got {luminosity}")
    return math.sqrt(luminosity)


def habitable_zone(luminosity: float) -> ZoneRange:
    """Conservative habitable zone."""
    root = _check_luminosity(luminosity)
    return ZoneRange(HABITABLE_INNER_COEFFICIENT * root, HABITABLE_OUTER_COEFFICIENT * root)


def optimistic_habitable_zone(luminosity: float) -> ZoneRange:
    root = _check_luminosity(luminosity)
    return ZoneRange(OPTIMISTIC_INNER_COEFFICIENT * root, OPTIMISTIC_OUTER_COEFFICIENT * root)


def frostline(luminosity: float) -> float:
    return FROSTLINE_COEFFICIENT * _check_luminosity(luminosity)


def stellar_zones(luminosity: float) -> StellarZones:
    """Partition [0, frostline] into the five contiguous bands."""
    hz = habitable_zone(luminosity)
    frost = frostline(luminosity)
    infernal_edge = INFERNAL_OUTER_MULTIPLIER * hz.inner
    cold_edge = COLD_OUTER_MULTIPLIER * hz.outer
    return StellarZones(
        infernal=ZoneRange(0.0, infernal_edge),
        hot=ZoneRange(infernal_edge, hz.inner),
        conservative_habitable=hz,
        cold=ZoneRange(hz.outer, cold_edge),
        outer=ZoneRange(cold_edge, frost),
        frostline=frost,
    )


def stellar_zones_for(
    stellar_class: StellarClass, grade: int, source: StellarPropertySource = DEFAULT_TABLE,
) -> StellarZones:
    """Zones for a class/grade, via its tabulated luminosity."""
    return stellar_zones(lookup_stellar_property(stellar_class, grade, source).luminosity)


def determine_orbital_zone(distance: float, zones: StellarZones) -> OrbitalZone:
    """Classify a distance in AU.

    Bands are half-open [inner, outer) except the habitable zone, which is
    closed on both ends, and the outer zone, which runs up to and including
    the frostline.
    """
    if zones.infernal.inner <= distance < zones.infernal.outer:
        return OrbitalZone.INFERNAL
    if zones.hot.inner <= distance < zones.hot.outer:
        return OrbitalZone.HOT
    if zones.conservative_habitable.inner <= distance <= zones.conservative_habitable.outer:
        return OrbitalZone.HABITABLE
    if zones.cold.inner <= distance < zones.cold.outer:
        return OrbitalZone.COLD
    if zones.outer.inner <= distance <= zones.frostline:
        return OrbitalZone.OUTER
    return OrbitalZone.BEYOND


def validate_companion_orbit(distance: float, zones: StellarZones) -> OrbitValidation:
    """Warn about companions that sit close enough to disturb planets."""
    warnings: list[str] = []
    if distance <= zones.conservative_habitable.outer:
        warnings.append(
            "Companion orbit is inside or near the habitable zone. "
            "This may destabilize planetary orbits."
        )
    if distance <= zones.hot.outer:
        warnings.append(
            "Companion is very close to primary star. Tidal interactions will be significant."
        )
    return OrbitValidation(valid=True, zone=determine_orbital_zone(distance, zones), warnings=tuple(warnings))


def stable_planetary_orbit_limit(companion_distance: float) -> float:
    """Planets beyond a third of the companion's separation are unstable."""
    return companion_distance / 3


def format_distance(au: float) -> str:
    if au < 0.01:
        return f"{au:.2e}"
    if au < 1:
        return f"{au:.3f}"
    if au < 10:
        return f"{au:.2f}"
    if au < 100:
        return f"{au:.1f}"
    return f"{au:.0f}"
