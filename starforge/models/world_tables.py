"""2D6 lookup tables for the world generation pipeline.

Every table covers the closed 2-12 domain; rows spanning several rolls are
written as ranges and expanded once at import.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .tables import expand_ranges


class WorldType(enum.Enum):
    DWARF = "dwarf"
    TERRESTRIAL = "terrestrial"
    HABITAT = "habitat"

    @property
    def label(self) -> str:
        return {
            WorldType.DWARF: "Lesser Earth/Moon",
            WorldType.TERRESTRIAL: "Terrestrial",
            WorldType.HABITAT: "Habitat",
        }[self]


class Composition(enum.Enum):
    METALLIC = "metallic"
    SILICACEOUS = "silicaceous"
    CARBONACEOUS = "carbonaceous"
    OTHER = "other"


# ---------------------------------------------------------------------------
# Entry types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SizeEntry:
    label: str
    mass: str  # Display string with unit, e.g. "0.3 LM" or "10 GVT"
    mass_value: float
    description: str


@dataclass(frozen=True)
class CompositionEntry:
    composition: Composition
    modifier: float
    description: str


@dataclass(frozen=True)
class FactorEntry:
    """A habitability factor: a label with its signed habitability modifier."""

    label: str
    modifier: float
    description: str


@dataclass(frozen=True)
class HazardTypeEntry:
    label: str
    description: str
    requires_intensity: bool


@dataclass(frozen=True)
class HazardIntensityEntry:
    intensity: int
    label: str
    modifier: float
    description: str


@dataclass(frozen=True)
class WealthEntry:
    wealth: int
    label: str
    description: str


@dataclass(frozen=True)
class SocialEntry:
    label: str
    description: str


@dataclass(frozen=True)
class GovernanceEntry:
    label: str
    description: str
    modifier: str  # Dice modifier for governance checks, e.g. "Adv+1"


# ---------------------------------------------------------------------------
# Physical
# ---------------------------------------------------------------------------

WORLD_TYPE_TABLE: dict[int, WorldType] = expand_ranges([
    ((2, 4), WorldType.DWARF),
    ((5, 9), WorldType.TERRESTRIAL),
    ((10, 12), WorldType.HABITAT),
])

_SIZE_LABELS = [
    "Micro", "Tiny", "Small", "Below Average", "Average", "Standard",
    "Large", "Very Large", "Huge", "Massive", "Giant",
]
_RELATIVE_MASSES = [0.1, 0.2, 0.3, 0.5, 0.7, 1.0, 1.5, 2.0, 3.0, 5.0, 7.0]

# Lunar masses expressed in Earth masses
_DWARF_MASS_VALUES = [
    0.00123, 0.00246, 0.00369, 0.00615, 0.00861, 0.0123,
    0.01845, 0.0246, 0.0369, 0.0615, 0.0861,
]
_DWARF_DESCRIPTIONS = [
    "Very small dwarf", "Small dwarf", "Below average", "Moderately small",
    "Average dwarf", "Luna-sized", "Large dwarf", "Very large dwarf",
    "Huge dwarf", "Massive dwarf", "Giant dwarf",
]
_TERRESTRIAL_DESCRIPTIONS = [
    "Mars-sized", "Very small", "Below average", "Moderately small",
    "Below Earth", "Earth-sized", "Super Earth", "Large super Earth",
    "Huge terrestrial", "Massive terrestrial", "Mega Earth",
]

DWARF_SIZE_TABLE: dict[int, SizeEntry] = {
    roll: SizeEntry(label, f"{lm:g} LM", value, desc)
    for roll, label, lm, value, desc in zip(
        range(2, 13), _SIZE_LABELS, _RELATIVE_MASSES, _DWARF_MASS_VALUES, _DWARF_DESCRIPTIONS,
    )
}

TERRESTRIAL_SIZE_TABLE: dict[int, SizeEntry] = {
    roll: SizeEntry(label, f"{em:g} EM", em, desc)
    for roll, label, em, desc in zip(
        range(2, 13), _SIZE_LABELS[:-1] + ["Mega Earth"], _RELATIVE_MASSES, _TERRESTRIAL_DESCRIPTIONS,
    )
}

# Habitat mass in megatons/gigatons of volume-tonnage; description is population
HABITAT_SIZE_TABLE: dict[int, SizeEntry] = {
    2: SizeEntry("Tiny", "1 MVT", 0.001, "10K-33K people"),
    3: SizeEntry("Small", "3 MVT", 0.003, "30K-99K people"),
    4: SizeEntry("Medium", "10 MVT", 0.01, "100K-333K people"),
    5: SizeEntry("Large", "30 MVT", 0.03, "300K-999K people"),
    6: SizeEntry("Very Large", "100 MVT", 0.1, "1M-3M people"),
    7: SizeEntry("Huge", "300 MVT", 0.3, "3M-9M people"),
    8: SizeEntry("Massive", "1 GVT", 1, "10M-33M people"),
    9: SizeEntry("Giant", "3 GVT", 3, "30M-99M people"),
    10: SizeEntry("Enormous", "10 GVT", 10, "100M-333M people"),
    11: SizeEntry("Colossal", "30 GVT", 30, "300M-999M people"),
    12: SizeEntry("Mega", "100 GVT", 100, "1B-3B people"),
}

SIZE_TABLES: dict[WorldType, dict[int, SizeEntry]] = {
    WorldType.DWARF: DWARF_SIZE_TABLE,
    WorldType.TERRESTRIAL: TERRESTRIAL_SIZE_TABLE,
    WorldType.HABITAT: HABITAT_SIZE_TABLE,
}

DWARF_GRAVITY_TABLE: dict[int, float] = dict(zip(
    range(2, 13), [0.001, 0.02, 0.04, 0.06, 0.08, 0.10, 0.12, 0.14, 0.16, 0.18, 0.20],
))

TERRESTRIAL_GRAVITY_TABLE: dict[int, float] = dict(zip(
    range(2, 13), [0.3, 0.4, 0.5, 0.7, 0.9, 1.0, 1.0, 1.2, 1.5, 2.0, 3.0],
))

GRAVITY_TABLES: dict[WorldType, dict[int, float]] = {
    WorldType.DWARF: DWARF_GRAVITY_TABLE,
    WorldType.TERRESTRIAL: TERRESTRIAL_GRAVITY_TABLE,
}

COMPOSITION_TABLE: dict[int, CompositionEntry] = expand_ranges([
    ((2, 3), CompositionEntry(Composition.METALLIC, -1, "Dense, found near star")),
    ((4, 8), CompositionEntry(Composition.SILICACEOUS, 0, "Stony, moderate density")),
    ((9, 11), CompositionEntry(Composition.CARBONACEOUS, 1, "Volatile-rich, found in outer zones")),
    ((12, 12), CompositionEntry(Composition.OTHER, 0, "Unusual composition")),
])

# ---------------------------------------------------------------------------
# Habitability
# ---------------------------------------------------------------------------

ATMOSPHERE_TABLE: dict[int, FactorEntry] = expand_ranges([
    ((2, 3), FactorEntry("None", -3, "Vacuum or trace atmosphere")),
    ((4, 5), FactorEntry("Trace", -2, "Very thin atmosphere")),
    ((6, 7), FactorEntry("Thin", -1, "Breathable but thin")),
    ((8, 9), FactorEntry("Standard", 2, "Earth-like pressure")),
    ((10, 11), FactorEntry("Dense", 0, "Heavy but breathable")),
    ((12, 12), FactorEntry("Very Dense", -2, "Crushing atmosphere")),
])

TEMPERATURE_TABLE: dict[int, FactorEntry] = expand_ranges([
    ((2, 3), FactorEntry("Frozen", -2, "Below -50°C")),
    ((4, 5), FactorEntry("Cold", -1, "-20°C to 0°C")),
    ((6, 6), FactorEntry("Cool", 0, "0°C to 15°C")),
    ((7, 8), FactorEntry("Temperate", 2, "15°C to 25°C")),
    ((9, 9), FactorEntry("Warm", 0, "25°C to 35°C")),
    ((10, 11), FactorEntry("Hot", -1, "35°C to 50°C")),
    ((12, 12), FactorEntry("Very Hot", -2, "Above 50°C")),
])

NO_HAZARD = "None"

HAZARD_TYPE_TABLE: dict[int, HazardTypeEntry] = expand_ranges([
    ((2, 7), HazardTypeEntry(NO_HAZARD, "No environmental hazards", False)),
    ((8, 8), HazardTypeEntry("Seismic", "Earthquakes and tremors", True)),
    ((9, 9), HazardTypeEntry("Volcanic", "Active volcanoes and lava flows", True)),
    ((10, 10), HazardTypeEntry("Weather", "Severe storms and weather events", True)),
    ((11, 11), HazardTypeEntry("Radiation", "Dangerous radiation levels", True)),
    ((12, 12), HazardTypeEntry("Other", "Unusual or exotic hazard", True)),
])

HAZARD_INTENSITY_TABLE: dict[int, HazardIntensityEntry] = expand_ranges([
    ((2, 3), HazardIntensityEntry(1, "Mild", -0.5, "Minor inconvenience")),
    ((4, 5), HazardIntensityEntry(2, "Mild", -0.5, "Minor inconvenience")),
    ((6, 8), HazardIntensityEntry(3, "Moderate", -1, "Noticeable danger")),
    ((9, 10), HazardIntensityEntry(4, "Severe", -1.5, "Serious threat")),
    ((11, 12), HazardIntensityEntry(5, "Extreme", -2, "Life-threatening")),
])

RESOURCE_TABLE: dict[int, FactorEntry] = expand_ranges([
    ((2, 3), FactorEntry("None", -2, "No organic chemistry")),
    ((4, 5), FactorEntry("Poor", -1, "Minimal organic compounds")),
    ((6, 8), FactorEntry("Moderate", 0, "Some organic chemistry")),
    ((9, 10), FactorEntry("Rich", 1, "Abundant organic compounds")),
    ((11, 12), FactorEntry("Very Rich", 2, "Thriving biosphere")),
])

# ---------------------------------------------------------------------------
# Society
# ---------------------------------------------------------------------------

WEALTH_TABLE: dict[int, WealthEntry] = expand_ranges([
    ((2, 2), WealthEntry(-2, "Destitute", "Extreme poverty")),
    ((3, 3), WealthEntry(-1, "Very Poor", "Struggling economy")),
    ((4, 5), WealthEntry(0, "Poor", "Below average wealth")),
    ((6, 7), WealthEntry(1, "Moderate", "Average wealth")),
    ((8, 9), WealthEntry(2, "Comfortable", "Above average wealth")),
    ((10, 10), WealthEntry(3, "Prosperous", "Well-off")),
    ((11, 11), WealthEntry(4, "Rich", "Wealthy world")),
    ((12, 12), WealthEntry(5, "Very Rich", "Extremely wealthy")),
])

POWER_STRUCTURE_TABLE: dict[int, SocialEntry] = expand_ranges([
    ((2, 2), SocialEntry("Anarchy", "No central authority")),
    ((3, 3), SocialEntry("Feudal", "Local lords and vassals")),
    ((4, 4), SocialEntry("Autocracy", "Single ruler with absolute power")),
    ((5, 6), SocialEntry("Oligarchy", "Rule by elite few")),
    ((7, 8), SocialEntry("Representative", "Elected representatives")),
    ((9, 9), SocialEntry("Democracy", "Direct democratic rule")),
    ((10, 10), SocialEntry("Meritocracy", "Rule by the most capable")),
    ((11, 11), SocialEntry("Technocracy", "Rule by technical experts")),
    ((12, 12), SocialEntry("AI/Synthetic", "Governed by artificial intelligence")),
])

GOVERNANCE_TABLE: dict[int, GovernanceEntry] = expand_ranges([
    ((2, 3), GovernanceEntry("Chaotic", "Collapsed or ineffective", "Dis+2")),
    ((4, 5), GovernanceEntry("Weak", "Corrupt or incompetent", "Dis+1")),
    ((6, 8), GovernanceEntry("Moderate", "Functional but flawed", "Standard")),
    ((9, 10), GovernanceEntry("Strong", "Effective and fair", "Adv+1")),
    ((11, 12), GovernanceEntry("Totalitarian", "Highly efficient but oppressive", "Adv+2")),
])

SOURCE_OF_POWER_TABLE: dict[int, SocialEntry] = expand_ranges([
    ((2, 3), SocialEntry("Military", "Armed forces hold power")),
    ((4, 5), SocialEntry("Religious", "Faith-based authority")),
    ((6, 6), SocialEntry("Corporate", "Megacorporation control")),
    ((7, 8), SocialEntry("Popular", "Will of the people")),
    ((9, 9), SocialEntry("Hereditary", "Inherited positions")),
    ((10, 10), SocialEntry("Bureaucratic", "Civil service power")),
    ((11, 11), SocialEntry("Academic", "Educational institutions")),
    ((12, 12), SocialEntry("Other", "Unusual power source")),
])


def entry_by_label(table: dict, label: str, attr: str = "label"):
    """Reverse lookup used when a caller overrides a rolled value by name."""
    for entry in table.values():
        if getattr(entry, attr) == label:
            return entry
    return None
