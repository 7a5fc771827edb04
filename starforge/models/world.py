"""World generation pipeline.

A world is built from a fixed sequence of 2D6 rolls. Each stage reads its own
table; later stages (population, development, starport) are derived from the
earlier results rather than rolled.

Stage order:
  type -> size -> gravity (not habitats) -> composition (dwarfs only)
  -> atmosphere -> temperature -> hazard -> hazard intensity (if any)
  -> biochemical resources -> wealth -> power structure -> governance
  -> source of power -> three d66 culture codes
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Union

from ..constants import (
    ARTIFICIAL_GRAVITY,
    BASELINE_TECH_LEVEL,
    COMFORTABLE_MASS_RANGE,
    DEFAULT_TECH_LEVEL,
    HAZARD_PRESENCE_MODIFIER,
    MASS_EXTREMITY_MODIFIER,
    MIN_HABITABILITY_FACTOR,
    TECH_HABITABILITY_BONUS,
)
from ..errors import DomainViolationError
from .culture import roll_culture_traits
from .dice import Dice
from .naming import NameSequence, next_name
from .records import GenerationMethod, new_id, roll_errors, utc_now
from .starport import (
    STARPORT_CLASSES,
    StarportClass,
    port_value_score,
    starport_class_from_pvs,
)
from .tables import lookup_roll
from .world_tables import (
    ATMOSPHERE_TABLE,
    COMPOSITION_TABLE,
    GOVERNANCE_TABLE,
    GRAVITY_TABLES,
    HAZARD_INTENSITY_TABLE,
    HAZARD_TYPE_TABLE,
    NO_HAZARD,
    POWER_STRUCTURE_TABLE,
    RESOURCE_TABLE,
    SIZE_TABLES,
    SOURCE_OF_POWER_TABLE,
    TEMPERATURE_TABLE,
    WEALTH_TABLE,
    WORLD_TYPE_TABLE,
    Composition,
    SizeEntry,
    WorldType,
    entry_by_label,
)

logger = logging.getLogger(__name__)

_DEFAULT_NAME_PATTERNS: dict[WorldType, str] = {
    WorldType.HABITAT: "Habitat {n}",
    WorldType.DWARF: "Lesser Earth {n}",
    WorldType.TERRESTRIAL: "Terrestrial {n}",
}


# ---------------------------------------------------------------------------
# Development
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DevelopmentInfo:
    label: str
    description: str
    modifier: int  # Feeds the Port Value Score
    governance_modifier: str
    port_fee_multiplier: float
    min_tech_level: int | None = None


class DevelopmentLevel(enum.Enum):
    UNDERDEVELOPED = "underdeveloped"
    DEVELOPING = "developing"
    MATURE = "mature"
    DEVELOPED = "developed"
    WELL_DEVELOPED = "well_developed"
    VERY_DEVELOPED = "very_developed"

    @property
    def info(self) -> DevelopmentInfo:
        return DEVELOPMENT_LEVELS[self]

    @property
    def modifier(self) -> int:
        return DEVELOPMENT_LEVELS[self].modifier


DEVELOPMENT_LEVELS: dict[DevelopmentLevel, DevelopmentInfo] = {
    DevelopmentLevel.UNDERDEVELOPED: DevelopmentInfo(
        "Underdeveloped", "Minimal infrastructure, struggling economy, limited services",
        -2, "Dis+2", 0.5,
    ),
    DevelopmentLevel.DEVELOPING: DevelopmentInfo(
        "Developing", "Growing infrastructure, emerging economy, basic services",
        -1, "Dis+1", 1,
    ),
    DevelopmentLevel.MATURE: DevelopmentInfo(
        "Mature", "Established infrastructure, stable economy, reliable services",
        0, "Standard", 2, 8,
    ),
    DevelopmentLevel.DEVELOPED: DevelopmentInfo(
        "Developed", "Advanced infrastructure, prosperous economy, excellent services",
        1, "Adv+1", 5, 10,
    ),
    DevelopmentLevel.WELL_DEVELOPED: DevelopmentInfo(
        "Well Developed", "Cutting-edge infrastructure, wealthy economy, premium services",
        2, "Adv+2", 10, 12,
    ),
    DevelopmentLevel.VERY_DEVELOPED: DevelopmentInfo(
        "Very Developed", "Futuristic infrastructure, post-scarcity economy, unparalleled services",
        3, "Adv+3", 20, 14,
    ),
}

# Minimum development score for each level, highest first
_DEVELOPMENT_THRESHOLDS: list[tuple[int, DevelopmentLevel]] = [
    (20, DevelopmentLevel.VERY_DEVELOPED),
    (16, DevelopmentLevel.WELL_DEVELOPED),
    (12, DevelopmentLevel.DEVELOPED),
    (9, DevelopmentLevel.MATURE),
    (6, DevelopmentLevel.DEVELOPING),
]


def development_level(tech_level: int, habitability_score: float) -> DevelopmentLevel:
    """Classify by TL plus any positive habitability."""
    score = tech_level + max(0, habitability_score)
    for threshold, level in _DEVELOPMENT_THRESHOLDS:
        if score >= threshold:
            return level
    return DevelopmentLevel.UNDERDEVELOPED


_HABITABILITY_RATINGS: list[tuple[float, str]] = [
    (8, "Paradise"),
    (4, "Excellent"),
    (0, "Good"),
    (-4, "Marginal"),
    (-8, "Harsh"),
]


def habitability_rating(score: float) -> str:
    for threshold, rating in _HABITABILITY_RATINGS:
        if score >= threshold:
            return rating
    return "Hostile"


# ---------------------------------------------------------------------------
# Physical variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DwarfBody:
    """A lesser earth or large moon. Always has a composition."""

    world_type: ClassVar[WorldType] = WorldType.DWARF

    size_label: str
    mass_label: str
    mass: float  # Earth masses
    gravity: float
    composition: Composition


@dataclass(frozen=True)
class TerrestrialBody:
    world_type: ClassVar[WorldType] = WorldType.TERRESTRIAL

    size_label: str
    mass_label: str
    mass: float  # Earth masses
    gravity: float


@dataclass(frozen=True)
class HabitatBody:
    """An artificial habitat. Gravity is spun up to exactly 1 G."""

    world_type: ClassVar[WorldType] = WorldType.HABITAT

    size_label: str
    mass_label: str
    mass: float  # Volume-tonnage, millions
    population_range: str

    @property
    def gravity(self) -> float:
        return ARTIFICIAL_GRAVITY


WorldBody = Union[DwarfBody, TerrestrialBody, HabitatBody]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HabitabilityModifiers:
    atmosphere: float = 0
    temperature: float = 0
    hazard: float = 0
    hazard_intensity: float = 0
    biochemical_resources: float = 0
    mass: float = 0
    tech_level: float = 0

    @property
    def total(self) -> float:
        """Unclamped sum; downstream formulas accept any sign or size."""
        return (
            self.atmosphere
            + self.temperature
            + self.hazard
            + self.hazard_intensity
            + self.biochemical_resources
            + self.mass
            + self.tech_level
        )


@dataclass(frozen=True)
class WorldDiceRolls:
    """Roll totals per stage. None means the stage was skipped or overridden."""

    type_roll: int | None = None
    size_roll: int | None = None
    gravity_roll: int | None = None
    composition_roll: int | None = None
    atmosphere_roll: int | None = None
    temperature_roll: int | None = None
    hazard_roll: int | None = None
    hazard_intensity_roll: int | None = None
    resource_roll: int | None = None
    wealth_roll: int | None = None
    power_structure_roll: int | None = None
    governance_roll: int | None = None
    source_of_power_roll: int | None = None
    culture_codes: tuple[str, ...] = ()

    def two_dice_rolls(self) -> dict[str, int]:
        """Every 2D6 total that was actually rolled."""
        return {
            name: value
            for name, value in vars(self).items()
            if name.endswith("_roll") and value is not None
        }


@dataclass(frozen=True)
class WorldRecord:
    id: str
    name: str
    star_system_id: str
    body: WorldBody
    # Habitability
    atmosphere: str
    temperature: str
    hazard_type: str
    hazard_intensity: int | None
    biochemical_resources: str
    habitability_modifiers: HabitabilityModifiers
    habitability_score: float
    # Society
    population: int
    wealth: int
    power_structure: str
    governance: str
    source_of_power: str
    # Starport
    port_value_score: int
    starport_class: StarportClass
    starport_capabilities: tuple[str, ...]
    # Culture, as "Trait: description"
    culture_traits: tuple[str, str, str]
    tech_level: int
    development_level: DevelopmentLevel
    generation_method: GenerationMethod
    dice_rolls: WorldDiceRolls
    created_at: datetime = field(default_factory=utc_now)

    @property
    def world_type(self) -> WorldType:
        return self.body.world_type

    @property
    def gravity(self) -> float:
        return self.body.gravity

    @property
    def mass(self) -> float:
        return self.body.mass

    @property
    def composition(self) -> Composition | None:
        return self.body.composition if isinstance(self.body, DwarfBody) else None

    @property
    def habitability_rating(self) -> str:
        return habitability_rating(self.habitability_score)


@dataclass
class WorldOptions:
    """Inputs for generate_world. Any override skips the matching roll."""

    star_system_id: str
    tech_level: int | None = None
    name: str | None = None
    advantage: int = 0
    disadvantage: int = 0
    # Overrides
    world_type: WorldType | None = None
    size_roll: int | None = None
    gravity_roll: int | None = None
    composition: Composition | None = None
    atmosphere: str | None = None
    temperature: str | None = None
    hazard_type: str | None = None
    hazard_intensity: int | None = None
    biochemical_resources: str | None = None
    wealth: int | None = None
    power_structure: str | None = None
    governance: str | None = None
    source_of_power: str | None = None
    culture_codes: tuple[str | None, str | None, str | None] = (None, None, None)

    _OVERRIDES: ClassVar[tuple[str, ...]] = (
        "world_type", "size_roll", "gravity_roll", "composition", "atmosphere",
        "temperature", "hazard_type", "hazard_intensity", "biochemical_resources",
        "wealth", "power_structure", "governance", "source_of_power",
    )

    def has_overrides(self) -> bool:
        return (
            any(getattr(self, name) is not None for name in self._OVERRIDES)
            or any(code is not None for code in self.culture_codes)
        )


# ---------------------------------------------------------------------------
# Stage helpers
# ---------------------------------------------------------------------------


class _Roller:
    """Rolls 2D6 with the pipeline's shared advantage/disadvantage."""

    def __init__(self, dice: Dice, advantage: int, disadvantage: int) -> None:
        self.dice = dice
        self.advantage = advantage
        self.disadvantage = disadvantage

    def roll(self) -> int:
        return self.dice.roll_2d6(self.advantage, self.disadvantage).total

    def table(self, table: dict, table_name: str, override=None, attr: str = "label"):
        """Return (entry, roll). An override is matched by ``attr`` and leaves roll as None."""
        if override is None:
            roll = self.roll()
            return lookup_roll(table, roll, table_name), roll
        entry = entry_by_label(table, override, attr)
        if entry is None:
            raise DomainViolationError(f"{override!r} is not a valid {table_name} value")
        return entry, None


def generate_world_type(dice: Dice, advantage: int = 0, disadvantage: int = 0) -> tuple[WorldType, int]:
    roll = dice.roll_2d6(advantage, disadvantage).total
    return lookup_roll(WORLD_TYPE_TABLE, roll, "world type"), roll


def generate_world_size(
    dice: Dice, world_type: WorldType, advantage: int = 0, disadvantage: int = 0,
    roll: int | None = None,
) -> tuple[SizeEntry, int]:
    """A given ``roll`` is looked up as-is instead of rolling."""
    if roll is None:
        roll = dice.roll_2d6(advantage, disadvantage).total
    return lookup_roll(SIZE_TABLES[world_type], roll, f"{world_type.value} size"), roll


def generate_world_gravity(
    dice: Dice, world_type: WorldType, advantage: int = 0, disadvantage: int = 0,
    roll: int | None = None,
) -> tuple[float, int | None]:
    """Habitats never roll: they get artificial gravity and no roll."""
    if world_type is WorldType.HABITAT:
        return ARTIFICIAL_GRAVITY, None
    if roll is None:
        roll = dice.roll_2d6(advantage, disadvantage).total
    return lookup_roll(GRAVITY_TABLES[world_type], roll, f"{world_type.value} gravity"), roll


def generate_dwarf_composition(
    dice: Dice, advantage: int = 0, disadvantage: int = 0,
) -> tuple[Composition, int]:
    roll = dice.roll_2d6(advantage, disadvantage).total
    return lookup_roll(COMPOSITION_TABLE, roll, "composition").composition, roll


_POPULATION_SUFFIXES = {"K": 1_000, "M": 1_000_000, "B": 1_000_000_000}


def habitat_population(population_range: str) -> int:
    """Lower bound of a label like "30K-99K people"."""
    low = population_range.split("-", 1)[0].strip()
    try:
        return int(float(low[:-1]) * _POPULATION_SUFFIXES[low[-1]])
    except (KeyError, ValueError, IndexError):
        raise DomainViolationError(f"Unparseable population range {population_range!r}") from None


def planetary_population(mass: float, habitability_score: float, tech_level: int) -> int:
    factor = max(MIN_HABITABILITY_FACTOR, 1 + habitability_score / 10)
    return math.floor(mass * factor * 10 ** (tech_level - BASELINE_TECH_LEVEL) * 1_000_000)


def mass_modifier(mass: float) -> float:
    low, high = COMFORTABLE_MASS_RANGE
    return 0 if low <= mass <= high else MASS_EXTREMITY_MODIFIER


def tech_level_modifier(tech_level: int) -> float:
    return max(0, tech_level - BASELINE_TECH_LEVEL) * TECH_HABITABILITY_BONUS


def _validate_options(options: WorldOptions, tech_level: int) -> None:
    if isinstance(tech_level, bool) or not isinstance(tech_level, int) or tech_level < 0:
        raise DomainViolationError(f"Tech level must be a non-negative integer, got {tech_level!r}")
    if options.advantage < 0 or options.disadvantage < 0:
        raise DomainViolationError("Advantage and disadvantage must be non-negative")
    if options.hazard_type == NO_HAZARD and options.hazard_intensity is not None:
        raise DomainViolationError("A hazard intensity needs a hazard")
    if len(options.culture_codes) != 3:
        raise DomainViolationError("culture_codes must hold exactly three entries")


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def generate_world(
    dice: Dice, options: WorldOptions, naming: NameSequence | None = None,
) -> WorldRecord:
    """Run the full pipeline and return one consistent world."""
    tech_level = options.tech_level if options.tech_level is not None else DEFAULT_TECH_LEVEL
    _validate_options(options, tech_level)
    adv, dis = options.advantage, options.disadvantage
    r = _Roller(dice, adv, dis)

    # 1. Type
    if options.world_type is None:
        world_type, type_roll = generate_world_type(dice, adv, dis)
    else:
        type_roll, world_type = None, options.world_type
    if options.composition is not None and world_type is not WorldType.DWARF:
        raise DomainViolationError(f"A {world_type.value} world cannot have a composition")
    if options.gravity_roll is not None and world_type is WorldType.HABITAT:
        raise DomainViolationError("Habitats have fixed artificial gravity")

    # 2. Size
    size, size_roll = generate_world_size(dice, world_type, adv, dis, roll=options.size_roll)

    # 3-4. Gravity and composition
    gravity, gravity_roll = generate_world_gravity(dice, world_type, adv, dis, roll=options.gravity_roll)
    composition_roll = None
    if world_type is WorldType.HABITAT:
        body: WorldBody = HabitatBody(
            size_label=size.label, mass_label=size.mass, mass=size.mass_value,
            population_range=size.description,
        )
    else:
        if world_type is WorldType.DWARF:
            if options.composition is None:
                composition, composition_roll = generate_dwarf_composition(dice, adv, dis)
            else:
                entry, _ = r.table(COMPOSITION_TABLE, "composition", options.composition, attr="composition")
                composition = entry.composition
            body = DwarfBody(
                size_label=size.label, mass_label=size.mass, mass=size.mass_value,
                gravity=gravity, composition=composition,
            )
        else:
            body = TerrestrialBody(
                size_label=size.label, mass_label=size.mass, mass=size.mass_value, gravity=gravity,
            )

    # 5. Habitability factors
    atmosphere, atmosphere_roll = r.table(ATMOSPHERE_TABLE, "atmosphere", options.atmosphere)
    temperature, temperature_roll = r.table(TEMPERATURE_TABLE, "temperature", options.temperature)
    hazard, hazard_roll = r.table(HAZARD_TYPE_TABLE, "hazard", options.hazard_type)
    if options.hazard_intensity is not None and not hazard.requires_intensity:
        raise DomainViolationError("A hazard intensity needs a hazard")
    intensity = intensity_roll = None
    if hazard.requires_intensity:
        intensity, intensity_roll = r.table(
            HAZARD_INTENSITY_TABLE, "hazard intensity", options.hazard_intensity, attr="intensity",
        )
    resources, resource_roll = r.table(RESOURCE_TABLE, "biochemical resources", options.biochemical_resources)

    # 6. Score
    modifiers = HabitabilityModifiers(
        atmosphere=atmosphere.modifier,
        temperature=temperature.modifier,
        hazard=HAZARD_PRESENCE_MODIFIER if intensity is not None else 0,
        hazard_intensity=intensity.modifier if intensity is not None else 0,
        biochemical_resources=resources.modifier,
        mass=mass_modifier(body.mass),
        tech_level=tech_level_modifier(tech_level),
    )
    score = modifiers.total

    # 7. Society
    wealth, wealth_roll = r.table(WEALTH_TABLE, "wealth", options.wealth, attr="wealth")
    power, power_roll = r.table(POWER_STRUCTURE_TABLE, "power structure", options.power_structure)
    governance, governance_roll = r.table(GOVERNANCE_TABLE, "governance", options.governance)
    source, source_roll = r.table(SOURCE_OF_POWER_TABLE, "source of power", options.source_of_power)

    # 8. Population
    if isinstance(body, HabitatBody):
        population = habitat_population(body.population_range)
    else:
        population = planetary_population(body.mass, score, tech_level)

    # 9-10. Development and starport
    development = development_level(tech_level, score)
    pvs = port_value_score(score, tech_level, wealth.wealth, development.modifier)
    starport_class = starport_class_from_pvs(pvs)

    # 11. Culture
    traits = roll_culture_traits(dice, options.culture_codes)

    name = options.name or next_name(_DEFAULT_NAME_PATTERNS[world_type], world_type.value, naming)
    logger.debug(
        "World %s: %s, habitability %.1f (%s), PVS %d -> %s",
        name, world_type.value, score, habitability_rating(score), pvs, starport_class.value,
    )

    return WorldRecord(
        id=new_id(),
        name=name,
        star_system_id=options.star_system_id,
        body=body,
        atmosphere=atmosphere.label,
        temperature=temperature.label,
        hazard_type=hazard.label,
        hazard_intensity=intensity.intensity if intensity is not None else None,
        biochemical_resources=resources.label,
        habitability_modifiers=modifiers,
        habitability_score=score,
        population=population,
        wealth=wealth.wealth,
        power_structure=power.label,
        governance=governance.label,
        source_of_power=source.label,
        port_value_score=pvs,
        starport_class=starport_class,
        starport_capabilities=STARPORT_CLASSES[starport_class].capabilities,
        culture_traits=tuple(t.formatted() for t in traits),
        tech_level=tech_level,
        development_level=development,
        generation_method=GenerationMethod.CUSTOM if options.has_overrides() else GenerationMethod.PROCEDURAL,
        dice_rolls=WorldDiceRolls(
            type_roll=type_roll,
            size_roll=size_roll if options.size_roll is None else None,
            gravity_roll=gravity_roll if options.gravity_roll is None else None,
            composition_roll=composition_roll,
            atmosphere_roll=atmosphere_roll,
            temperature_roll=temperature_roll,
            hazard_roll=hazard_roll,
            hazard_intensity_roll=intensity_roll,
            resource_roll=resource_roll,
            wealth_roll=wealth_roll,
            power_structure_roll=power_roll,
            governance_roll=governance_roll,
            source_of_power_roll=source_roll,
            culture_codes=tuple(t.code for t in traits),
        ),
    )


def validate_world(world: WorldRecord) -> list[str]:
    """Consistency problems in a stored or hand-edited world. Empty means valid."""
    errors: list[str] = []
    if not world.id:
        errors.append("Missing world ID")
    if not world.name:
        errors.append("Missing world name")
    if not world.star_system_id:
        errors.append("Missing star system ID")
    errors.extend(roll_errors(world.dice_rolls.two_dice_rolls()))
    if world.world_type is WorldType.DWARF and world.composition is None:
        errors.append("Dwarf worlds must have composition")
    if world.world_type is not WorldType.DWARF and world.composition is not None:
        errors.append("Only dwarf worlds have composition")
    if world.world_type is WorldType.HABITAT and world.gravity != ARTIFICIAL_GRAVITY:
        errors.append("Habitats must have 1.0G artificial gravity")
    return errors
