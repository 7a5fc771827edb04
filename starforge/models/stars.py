"""Primary and companion star generation."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable

from ..constants import (
    COMPANION_CONTINUE_ROLL,
    COMPANION_NAME_PATTERN,
    MAX_COMPANIONS,
    PRIMARY_NAME_PATTERN,
)
from ..errors import ConstraintExhaustedError, DomainViolationError
from .dice import Dice
from .naming import NameSequence, next_name
from .records import GenerationMethod, new_id, utc_now
from .stellar import (
    DEFAULT_TABLE,
    StellarClass,
    StellarProperty,
    StellarPropertySource,
    classes_from,
    is_brighter,
    lookup_stellar_property,
    validate_class_grade,
)
from .tables import expand_ranges, lookup_roll

logger = logging.getLogger(__name__)


class StarRole(enum.Enum):
    PRIMARY = "primary"
    COMPANION = "companion"


@dataclass(frozen=True)
class StarDiceRolls:
    """Totals of the rolls behind a star. Unrolled fields stay None."""

    class_roll: int | None = None
    grade_roll: int | None = None
    companion_roll: int | None = None
    orbit_roll: int | None = None


@dataclass(frozen=True)
class StarRecord:
    id: str
    name: str
    stellar_class: StellarClass
    stellar_grade: int
    role: StarRole
    generation_method: GenerationMethod
    dice_rolls: StarDiceRolls
    properties: StellarProperty
    orbital_distance: float | None = None  # AU from the primary, companions only
    created_at: datetime = field(default_factory=utc_now)

    @property
    def class_grade(self) -> str:
        return self.properties.id


@dataclass(frozen=True)
class CompanionGenerationResult:
    companions: tuple[StarRecord, ...]
    total_rolls: int
    max_reached: bool


# ---------------------------------------------------------------------------
# Primary star
# ---------------------------------------------------------------------------

# 5D6 (5-30) -> class; the bell curve favours G
_CLASS_TABLE: dict[int, StellarClass] = expand_ranges([
    ((5, 7), StellarClass.O),
    ((8, 10), StellarClass.B),
    ((11, 13), StellarClass.A),
    ((14, 17), StellarClass.F),
    ((18, 22), StellarClass.G),
    ((23, 26), StellarClass.K),
    ((27, 30), StellarClass.M),
])

# 5D6 -> grade
_GRADE_TABLE: dict[int, int] = expand_ranges([
    ((5, 8), 0),
    ((9, 11), 1),
    ((12, 14), 2),
    ((15, 16), 3),
    ((17, 18), 4),
    ((19, 20), 5),
    ((21, 22), 6),
    ((23, 25), 7),
    ((26, 28), 8),
    ((29, 30), 9),
])


def stellar_class_from_roll(roll: int) -> StellarClass:
    return lookup_roll(_CLASS_TABLE, roll, "stellar class")


def stellar_grade_from_roll(roll: int) -> int:
    return lookup_roll(_GRADE_TABLE, roll, "stellar grade")


@dataclass
class PrimaryStarOptions:
    name: str | None = None
    stellar_class: StellarClass | None = None
    stellar_grade: int | None = None
    advantage: int = 0
    disadvantage: int = 0


def generate_primary_star(
    dice: Dice,
    options: PrimaryStarOptions | None = None,
    source: StellarPropertySource = DEFAULT_TABLE,
    naming: NameSequence | None = None,
) -> StarRecord:
    """Roll 5D6 for class and 5D6 for grade, unless either is overridden."""
    options = options or PrimaryStarOptions()

    class_roll = grade_roll = None
    if options.stellar_class is None:
        class_roll = dice.roll_5d6(options.advantage, options.disadvantage).total
        stellar_class = stellar_class_from_roll(class_roll)
    else:
        stellar_class = options.stellar_class
    if options.stellar_grade is None:
        grade_roll = dice.roll_5d6(options.advantage, options.disadvantage).total
        grade = stellar_grade_from_roll(grade_roll)
    else:
        grade = options.stellar_grade

    properties = lookup_stellar_property(stellar_class, grade, source)
    custom = options.stellar_class is not None or options.stellar_grade is not None
    name = options.name or next_name(PRIMARY_NAME_PATTERN, "star", naming)

    logger.debug("Primary star %s: %s (rolls %s/%s)", name, properties.id, class_roll, grade_roll)
    return StarRecord(
        id=new_id(),
        name=name,
        stellar_class=stellar_class,
        stellar_grade=grade,
        role=StarRole.PRIMARY,
        generation_method=GenerationMethod.CUSTOM if custom else GenerationMethod.PROCEDURAL,
        dice_rolls=StarDiceRolls(class_roll=class_roll, grade_roll=grade_roll),
        properties=properties,
    )


# ---------------------------------------------------------------------------
# Companion stars
# ---------------------------------------------------------------------------

# Minimum 2D6 for a companion to exist; cool primaries rarely have one
COMPANION_TARGETS: dict[StellarClass, int] = {
    StellarClass.O: 4,
    StellarClass.B: 5,
    StellarClass.A: 6,
    StellarClass.F: 7,
    StellarClass.G: 8,
    StellarClass.K: 9,
    StellarClass.M: 10,
}

# AU ranges per 3D6 bucket, by primary class group
_ORBIT_WIDE = [(0.1, 1.0), (1.0, 10.0), (10.0, 100.0), (100.0, 1000.0)]
_ORBIT_MEDIUM = [(0.05, 0.5), (0.5, 5.0), (5.0, 50.0), (50.0, 500.0)]
_ORBIT_NARROW = [(0.01, 0.1), (0.1, 1.0), (1.0, 10.0), (10.0, 100.0)]

COMPANION_ORBIT_RANGES: dict[StellarClass, list[tuple[float, float]]] = {
    StellarClass.O: _ORBIT_WIDE,
    StellarClass.B: _ORBIT_WIDE,
    StellarClass.A: _ORBIT_WIDE,
    StellarClass.F: _ORBIT_MEDIUM,
    StellarClass.G: _ORBIT_MEDIUM,
    StellarClass.K: _ORBIT_NARROW,
    StellarClass.M: _ORBIT_NARROW,
}

# 3D6 total -> bucket index
_ORBIT_BUCKETS: dict[int, int] = expand_ranges([
    ((3, 6), 0),
    ((7, 10), 1),
    ((11, 14), 2),
    ((15, 18), 3),
])


def companion_target(primary_class: StellarClass) -> int:
    return COMPANION_TARGETS[primary_class]


def valid_companion_classes(primary_class: StellarClass) -> list[StellarClass]:
    """Classes a companion may take: the primary's own or any cooler."""
    return classes_from(primary_class)


def is_companion_smaller_than_primary(
    primary_class: StellarClass,
    primary_grade: int,
    companion_class: StellarClass,
    companion_grade: int,
) -> bool:
    """A companion must be strictly dimmer: a cooler class, or the same class at a higher grade."""
    return is_brighter(primary_class, primary_grade, companion_class, companion_grade)


def validate_companion(
    primary_class: StellarClass,
    primary_grade: int,
    companion_class: StellarClass,
    companion_grade: int,
) -> bool:
    """Standalone check used on stored or hand-edited systems."""
    validate_class_grade(primary_class, primary_grade)
    validate_class_grade(companion_class, companion_grade)
    return is_companion_smaller_than_primary(
        primary_class, primary_grade, companion_class, companion_grade,
    )


def _grade_from_2d6(total: int) -> int:
    return max(0, min(9, (total - 2) * 9 // 10))


def choose_companion_class_grade(
    dice: Dice, primary_class: StellarClass, primary_grade: int,
) -> tuple[StellarClass, int, int | None]:
    """Pick a class/grade dimmer than the primary.

    Returns (class, grade, grade_roll). When the primary's class is drawn and
    the primary is already grade 9, the floor moves to the next cooler class
    at grade 0 and the draw repeats. There are only seven classes, so this
    terminates; a floor past M raises ConstraintExhaustedError.
    """
    floor_class, floor_grade = primary_class, primary_grade
    while True:
        chosen = dice.rng.choice(classes_from(floor_class))
        if chosen is not floor_class:
            roll = dice.roll_2d6().total
            return chosen, _grade_from_2d6(roll), roll
        if floor_grade < 9:
            return chosen, dice.rng.randint(floor_grade + 1, 9), None

        next_class = floor_class.next_cooler
        if next_class is None:
            raise ConstraintExhaustedError(
                f"No star is dimmer than {primary_class.value}{primary_grade}"
            )
        logger.debug("Escalating companion floor from %s9 to %s0", floor_class.value, next_class.value)
        floor_class, floor_grade = next_class, 0


def sample_companion_orbit(dice: Dice, primary_class: StellarClass) -> tuple[float, int]:
    """Roll 3D6 for the bucket, then sample log-uniformly inside it.

    Returns (distance_au, orbit_roll).
    """
    roll = dice.roll_3d6().total
    low, high = COMPANION_ORBIT_RANGES[primary_class][lookup_roll(_ORBIT_BUCKETS, roll, "companion orbit")]
    log_low, log_high = math.log10(low), math.log10(high)
    distance = 10 ** (log_low + dice.rng.random() * (log_high - log_low))
    return distance, roll


def _build_companion(
    dice: Dice,
    primary_class: StellarClass,
    primary_grade: int,
    companion_roll: int | None,
    name: Callable[[], str],
    source: StellarPropertySource,
) -> StarRecord:
    """``name`` is only called once a class and grade have been settled."""
    stellar_class, grade, grade_roll = choose_companion_class_grade(dice, primary_class, primary_grade)
    if not is_companion_smaller_than_primary(primary_class, primary_grade, stellar_class, grade):
        raise DomainViolationError(
            f"Companion {stellar_class.value}{grade} is not dimmer than "
            f"primary {primary_class.value}{primary_grade}"
        )
    distance, orbit_roll = sample_companion_orbit(dice, primary_class)
    properties = lookup_stellar_property(stellar_class, grade, source)
    return StarRecord(
        id=new_id(),
        name=name(),
        stellar_class=stellar_class,
        stellar_grade=grade,
        role=StarRole.COMPANION,
        generation_method=GenerationMethod.PROCEDURAL,
        dice_rolls=StarDiceRolls(
            grade_roll=grade_roll, companion_roll=companion_roll, orbit_roll=orbit_roll,
        ),
        properties=properties,
        orbital_distance=distance,
    )


def generate_companion_stars(
    dice: Dice,
    primary_class: StellarClass,
    primary_grade: int,
    source: StellarPropertySource = DEFAULT_TABLE,
    naming: NameSequence | None = None,
) -> CompanionGenerationResult:
    """Roll for up to three companions.

    Each 2D6 at or above the primary's target adds a companion; only a
    natural 12 earns another roll.
    """
    validate_class_grade(primary_class, primary_grade)
    target = companion_target(primary_class)
    companions: list[StarRecord] = []
    total_rolls = 0
    max_reached = False

    while len(companions) < MAX_COMPANIONS:
        roll = dice.roll_2d6().total
        total_rolls += 1
        if roll < target:
            logger.debug("Companion roll %d < %d for %s primary; stopping", roll, target, primary_class.value)
            break

        try:
            companion = _build_companion(
                dice,
                primary_class,
                primary_grade,
                roll,
                lambda: next_name(COMPANION_NAME_PATTERN, "companion", naming),
                source,
            )
        except ConstraintExhaustedError as exc:
            logger.warning("Abandoning companion attempt: %s", exc)
            break
        companions.append(companion)
        logger.debug(
            "Companion %s: %s at %.3f AU", companion.name, companion.class_grade, companion.orbital_distance,
        )

        if len(companions) >= MAX_COMPANIONS:
            max_reached = True
            break
        if roll != COMPANION_CONTINUE_ROLL:
            break

    return CompanionGenerationResult(companions=tuple(companions), total_rolls=total_rolls, max_reached=max_reached)


def reroll_companion(
    dice: Dice,
    primary: StarRecord,
    companion: StarRecord,
    source: StellarPropertySource = DEFAULT_TABLE,
) -> StarRecord:
    """Re-roll a companion's class, grade and orbit, keeping its identity and name."""
    fresh = _build_companion(
        dice,
        primary.stellar_class,
        primary.stellar_grade,
        companion.dice_rolls.companion_roll,
        lambda: companion.name,
        source,
    )
    return replace(fresh, id=companion.id, created_at=companion.created_at)
