"""Starport classification from the Port Value Score, and base presence rolls."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from ..constants import BASELINE_TECH_LEVEL
from ..errors import DomainViolationError
from .dice import Dice

if TYPE_CHECKING:
    from .world import WorldRecord

logger = logging.getLogger(__name__)


class StarportClass(enum.Enum):
    X = "X"
    E = "E"
    D = "D"
    C = "C"
    B = "B"
    A = "A"


class BaseType(enum.Enum):
    NAVAL = "naval"
    SCOUT = "scout"
    PIRATE = "pirate"


@dataclass(frozen=True)
class StarportClassInfo:
    label: str
    description: str
    capabilities: tuple[str, ...]
    pvs_min: float  # Inclusive; -inf for X
    pvs_max: float  # Inclusive; inf for A


STARPORT_CLASSES: dict[StarportClass, StarportClassInfo] = {
    StarportClass.X: StarportClassInfo(
        "No Starport", "No port facilities", (), -math.inf, -1,
    ),
    StarportClass.E: StarportClassInfo(
        "Frontier Port", "Minimal facilities",
        ("Basic landing pad", "No fuel", "No repair"), 0, 3,
    ),
    StarportClass.D: StarportClassInfo(
        "Poor Port", "Limited services",
        ("Landing facilities", "Unrefined fuel", "Limited repair"), 4, 7,
    ),
    StarportClass.C: StarportClassInfo(
        "Routine Port", "Standard services",
        ("Good facilities", "Refined fuel", "Shipyard (small craft)"), 8, 11,
    ),
    StarportClass.B: StarportClassInfo(
        "Good Port", "Excellent services",
        ("Excellent facilities", "Refined fuel", "Shipyard (spacecraft)"), 12, 15,
    ),
    StarportClass.A: StarportClassInfo(
        "Excellent Port", "Best possible services",
        ("Best facilities", "Refined fuel", "Shipyard (all classes)", "Naval base possible"),
        16, math.inf,
    ),
}

# 2D6 target per base type; classes missing from a row cannot host that base
BASE_TARGETS: dict[BaseType, dict[StarportClass, int]] = {
    BaseType.NAVAL: {StarportClass.A: 8, StarportClass.B: 10},
    BaseType.SCOUT: {
        StarportClass.A: 7, StarportClass.B: 8, StarportClass.C: 9, StarportClass.D: 10,
    },
    BaseType.PIRATE: {StarportClass.C: 12, StarportClass.D: 12, StarportClass.E: 12},
}

ROLLED_BASES = [BaseType.NAVAL, BaseType.SCOUT, BaseType.PIRATE]


@dataclass(frozen=True)
class BasePresence:
    base_type: BaseType
    present: bool
    roll: int
    target: int


@dataclass(frozen=True)
class StarportRecord:
    world_id: str
    starport_class: StarportClass
    port_value_score: int
    label: str
    description: str
    capabilities: tuple[str, ...]
    bases: tuple[BasePresence, ...] = ()

    def has_base(self, base_type: BaseType) -> bool:
        return any(b.base_type is base_type and b.present for b in self.bases)


@dataclass
class StarportOptions:
    world_id: str
    habitability_score: float
    tech_level: int
    wealth: int
    development_modifier: int
    advantage: int = 0
    disadvantage: int = 0

    @classmethod
    def from_world(cls, world: WorldRecord, advantage: int = 0, disadvantage: int = 0) -> StarportOptions:
        return cls(
            world_id=world.id,
            habitability_score=world.habitability_score,
            tech_level=world.tech_level,
            wealth=world.wealth,
            development_modifier=world.development_level.modifier,
            advantage=advantage,
            disadvantage=disadvantage,
        )


def port_value_score(
    habitability_score: float, tech_level: int, wealth: int, development_modifier: int,
) -> int:
    """PVS = floor(habitability / 4) + (TL - 7) + wealth + development modifier."""
    return (
        math.floor(habitability_score / 4)
        + (tech_level - BASELINE_TECH_LEVEL)
        + wealth
        + development_modifier
    )


def starport_class_from_pvs(pvs: int) -> StarportClass:
    for starport_class, info in STARPORT_CLASSES.items():
        if info.pvs_min <= pvs <= info.pvs_max:
            return starport_class
    raise DomainViolationError(f"PVS {pvs} matches no starport class")


def pvs_range_for_class(starport_class: StarportClass) -> tuple[float, float]:
    info = STARPORT_CLASSES[starport_class]
    return info.pvs_min, info.pvs_max


def base_presence_target(base_type: BaseType, starport_class: StarportClass) -> int | None:
    """The 2D6 target for a base, or None if this class cannot host it."""
    return BASE_TARGETS.get(base_type, {}).get(starport_class)


def roll_base_presence(
    dice: Dice,
    base_type: BaseType,
    starport_class: StarportClass,
    advantage: int = 0,
    disadvantage: int = 0,
) -> BasePresence:
    """A single base check. Asking about an ineligible base is a caller error."""
    target = base_presence_target(base_type, starport_class)
    if target is None:
        raise DomainViolationError(
            f"A class {starport_class.value} starport cannot host a {base_type.value} base"
        )
    roll = dice.roll_2d6(advantage, disadvantage).total
    return BasePresence(base_type=base_type, present=roll >= target, roll=roll, target=target)


def roll_bases(
    dice: Dice, starport_class: StarportClass, advantage: int = 0, disadvantage: int = 0,
) -> list[BasePresence]:
    """Roll every base the class is eligible for; ineligible ones are left out."""
    return [
        roll_base_presence(dice, base_type, starport_class, advantage, disadvantage)
        for base_type in ROLLED_BASES
        if base_presence_target(base_type, starport_class) is not None
    ]


def generate_starport(dice: Dice, options: StarportOptions) -> StarportRecord:
    pvs = port_value_score(
        options.habitability_score, options.tech_level, options.wealth, options.development_modifier,
    )
    starport_class = starport_class_from_pvs(pvs)
    info = STARPORT_CLASSES[starport_class]
    bases = roll_bases(dice, starport_class, options.advantage, options.disadvantage)
    logger.debug(
        "Starport for %s: PVS %d -> class %s, bases %s",
        options.world_id, pvs, starport_class.value,
        [b.base_type.value for b in bases if b.present],
    )
    return StarportRecord(
        world_id=options.world_id,
        starport_class=starport_class,
        port_value_score=pvs,
        label=info.label,
        description=info.description,
        capabilities=info.capabilities,
        bases=tuple(bases),
    )


def reroll_base(dice: Dice, starport: StarportRecord, base_type: BaseType) -> StarportRecord:
    """A copy of ``starport`` with one base check rolled again."""
    fresh = roll_base_presence(dice, base_type, starport.starport_class)
    bases = [fresh if b.base_type is base_type else b for b in starport.bases]
    if not any(b.base_type is base_type for b in starport.bases):
        bases.append(fresh)
    return replace(starport, bases=tuple(bases))
