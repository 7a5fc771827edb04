"""Dice engine: pools of six-sided dice with advantage and disadvantage.

Advantage rolls extra dice and drops the lowest; disadvantage rolls extra
dice and drops the highest. The two cancel one for one before rolling.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from ..errors import DomainViolationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiceRollResult:
    """Outcome of one roll. ``dice`` keeps every die thrown, dropped ones included."""

    total: int
    dice: tuple[int, ...]
    advantage_used: int = 0
    disadvantage_used: int = 0


class Dice:
    """Dice roller backed by an injectable random source."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    @classmethod
    def seeded(cls, seed: int) -> Dice:
        """A roller whose sequence is fully determined by ``seed``."""
        return cls(random.Random(seed))

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def roll_pool(self, count: int, sides: int) -> list[int]:
        """Roll ``count`` independent dice of ``sides`` faces."""
        if count <= 0:
            raise DomainViolationError(f"Dice count must be positive, got {count}")
        if sides <= 0:
            raise DomainViolationError(f"Die sides must be positive, got {sides}")
        return [self.rng.randint(1, sides) for _ in range(count)]

    def roll_with_advantage(
        self, count: int, sides: int, advantage: int = 0, disadvantage: int = 0,
    ) -> DiceRollResult:
        """Roll ``count`` dice, applying the net of advantage and disadvantage."""
        if advantage < 0 or disadvantage < 0:
            raise DomainViolationError(
                f"Advantage and disadvantage must be non-negative, got {advantage}/{disadvantage}"
            )
        net = advantage - disadvantage
        rolls = self.roll_pool(count + abs(net), sides)

        if net > 0:
            kept = sorted(rolls)[net:]
        elif net < 0:
            kept = sorted(rolls, reverse=True)[-net:]
        else:
            kept = rolls

        result = DiceRollResult(
            total=sum(kept),
            dice=tuple(rolls),
            advantage_used=max(net, 0),
            disadvantage_used=max(-net, 0),
        )
        logger.debug("Rolled %dd%d (net %+d): %s -> %d", count, sides, net, rolls, result.total)
        return result

    # ------------------------------------------------------------------
    # Named rolls
    # ------------------------------------------------------------------

    def roll_1d6(self, advantage: int = 0, disadvantage: int = 0) -> DiceRollResult:
        return self.roll_with_advantage(1, 6, advantage, disadvantage)

    def roll_2d6(self, advantage: int = 0, disadvantage: int = 0) -> DiceRollResult:
        return self.roll_with_advantage(2, 6, advantage, disadvantage)

    def roll_3d6(self, advantage: int = 0, disadvantage: int = 0) -> DiceRollResult:
        return self.roll_with_advantage(3, 6, advantage, disadvantage)

    def roll_5d6(self, advantage: int = 0, disadvantage: int = 0) -> DiceRollResult:
        return self.roll_with_advantage(5, 6, advantage, disadvantage)

    def roll_custom(
        self, count: int, sides: int, advantage: int = 0, disadvantage: int = 0,
    ) -> DiceRollResult:
        return self.roll_with_advantage(count, sides, advantage, disadvantage)

    def roll_d66(self) -> str:
        """Two d6 read as tens and ones digit, e.g. "3-5". A table key, never summed."""
        tens, ones = self.roll_pool(2, 6)
        return f"{tens}-{ones}"
