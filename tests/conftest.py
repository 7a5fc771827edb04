"""Shared fixtures: seeded dice, scripted dice and fresh name counters."""

import logging
import random

import pytest

from starforge.log import CHANNEL_MODULES
from starforge.models.dice import Dice
from starforge.models.naming import CounterNameSequence


class ScriptedRandom(random.Random):
    """Random source whose randint replays a script, then falls back to seeded values."""

    script: list[int] = []

    def randint(self, a: int, b: int) -> int:
        if self.script:
            value = self.script.pop(0)
            assert a <= value <= b, f"scripted {value} outside {a}-{b}"
            return value
        return super().randint(a, b)


def scripted_dice(*values: int, seed: int = 0) -> Dice:
    rng = ScriptedRandom(seed)
    rng.script = list(values)
    return Dice(rng)


@pytest.fixture
def dice() -> Dice:
    return Dice.seeded(1234)


@pytest.fixture
def scripted():
    return scripted_dice


@pytest.fixture
def naming() -> CounterNameSequence:
    return CounterNameSequence()


@pytest.fixture(autouse=True)
def _enable_channel_loggers():
    yield
    for modules in CHANNEL_MODULES.values():
        for module in modules:
            logging.getLogger(module).disabled = False
