"""Tests for starport classification and base presence."""

import pytest

from starforge.errors import DomainViolationError
from starforge.models.dice import Dice
from starforge.models.starport import (
    BaseType,
    StarportClass,
    StarportOptions,
    base_presence_target,
    generate_starport,
    port_value_score,
    pvs_range_for_class,
    reroll_base,
    roll_base_presence,
    roll_bases,
    starport_class_from_pvs,
)
from starforge.models.world import WorldOptions, generate_world


def test_port_value_score_example() -> None:
    assert port_value_score(8, 11, 2, 1) == 9
    assert starport_class_from_pvs(9) is StarportClass.C


def test_port_value_score_floors_negative_habitability() -> None:
    assert port_value_score(-1, 7, 0, 0) == -1
    assert port_value_score(-5, 7, 0, 0) == -2


@pytest.mark.parametrize(
    "pvs,expected",
    [
        (-50, StarportClass.X), (-1, StarportClass.X), (0, StarportClass.E), (3, StarportClass.E),
        (4, StarportClass.D), (7, StarportClass.D), (8, StarportClass.C), (11, StarportClass.C),
        (12, StarportClass.B), (15, StarportClass.B), (16, StarportClass.A), (100, StarportClass.A),
    ],
)
def test_class_boundaries(pvs: int, expected: StarportClass) -> None:
    assert starport_class_from_pvs(pvs) is expected
    low, high = pvs_range_for_class(expected)
    assert low <= pvs <= high


class TestBases:
    def test_eligibility(self) -> None:
        assert base_presence_target(BaseType.NAVAL, StarportClass.A) == 8
        assert base_presence_target(BaseType.NAVAL, StarportClass.C) is None
        assert base_presence_target(BaseType.SCOUT, StarportClass.A) == 7
        assert base_presence_target(BaseType.PIRATE, StarportClass.A) is None

    def test_every_base_type_can_be_hosted(self) -> None:
        for base_type in BaseType:
            assert any(base_presence_target(base_type, c) is not None for c in StarportClass)

    def test_class_x_has_no_bases(self, dice: Dice) -> None:
        assert roll_bases(dice, StarportClass.X) == []

    def test_ineligible_bases_are_omitted(self, dice: Dice) -> None:
        for _ in range(50):
            bases = roll_bases(dice, StarportClass.C)
            assert [b.base_type for b in bases] == [BaseType.SCOUT, BaseType.PIRATE]
            bases = roll_bases(dice, StarportClass.A)
            assert [b.base_type for b in bases] == [BaseType.NAVAL, BaseType.SCOUT]

    def test_presence_matches_target(self, dice: Dice) -> None:
        for _ in range(200):
            for base in roll_bases(dice, StarportClass.D):
                assert base.present == (base.roll >= base.target)

    def test_ineligible_roll_raises(self, dice: Dice) -> None:
        with pytest.raises(DomainViolationError):
            roll_base_presence(dice, BaseType.NAVAL, StarportClass.E)


class TestGenerateStarport:
    def test_scripted_class_c(self, scripted) -> None:
        options = StarportOptions(
            world_id="w-1", habitability_score=8, tech_level=11, wealth=2, development_modifier=1,
        )
        starport = generate_starport(scripted(5, 5, 6, 5), options)
        assert starport.starport_class is StarportClass.C
        assert starport.port_value_score == 9
        assert starport.label == "Routine Port"
        assert starport.has_base(BaseType.SCOUT)
        assert not starport.has_base(BaseType.PIRATE)
        assert not starport.has_base(BaseType.NAVAL)
        assert isinstance(starport.bases, tuple)
        scout, pirate = starport.bases
        assert (scout.roll, scout.target) == (10, 9)
        assert (pirate.roll, pirate.target) == (11, 12)

    def test_reroll_base_changes_only_that_base(self, scripted) -> None:
        options = StarportOptions(
            world_id="w-1", habitability_score=8, tech_level=11, wealth=2, development_modifier=1,
        )
        starport = generate_starport(scripted(5, 5, 6, 5), options)
        updated = reroll_base(scripted(6, 6), starport, BaseType.PIRATE)
        assert updated.has_base(BaseType.PIRATE)
        assert updated.bases[0] == starport.bases[0]
        assert isinstance(updated.bases, tuple)
        assert not starport.has_base(BaseType.PIRATE)

    def test_reroll_ineligible_base_raises(self, scripted) -> None:
        options = StarportOptions(
            world_id="w-1", habitability_score=8, tech_level=11, wealth=2, development_modifier=1,
        )
        starport = generate_starport(scripted(5, 5, 6, 5), options)
        with pytest.raises(DomainViolationError):
            reroll_base(scripted(6, 6), starport, BaseType.NAVAL)

    def test_from_world_agrees_with_world(self, dice: Dice) -> None:
        for _ in range(50):
            world = generate_world(dice, WorldOptions(star_system_id="s"))
            starport = generate_starport(dice, StarportOptions.from_world(world))
            assert starport.world_id == world.id
            assert starport.port_value_score == world.port_value_score
            assert starport.starport_class is world.starport_class
