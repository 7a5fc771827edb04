"""Tests for primary and companion star generation."""

import logging

import pytest

from starforge.errors import ConstraintExhaustedError, DomainViolationError, MissingReferenceDataError
from starforge.models.dice import Dice
from starforge.models.records import GenerationMethod
from starforge.models.stars import (
    COMPANION_ORBIT_RANGES,
    PrimaryStarOptions,
    StarRole,
    choose_companion_class_grade,
    generate_companion_stars,
    generate_primary_star,
    is_companion_smaller_than_primary,
    reroll_companion,
    sample_companion_orbit,
    stellar_class_from_roll,
    stellar_grade_from_roll,
    valid_companion_classes,
    validate_companion,
)
from starforge.models.stellar import DEFAULT_TABLE, StellarClass


class _NoMClassSource:
    def get(self, stellar_class, grade):
        if stellar_class is StellarClass.M and grade > 0:
            return None
        return DEFAULT_TABLE.get(stellar_class, grade)


class TestPrimaryStar:
    def test_roll_tables(self) -> None:
        assert stellar_class_from_roll(5) is StellarClass.O
        assert stellar_class_from_roll(20) is StellarClass.G
        assert stellar_class_from_roll(30) is StellarClass.M
        assert stellar_grade_from_roll(8) == 0
        assert stellar_grade_from_roll(29) == 9

    def test_out_of_table_roll(self) -> None:
        with pytest.raises(DomainViolationError):
            stellar_class_from_roll(4)

    def test_procedural_primary(self, scripted, naming) -> None:
        dice = scripted(4, 4, 4, 4, 4, 4, 4, 4, 4, 3)
        star = generate_primary_star(dice, naming=naming)
        assert star.stellar_class is StellarClass.G
        assert star.stellar_grade == 5
        assert star.class_grade == "G5"
        assert star.properties.luminosity == 1.01
        assert star.role is StarRole.PRIMARY
        assert star.name == "Star #1"
        assert star.generation_method is GenerationMethod.PROCEDURAL
        assert star.dice_rolls.class_roll == 20
        assert star.dice_rolls.grade_roll == 19
        assert star.orbital_distance is None

    def test_override_marks_custom(self, dice: Dice) -> None:
        options = PrimaryStarOptions(name="Sol", stellar_class=StellarClass.K, stellar_grade=3)
        star = generate_primary_star(dice, options)
        assert star.class_grade == "K3"
        assert star.name == "Sol"
        assert star.generation_method is GenerationMethod.CUSTOM
        assert star.dice_rolls.class_roll is None
        assert star.dice_rolls.grade_roll is None

    def test_partial_override_still_rolls_the_rest(self, dice: Dice) -> None:
        star = generate_primary_star(dice, PrimaryStarOptions(stellar_class=StellarClass.A))
        assert star.stellar_class is StellarClass.A
        assert star.dice_rolls.grade_roll is not None
        assert star.generation_method is GenerationMethod.CUSTOM

    def test_invalid_override(self, dice: Dice) -> None:
        with pytest.raises(DomainViolationError):
            generate_primary_star(dice, PrimaryStarOptions(stellar_class=StellarClass.G, stellar_grade=12))

    def test_names_are_sequential(self, dice: Dice, naming) -> None:
        names = [generate_primary_star(dice, naming=naming).name for _ in range(3)]
        assert names == ["Star #1", "Star #2", "Star #3"]


class TestCompanionRules:
    def test_valid_classes(self) -> None:
        assert valid_companion_classes(StellarClass.G) == [StellarClass.G, StellarClass.K, StellarClass.M]

    @pytest.mark.parametrize(
        "companion,expected",
        [
            ((StellarClass.G, 5), False),
            ((StellarClass.G, 6), True),
            ((StellarClass.F, 9), False),
            ((StellarClass.K, 0), True),
            ((StellarClass.G, 4), False),
        ],
    )
    def test_smaller_than_primary(self, companion, expected: bool) -> None:
        assert is_companion_smaller_than_primary(StellarClass.G, 5, *companion) is expected
        assert validate_companion(StellarClass.G, 5, *companion) is expected

    def test_validate_companion_checks_domain(self) -> None:
        with pytest.raises(DomainViolationError):
            validate_companion(StellarClass.G, 5, StellarClass.K, 10)

    def test_grade_nine_escalates_to_cooler_class(self) -> None:
        dice = Dice.seeded(3)
        for _ in range(200):
            stellar_class, grade, _ = choose_companion_class_grade(dice, StellarClass.K, 9)
            assert stellar_class is StellarClass.M
            assert 0 <= grade <= 9

    def test_no_dimmer_star_than_m9(self, dice: Dice) -> None:
        with pytest.raises(ConstraintExhaustedError):
            choose_companion_class_grade(dice, StellarClass.M, 9)

    @pytest.mark.parametrize("primary_class", list(StellarClass))
    def test_orbit_inside_bucket_span(self, primary_class: StellarClass) -> None:
        dice = Dice.seeded(11)
        ranges = COMPANION_ORBIT_RANGES[primary_class]
        low, high = ranges[0][0], ranges[-1][1]
        for _ in range(300):
            distance, roll = sample_companion_orbit(dice, primary_class)
            assert 3 <= roll <= 18
            assert low <= distance <= high


class TestCompanionGeneration:
    def test_roll_below_target_yields_nothing(self, scripted) -> None:
        result = generate_companion_stars(scripted(3, 4), StellarClass.G, 2)
        assert result.companions == ()
        assert result.total_rolls == 1
        assert not result.max_reached

    def test_success_without_twelve_stops_after_one(self, scripted) -> None:
        result = generate_companion_stars(scripted(4, 4), StellarClass.G, 2)
        assert len(result.companions) == 1
        assert result.total_rolls == 1
        companion = result.companions[0]
        assert companion.role is StarRole.COMPANION
        assert companion.dice_rolls.companion_roll == 8
        assert companion.orbital_distance > 0
        assert is_companion_smaller_than_primary(
            StellarClass.G, 2, companion.stellar_class, companion.stellar_grade,
        )

    def test_three_twelves_cap_at_three(self, scripted, naming) -> None:
        # Each companion: 2D6 existence roll, grade draw, 3D6 orbit bucket
        per_companion = (6, 6, 5, 3, 3, 3)
        dice = scripted(*(per_companion * 3))
        result = generate_companion_stars(dice, StellarClass.M, 0, naming=naming)
        assert [c.class_grade for c in result.companions] == ["M5", "M5", "M5"]
        assert [c.name for c in result.companions] == ["Companion #1", "Companion #2", "Companion #3"]
        assert result.total_rolls == 3
        assert result.max_reached
        for companion in result.companions:
            assert companion.dice_rolls.orbit_roll == 9
            assert 0.1 <= companion.orbital_distance <= 1.0

    def test_m9_primary_yields_no_companion(self, scripted, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="starforge.models.stars"):
            result = generate_companion_stars(scripted(5, 5), StellarClass.M, 9)
        assert result.companions == ()
        assert result.total_rolls == 1
        assert "Abandoning companion attempt" in caplog.text

    def test_abandoned_attempt_does_not_consume_a_name(self, scripted, naming) -> None:
        generate_companion_stars(scripted(5, 5), StellarClass.M, 9, naming=naming)
        result = generate_companion_stars(scripted(4, 4), StellarClass.G, 2, naming=naming)
        assert result.companions[0].name == "Companion #1"

    def test_missing_reference_data_propagates(self, scripted) -> None:
        with pytest.raises(MissingReferenceDataError):
            generate_companion_stars(scripted(6, 6, 5, 3, 3, 3), StellarClass.M, 0, source=_NoMClassSource())

    def test_many_runs_respect_invariants(self) -> None:
        dice = Dice.seeded(2024)
        classes = list(StellarClass)
        for _ in range(1000):
            primary_class = dice.rng.choice(classes)
            primary_grade = dice.rng.randint(0, 9)
            result = generate_companion_stars(dice, primary_class, primary_grade)
            assert len(result.companions) <= 3
            assert result.total_rolls <= 3
            assert result.max_reached == (len(result.companions) == 3)
            for companion in result.companions:
                assert is_companion_smaller_than_primary(
                    primary_class, primary_grade, companion.stellar_class, companion.stellar_grade,
                )
            for companion in result.companions[:-1]:
                assert companion.dice_rolls.companion_roll == 12

    def test_reroll_keeps_identity(self, dice: Dice) -> None:
        primary = generate_primary_star(dice, PrimaryStarOptions(stellar_class=StellarClass.F, stellar_grade=2))
        companions: tuple = ()
        while not companions:
            companions = generate_companion_stars(dice, StellarClass.F, 2).companions
        original = companions[0]
        fresh = reroll_companion(dice, primary, original)
        assert fresh.id == original.id
        assert fresh.name == original.name
        assert fresh.created_at == original.created_at
        assert fresh.dice_rolls.companion_roll == original.dice_rolls.companion_roll
        assert is_companion_smaller_than_primary(
            StellarClass.F, 2, fresh.stellar_class, fresh.stellar_grade,
        )
