"""Tests for the world generation pipeline."""

import math
from dataclasses import replace

import pytest

from starforge.errors import DomainViolationError
from starforge.models.dice import Dice
from starforge.models.records import GenerationMethod
from starforge.models.starport import StarportClass, starport_class_from_pvs
from starforge.models.world import (
    DevelopmentLevel,
    HabitatBody,
    TerrestrialBody,
    WorldOptions,
    development_level,
    generate_dwarf_composition,
    generate_world,
    generate_world_gravity,
    generate_world_size,
    generate_world_type,
    habitability_rating,
    habitat_population,
    mass_modifier,
    planetary_population,
    tech_level_modifier,
    validate_world,
)
from starforge.models.world_tables import Composition, WorldType

# type, size, gravity, atmosphere, temperature, hazard, resources,
# wealth, power, governance, source of power, then three d66 codes
TEMPERATE_TERRESTRIAL = (
    3, 4,  3, 3,  3, 4,  4, 4,  3, 4,  2, 2,  4, 5,
    4, 4,  3, 4,  3, 4,  3, 4,
    1, 1,  1, 2,  6, 6,
)


@pytest.fixture
def options() -> WorldOptions:
    return WorldOptions(star_system_id="sys-1", tech_level=11)


class TestScriptedTerrestrial:
    def test_full_pipeline(self, scripted, options, naming) -> None:
        world = generate_world(scripted(*TEMPERATE_TERRESTRIAL), options, naming)

        assert isinstance(world.body, TerrestrialBody)
        assert world.world_type is WorldType.TERRESTRIAL
        assert world.body.size_label == "Average"
        assert world.mass == 0.7
        assert world.gravity == 1.0
        assert world.composition is None

        assert world.atmosphere == "Standard"
        assert world.temperature == "Temperate"
        assert world.hazard_type == "None"
        assert world.hazard_intensity is None
        assert world.biochemical_resources == "Rich"
        assert world.habitability_modifiers.tech_level == 2
        assert world.habitability_score == 7
        assert world.habitability_rating == "Excellent"

        assert world.wealth == 2
        assert world.power_structure == "Representative"
        assert world.governance == "Moderate"
        assert world.source_of_power == "Popular"
        assert world.population == math.floor(0.7 * (1 + 7 / 10) * 10 ** 4 * 1_000_000)

        assert world.development_level is DevelopmentLevel.WELL_DEVELOPED
        assert world.port_value_score == 9
        assert world.starport_class is StarportClass.C
        assert "Refined fuel" in world.starport_capabilities

        assert world.culture_traits[0].startswith("Individualistic:")
        assert world.culture_traits[1].startswith("Industrial:")
        assert world.culture_traits[2].startswith("Indigenous:")
        assert world.dice_rolls.culture_codes == ("1-1", "1-2", "6-6")

        assert world.name == "Terrestrial 1"
        assert world.star_system_id == "sys-1"
        assert world.generation_method is GenerationMethod.PROCEDURAL
        assert world.dice_rolls.type_roll == 7
        assert world.dice_rolls.hazard_intensity_roll is None
        assert validate_world(world) == []

    def test_hazard_adds_intensity(self, scripted, options) -> None:
        dice = scripted(3, 4, 3, 3, 3, 4, 4, 4, 3, 4, 4, 4, 3, 3)
        world = generate_world(dice, options)
        assert world.hazard_type == "Seismic"
        assert world.hazard_intensity == 3
        assert world.dice_rolls.hazard_intensity_roll == 6
        assert world.habitability_modifiers.hazard == -0.5
        assert world.habitability_modifiers.hazard_intensity == -1


class TestWorldVariants:
    def test_habitat_has_artificial_gravity_and_no_gravity_roll(self, scripted, options) -> None:
        world = generate_world(scripted(5, 5, 4, 4), options)
        assert isinstance(world.body, HabitatBody)
        assert world.gravity == 1.0
        assert world.dice_rolls.gravity_roll is None
        assert world.composition is None
        assert world.body.population_range == "10M-33M people"
        assert world.population == 10_000_000
        assert world.name.startswith("Habitat")

    def test_dwarf_always_has_composition(self, scripted, options) -> None:
        world = generate_world(scripted(1, 1, 3, 3, 1, 1, 1, 1), options)
        assert world.world_type is WorldType.DWARF
        assert world.composition is Composition.METALLIC
        assert world.gravity == 0.001
        assert world.dice_rolls.composition_roll == 2
        assert world.habitability_modifiers.mass == -1

    def test_invariants_hold_across_many_worlds(self, options) -> None:
        dice = Dice.seeded(77)
        seen = set()
        for _ in range(500):
            world = generate_world(dice, options)
            seen.add(world.world_type)
            assert validate_world(world) == []
            assert (world.composition is not None) == (world.world_type is WorldType.DWARF)
            if world.world_type is WorldType.HABITAT:
                assert world.gravity == 1.0
                assert world.dice_rolls.gravity_roll is None
            assert world.starport_class is starport_class_from_pvs(world.port_value_score)
            assert world.population >= 0
            assert len(world.culture_traits) == 3
        assert seen == set(WorldType)


class TestOverrides:
    def test_overrides_skip_rolls_and_mark_custom(self, dice: Dice) -> None:
        options = WorldOptions(
            star_system_id="sys-1",
            world_type=WorldType.TERRESTRIAL,
            atmosphere="Standard",
            hazard_type="None",
            wealth=5,
            culture_codes=("3-5", None, None),
        )
        world = generate_world(dice, options)
        assert world.generation_method is GenerationMethod.CUSTOM
        assert world.world_type is WorldType.TERRESTRIAL
        assert world.dice_rolls.type_roll is None
        assert world.dice_rolls.atmosphere_roll is None
        assert world.atmosphere == "Standard"
        assert world.wealth == 5
        assert world.culture_traits[0].startswith("Cosmopolitan:")
        assert world.tech_level == 10

    def test_size_override_is_a_roll(self, dice: Dice) -> None:
        options = WorldOptions(star_system_id="s", world_type=WorldType.TERRESTRIAL, size_roll=12)
        world = generate_world(dice, options)
        assert world.body.size_label == "Mega Earth"
        assert world.dice_rolls.size_roll is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"atmosphere": "Breathable"},
            {"world_type": WorldType.TERRESTRIAL, "composition": Composition.METALLIC},
            {"world_type": WorldType.HABITAT, "gravity_roll": 7},
            {"size_roll": 13},
            {"hazard_type": "None", "hazard_intensity": 3},
            {"tech_level": -1},
            {"advantage": -1},
            {"culture_codes": ("9-9", None, None)},
        ],
    )
    def test_invalid_overrides_rejected(self, dice: Dice, overrides) -> None:
        with pytest.raises(DomainViolationError):
            generate_world(dice, WorldOptions(star_system_id="s", **overrides))

    def test_rolled_calm_world_rejects_intensity(self, scripted) -> None:
        dice = scripted(3, 4, 3, 3, 3, 4, 4, 4, 3, 4, 1, 1)
        with pytest.raises(DomainViolationError, match="needs a hazard"):
            generate_world(dice, WorldOptions(star_system_id="s", hazard_intensity=5))


class TestStages:
    def test_world_type(self, scripted) -> None:
        assert generate_world_type(scripted(3, 4)) == (WorldType.TERRESTRIAL, 7)

    def test_size_uses_given_roll(self, scripted) -> None:
        size, roll = generate_world_size(scripted(), WorldType.TERRESTRIAL, roll=12)
        assert (size.label, roll) == ("Mega Earth", 12)

    def test_habitat_gravity_is_fixed(self, scripted) -> None:
        assert generate_world_gravity(scripted(), WorldType.HABITAT) == (1.0, None)

    def test_terrestrial_gravity_rolls(self, scripted) -> None:
        assert generate_world_gravity(scripted(3, 4), WorldType.TERRESTRIAL) == (1.0, 7)

    def test_dwarf_composition(self, scripted) -> None:
        assert generate_dwarf_composition(scripted(1, 1)) == (Composition.METALLIC, 2)


class TestDerivedValues:
    @pytest.mark.parametrize(
        "tech_level,score,expected",
        [
            (5, -3, DevelopmentLevel.UNDERDEVELOPED),
            (6, 0, DevelopmentLevel.DEVELOPING),
            (9, 0, DevelopmentLevel.MATURE),
            (10, 2.5, DevelopmentLevel.DEVELOPED),
            (11, 7, DevelopmentLevel.WELL_DEVELOPED),
            (20, 0, DevelopmentLevel.VERY_DEVELOPED),
        ],
    )
    def test_development_level(self, tech_level: int, score: float, expected) -> None:
        assert development_level(tech_level, score) is expected

    def test_development_modifiers(self) -> None:
        assert DevelopmentLevel.UNDERDEVELOPED.modifier == -2
        assert DevelopmentLevel.VERY_DEVELOPED.modifier == 3
        assert DevelopmentLevel.MATURE.info.label == "Mature"

    @pytest.mark.parametrize(
        "score,rating",
        [(8, "Paradise"), (4, "Excellent"), (0, "Good"), (-4, "Marginal"), (-8, "Harsh"), (-8.5, "Hostile")],
    )
    def test_habitability_rating(self, score: float, rating: str) -> None:
        assert habitability_rating(score) == rating

    def test_habitat_population(self) -> None:
        assert habitat_population("10K-33K people") == 10_000
        assert habitat_population("1B-3B people") == 1_000_000_000
        with pytest.raises(DomainViolationError):
            habitat_population("lots")

    def test_planetary_population_floors_the_factor(self) -> None:
        assert planetary_population(1.0, -50, 7) == planetary_population(1.0, -9, 7)
        assert planetary_population(1.0, 0, 7) == 1_000_000

    def test_modifiers(self) -> None:
        assert mass_modifier(1.0) == 0
        assert mass_modifier(0.5) == 0
        assert mass_modifier(0.3) == -1
        assert mass_modifier(2.0) == -1
        assert tech_level_modifier(5) == 0
        assert tech_level_modifier(10) == 1.5


class TestValidateWorld:
    def test_detects_inconsistencies(self, options) -> None:
        world = generate_world(Dice.seeded(8), options)
        broken = replace(
            world,
            name="",
            dice_rolls=replace(world.dice_rolls, atmosphere_roll=13),
        )
        errors = validate_world(broken)
        assert "Missing world name" in errors
        assert any("atmosphere roll 13" in e for e in errors)
