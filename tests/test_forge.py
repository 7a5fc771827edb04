"""End-to-end tests for star system assembly and the seeded Forge."""

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from starforge.forge import Forge
from starforge.models.dice import Dice
from starforge.models.disks import DiskType
from starforge.models.naming import CounterNameSequence
from starforge.models.stars import PrimaryStarOptions, is_companion_smaller_than_primary
from starforge.models.stellar import StellarClass
from starforge.models.system import generate_star_system
from starforge.models.world import WorldOptions, validate_world
from starforge.models.zones import stellar_zones
from starforge.settings import Settings

EPOCH = datetime(2000, 1, 1, tzinfo=timezone.utc)


def _strip(record):
    return replace(record, id="", created_at=EPOCH)


def _forge(seed: int, **settings) -> Forge:
    return Forge(seed=seed, settings=Settings(**settings), naming=CounterNameSequence())


class TestStarSystem:
    def test_zones_follow_primary(self, dice: Dice, naming) -> None:
        system = generate_star_system(dice, naming=naming)
        assert system.name == "System #1"
        assert system.zones == stellar_zones(system.primary.properties.luminosity)
        assert system.stars[0] is system.primary
        assert len(system.orbit_checks) == len(system.companions.companions)
        assert isinstance(system.orbit_checks, tuple)
        assert isinstance(system.companions.companions, tuple)

    def test_companions_are_dimmer(self) -> None:
        dice = Dice.seeded(12)
        for _ in range(200):
            system = generate_star_system(dice)
            primary = system.primary
            for companion in system.stars[1:]:
                assert is_companion_smaller_than_primary(
                    primary.stellar_class, primary.stellar_grade,
                    companion.stellar_class, companion.stellar_grade,
                )

    def test_planetary_orbit_limit(self, scripted) -> None:
        dice = scripted(6, 6, 5, 3, 3, 3, 3, 4)
        system = generate_star_system(
            dice, primary_options=PrimaryStarOptions(stellar_class=StellarClass.M, stellar_grade=0),
        )
        distances = [c.orbital_distance for c in system.companions.companions]
        assert len(distances) == 1
        assert system.planetary_orbit_limit == pytest.approx(distances[0] / 3)

    def test_no_companions_no_limit(self, scripted) -> None:
        system = generate_star_system(
            scripted(1, 1), primary_options=PrimaryStarOptions(stellar_class=StellarClass.G, stellar_grade=2),
        )
        assert system.companions.companions == ()
        assert system.planetary_orbit_limit is None


class TestForge:
    def test_same_seed_same_output(self) -> None:
        a, b = _forge(7), _forge(7)
        sys_a, sys_b = a.star_system(), b.star_system()
        assert _strip(sys_a.primary) == _strip(sys_b.primary)
        assert [_strip(c) for c in sys_a.companions.companions] == [
            _strip(c) for c in sys_b.companions.companions
        ]
        assert sys_a.zones == sys_b.zones
        world_a = a.world(WorldOptions(star_system_id="s"))
        world_b = b.world(WorldOptions(star_system_id="s"))
        assert _strip(world_a) == _strip(world_b)

    def test_default_tech_level_from_settings(self) -> None:
        forge = _forge(3, default_tech_level=12)
        assert forge.world(WorldOptions(star_system_id="s")).tech_level == 12
        assert forge.world(WorldOptions(star_system_id="s", tech_level=8)).tech_level == 8

    def test_disk_type_cutoff_from_settings(self) -> None:
        forge = _forge(4, disk_accretion_max_roll=12)
        system = forge.star_system()
        for _ in range(30):
            disk = forge.disk(system)
            assert disk.disk_type is DiskType.ACCRETION
            assert disk.star_system_id == system.id

    def test_full_system(self) -> None:
        forge = _forge(2025)
        system = forge.star_system()
        world = forge.world(WorldOptions(star_system_id=system.id))
        assert validate_world(world) == []

        starport = forge.starport(world)
        assert starport.starport_class is world.starport_class

        culture = forge.culture(world)
        assert tuple(t.formatted() for t in culture.traits()) == world.culture_traits

        moon = forge.moon(world, orbit_position=1)
        assert moon.world_id == world.id
        assert moon.name.startswith(world.name)

        planet = forge.planet(system, orbit_position=5)
        assert planet.star_system_id == system.id
        dwarf = forge.brown_dwarf(system, orbit_position=9)
        assert dwarf.orbit_position == 9

    def test_persistent_names(self, tmp_path) -> None:
        settings = Settings(name_sequence_file=tmp_path / "names.json")
        first = Forge(seed=1, settings=settings, persistent_names=True).star_system()
        second = Forge(seed=1, settings=settings, persistent_names=True).star_system()
        assert first.name == "System #1"
        assert second.name == "System #2"
