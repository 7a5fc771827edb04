"""Seeded entry point tying the generators to one dice stream and one settings set."""

from __future__ import annotations

import logging
import random
from dataclasses import replace

from .models.brown_dwarfs import BrownDwarfOptions, BrownDwarfRecord, generate_brown_dwarf
from .models.culture import CultureOptions, CultureRecord, generate_culture
from .models.dice import Dice
from .models.disks import DiskOptions, DiskRecord, build_disk_type_table, generate_disk
from .models.moons import MoonOptions, MoonRecord, generate_moon
from .models.naming import CounterNameSequence, FileNameSequence, NameSequence
from .models.planets import PlanetOptions, PlanetRecord, generate_planet
from .models.starport import StarportOptions, StarportRecord, generate_starport
from .models.stars import PrimaryStarOptions
from .models.stellar import DEFAULT_TABLE, StellarPropertySource
from .models.system import StarSystem, generate_star_system
from .models.world import WorldOptions, WorldRecord, generate_world
from .settings import Settings, load_settings

logger = logging.getLogger(__name__)


class Forge:
    """Generates whole systems and their bodies from a single seed."""

    def __init__(
        self,
        seed: int | None = None,
        settings: Settings | None = None,
        naming: NameSequence | None = None,
        source: StellarPropertySource = DEFAULT_TABLE,
        persistent_names: bool = False,
    ) -> None:
        self.seed = seed if seed is not None else random.randint(0, 2**32)
        self.rng = random.Random(self.seed)
        self.dice = Dice(self.rng)
        self.settings = settings if settings is not None else load_settings()
        self.source = source
        if naming is not None:
            self.naming = naming
        elif persistent_names:
            self.naming = FileNameSequence(self.settings.name_sequence_file)
        else:
            self.naming = CounterNameSequence()
        self._disk_types = build_disk_type_table(self.settings.disk_accretion_max_roll)
        logger.debug("Forge seeded with %d", self.seed)

    # ------------------------------------------------------------------
    # Stars
    # ------------------------------------------------------------------

    def star_system(self, name: str | None = None, primary: PrimaryStarOptions | None = None) -> StarSystem:
        return generate_star_system(self.dice, name, primary, self.source, self.naming)

    # ------------------------------------------------------------------
    # Worlds
    # ------------------------------------------------------------------

    def world(self, options: WorldOptions) -> WorldRecord:
        """Generate a world, filling in the configured default tech level."""
        if options.tech_level is None:
            options = replace(options, tech_level=self.settings.default_tech_level)
        return generate_world(self.dice, options, self.naming)

    def starport(self, world: WorldRecord) -> StarportRecord:
        return generate_starport(self.dice, StarportOptions.from_world(world))

    def culture(self, world: WorldRecord) -> CultureRecord:
        """Culture record matching the traits already rolled into ``world``."""
        return generate_culture(
            self.dice,
            CultureOptions(world.id, *world.dice_rolls.culture_codes),
        )

    # ------------------------------------------------------------------
    # Satellite bodies
    # ------------------------------------------------------------------

    def disk(self, system: StarSystem, name: str | None = None) -> DiskRecord:
        return generate_disk(
            self.dice,
            DiskOptions(star_system_id=system.id, zones=system.zones, name=name, type_table=self._disk_types),
        )

    def planet(self, system: StarSystem, orbit_position: int, name: str | None = None) -> PlanetRecord:
        return generate_planet(self.dice, PlanetOptions(system.id, orbit_position, name))

    def moon(self, world: WorldRecord, orbit_position: int | None = None) -> MoonRecord:
        return generate_moon(
            self.dice,
            MoonOptions(
                world_id=world.id,
                star_system_id=world.star_system_id,
                orbit_position=orbit_position,
                world_name=world.name,
            ),
        )

    def brown_dwarf(self, system: StarSystem, orbit_position: int) -> BrownDwarfRecord:
        return generate_brown_dwarf(self.dice, BrownDwarfOptions(system.id, orbit_position))
