"""World -- the top-level simulation state and its tick loop.

Owns the grid (and through it every resource), the pheromone field,
all colonies and the tick counter, and advances them in the canonical
order:

1. For each colony, in creation order:
   a. spawn phase (close the gap to each role's target)
   b. every ant that existed before the spawn phase moves and acts
2. One global pheromone decay pass
3. Increment the tick counter

Ants run sequentially and mutate the grid and pheromone field in place,
so an ant sees the deposits and extractions of every ant processed
before it in the same tick.  Decay runs once, after all movement, so
the result does not depend on colony order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.random import Generator

from antforage.colony.ant import Ant, Role
from antforage.colony.colony import Colony
from antforage.colony.policies import MoveContext
from antforage.errors import ConfigurationError
from antforage.pheromones.fields import PheromoneField, PheromoneKind
from antforage.simulation.config import SimulationConfig
from antforage.world.cell import Cell
from antforage.world.grid import Grid
from antforage.world.resource import Resource

logger = logging.getLogger(__name__)


@dataclass
class World:
    """Drives the simulation forward tick by tick.

    Attributes:
        config: Immutable simulation configuration.
        grid: The cell map with resources and colony markers.
        pheromones: Per-kind pheromone layers.
        colonies: All colonies keyed by id, in creation order.
        rng: Master seeded random generator.
        current_tick: Number of ticks completed.
    """

    config: SimulationConfig
    grid: Grid = field(init=False)
    pheromones: PheromoneField = field(init=False)
    colonies: dict[int, Colony] = field(init=False, default_factory=dict)
    rng: Generator = field(init=False)
    current_tick: int = 0

    def __post_init__(self) -> None:
        """Build grid, pheromone field, colonies and resources from config."""
        cfg = self.config
        self.rng = np.random.default_rng(cfg.seed)
        self.grid = Grid(width=cfg.world_width, height=cfg.world_height)
        self.pheromones = PheromoneField(
            width=cfg.world_width,
            height=cfg.world_height,
            depreciation_rates={
                PheromoneKind.EXPLORATION: cfg.exploration_depreciation_rate,
                PheromoneKind.RESOURCE_TRAIL: cfg.trail_depreciation_rate,
            },
            max_strength=cfg.max_pheromone_strength,
        )
        for x, y in cfg.colony_positions:
            self.add_colony(x, y)
        for placement in cfg.resources:
            self.grid.place_resource(placement.x, placement.y, placement.capacity)
        self.grid.scatter_resources(
            self.rng,
            cfg.random_resource_count,
            cfg.random_resource_capacity,
        )
        logger.info(
            "World %dx%d created with %d colonies and %d resources (seed %d)",
            cfg.world_width,
            cfg.world_height,
            len(self.colonies),
            sum(1 for _ in self.grid.resources()),
            cfg.seed,
        )

    def add_colony(self, x: int, y: int) -> Colony:
        """Create a colony at ``(x, y)`` with the configured targets.

        Args:
            x: Column of the colony cell.
            y: Row of the colony cell.

        Returns:
            The new colony.

        Raises:
            ConfigurationError: If the cell already holds a colony.
            InvalidPositionError: If ``(x, y)`` is outside the grid.
        """
        if self.grid.cell_at(x, y).is_colony:
            msg = f"a colony already occupies ({x}, {y})"
            raise ConfigurationError(msg)
        self.grid.mark_colony(x, y)
        colony = Colony(
            colony_id=len(self.colonies),
            x=x,
            y=y,
            targets={
                Role.SCOUT: self.config.target_scouts,
                Role.WORKER: self.config.target_workers,
            },
            spawn_rate=self.config.spawn_rate,
        )
        self.colonies[colony.colony_id] = colony
        return colony

    def tick(self) -> None:
        """Advance the simulation by one tick (see module docstring)."""
        for colony in self.colonies.values():
            # Ants spawned this tick take their first step next tick.
            active = list(colony.iter_ants())
            colony.update_spawns()
            ctx = MoveContext(
                grid=self.grid,
                pheromones=self.pheromones,
                colony=colony,
                config=self.config,
                rng=self.rng,
            )
            for ant in active:
                ant.update(ctx)

        self.pheromones.decay_all()
        self.current_tick += 1

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Tick %d: %s", self.current_tick, self.stats())

    def run(self, ticks: int) -> None:
        """Run the simulation for a fixed number of ticks.

        Args:
            ticks: Number of ticks to advance.
        """
        for _ in range(ticks):
            self.tick()

    # -- Read-only queries ---------------------------------------------------

    @property
    def width(self) -> int:
        """Grid columns."""
        return self.grid.width

    @property
    def height(self) -> int:
        """Grid rows."""
        return self.grid.height

    def cell_at(self, x: int, y: int) -> Cell:
        """Return the cell at ``(x, y)``; raises InvalidPositionError."""
        return self.grid.cell_at(x, y)

    def resource_at(self, x: int, y: int) -> Resource | None:
        """Return the resource at ``(x, y)``, or None."""
        return self.grid.resource_at(x, y)

    def pheromone_at(self, kind: PheromoneKind, x: int, y: int) -> float:
        """Return pheromone strength of ``kind`` at ``(x, y)`` (0 if absent)."""
        return self.pheromones.read(kind, x, y)

    def iter_ants(self) -> Iterator[Ant]:
        """Iterate every ant in colony order, then spawn order."""
        for colony in self.colonies.values():
            yield from colony.iter_ants()

    def stats(self) -> dict[str, Any]:
        """Summarise world state for display or logging.

        Returns:
            Tick, per-colony populations and stores, live resource
            count and per-kind pheromone cell counts.
        """
        return {
            "tick": self.current_tick,
            "colonies": [
                {
                    "id": colony.colony_id,
                    "position": colony.position,
                    "population": {
                        role.name.lower(): count
                        for role, count in colony.populations().items()
                    },
                    "stored_resources": colony.stored_resources,
                    "discoveries": colony.discoveries,
                }
                for colony in self.colonies.values()
            ],
            "resources": sum(1 for _ in self.grid.resources()),
            "pheromones": {
                kind.name.lower(): self.pheromones.count(kind) for kind in PheromoneKind
            },
        }
