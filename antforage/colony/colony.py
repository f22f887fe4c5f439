"""Colony -- spawn point, drop-off point and owner of its ants.

A Colony owns its population of Ant agents keyed by id, tracks how many
of each role are alive against configured targets, and closes the gap a
little every tick.  Ants bring resources back here; scouts report the
resources they discover.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from antforage.colony.ant import Ant, Role
from antforage.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class Colony:
    """Top-level state for a single ant colony.

    Attributes:
        colony_id: Unique identifier within the world.
        x: Column of the colony cell.
        y: Row of the colony cell.
        targets: Population each role should be kept at.
        spawn_rate: Maximum ants spawned per role per tick.
        ants: Living ants keyed by ``ant_id``, in spawn order.
        stored_resources: Resource delivered by returning ants.
        discoveries: Number of resource discoveries reported by scouts.
        known_resources: Cells where scouts have reported resources.
    """

    colony_id: int
    x: int
    y: int
    targets: dict[Role, int] = field(default_factory=dict)
    spawn_rate: int = 1
    ants: dict[int, Ant] = field(default_factory=dict)
    stored_resources: float = 0.0
    discoveries: int = 0
    known_resources: set[tuple[int, int]] = field(default_factory=set)
    _ant_ids: Iterator[int] = field(default_factory=itertools.count, repr=False)

    def __post_init__(self) -> None:
        if self.spawn_rate < 0:
            msg = f"spawn_rate must be non-negative, got {self.spawn_rate}"
            raise ConfigurationError(msg)
        for role, target in self.targets.items():
            if target < 0:
                msg = f"target population for {role.name} must be non-negative"
                raise ConfigurationError(msg)

    @property
    def position(self) -> tuple[int, int]:
        """Return the colony cell as ``(x, y)``."""
        return (self.x, self.y)

    def target(self, role: Role) -> int:
        """Return the configured population target for ``role``."""
        return self.targets.get(role, 0)

    def population(self, role: Role) -> int:
        """Return how many ants of ``role`` are alive."""
        return sum(1 for ant in self.ants.values() if ant.role is role)

    def populations(self) -> dict[Role, int]:
        """Return the active population of every role."""
        return {role: self.population(role) for role in Role}

    def iter_ants(self, role: Role | None = None) -> Iterator[Ant]:
        """Iterate ants in spawn order, optionally filtered by role."""
        for ant in self.ants.values():
            if role is None or ant.role is role:
                yield ant

    def spawn_ant(self, role: Role) -> Ant:
        """Create a new exploring ant of ``role`` on the colony cell.

        Args:
            role: Role of the new ant.

        Returns:
            The newly created Ant (also stored in ``self.ants``).
        """
        ant = Ant(
            ant_id=next(self._ant_ids),
            colony_id=self.colony_id,
            role=role,
            x=self.x,
            y=self.y,
        )
        self.ants[ant.ant_id] = ant
        return ant

    def update_spawns(self) -> list[Ant]:
        """Spawn ants toward each role's target population.

        Every role is filled independently: ``min(deficit, spawn_rate)``
        new ants, where ``deficit = target - active``.  A role at or
        above its target spawns nothing.

        Returns:
            The ants spawned this tick.
        """
        spawned: list[Ant] = []
        for role in Role:
            deficit = self.target(role) - self.population(role)
            to_spawn = min(deficit, self.spawn_rate)
            for _ in range(max(0, to_spawn)):
                spawned.append(self.spawn_ant(role))
            if to_spawn > 0:
                logger.debug(
                    "Colony %d spawned %d %s (deficit %d)",
                    self.colony_id,
                    to_spawn,
                    role.name.lower(),
                    deficit,
                )
        return spawned

    def remove_ant(self, ant_id: int) -> Ant | None:
        """Remove an ant from the colony, e.g. when it is recalled.

        Returns:
            The removed ant, or None if no ant has that id.
        """
        return self.ants.pop(ant_id, None)

    def deliver(self, amount: float) -> None:
        """Add resource brought home by an ant to the colony's stores."""
        if amount > 0:
            self.stored_resources += amount

    def record_discovery(self, x: int, y: int) -> None:
        """Note that a scout found a resource at ``(x, y)``.

        Reacting to discoveries (for example by shifting spawn targets)
        is left to callers; the colony only keeps the record.
        """
        self.discoveries += 1
        if (x, y) not in self.known_resources:
            self.known_resources.add((x, y))
            logger.info(
                "Colony %d learned of a resource at (%d, %d)",
                self.colony_id,
                x,
                y,
            )
