"""Config -- load simulation parameters from YAML files.

All tunable constants (world size, population targets, spawn rate,
pheromone rates, movement biases, resource placement) live in YAML and
are parsed into an immutable dataclass here.  The simulation core only
ever receives an already-built ``SimulationConfig``, so several
independent worlds can run side by side with different parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from antforage.errors import ConfigurationError


@dataclass(frozen=True)
class ResourcePlacement:
    """A resource placed at world construction.

    Attributes:
        x: Column position.
        y: Row position.
        capacity: Initial extractable capacity.
    """

    x: int
    y: int
    capacity: float


@dataclass(frozen=True)
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        world_width: Number of grid columns.
        world_height: Number of grid rows.
        diagonal_moves: Whether ants may step diagonally (8-neighbourhood).
        colony_positions: ``(x, y)`` of every colony created with the world.
        target_scouts: Scout population each colony tries to maintain.
        target_workers: Worker population each colony tries to maintain.
        spawn_rate: Maximum ants of each role spawned per colony per tick.
        exploration_depreciation_rate: Exploration strength lost per tick.
        trail_depreciation_rate: Resource-trail strength lost per tick.
        exploration_deposit: Exploration strength laid per scout step.
        trail_deposit: Resource-trail strength laid at the resource cell.
        trail_falloff: Multiplier applied to the trail deposit for every
            step taken away from the resource, so trails are strongest
            at the resource and fade toward the colony.
        max_pheromone_strength: Cap on any single pheromone deposit.
        extraction_amount: Capacity a worker extracts per visit.
        scout_explore_bias: Probability a scout picks the least-explored
            neighbour instead of a random one.
        worker_follow_bias: Probability a worker climbs the trail
            gradient instead of stepping randomly.
        backwards_chance: Probability an exploring ant may step straight
            back onto the cell it just left.
        max_journey_steps: Steps an exploring ant takes before giving up
            and heading home.
        resources: Explicit resources placed at construction.
        random_resource_count: Extra resources scattered at random.
        random_resource_capacity: Capacity of each scattered resource.
    """

    seed: int = 42
    world_width: int = 64
    world_height: int = 64
    diagonal_moves: bool = False
    colony_positions: tuple[tuple[int, int], ...] = ((32, 32),)

    # Colonies
    target_scouts: int = 25
    target_workers: int = 10
    spawn_rate: int = 2

    # Pheromones
    exploration_depreciation_rate: float = 5.0
    trail_depreciation_rate: float = 2.0
    exploration_deposit: float = 100.0
    trail_deposit: float = 100.0
    trail_falloff: float = 0.95
    max_pheromone_strength: float = 1000.0

    # Ant behaviour
    extraction_amount: float = 1.0
    scout_explore_bias: float = 0.9
    worker_follow_bias: float = 0.9
    backwards_chance: float = 0.1
    max_journey_steps: int = 1000

    # Resources
    resources: tuple[ResourcePlacement, ...] = ()
    random_resource_count: int = 5
    random_resource_capacity: float = 20.0

    def __post_init__(self) -> None:
        """Reject parameter sets that would break simulation invariants.

        Raises:
            ConfigurationError: On the first invalid parameter found.
        """
        if self.world_width <= 0 or self.world_height <= 0:
            msg = (
                "world dimensions must be positive, got "
                f"{self.world_width}x{self.world_height}"
            )
            raise ConfigurationError(msg)
        for name in ("target_scouts", "target_workers", "spawn_rate"):
            if getattr(self, name) < 0:
                msg = f"{name} must be non-negative, got {getattr(self, name)}"
                raise ConfigurationError(msg)
        for name in ("exploration_depreciation_rate", "trail_depreciation_rate"):
            if getattr(self, name) <= 0:
                msg = f"{name} must be positive, got {getattr(self, name)}"
                raise ConfigurationError(msg)
        for name in (
            "exploration_deposit",
            "trail_deposit",
            "max_pheromone_strength",
            "extraction_amount",
        ):
            if getattr(self, name) <= 0:
                msg = f"{name} must be positive, got {getattr(self, name)}"
                raise ConfigurationError(msg)
        for name in (
            "trail_falloff",
            "scout_explore_bias",
            "worker_follow_bias",
            "backwards_chance",
        ):
            if not 0.0 <= getattr(self, name) <= 1.0:
                msg = f"{name} must lie in [0, 1], got {getattr(self, name)}"
                raise ConfigurationError(msg)
        if self.max_journey_steps <= 0:
            msg = f"max_journey_steps must be positive, got {self.max_journey_steps}"
            raise ConfigurationError(msg)
        if self.random_resource_count < 0 or self.random_resource_capacity <= 0:
            msg = "random resources need a non-negative count and positive capacity"
            raise ConfigurationError(msg)
        for x, y in self.colony_positions:
            self._check_position("colony", x, y)
        for placement in self.resources:
            self._check_position("resource", placement.x, placement.y)
            if placement.capacity <= 0:
                msg = f"resource capacity must be positive, got {placement.capacity}"
                raise ConfigurationError(msg)

    def _check_position(self, what: str, x: int, y: int) -> None:
        if not (0 <= x < self.world_width and 0 <= y < self.world_height):
            msg = (
                f"{what} position ({x}, {y}) outside "
                f"{self.world_width}x{self.world_height} world"
            )
            raise ConfigurationError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Missing keys fall back to the dataclass defaults.  Pheromone
        settings may be given flat or grouped under a ``pheromones``
        mapping keyed by kind (``exploration``, ``resource_trail``).

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ConfigurationError: If the values violate an invariant.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimulationConfig:
        """Build a config from an already-parsed mapping."""
        pheromones = data.get("pheromones", {}) or {}
        exploration = pheromones.get("exploration", {}) or {}
        trail = pheromones.get("resource_trail", {}) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            world_width=data.get("world_width", cls.world_width),
            world_height=data.get("world_height", cls.world_height),
            diagonal_moves=data.get("diagonal_moves", cls.diagonal_moves),
            colony_positions=tuple(
                (int(x), int(y))
                for x, y in data.get("colony_positions", cls.colony_positions)
            ),
            target_scouts=data.get("target_scouts", cls.target_scouts),
            target_workers=data.get("target_workers", cls.target_workers),
            spawn_rate=data.get("spawn_rate", cls.spawn_rate),
            exploration_depreciation_rate=exploration.get(
                "depreciation_rate",
                data.get(
                    "exploration_depreciation_rate",
                    cls.exploration_depreciation_rate,
                ),
            ),
            trail_depreciation_rate=trail.get(
                "depreciation_rate",
                data.get("trail_depreciation_rate", cls.trail_depreciation_rate),
            ),
            exploration_deposit=exploration.get(
                "deposit",
                data.get("exploration_deposit", cls.exploration_deposit),
            ),
            trail_deposit=trail.get(
                "deposit",
                data.get("trail_deposit", cls.trail_deposit),
            ),
            trail_falloff=trail.get(
                "falloff",
                data.get("trail_falloff", cls.trail_falloff),
            ),
            max_pheromone_strength=data.get(
                "max_pheromone_strength",
                cls.max_pheromone_strength,
            ),
            extraction_amount=data.get("extraction_amount", cls.extraction_amount),
            scout_explore_bias=data.get(
                "scout_explore_bias",
                cls.scout_explore_bias,
            ),
            worker_follow_bias=data.get(
                "worker_follow_bias",
                cls.worker_follow_bias,
            ),
            backwards_chance=data.get("backwards_chance", cls.backwards_chance),
            max_journey_steps=data.get("max_journey_steps", cls.max_journey_steps),
            resources=tuple(
                ResourcePlacement(
                    x=int(entry["x"]),
                    y=int(entry["y"]),
                    capacity=float(entry["capacity"]),
                )
                for entry in data.get("resources", []) or []
            ),
            random_resource_count=data.get(
                "random_resource_count",
                cls.random_resource_count,
            ),
            random_resource_capacity=data.get(
                "random_resource_capacity",
                cls.random_resource_capacity,
            ),
        )
