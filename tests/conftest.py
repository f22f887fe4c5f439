"""Shared fixtures for the antforage test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from antforage.colony.colony import Colony
from antforage.colony.policies import MoveContext
from antforage.pheromones.fields import PheromoneField, PheromoneKind
from antforage.simulation.config import SimulationConfig
from antforage.world.grid import Grid


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_grid() -> Grid:
    """A small 8x8 grid for fast tests."""
    return Grid(width=8, height=8)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def small_pheromone_field() -> PheromoneField:
    """An 8x8 pheromone field with distinct per-kind rates."""
    return PheromoneField(
        width=8,
        height=8,
        depreciation_rates={
            PheromoneKind.EXPLORATION: 5.0,
            PheromoneKind.RESOURCE_TRAIL: 2.0,
        },
        max_strength=1000.0,
    )


@pytest.fixture
def policy_config() -> SimulationConfig:
    """A 5x5 world config with fully biased (non-random) movement choices."""
    return SimulationConfig(
        world_width=5,
        world_height=5,
        colony_positions=((0, 0),),
        random_resource_count=0,
        scout_explore_bias=1.0,
        worker_follow_bias=1.0,
    )


@pytest.fixture
def move_ctx(policy_config: SimulationConfig, rng: Generator) -> MoveContext:
    """A movement context over an empty 5x5 grid with a colony at (0, 0)."""
    grid = Grid(width=5, height=5)
    grid.mark_colony(0, 0)
    return MoveContext(
        grid=grid,
        pheromones=PheromoneField(
            width=5,
            height=5,
            depreciation_rates={
                PheromoneKind.EXPLORATION: policy_config.exploration_depreciation_rate,
                PheromoneKind.RESOURCE_TRAIL: policy_config.trail_depreciation_rate,
            },
            max_strength=policy_config.max_pheromone_strength,
        ),
        colony=Colony(colony_id=0, x=0, y=0),
        config=policy_config,
        rng=rng,
    )
