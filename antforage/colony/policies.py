"""Movement policies -- what each role does on its turn.

Roles are a closed set, so behaviour is picked from a dispatch table
keyed by ``Role`` instead of an Ant subclass hierarchy.  Each policy
moves the ant one cell and then performs the action at the new cell
(discover, extract, deliver) within the same tick.

Pheromone and resource reads see the field as already mutated by any
ant that moved earlier in the same tick.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from antforage.colony.ant import Ant, AntState, Role
from antforage.pheromones.fields import PheromoneKind

if TYPE_CHECKING:
    from numpy.random import Generator

    from antforage.colony.colony import Colony
    from antforage.pheromones.fields import PheromoneField
    from antforage.simulation.config import SimulationConfig
    from antforage.world.cell import Cell
    from antforage.world.grid import Grid


@dataclass
class MoveContext:
    """Everything a movement policy may read or write during one turn.

    Attributes:
        grid: Cell map with resources.
        pheromones: Pheromone layers.
        colony: The ant's owning colony.
        config: Immutable simulation parameters.
        rng: Seeded random generator shared by the whole world.
    """

    grid: Grid
    pheromones: PheromoneField
    colony: Colony
    config: SimulationConfig
    rng: Generator


MovementPolicy = Callable[[Ant, MoveContext], None]

# Only the exact reverse step counts as "behind", in 4- and 8-neighbourhoods.
_BEHIND_COSINE = -0.9


# -- Scout -------------------------------------------------------------------


def scout_step(ant: Ant, ctx: MoveContext) -> None:
    """One scout turn.

    Exploring scouts mark the cell they leave with exploration
    pheromone and move toward the least-explored neighbour (random
    neighbour with probability ``1 - scout_explore_bias``).  Entering a
    resource cell turns the scout around; it lays resource trail all
    the way home and reports the find to its colony.
    """
    if ant.state is AntState.RETURNING:
        _return_home(ant, ctx)
        return
    if ant.steps_on_journey > ctx.config.max_journey_steps:
        ant.start_return()
        _return_home(ant, ctx)
        return

    ctx.pheromones.deposit(
        PheromoneKind.EXPLORATION,
        ant.x,
        ant.y,
        ctx.config.exploration_deposit,
    )

    neighbours = _exploring_neighbours(ant, ctx)
    if not neighbours:
        return
    if ctx.rng.random() < ctx.config.scout_explore_bias:
        strengths = [
            ctx.pheromones.read(PheromoneKind.EXPLORATION, c.x, c.y)
            for c in neighbours
        ]
        target = _pick(neighbours, strengths, ctx.rng, highest=False)
    else:
        target = _random_cell(neighbours, ctx.rng)
    ant.step_to(target)

    if ctx.grid.resource_at(ant.x, ant.y) is not None:
        ant.found_resource = True
        ant.resource_position = ant.position
        ant.steps_since_resource = 0
        ant.start_return()
        _lay_trail(ant, ctx)


# -- Worker ------------------------------------------------------------------


def worker_step(ant: Ant, ctx: MoveContext) -> None:
    """One worker turn.

    Exploring workers climb the resource-trail gradient with probability
    ``worker_follow_bias`` and otherwise step at random; with no trail
    in reach they always step at random.  On a resource cell they
    extract ``extraction_amount`` and head home, reinforcing the trail.
    A resource emptied by another ant earlier this tick is simply
    absent and the worker keeps exploring.
    """
    if ant.state is AntState.RETURNING:
        _return_home(ant, ctx)
        return
    if ant.steps_on_journey > ctx.config.max_journey_steps:
        ant.start_return()
        _return_home(ant, ctx)
        return

    neighbours = _exploring_neighbours(ant, ctx)
    if not neighbours:
        return
    strengths = [
        ctx.pheromones.read(PheromoneKind.RESOURCE_TRAIL, c.x, c.y)
        for c in neighbours
    ]
    follow = ctx.rng.random() < ctx.config.worker_follow_bias
    if follow and max(strengths) > 0.0:
        target = _pick(neighbours, strengths, ctx.rng, highest=True)
    else:
        target = _random_cell(neighbours, ctx.rng)
    ant.step_to(target)

    if ctx.grid.resource_at(ant.x, ant.y) is None:
        return
    taken = ctx.grid.extract(ant.x, ant.y, ctx.config.extraction_amount)
    if taken <= 0.0:
        return
    ant.carrying = taken
    ant.found_resource = True
    ant.resource_position = (ant.x, ant.y)
    ant.steps_since_resource = 0
    ant.start_return()
    _lay_trail(ant, ctx)


MOVEMENT_POLICIES: dict[Role, MovementPolicy] = {
    Role.SCOUT: scout_step,
    Role.WORKER: worker_step,
}


# -- Shared helpers ----------------------------------------------------------


def _neighbours(ant: Ant, ctx: MoveContext) -> list[Cell]:
    return ctx.grid.neighbours(
        ant.x,
        ant.y,
        include_diagonals=ctx.config.diagonal_moves,
    )


def _exploring_neighbours(ant: Ant, ctx: MoveContext) -> list[Cell]:
    """Neighbours an exploring ant may step onto.

    Once the ant has moved this journey, the cell straight behind its
    heading is left out unless a ``backwards_chance`` roll succeeds.  A
    dead end always lets the ant turn back.
    """
    neighbours = _neighbours(ant, ctx)
    if ant.steps_on_journey == 0:
        return neighbours
    if ctx.rng.random() < ctx.config.backwards_chance:
        return neighbours
    ahead = [c for c in neighbours if not _is_behind(ant, c)]
    return ahead or neighbours


def _is_behind(ant: Ant, cell: Cell) -> bool:
    angle = math.atan2(cell.y - ant.y, cell.x - ant.x)
    return math.cos(angle - ant.heading) < _BEHIND_COSINE


def _return_home(ant: Ant, ctx: MoveContext) -> None:
    """Step toward the colony; deliver and reset on arrival.

    Picks the neighbour with the smallest Manhattan distance to the
    colony, breaking ties at random.  Ants whose journey found a
    resource lay trail on every cell they step onto.
    """
    colony = ctx.colony
    if ant.position != colony.position:
        neighbours = _neighbours(ant, ctx)
        if not neighbours:
            return
        distances = [abs(c.x - colony.x) + abs(c.y - colony.y) for c in neighbours]
        ant.step_to(_pick(neighbours, distances, ctx.rng, highest=False))
        if ant.found_resource:
            _lay_trail(ant, ctx)
    if ant.position == colony.position:
        _arrive_home(ant, ctx)


def _arrive_home(ant: Ant, ctx: MoveContext) -> None:
    colony = ctx.colony
    if ant.is_carrying:
        colony.deliver(ant.carrying)
    if ant.role is Role.SCOUT and ant.resource_position is not None:
        colony.record_discovery(*ant.resource_position)
    ant.reset_journey()


def _lay_trail(ant: Ant, ctx: MoveContext) -> None:
    """Deposit resource trail that weakens with distance from the resource."""
    cfg = ctx.config
    amount = cfg.trail_deposit * cfg.trail_falloff**ant.steps_since_resource
    ctx.pheromones.deposit(PheromoneKind.RESOURCE_TRAIL, ant.x, ant.y, amount)


def _pick(
    cells: Sequence[Cell],
    scores: Sequence[float],
    rng: Generator,
    *,
    highest: bool,
) -> Cell:
    """Return the best-scoring cell, choosing uniformly among ties."""
    best = max(scores) if highest else min(scores)
    candidates = [c for c, s in zip(cells, scores, strict=True) if s == best]
    return candidates[int(rng.integers(len(candidates)))]


def _random_cell(cells: Sequence[Cell], rng: Generator) -> Cell:
    return cells[int(rng.integers(len(cells)))]
