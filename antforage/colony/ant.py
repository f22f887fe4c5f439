"""Ant -- individual agent with a role-keyed movement policy.

Every ant is either a Scout or a Worker.  The role is fixed at spawn
and selects the movement policy that runs each tick (see
``policies.py``); the Ant itself only holds state:

- **Exploring**: no resource in hand.  Scouts push into unexplored
  ground, workers climb resource-trail gradients.
- **Returning**: heading straight back to the colony, laying resource
  trail if the journey found something.

The ant's back-reference to its colony is the colony id, never the
Colony object; the colony owns the ant.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from antforage.colony.policies import MoveContext
    from antforage.world.cell import Cell


class Role(Enum):
    """Behavioural role, fixed for the ant's lifetime."""

    SCOUT = auto()
    WORKER = auto()


class AntState(Enum):
    """Movement state an ant is currently in."""

    EXPLORING = auto()
    RETURNING = auto()


@dataclass
class Ant:
    """A single ant agent.

    Attributes:
        ant_id: Identifier, unique within the owning colony.
        colony_id: Identifier of the owning colony.
        role: Scout or Worker.  Write-once: assigning it after
            construction raises AttributeError, since the role selects
            the movement policy and the colony counts ants per role.
        x: Current column position in the grid.
        y: Current row position in the grid.
        state: Exploring or Returning.
        heading: Direction of the last step in radians (0 = east,
            pi/2 = south).  Exploring ants use it to avoid stepping
            straight back the way they came.
        carrying: Amount of resource currently carried.
        found_resource: Whether this journey reached a resource, which
            makes the ant lay resource trail on the way home.
        resource_position: Cell of the resource found this journey.
        steps_on_journey: Steps taken since last leaving the colony.
        steps_since_resource: Steps taken since leaving the resource.
    """

    ant_id: int
    colony_id: int
    role: Role
    x: int
    y: int
    state: AntState = AntState.EXPLORING
    heading: float = 0.0
    carrying: float = 0.0
    found_resource: bool = False
    resource_position: tuple[int, int] | None = None
    steps_on_journey: int = 0
    steps_since_resource: int = 0

    def __setattr__(self, name: str, value: Any) -> None:
        # role is write-once; every other field stays mutable.
        if name == "role" and "role" in self.__dict__:
            msg = "an ant's role cannot change after spawn"
            raise AttributeError(msg)
        super().__setattr__(name, value)

    @property
    def position(self) -> tuple[int, int]:
        """Return the current ``(x, y)``."""
        return (self.x, self.y)

    @property
    def is_carrying(self) -> bool:
        """Return True if the ant holds any resource."""
        return self.carrying > 0.0

    @property
    def key(self) -> tuple[int, int]:
        """World-unique identity: ``(colony_id, ant_id)``."""
        return (self.colony_id, self.ant_id)

    def update(self, ctx: MoveContext) -> None:
        """Perform one tick of movement and the action at the new cell.

        Args:
            ctx: Grid, pheromones, owning colony, config and RNG for
                this tick.
        """
        from antforage.colony.policies import MOVEMENT_POLICIES

        MOVEMENT_POLICIES[self.role](self, ctx)

    def step_to(self, cell: Cell) -> None:
        """Move to a cell and update heading to match the step direction."""
        dx = cell.x - self.x
        dy = cell.y - self.y
        if dx != 0 or dy != 0:
            self.heading = math.atan2(dy, dx)
        self.x, self.y = cell.x, cell.y
        self.steps_on_journey += 1
        if self.found_resource:
            self.steps_since_resource += 1

    def start_return(self) -> None:
        """Switch to Returning, keeping whatever the journey found."""
        self.state = AntState.RETURNING

    def reset_journey(self) -> None:
        """Back at the colony: drop journey state and explore again."""
        self.state = AntState.EXPLORING
        self.carrying = 0.0
        self.found_resource = False
        self.resource_position = None
        self.steps_on_journey = 0
        self.steps_since_resource = 0
