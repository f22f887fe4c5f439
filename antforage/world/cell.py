"""Cell -- a single tile in the world grid.

A cell optionally holds a Resource and may be a colony drop-off point.
Pheromone strengths are stored externally in ``PheromoneField`` layers
so the cell itself stays lightweight.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from antforage.world.resource import Resource


@dataclass
class Cell:
    """A single tile in the world grid.

    Attributes:
        x: Column position.
        y: Row position.
        resource: Extractable resource on this cell, if any.
        is_colony: Whether a colony sits on this cell.
    """

    x: int
    y: int
    resource: Resource | None = None
    is_colony: bool = False

    @property
    def has_resource(self) -> bool:
        """Return True if a non-depleted resource sits on this cell."""
        return self.resource is not None and not self.resource.is_depleted
