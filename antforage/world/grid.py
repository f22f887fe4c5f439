"""Grid -- the fixed-size cell lattice the simulation runs on.

The Grid owns cells arranged in a 2D array and every Resource placed on
them.  It provides the spatial queries (bounds checks, neighbours) used
by the ant movement policies, and routes extraction so that a resource
leaves its cell exactly when its capacity reaches zero.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

from antforage.errors import ConfigurationError, InvalidPositionError
from antforage.world.cell import Cell
from antforage.world.resource import Resource

logger = logging.getLogger(__name__)

_CARDINAL = ((-1, 0), (1, 0), (0, -1), (0, 1))
_DIAGONAL = ((-1, -1), (-1, 1), (1, -1), (1, 1))


@dataclass
class Grid:
    """A 2D lattice of cells holding resources and colony markers.

    Attributes:
        width: Number of columns in the grid.
        height: Number of rows in the grid.
        cells: 2D list of Cell objects indexed as ``cells[y][x]``.
    """

    width: int
    height: int
    cells: list[list[Cell]] = field(init=False, repr=False)
    _resources: dict[tuple[int, int], Resource] = field(
        init=False,
        default_factory=dict,
        repr=False,
    )

    def __post_init__(self) -> None:
        """Initialise the grid with empty cells."""
        if self.width <= 0 or self.height <= 0:
            msg = f"grid dimensions must be positive, got {self.width}x{self.height}"
            raise ConfigurationError(msg)
        self.cells = [
            [Cell(x=x, y=y) for x in range(self.width)] for y in range(self.height)
        ]

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Cell:
        """Return the cell at grid coordinates ``(x, y)``.

        Args:
            x: Column index.
            y: Row index.

        Raises:
            InvalidPositionError: If coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            raise InvalidPositionError(x, y, self.width, self.height)
        return self.cells[y][x]

    def neighbours(
        self,
        x: int,
        y: int,
        *,
        include_diagonals: bool = False,
    ) -> list[Cell]:
        """Return adjacent in-bounds cells for the given position.

        Args:
            x: Column index.
            y: Row index.
            include_diagonals: If True, return up to 8 neighbours; otherwise 4.

        Returns:
            List of neighbouring Cell objects in a fixed offset order.

        Raises:
            InvalidPositionError: If ``(x, y)`` itself is out of bounds.
        """
        if not self.in_bounds(x, y):
            raise InvalidPositionError(x, y, self.width, self.height)
        offsets = _CARDINAL + _DIAGONAL if include_diagonals else _CARDINAL

        result: list[Cell] = []
        for dx, dy in offsets:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                result.append(self.cells[ny][nx])
        return result

    # -- Resources -----------------------------------------------------------

    def place_resource(self, x: int, y: int, capacity: float) -> Resource:
        """Put a resource on a cell.

        Placing onto a cell that already holds a resource merges the two
        by adding capacity.

        Args:
            x: Column index.
            y: Row index.
            capacity: Initial capacity (must be > 0).

        Returns:
            The resource now occupying the cell.
        """
        existing = self.resource_at(x, y)
        if capacity <= 0:
            msg = f"resource capacity must be positive, got {capacity}"
            raise ConfigurationError(msg)
        if existing is not None:
            existing.replenish(capacity)
            return existing
        resource = Resource(x=x, y=y, capacity=capacity)
        self.cells[y][x].resource = resource
        self._resources[(x, y)] = resource
        return resource

    def scatter_resources(
        self,
        rng: Generator,
        count: int,
        capacity: float,
    ) -> list[Resource]:
        """Place ``count`` resources on random free, non-colony cells.

        Stops early if the grid runs out of free cells.

        Args:
            rng: Seeded random generator.
            count: Number of resources to place.
            capacity: Capacity given to each one.

        Returns:
            The newly placed resources.
        """
        free = [
            (cell.x, cell.y)
            for row in self.cells
            for cell in row
            if not cell.has_resource and not cell.is_colony
        ]
        placed: list[Resource] = []
        if count <= 0 or not free:
            return placed
        picks = rng.choice(len(free), size=min(count, len(free)), replace=False)
        for idx in picks:
            x, y = free[int(idx)]
            placed.append(self.place_resource(x, y, capacity))
        return placed

    def resource_at(self, x: int, y: int) -> Resource | None:
        """Return the live resource on ``(x, y)``, or None.

        A resource drained through its own ``extract`` is dropped from
        the cell here, so a depleted resource is never reported.
        """
        cell = self.cell_at(x, y)
        if cell.resource is not None and cell.resource.is_depleted:
            self._remove_resource(cell)
        return cell.resource

    def resources(self) -> Iterator[Resource]:
        """Iterate live resources in placement order."""
        for resource in list(self._resources.values()):
            if resource.is_depleted:
                self._remove_resource(self.cells[resource.y][resource.x])
            else:
                yield resource

    def extract(self, x: int, y: int, amount: float) -> float:
        """Extract from the resource on ``(x, y)``.

        An absent resource yields 0.  When the extraction drains the
        resource it is removed from its cell.

        Args:
            x: Column index.
            y: Row index.
            amount: Quantity requested.

        Returns:
            The quantity actually removed.
        """
        resource = self.resource_at(x, y)
        if resource is None:
            return 0.0
        taken = resource.extract(amount)
        if resource.is_depleted:
            self._remove_resource(self.cells[y][x])
        return taken

    def _remove_resource(self, cell: Cell) -> None:
        cell.resource = None
        del self._resources[(cell.x, cell.y)]
        logger.info("Resource at (%d, %d) depleted", cell.x, cell.y)

    # -- Colonies ------------------------------------------------------------

    def mark_colony(self, x: int, y: int) -> None:
        """Mark ``(x, y)`` as a colony drop-off cell."""
        self.cell_at(x, y).is_colony = True
