"""PheromoneField -- per-kind pheromone grids.

Each pheromone kind (exploration, resource trail) is stored as a
separate NumPy 2D array.  A value of zero means no pheromone is present
on that cell.  The field provides deposit/read operations and delegates
the per-tick decay pass to ``decay.py``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto

import numpy as np
from numpy.typing import NDArray

from antforage.errors import ConfigurationError, InvalidPositionError
from antforage.pheromones.decay import decay_field


class PheromoneKind(Enum):
    """Distinct pheromone channels, each with its own layer."""

    EXPLORATION = auto()
    RESOURCE_TRAIL = auto()


@dataclass
class PheromoneLayer:
    """A single pheromone channel stored as a 2D NumPy array.

    Attributes:
        kind: Which pheromone this layer represents.
        grid: Strength values (0 = absent, otherwise > 0).
        depreciation_rate: Strength lost per unit of decay time.
    """

    kind: PheromoneKind
    grid: NDArray[np.float64]
    depreciation_rate: float = 1.0


@dataclass
class PheromoneField:
    """All pheromone layers for a world.

    Attributes:
        width: Grid columns (must match the Grid).
        height: Grid rows (must match the Grid).
        depreciation_rates: Per-kind decay rate; kinds not listed use 1.0.
        max_strength: Cap applied to every deposit.
        layers: Mapping from PheromoneKind to its layer.
    """

    width: int
    height: int
    depreciation_rates: Mapping[PheromoneKind, float] = field(default_factory=dict)
    max_strength: float = float("inf")
    layers: dict[PheromoneKind, PheromoneLayer] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Create one zeroed layer per pheromone kind."""
        self.layers = {}
        for kind in PheromoneKind:
            rate = float(self.depreciation_rates.get(kind, 1.0))
            if rate <= 0:
                msg = f"depreciation rate for {kind.name} must be positive"
                raise ConfigurationError(msg)
            self.layers[kind] = PheromoneLayer(
                kind=kind,
                grid=np.zeros((self.height, self.width), dtype=np.float64),
                depreciation_rate=rate,
            )

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InvalidPositionError(x, y, self.width, self.height)

    def deposit(self, kind: PheromoneKind, x: int, y: int, amount: float) -> None:
        """Add pheromone at a specific cell.

        Reinforces an existing deposit of the same kind, or creates one
        with strength ``amount``.  The result is capped at
        ``max_strength``.

        Args:
            kind: Which pheromone to deposit.
            x: Column index.
            y: Row index.
            amount: Quantity to add; non-positive amounts are ignored.

        Raises:
            InvalidPositionError: If ``(x, y)`` is out of bounds.
        """
        self._check(x, y)
        if amount <= 0:
            return
        grid = self.layers[kind].grid
        grid[y, x] = min(grid[y, x] + amount, self.max_strength)

    def read(self, kind: PheromoneKind, x: int, y: int) -> float:
        """Read pheromone strength at a cell.

        Args:
            kind: Which pheromone to read.
            x: Column index.
            y: Row index.

        Returns:
            Current strength, 0.0 if absent.
        """
        self._check(x, y)
        return float(self.layers[kind].grid[y, x])

    def is_present(self, kind: PheromoneKind, x: int, y: int) -> bool:
        """Return True if a pheromone of ``kind`` exists at ``(x, y)``."""
        return self.read(kind, x, y) > 0.0

    def active_cells(self, kind: PheromoneKind) -> list[tuple[int, int]]:
        """Return ``(x, y)`` for every cell holding pheromone of ``kind``."""
        ys, xs = np.nonzero(self.layers[kind].grid > 0.0)
        return [(int(x), int(y)) for y, x in zip(ys, xs, strict=True)]

    def count(self, kind: PheromoneKind) -> int:
        """Return how many cells hold pheromone of ``kind``."""
        return int(np.count_nonzero(self.layers[kind].grid > 0.0))

    def decay_all(self, dt: float = 1.0) -> None:
        """Run one decay pass over every layer (see ``decay.decay_field``)."""
        decay_field(self, dt)

    def get_layer(self, kind: PheromoneKind) -> NDArray[np.float64]:
        """Return a read-only view of a pheromone layer.

        Args:
            kind: Which pheromone kind.

        Returns:
            2D array of strengths indexed ``[y, x]``.
        """
        view = self.layers[kind].grid.view()
        view.flags.writeable = False
        return view
