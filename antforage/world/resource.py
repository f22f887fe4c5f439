"""Resource -- depletable capacity sitting on a grid cell."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Resource:
    """Extractable capacity at a fixed position.

    Attributes:
        x: Column position.
        y: Row position.
        capacity: Remaining capacity (never negative).
        initial_capacity: Capacity at placement time.
    """

    x: int
    y: int
    capacity: float
    initial_capacity: float = field(init=False)

    def __post_init__(self) -> None:
        self.capacity = max(0.0, float(self.capacity))
        self.initial_capacity = self.capacity

    @property
    def is_depleted(self) -> bool:
        """Return True once all capacity has been extracted."""
        return self.capacity <= 0.0

    @property
    def fraction_remaining(self) -> float:
        """Remaining capacity as a fraction of the initial capacity."""
        if self.initial_capacity <= 0.0:
            return 0.0
        return self.capacity / self.initial_capacity

    def replenish(self, amount: float) -> None:
        """Add capacity, e.g. when a second placement lands on this cell."""
        if amount > 0:
            self.capacity += amount
            self.initial_capacity += amount

    def extract(self, amount: float) -> float:
        """Remove up to ``amount`` of capacity.

        Partial extraction happens near depletion.  Extracting from a
        depleted resource, or a non-positive amount, is a no-op.

        Args:
            amount: Quantity requested.

        Returns:
            The quantity actually removed.
        """
        if amount <= 0 or self.is_depleted:
            return 0.0
        taken = min(amount, self.capacity)
        self.capacity -= taken
        if self.capacity < 0.0:
            self.capacity = 0.0
        return taken
