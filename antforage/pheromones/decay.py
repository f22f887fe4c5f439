"""Decay logic for pheromone layers.

Operates on the raw NumPy arrays inside ``PheromoneLayer`` objects.
Separated from ``fields.py`` so the decay model can be swapped
independently of deposit/read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from antforage.pheromones.fields import PheromoneField, PheromoneLayer

# Leftovers below this fraction of one decay step are rounding error.
_SNAP_TOLERANCE = 1e-9


def decay(layer: PheromoneLayer, dt: float = 1.0) -> None:
    """Reduce every present pheromone by ``depreciation_rate * dt``.

    Strengths that would fall to or below zero are clamped to zero,
    which removes the pheromone.  Absent cells are untouched.  A
    deposit of strength ``S`` therefore disappears after exactly
    ``ceil(S / (rate * dt))`` passes, even when repeated float
    subtraction would leave a residue like ``1e-16`` behind.

    Args:
        layer: The pheromone layer to decay.
        dt: Elapsed decay time; one world tick is 1.0.
    """
    if dt <= 0:
        return
    step = layer.depreciation_rate * dt
    grid = layer.grid
    present = grid > 0.0
    grid[present] -= step
    grid[present & (grid <= step * _SNAP_TOLERANCE)] = 0.0


def decay_field(field: PheromoneField, dt: float = 1.0) -> None:
    """Run one decay step on all layers.

    Args:
        field: The complete pheromone field to update.
        dt: Elapsed decay time.
    """
    for layer in field.layers.values():
        decay(layer, dt)
