"""Exceptions raised by the simulation core.

Almost everything that can go wrong inside a tick is an expected race
and is handled silently (extracting from a depleted resource, spawning
with no deficit, decay underflow).  The exceptions here cover the two
remaining cases: coordinates outside the grid and invalid configuration.
"""

from __future__ import annotations


class AntForageError(Exception):
    """Base class for all simulation errors."""


class InvalidPositionError(AntForageError, IndexError):
    """A coordinate lies outside ``[0, width) x [0, height)``."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        super().__init__(f"({x}, {y}) out of bounds for {width}x{height}")


class ConfigurationError(AntForageError, ValueError):
    """A construction-time parameter violates a simulation invariant."""
