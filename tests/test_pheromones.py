"""Tests for antforage.pheromones -- field deposit/read and decay."""

import math

import numpy as np
import pytest

from antforage.errors import ConfigurationError, InvalidPositionError
from antforage.pheromones.decay import decay, decay_field
from antforage.pheromones.fields import (
    PheromoneField,
    PheromoneKind,
    PheromoneLayer,
)


class TestPheromoneField:
    """Tests for PheromoneField setup and basic operations."""

    def test_all_layers_created(self, small_pheromone_field: PheromoneField) -> None:
        for kind in PheromoneKind:
            assert kind in small_pheromone_field.layers

    def test_initial_strengths_zero(
        self,
        small_pheromone_field: PheromoneField,
    ) -> None:
        for layer in small_pheromone_field.layers.values():
            assert np.all(layer.grid == 0.0)

    def test_rates_applied_per_kind(
        self,
        small_pheromone_field: PheromoneField,
    ) -> None:
        layers = small_pheromone_field.layers
        assert layers[PheromoneKind.EXPLORATION].depreciation_rate == 5.0
        assert layers[PheromoneKind.RESOURCE_TRAIL].depreciation_rate == 2.0

    def test_deposit_and_read(self, small_pheromone_field: PheromoneField) -> None:
        small_pheromone_field.deposit(PheromoneKind.RESOURCE_TRAIL, x=3, y=4, amount=1.5)
        assert small_pheromone_field.read(PheromoneKind.RESOURCE_TRAIL, x=3, y=4) == 1.5
        assert small_pheromone_field.is_present(PheromoneKind.RESOURCE_TRAIL, 3, 4)

    def test_read_absent_is_zero(self, small_pheromone_field: PheromoneField) -> None:
        assert small_pheromone_field.read(PheromoneKind.EXPLORATION, 2, 2) == 0.0
        assert not small_pheromone_field.is_present(PheromoneKind.EXPLORATION, 2, 2)

    def test_deposit_accumulates(self, small_pheromone_field: PheromoneField) -> None:
        small_pheromone_field.deposit(PheromoneKind.EXPLORATION, x=1, y=1, amount=1.0)
        small_pheromone_field.deposit(PheromoneKind.EXPLORATION, x=1, y=1, amount=0.5)
        assert small_pheromone_field.read(PheromoneKind.EXPLORATION, x=1, y=1) == 1.5

    def test_kinds_are_independent(
        self,
        small_pheromone_field: PheromoneField,
    ) -> None:
        small_pheromone_field.deposit(PheromoneKind.EXPLORATION, 1, 1, 4.0)
        assert small_pheromone_field.read(PheromoneKind.RESOURCE_TRAIL, 1, 1) == 0.0

    def test_deposit_capped_at_max_strength(
        self,
        small_pheromone_field: PheromoneField,
    ) -> None:
        small_pheromone_field.deposit(PheromoneKind.EXPLORATION, 0, 0, 800.0)
        small_pheromone_field.deposit(PheromoneKind.EXPLORATION, 0, 0, 800.0)
        assert small_pheromone_field.read(PheromoneKind.EXPLORATION, 0, 0) == 1000.0

    def test_non_positive_deposit_ignored(
        self,
        small_pheromone_field: PheromoneField,
    ) -> None:
        small_pheromone_field.deposit(PheromoneKind.EXPLORATION, 0, 0, 0.0)
        small_pheromone_field.deposit(PheromoneKind.EXPLORATION, 0, 0, -1.0)
        assert small_pheromone_field.count(PheromoneKind.EXPLORATION) == 0

    def test_out_of_bounds_rejected(
        self,
        small_pheromone_field: PheromoneField,
    ) -> None:
        with pytest.raises(InvalidPositionError):
            small_pheromone_field.deposit(PheromoneKind.EXPLORATION, 8, 0, 1.0)
        with pytest.raises(InvalidPositionError):
            small_pheromone_field.read(PheromoneKind.EXPLORATION, 0, -1)

    def test_active_cells_and_count(
        self,
        small_pheromone_field: PheromoneField,
    ) -> None:
        small_pheromone_field.deposit(PheromoneKind.RESOURCE_TRAIL, 2, 5, 1.0)
        small_pheromone_field.deposit(PheromoneKind.RESOURCE_TRAIL, 7, 0, 1.0)
        cells = small_pheromone_field.active_cells(PheromoneKind.RESOURCE_TRAIL)
        assert sorted(cells) == [(2, 5), (7, 0)]
        assert small_pheromone_field.count(PheromoneKind.RESOURCE_TRAIL) == 2

    def test_get_layer_is_read_only(
        self,
        small_pheromone_field: PheromoneField,
    ) -> None:
        layer = small_pheromone_field.get_layer(PheromoneKind.EXPLORATION)
        with pytest.raises(ValueError):
            layer[0, 0] = 1.0

    @pytest.mark.parametrize("rate", [0.0, -1.0])
    def test_non_positive_rate_rejected(self, rate: float) -> None:
        with pytest.raises(ConfigurationError):
            PheromoneField(
                width=4,
                height=4,
                depreciation_rates={PheromoneKind.EXPLORATION: rate},
            )


class TestDecay:
    """Tests for the per-tick decay pass."""

    def test_decay_reduces_strength(self) -> None:
        grid = np.full((4, 4), 10.0, dtype=np.float64)
        layer = PheromoneLayer(
            kind=PheromoneKind.RESOURCE_TRAIL,
            grid=grid,
            depreciation_rate=3.0,
        )
        decay(layer)
        assert np.allclose(layer.grid, 7.0)

    def test_decay_clamps_and_removes(self) -> None:
        grid = np.zeros((4, 4), dtype=np.float64)
        grid[1, 1] = 1.0
        layer = PheromoneLayer(
            kind=PheromoneKind.EXPLORATION,
            grid=grid,
            depreciation_rate=5.0,
        )
        decay(layer)
        assert layer.grid[1, 1] == 0.0
        assert np.all(layer.grid >= 0.0)

    def test_decay_snaps_rounding_residue(self) -> None:
        grid = np.zeros((2, 2), dtype=np.float64)
        grid[0, 0] = 0.1 + 1e-16
        layer = PheromoneLayer(
            kind=PheromoneKind.EXPLORATION,
            grid=grid,
            depreciation_rate=0.1,
        )
        decay(layer)
        assert layer.grid[0, 0] == 0.0

    def test_decay_scales_with_dt(
        self,
        small_pheromone_field: PheromoneField,
    ) -> None:
        small_pheromone_field.deposit(PheromoneKind.RESOURCE_TRAIL, 0, 0, 10.0)
        small_pheromone_field.decay_all(dt=2.0)
        assert small_pheromone_field.read(PheromoneKind.RESOURCE_TRAIL, 0, 0) == 6.0

    def test_decay_all_uses_each_kinds_rate(
        self,
        small_pheromone_field: PheromoneField,
    ) -> None:
        small_pheromone_field.deposit(PheromoneKind.EXPLORATION, 0, 0, 10.0)
        small_pheromone_field.deposit(PheromoneKind.RESOURCE_TRAIL, 0, 0, 10.0)
        small_pheromone_field.decay_all()
        assert small_pheromone_field.read(PheromoneKind.EXPLORATION, 0, 0) == 5.0
        assert small_pheromone_field.read(PheromoneKind.RESOURCE_TRAIL, 0, 0) == 8.0

    def test_decay_field_is_the_decay_all_pass(
        self,
        small_pheromone_field: PheromoneField,
    ) -> None:
        small_pheromone_field.deposit(PheromoneKind.EXPLORATION, 2, 2, 12.0)
        decay_field(small_pheromone_field)
        small_pheromone_field.decay_all()
        assert small_pheromone_field.read(PheromoneKind.EXPLORATION, 2, 2) == 2.0

    @pytest.mark.parametrize(
        ("strength", "rate"),
        [
            (10.0, 3.0),
            (9.0, 3.0),
            (100.0, 5.0),
            (1.0, 2.0),
            (7.5, 2.5),
            (1.0, 0.1),
            (0.7, 0.1),
            (0.3, 0.1),
        ],
    )
    def test_pheromone_lives_exactly_ceil_s_over_d_ticks(
        self,
        strength: float,
        rate: float,
    ) -> None:
        """A single deposit disappears after exactly ceil(S/D) decay ticks."""
        field = PheromoneField(
            width=3,
            height=3,
            depreciation_rates={PheromoneKind.EXPLORATION: rate},
        )
        field.deposit(PheromoneKind.EXPLORATION, 1, 1, strength)
        lifetime = math.ceil(strength / rate)

        for _ in range(lifetime - 1):
            field.decay_all()
            assert field.read(PheromoneKind.EXPLORATION, 1, 1) > 0.0

        field.decay_all()
        assert not field.is_present(PheromoneKind.EXPLORATION, 1, 1)
        assert field.count(PheromoneKind.EXPLORATION) == 0
