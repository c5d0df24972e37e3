"""Tests for rockfall.world.generator."""

import numpy as np
from numpy.random import Generator

from rockfall.world.cell import CellKind
from rockfall.world.generator import _place_cell, generate_level


class _ScriptedRng:
    """Stands in for a Generator with fixed floats and a fixed byte."""

    def __init__(self, numbers: list[float], byte: int) -> None:
        self.numbers = numbers
        self.byte = byte

    def random(self, size: int) -> np.ndarray:
        assert size == len(self.numbers)
        return np.array(self.numbers)

    def integers(self, low: int, high: int) -> int:
        assert 0 <= self.byte < high
        return self.byte


class TestPlaceCell:
    """Tests for the cumulative probability buckets."""

    def test_bucket_boundaries(self) -> None:
        n = 504
        assert _place_cell(0.0, 0, n)[0].kind is CellKind.SOIL
        assert _place_cell(0.7499, 0, n)[0].kind is CellKind.SOIL
        assert _place_cell(0.75, 0, n)[0].kind is CellKind.BOULDER
        assert _place_cell(0.90, 0, n)[0].kind is CellKind.METAL
        assert _place_cell(0.95, 0, n)[0].kind is CellKind.DIAMOND
        assert _place_cell(0.98, 0, n)[0].kind is CellKind.DIAMOND

    def test_generated_rocks_rest(self) -> None:
        assert not _place_cell(0.8, 0, 504)[0].falling
        assert not _place_cell(0.96, 0, 504)[0].falling

    def test_enemies_only_past_midpoint(self) -> None:
        assert _place_cell(0.99, 252, 504)[0].kind is CellKind.DIAMOND
        assert _place_cell(0.99, 253, 504)[0].kind is CellKind.ENEMY

    def test_diamond_and_enemy_count(self) -> None:
        assert _place_cell(0.96, 0, 504)[1]
        assert _place_cell(0.99, 400, 504)[1]
        assert not _place_cell(0.5, 0, 504)[1]
        assert not _place_cell(0.8, 0, 504)[1]


class TestGenerateLevel:
    """Tests for whole-level generation."""

    def test_dimensions(self, rng: Generator) -> None:
        grid, _ = generate_level(rng)
        assert (grid.width, grid.height) == (24, 21)

    def test_exactly_one_player(self, rng: Generator) -> None:
        grid, _ = generate_level(rng)
        assert grid.count(CellKind.PLAYER) == 1

    def test_tally_matches_population(self, rng: Generator) -> None:
        for _ in range(20):
            grid, diamonds = generate_level(rng)
            assert diamonds == grid.count(CellKind.DIAMOND, CellKind.ENEMY)

    def test_deterministic_with_seed(self) -> None:
        grid_a, diamonds_a = generate_level(np.random.default_rng(7))
        grid_b, diamonds_b = generate_level(np.random.default_rng(7))
        assert grid_a.cells == grid_b.cells
        assert diamonds_a == diamonds_b

    def test_player_within_first_byte_range(self, rng: Generator) -> None:
        for _ in range(50):
            grid, _ = generate_level(rng)
            x, y = grid.find_player()
            assert y * grid.width + x < 256

    def test_full_range_player(self) -> None:
        rng = np.random.default_rng(3)
        indices = set()
        for _ in range(200):
            grid, _ = generate_level(rng, full_range_player=True)
            x, y = grid.find_player()
            indices.add(y * grid.width + x)
        assert max(indices) >= 256

    def test_player_on_diamond_decrements(self) -> None:
        # Four cells: diamond, diamond, soil, enemy; player lands on index 0
        rng = _ScriptedRng([0.96, 0.99, 0.1, 0.99], byte=0)
        grid, diamonds = generate_level(rng, width=2, height=2)
        assert grid.to_rows() == ["Pd", ":X"]
        assert diamonds == 2

    def test_player_on_enemy_decrements(self) -> None:
        rng = _ScriptedRng([0.96, 0.99, 0.1, 0.99], byte=3)
        grid, diamonds = generate_level(rng, width=2, height=2)
        assert grid.to_rows() == ["dd", ":P"]
        assert diamonds == 2

    def test_player_on_soil_keeps_tally(self) -> None:
        rng = _ScriptedRng([0.96, 0.99, 0.1, 0.99], byte=2)
        _, diamonds = generate_level(rng, width=2, height=2)
        assert diamonds == 3

    def test_small_grid_wraps_byte(self) -> None:
        rng = _ScriptedRng([0.1] * 4, byte=255)
        grid, _ = generate_level(rng, width=2, height=2)
        assert grid.find_player() == (1, 1)
