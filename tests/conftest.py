"""Shared fixtures for the Rockfall test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from rockfall.simulation.config import GameConfig
from rockfall.simulation.state import GameState, Scene
from rockfall.world.grid import Grid


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def default_config() -> GameConfig:
    """Default game config (no YAML file needed), with a fixed seed."""
    return GameConfig(seed=42)


@pytest.fixture
def empty_grid() -> Grid:
    """A default-size grid of empty cells."""
    return Grid()


@pytest.fixture
def corridor() -> GameState:
    """A one-row level: player, resting diamond, empty, empty, enemy."""
    grid = Grid.from_rows(["Pd..X"])
    return GameState(grid=grid, diamonds_remaining=2, scene=Scene.LEVEL)
