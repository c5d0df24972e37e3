"""Level generation — random caves with a diamond tally.

Each cell is drawn independently from a cumulative probability table,
then the player is dropped onto one cell.  Enemies count towards the
diamond tally because crushing one with a rock turns it into a diamond.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rockfall.world.cell import ENEMY, METAL, PLAYER, SOIL, Cell, CellKind
from rockfall.world.grid import DEFAULT_HEIGHT, DEFAULT_WIDTH, Grid

if TYPE_CHECKING:
    from numpy.random import Generator

logger = logging.getLogger(__name__)

# Upper bounds of the cumulative buckets; the remainder spawns diamonds
# or enemies.
SOIL_BELOW = 0.75
BOULDER_BELOW = 0.90
METAL_BELOW = 0.95
DIAMOND_BELOW = 0.98

_BYTE_VALUES = 256


def _place_cell(number: float, index: int, n_cells: int) -> tuple[Cell, bool]:
    """Map one uniform draw to a cell and whether it counts as a diamond."""
    if number < SOIL_BELOW:
        return SOIL, False
    if number < BOULDER_BELOW:
        return Cell.boulder(), False
    if number < METAL_BELOW:
        return METAL, False
    if number < DIAMOND_BELOW:
        return Cell.diamond(), True
    # Enemies only spawn in the lower half of the cave
    if index > n_cells // 2:
        return ENEMY, True
    return Cell.diamond(), True


def _player_index(rng: Generator, n_cells: int, *, full_range: bool) -> int:
    """Draw the linear index that receives the player.

    By default a single random byte is used directly, so on grids larger
    than 256 cells the player always starts within the first 256.
    ``full_range`` draws uniformly over the whole grid instead.
    """
    if full_range:
        return int(rng.integers(0, n_cells))
    byte = int(rng.integers(0, _BYTE_VALUES))
    if n_cells <= _BYTE_VALUES:
        return byte % n_cells
    return byte


def generate_level(
    rng: Generator,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    *,
    full_range_player: bool = False,
) -> tuple[Grid, int]:
    """Build a fresh cave and count the diamonds it holds.

    Args:
        rng: Seeded random generator; the only source of randomness.
        width: Number of grid columns.
        height: Number of grid rows.
        full_range_player: Place the player anywhere in the grid rather
            than within the first 256 cells.

    Returns:
        The populated grid and the number of diamonds the player must
        collect to finish it.
    """
    n_cells = width * height
    numbers = rng.random(n_cells)

    cells: list[Cell] = []
    diamonds = 0
    for i, number in enumerate(numbers):
        cell, counts = _place_cell(float(number), i, n_cells)
        cells.append(cell)
        if counts:
            diamonds += 1

    index = _player_index(rng, n_cells, full_range=full_range_player)
    if cells[index].kind in (CellKind.DIAMOND, CellKind.ENEMY):
        diamonds -= 1
    cells[index] = PLAYER

    grid = Grid(width=width, height=height, cells=cells)
    logger.debug(
        "generated %dx%d level: %d diamonds, player at index %d",
        width,
        height,
        diamonds,
        index,
    )
    return grid, diamonds
