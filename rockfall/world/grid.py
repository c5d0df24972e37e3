"""Grid — the spatial container for the cave.

Cells are stored in a flat row-major list indexed by ``y * width + x``.
Coordinates are signed: anything outside the playable area reads as
Metal and ignores writes, so the grid behaves as if it were surrounded
by an endless wall without storing one.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from rockfall.world.cell import EMPTY, METAL, Cell, CellKind

DEFAULT_WIDTH = 24
DEFAULT_HEIGHT = 21


@dataclass
class Grid:
    """A fixed-size rectangular cave.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        cells: Flat row-major cell storage of length ``width * height``.
            Filled with Empty when not supplied.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    cells: list[Cell] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Validate dimensions and fill or check the cell storage."""
        if self.width <= 0 or self.height <= 0:
            msg = (
                "grid dimensions must be positive, "
                f"got {self.width}x{self.height}"
            )
            raise ValueError(msg)
        if not self.cells:
            self.cells = [EMPTY] * self.size
        elif len(self.cells) != self.size:
            msg = (
                f"expected {self.size} cells for {self.width}x{self.height}, "
                f"got {len(self.cells)}"
            )
            raise ValueError(msg)

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> Grid:
        """Build a grid from lines of cell glyphs.

        Args:
            rows: Equal-length strings, one per row, top row first.

        Raises:
            ValueError: If rows are ragged, empty, or contain an
                unknown glyph.
        """
        rows = list(rows)
        if not rows or not rows[0]:
            msg = "grid text must contain at least one cell"
            raise ValueError(msg)
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            msg = "grid rows must all have the same length"
            raise ValueError(msg)
        cells = [Cell.from_glyph(g) for row in rows for g in row]
        return cls(width=width, height=len(rows), cells=cells)

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Cell:
        """Return the cell at ``(x, y)``, or Metal outside the grid."""
        if not self.in_bounds(x, y):
            return METAL
        return self.cells[y * self.width + x]

    def set(self, x: int, y: int, cell: Cell) -> None:
        """Overwrite the cell at ``(x, y)``; ignored outside the grid."""
        if self.in_bounds(x, y):
            self.cells[y * self.width + x] = cell

    def copy(self) -> Grid:
        """Return an independent grid with the same contents."""
        return Grid(width=self.width, height=self.height, cells=list(self.cells))

    def positions(self) -> Iterator[tuple[int, int, Cell]]:
        """Yield ``(x, y, cell)`` in row-major order."""
        for i, cell in enumerate(self.cells):
            y, x = divmod(i, self.width)
            yield x, y, cell

    def find_player(self) -> tuple[int, int] | None:
        """Return the first Player position in row-major order, if any."""
        for x, y, cell in self.positions():
            if cell.kind is CellKind.PLAYER:
                return x, y
        return None

    def count(self, *kinds: CellKind) -> int:
        """Count cells whose kind is any of ``kinds``."""
        codes = [kind.value for kind in kinds]
        return int(np.isin(self.kind_codes(), codes).sum())

    def kind_codes(self) -> NDArray[np.int8]:
        """Return a ``(height, width)`` array of ``CellKind`` values."""
        codes = np.fromiter(
            (cell.kind.value for cell in self.cells),
            dtype=np.int8,
            count=self.size,
        )
        return codes.reshape(self.height, self.width)

    def to_rows(self) -> list[str]:
        """Render the grid as glyph lines, inverse of ``from_rows``."""
        w = self.width
        return [
            "".join(cell.glyph for cell in self.cells[y * w : (y + 1) * w])
            for y in range(self.height)
        ]
