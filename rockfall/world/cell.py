"""Cell — a single tile in the cave grid.

The set of tile kinds is closed.  Rock-like tiles (boulders and
diamonds) additionally carry a *falling* flag; every other kind is
always at rest.  Cells are immutable values so the grid can hand them
out freely and compare them with ``==``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CellKind(Enum):
    """Tile kinds, valued by their numeric code for array views."""

    EMPTY = 0
    SOIL = 1
    METAL = 2
    DIAMOND = 3
    BOULDER = 4
    PLAYER = 5
    ENEMY = 6


_ROCK_KINDS = frozenset({CellKind.DIAMOND, CellKind.BOULDER})
_CRUSHABLE_KINDS = frozenset({CellKind.EMPTY, CellKind.PLAYER, CellKind.ENEMY})


@dataclass(frozen=True)
class Cell:
    """A single tile.

    Attributes:
        kind: What occupies the tile.
        falling: Whether a rock-like tile is currently in motion.  Must
            be False for every other kind.
    """

    kind: CellKind
    falling: bool = False

    def __post_init__(self) -> None:
        """Reject falling flags on kinds that cannot fall."""
        if self.falling and self.kind not in _ROCK_KINDS:
            msg = f"{self.kind.name} cannot be falling"
            raise ValueError(msg)

    @classmethod
    def diamond(cls, falling: bool = False) -> Cell:
        """Return a diamond tile."""
        return cls(CellKind.DIAMOND, falling)

    @classmethod
    def boulder(cls, falling: bool = False) -> Cell:
        """Return a boulder tile."""
        return cls(CellKind.BOULDER, falling)

    @classmethod
    def from_glyph(cls, glyph: str) -> Cell:
        """Parse a one-character text glyph.

        Args:
            glyph: One of ``. : # d D o O P X``.

        Raises:
            ValueError: If the glyph is not recognised.
        """
        try:
            return _FROM_GLYPH[glyph]
        except KeyError:
            msg = f"unknown cell glyph {glyph!r}"
            raise ValueError(msg) from None

    @property
    def glyph(self) -> str:
        """One-character text form, inverse of ``from_glyph``."""
        return _TO_GLYPH[self]

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    @property
    def is_rock(self) -> bool:
        """Return True for boulders and diamonds in either state."""
        return self.kind in _ROCK_KINDS

    @property
    def is_crushable(self) -> bool:
        """Return True if a falling rock may land on or roll past this tile."""
        return self.kind in _CRUSHABLE_KINDS

    def with_falling(self, falling: bool) -> Cell:
        """Return the same rock kind with the given falling flag."""
        return Cell(self.kind, falling)


EMPTY = Cell(CellKind.EMPTY)
SOIL = Cell(CellKind.SOIL)
METAL = Cell(CellKind.METAL)
PLAYER = Cell(CellKind.PLAYER)
ENEMY = Cell(CellKind.ENEMY)

_TO_GLYPH: dict[Cell, str] = {
    EMPTY: ".",
    SOIL: ":",
    METAL: "#",
    Cell.diamond(): "d",
    Cell.diamond(falling=True): "D",
    Cell.boulder(): "o",
    Cell.boulder(falling=True): "O",
    PLAYER: "P",
    ENEMY: "X",
}
_FROM_GLYPH: dict[str, Cell] = {g: c for c, g in _TO_GLYPH.items()}
