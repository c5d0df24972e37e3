"""Rock physics — gravity, rolling and crushing for boulders and diamonds.

Runs once per tick before the player moves.  Rows are scanned bottom-up
(skipping the last row, which has nothing below it) and left to right,
so a rock that drops into the row below is not seen again this tick.

The sideways probe order alternates with tick parity to avoid a
systematic drift: even ticks try the right side first, odd ticks the
left.  For every rock exactly one rule fires, in this priority:

1. falling onto something crushable: drop (an enemy becomes a diamond)
2. resting over an empty cell: start falling
3. falling, first side empty with a crushable cell below it: roll
4. falling, second side empty with a crushable cell below it: roll
5. otherwise come to rest
"""

from __future__ import annotations

from rockfall.world.cell import EMPTY, Cell, CellKind
from rockfall.world.grid import Grid


def roll_direction(tick: int) -> int:
    """Return the first sideways probe direction for ``tick``."""
    return 1 if tick % 2 == 0 else -1


def update_rock(grid: Grid, x: int, y: int, dx: int) -> None:
    """Apply the first matching motion rule to the rock at ``(x, y)``.

    Args:
        grid: The cave, mutated in place.
        x: Column of the rock.
        y: Row of the rock.
        dx: First sideways probe direction (+1 or -1).
    """
    this = grid.get(x, y)
    bottom = grid.get(x, y + 1)
    side1 = grid.get(x + dx, y)
    diag1 = grid.get(x + dx, y + 1)
    side2 = grid.get(x - dx, y)
    diag2 = grid.get(x - dx, y + 1)

    if this.falling and bottom.is_crushable:
        grid.set(x, y, EMPTY)
        if bottom.kind is CellKind.ENEMY:
            # The crushed enemy turns into a diamond; the rock is spent
            grid.set(x, y + 1, Cell.diamond(falling=True))
        else:
            grid.set(x, y + 1, this.with_falling(True))
    elif not this.falling and bottom.is_empty:
        grid.set(x, y, EMPTY)
        grid.set(x, y + 1, this.with_falling(True))
    elif this.falling and side1.is_empty and diag1.is_crushable:
        grid.set(x, y, EMPTY)
        grid.set(x + dx, y, this.with_falling(True))
    elif this.falling and side2.is_empty and diag2.is_crushable:
        grid.set(x, y, EMPTY)
        grid.set(x - dx, y, this.with_falling(True))
    else:
        grid.set(x, y, this.with_falling(False))


def update_rocks(grid: Grid, tick: int) -> None:
    """Advance every rock in the grid by one tick.

    Args:
        grid: The cave, mutated in place.
        tick: Current tick counter; its parity picks the roll direction.
    """
    dx = roll_direction(tick)
    for y in range(grid.height - 2, -1, -1):
        for x in range(grid.width):
            if grid.get(x, y).is_rock:
                update_rock(grid, x, y, dx)
