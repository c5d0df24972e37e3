"""GameState — everything that changes between ticks.

The state record is shared by the physics pass, the player pass and the
engine's scene dispatch.  Scene changes always go through
``change_scene`` so the tick counter is reset consistently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto

from rockfall.world.cell import CellKind
from rockfall.world.grid import Grid

logger = logging.getLogger(__name__)

COUNTER_MAX = 2**32 - 1


class Scene(Enum):
    """Coarse game mode gating which passes run."""

    TITLE = auto()
    LEVEL = auto()
    GAMEOVER = auto()
    LEVELUP = auto()


class PlayerInput(Enum):
    """Movement request for the next tick, with its unit delta."""

    NONE = (0, 0)
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> tuple[int, int]:
        """Return ``(dx, dy)`` for this input."""
        return self.value


@dataclass
class GameState:
    """Live game record.

    Attributes:
        grid: The cave being played.
        diamonds_remaining: Diamonds still to collect on this level.
        initial_grid: Snapshot of the level as generated, restored on
            death.
        initial_diamonds: Diamond tally of the snapshot.
        scene: Current scene.
        level: One-based level index.
        counter: Tick counter; reset on every scene change, wraps to 0
            after ``COUNTER_MAX``.
        pending_input: Movement to apply on the next player pass.
    """

    grid: Grid
    diamonds_remaining: int
    initial_grid: Grid = field(init=False, repr=False)
    initial_diamonds: int = field(init=False)
    scene: Scene = Scene.TITLE
    level: int = 1
    counter: int = 0
    pending_input: PlayerInput = PlayerInput.NONE

    def __post_init__(self) -> None:
        """Take the restart snapshot of the starting level."""
        self.initial_grid = self.grid.copy()
        self.initial_diamonds = self.diamonds_remaining

    def change_scene(self, scene: Scene) -> None:
        """Switch scenes and restart the tick counter."""
        logger.info(
            "scene %s -> %s (level %d)",
            self.scene.name,
            scene.name,
            self.level,
        )
        self.scene = scene
        self.counter = 0

    def load_level(self, grid: Grid, diamonds: int) -> None:
        """Install a new level and make it the restart snapshot."""
        self.initial_grid = grid
        self.initial_diamonds = diamonds
        self.restart_level()

    def restart_level(self) -> None:
        """Restore the grid and diamond tally from the snapshot."""
        self.grid = self.initial_grid.copy()
        self.diamonds_remaining = self.initial_diamonds

    def advance_counter(self) -> None:
        """Increment the tick counter, wrapping instead of overflowing."""
        self.counter = 0 if self.counter >= COUNTER_MAX else self.counter + 1

    def latent_diamonds(self) -> int:
        """Count diamonds and enemies still present in the live grid.

        Matches ``diamonds_remaining`` unless physics destroyed a
        diamond or produced one that was never counted.
        """
        return self.grid.count(CellKind.DIAMOND, CellKind.ENEMY)
