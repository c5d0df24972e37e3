"""GameEngine — the main tick loop.

Owns the game state and the random generator and advances them in the
canonical tick order:

1. Scene dispatch (title timer, or rock physics)
2. Player movement (Level scene only)
3. Scene timers (restart after death, next level after a win)
4. Input drain and tick counter advance

Rendering and input polling live outside the engine; clients feed it
one ``PlayerInput`` per tick and read ``FrameSnapshot`` objects back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

import numpy as np
from numpy.random import Generator

from rockfall.simulation.config import GameConfig
from rockfall.simulation.physics import update_rocks
from rockfall.simulation.player import update_player
from rockfall.simulation.state import GameState, PlayerInput, Scene
from rockfall.world.cell import Cell
from rockfall.world.generator import generate_level
from rockfall.world.grid import Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only view of one tick for renderers.

    Attributes:
        scene: Current scene.
        level: One-based level index.
        width: Grid columns.
        height: Grid rows.
        cells: Row-major cell values.
        diamonds_remaining: Diamonds still to collect.
        initial_diamonds: Diamonds the level started with.
        counter: Tick counter, used for two-frame animation.
    """

    scene: Scene
    level: int
    width: int
    height: int
    cells: tuple[Cell, ...]
    diamonds_remaining: int
    initial_diamonds: int
    counter: int

    def cell_at(self, x: int, y: int) -> Cell:
        return self.cells[y * self.width + x]

    @property
    def diamonds_collected(self) -> int:
        return self.initial_diamonds - self.diamonds_remaining


@dataclass
class GameEngine:
    """Drives the game forward tick by tick.

    Attributes:
        config: Loaded game configuration.
        rng: Random generator used for level generation.  Built from
            ``config.seed`` when not supplied.
        state: Live game state.
    """

    config: GameConfig = field(default_factory=GameConfig)
    rng: Generator | None = None
    state: GameState = field(init=False)

    def __post_init__(self) -> None:
        """Seed the RNG and generate the first level."""
        if self.rng is None:
            self.rng = np.random.default_rng(self.config.seed)
        grid, diamonds = self._new_level()
        self.state = GameState(grid=grid, diamonds_remaining=diamonds)

    @classmethod
    def from_grid(
        cls,
        grid: Grid,
        diamonds: int,
        config: GameConfig | None = None,
        *,
        scene: Scene = Scene.LEVEL,
    ) -> GameEngine:
        """Build an engine playing a hand-made grid.

        Args:
            grid: The starting cave; also the restart snapshot.
            diamonds: Diamonds to collect.
            config: Configuration; grid size is taken from ``grid``.
            scene: Scene to start in.

        Returns:
            An engine whose first level is ``grid``.
        """
        config = replace(
            config or GameConfig(),
            grid_width=grid.width,
            grid_height=grid.height,
        )
        engine = cls(config=config)
        engine.state = GameState(grid=grid, diamonds_remaining=diamonds, scene=scene)
        return engine

    def submit_input(self, player_input: PlayerInput) -> None:
        """Queue a movement for the next tick; the latest call wins.

        Raises:
            TypeError: If ``player_input`` is not a PlayerInput.
        """
        if not isinstance(player_input, PlayerInput):
            msg = f"expected PlayerInput, got {type(player_input).__name__}"
            raise TypeError(msg)
        self.state.pending_input = player_input

    def step(self) -> None:
        """Advance the game by one tick."""
        state = self.state
        scene = state.scene

        if scene is Scene.TITLE:
            if state.counter >= self.config.title_ticks:
                state.change_scene(Scene.LEVEL)
        elif scene is Scene.LEVEL:
            update_rocks(state.grid, state.counter)
            update_player(state)
            self._check_diamond_drift()
        elif scene is Scene.GAMEOVER:
            update_rocks(state.grid, state.counter)
            if state.counter >= self.config.gameover_ticks:
                state.restart_level()
                state.change_scene(Scene.TITLE)
        elif scene is Scene.LEVELUP:
            update_rocks(state.grid, state.counter)
            if state.counter >= self.config.levelup_ticks:
                grid, diamonds = self._new_level()
                state.load_level(grid, diamonds)
                state.level += 1
                state.change_scene(Scene.TITLE)

        # Input is only consumed by ticks that started in the Level scene
        if scene is not Scene.LEVEL:
            state.pending_input = PlayerInput.NONE
        state.advance_counter()

    def run(self, ticks: int) -> None:
        """Run the game for a fixed number of ticks.

        Args:
            ticks: Number of ticks to advance.
        """
        for _ in range(ticks):
            self.step()

    def snapshot(self) -> FrameSnapshot:
        """Return an immutable view of the current tick for rendering."""
        state = self.state
        return FrameSnapshot(
            scene=state.scene,
            level=state.level,
            width=state.grid.width,
            height=state.grid.height,
            cells=tuple(state.grid.cells),
            diamonds_remaining=state.diamonds_remaining,
            initial_diamonds=state.initial_diamonds,
            counter=state.counter,
        )

    def _new_level(self) -> tuple[Grid, int]:
        """Generate a cave using the configured size and placement."""
        return generate_level(
            self.rng,
            self.config.grid_width,
            self.config.grid_height,
            full_range_player=self.config.full_range_player,
        )

    def _check_diamond_drift(self) -> None:
        """Log when the diamond tally no longer matches the grid."""
        if not logger.isEnabledFor(logging.DEBUG):
            return
        latent = self.state.latent_diamonds()
        if latent != self.state.diamonds_remaining:
            logger.debug(
                "diamond tally %d differs from %d diamonds/enemies in grid",
                self.state.diamonds_remaining,
                latent,
            )
