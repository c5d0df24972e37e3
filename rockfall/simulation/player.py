"""Player movement — resolve one pending input against the grid.

Runs once per tick after the rock physics pass, and only in the Level
scene.  Walking onto soil, empty space, diamonds or enemies is always
possible; metal is never passable; boulders can only be shoved
sideways into an empty cell, and a falling diamond cannot be caught
from below.
"""

from __future__ import annotations

import logging

from rockfall.simulation.state import GameState, PlayerInput, Scene
from rockfall.world.cell import EMPTY, PLAYER, Cell, CellKind

logger = logging.getLogger(__name__)


def can_move(next_cell: Cell, next_of_next: Cell, player_input: PlayerInput) -> bool:
    """Return True if the player may step onto ``next_cell``.

    Args:
        next_cell: Cell in the direction of travel.
        next_of_next: Cell one step beyond, where a shoved boulder lands.
        player_input: The requested move.
    """
    kind = next_cell.kind
    if kind in (CellKind.PLAYER, CellKind.METAL):
        return False
    if kind is CellKind.BOULDER:
        if player_input in (PlayerInput.UP, PlayerInput.DOWN):
            return False
        if player_input in (PlayerInput.LEFT, PlayerInput.RIGHT):
            return next_of_next.is_empty
        return True
    if kind is CellKind.DIAMOND:
        return not (next_cell.falling and player_input is PlayerInput.UP)
    return True


def update_player(state: GameState) -> None:
    """Apply ``state.pending_input`` to the player, then clear it.

    Transitions to Gameover if the player is missing (crushed last
    physics pass) or walks into an enemy, and to Levelup when the last
    diamond is collected.

    Args:
        state: Game state, mutated in place.
    """
    pos = state.grid.find_player()
    if pos is None:
        logger.info("player crushed on level %d", state.level)
        state.change_scene(Scene.GAMEOVER)
        return

    x, y = pos
    player_input = state.pending_input
    dx, dy = player_input.delta
    grid = state.grid
    next_cell = grid.get(x + dx, y + dy)
    next_of_next = grid.get(x + 2 * dx, y + 2 * dy)

    if can_move(next_cell, next_of_next, player_input):
        grid.set(x, y, EMPTY)
        kind = next_cell.kind
        if kind is CellKind.ENEMY:
            logger.info("player caught by enemy on level %d", state.level)
            state.change_scene(Scene.GAMEOVER)
        elif kind is CellKind.DIAMOND:
            state.diamonds_remaining = max(0, state.diamonds_remaining - 1)
            if state.diamonds_remaining == 0:
                logger.info("level %d cleared", state.level)
                state.change_scene(Scene.LEVELUP)
        elif kind is CellKind.BOULDER:
            grid.set(x + 2 * dx, y + 2 * dy, Cell.boulder(falling=True))
        grid.set(x + dx, y + dy, PLAYER)

    state.pending_input = PlayerInput.NONE
