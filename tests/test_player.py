"""Tests for rockfall.simulation.player — movement, pushing, collecting."""

import pytest

from rockfall.simulation.player import can_move, update_player
from rockfall.simulation.state import GameState, PlayerInput, Scene
from rockfall.world.cell import EMPTY, ENEMY, METAL, PLAYER, SOIL, Cell
from rockfall.world.grid import Grid


def _level(rows: list[str], diamonds: int = 5) -> GameState:
    state = GameState(
        grid=Grid.from_rows(rows),
        diamonds_remaining=diamonds,
        scene=Scene.LEVEL,
    )
    state.counter = 7
    return state


def _move(state: GameState, player_input: PlayerInput) -> list[str]:
    state.pending_input = player_input
    update_player(state)
    return state.grid.to_rows()


class TestCanMove:
    """Tests for the movement rule table."""

    @pytest.mark.parametrize("player_input", list(PlayerInput))
    def test_metal_and_player_always_block(self, player_input: PlayerInput) -> None:
        assert not can_move(METAL, EMPTY, player_input)
        assert not can_move(PLAYER, EMPTY, player_input)

    @pytest.mark.parametrize("cell", [EMPTY, SOIL, ENEMY, Cell.diamond()])
    def test_passable_cells(self, cell: Cell) -> None:
        for player_input in (PlayerInput.UP, PlayerInput.DOWN, PlayerInput.RIGHT):
            assert can_move(cell, METAL, player_input)

    def test_boulder_vertical_blocks(self) -> None:
        assert not can_move(Cell.boulder(), EMPTY, PlayerInput.UP)
        assert not can_move(Cell.boulder(falling=True), EMPTY, PlayerInput.DOWN)

    def test_boulder_sideways_needs_empty_target(self) -> None:
        assert can_move(Cell.boulder(), EMPTY, PlayerInput.LEFT)
        assert not can_move(Cell.boulder(), SOIL, PlayerInput.RIGHT)
        assert not can_move(Cell.boulder(), ENEMY, PlayerInput.LEFT)

    def test_falling_diamond_from_below(self) -> None:
        assert not can_move(Cell.diamond(falling=True), EMPTY, PlayerInput.UP)
        assert can_move(Cell.diamond(falling=True), EMPTY, PlayerInput.LEFT)
        assert can_move(Cell.diamond(), EMPTY, PlayerInput.UP)


class TestWalking:
    """Tests for plain movement."""

    def test_walk_into_soil(self) -> None:
        state = _level(["P:"])
        assert _move(state, PlayerInput.RIGHT) == [".P"]

    def test_walk_into_empty(self) -> None:
        state = _level([".", "P"])
        assert _move(state, PlayerInput.UP) == ["P", "."]

    def test_metal_blocks(self) -> None:
        state = _level(["P#"])
        assert _move(state, PlayerInput.RIGHT) == ["P#"]

    def test_grid_edge_blocks(self) -> None:
        state = _level(["P."])
        assert _move(state, PlayerInput.LEFT) == ["P."]

    def test_no_input_stays(self) -> None:
        state = _level(["P."])
        assert _move(state, PlayerInput.NONE) == ["P."]

    def test_input_is_single_use(self) -> None:
        state = _level(["P#"])
        _move(state, PlayerInput.RIGHT)
        assert state.pending_input is PlayerInput.NONE
        _move(state, PlayerInput.LEFT)
        assert state.pending_input is PlayerInput.NONE

    def test_at_most_one_player(self) -> None:
        state = _level(["P:d", "o..", "..X"])
        for player_input in (PlayerInput.RIGHT, PlayerInput.DOWN, PlayerInput.LEFT):
            _move(state, player_input)
            assert sum(row.count("P") for row in state.grid.to_rows()) == 1


class TestDiamonds:
    """Tests for diamond collection."""

    def test_collect_diamond(self, corridor: GameState) -> None:
        assert _move(corridor, PlayerInput.RIGHT) == [".P..X"]
        assert corridor.diamonds_remaining == 1
        assert corridor.scene is Scene.LEVEL

    def test_last_diamond_levels_up(self) -> None:
        state = _level(["Pd"], diamonds=1)
        _move(state, PlayerInput.RIGHT)
        assert state.diamonds_remaining == 0
        assert state.scene is Scene.LEVELUP
        assert state.counter == 0

    def test_collect_falling_diamond_sideways(self) -> None:
        state = _level(["PD"], diamonds=3)
        assert _move(state, PlayerInput.RIGHT) == [".P"]
        assert state.diamonds_remaining == 2

    def test_tally_never_negative(self) -> None:
        state = _level(["Pd"], diamonds=0)
        _move(state, PlayerInput.RIGHT)
        assert state.diamonds_remaining == 0
        assert state.scene is Scene.LEVELUP


class TestBoulders:
    """Tests for pushing boulders."""

    def test_push_right(self) -> None:
        state = _level(["Po."])
        assert _move(state, PlayerInput.RIGHT) == [".PO"]

    def test_push_left(self) -> None:
        state = _level([".oP"])
        assert _move(state, PlayerInput.LEFT) == ["OP."]

    def test_push_blocked_by_soil(self) -> None:
        state = _level(["Po:"])
        assert _move(state, PlayerInput.RIGHT) == ["Po:"]

    def test_push_blocked_by_edge(self) -> None:
        state = _level([".Po"])
        assert _move(state, PlayerInput.RIGHT) == [".Po"]

    def test_cannot_lift_boulder(self) -> None:
        state = _level(["o", "P"])
        assert _move(state, PlayerInput.UP) == ["o", "P"]

    def test_cannot_push_boulder_down(self) -> None:
        state = _level(["P", "o", "."])
        assert _move(state, PlayerInput.DOWN) == ["P", "o", "."]


class TestDeath:
    """Tests for the player dying."""

    def test_walk_into_enemy(self) -> None:
        state = _level(["PX"])
        assert _move(state, PlayerInput.RIGHT) == [".P"]
        assert state.scene is Scene.GAMEOVER
        assert state.counter == 0

    def test_missing_player_is_gameover(self) -> None:
        state = _level(["..", ".O"])
        _move(state, PlayerInput.RIGHT)
        assert state.scene is Scene.GAMEOVER
        assert state.counter == 0
