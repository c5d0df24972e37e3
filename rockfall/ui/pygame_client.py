"""Pygame visualisation and keyboard input for Rockfall.

Each grid cell is drawn as a three-character glyph in a monospace font,
framed by a metal border.  The client polls keys into the engine's
pending input, steps the engine once per tick and redraws from a
``FrameSnapshot``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import pygame

from rockfall.simulation.state import PlayerInput, Scene
from rockfall.world.cell import METAL, Cell, CellKind

if TYPE_CHECKING:
    from rockfall.simulation.engine import FrameSnapshot, GameEngine

# Colour palette
_BG = (0, 0, 0)
_TEXT = (255, 255, 255)

_GLYPHS: dict[CellKind, str] = {
    CellKind.EMPTY: "   ",
    CellKind.SOIL: ":::",
    CellKind.METAL: "###",
    CellKind.DIAMOND: "<:>",
    CellKind.BOULDER: "(O)",
    CellKind.PLAYER: "(o)",
    CellKind.ENEMY: " X ",
}

_COLOURS: dict[CellKind, tuple[int, int, int]] = {
    CellKind.EMPTY: _BG,
    CellKind.SOIL: (128, 128, 0),
    CellKind.METAL: (85, 85, 85),
    CellKind.DIAMOND: (0, 128, 128),
    CellKind.BOULDER: (192, 192, 192),
    CellKind.PLAYER: (0, 255, 0),
    CellKind.ENEMY: (128, 0, 0),
}

# Alternate animation frame
_PLAYER_CHEER = "\\o/"
_ENEMY_BRIGHT = (255, 0, 0)


def glyph_for(cell: Cell, counter: int) -> tuple[str, tuple[int, int, int]]:
    """Return the text and colour used to draw ``cell`` on this tick.

    Players and enemies alternate between two frames keyed on the tick
    counter.
    """
    alt_frame = counter % 10 > 5
    if cell.kind is CellKind.PLAYER and alt_frame:
        return _PLAYER_CHEER, _COLOURS[CellKind.PLAYER]
    if cell.kind is CellKind.ENEMY and alt_frame:
        return _GLYPHS[CellKind.ENEMY], _ENEMY_BRIGHT
    return _GLYPHS[cell.kind], _COLOURS[cell.kind]


class PygameRenderer:
    """Renders GameEngine snapshots into a Pygame window.

    Attributes:
        engine: The game engine to drive and display.
        cell_size: Font size in pixels; each cell is three glyphs wide.
        screen: The Pygame display surface.
    """

    _KEYMAP: ClassVar[dict[int, PlayerInput]] = {
        pygame.K_UP: PlayerInput.UP,
        pygame.K_DOWN: PlayerInput.DOWN,
        pygame.K_LEFT: PlayerInput.LEFT,
        pygame.K_RIGHT: PlayerInput.RIGHT,
    }

    def __init__(self, engine: GameEngine, cell_size: int = 16) -> None:
        """Initialise the renderer.

        Args:
            engine: The game engine to render.
            cell_size: Font size in pixels.
        """
        self.engine = engine
        self.cell_size = cell_size

        pygame.init()
        self.font = pygame.font.SysFont("monospace", cell_size)
        self._char_w, self._char_h = self.font.size("#")
        self._cell_w = self._char_w * 3

        config = engine.config
        # Metal border on every side plus one HUD row on top
        self._win_w = (config.grid_width + 2) * self._cell_w
        self._win_h = (config.grid_height + 3) * self._char_h
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Rockfall")
        self.clock = pygame.time.Clock()
        self.running = True

    def run(self) -> None:
        """Main loop: poll input, step the engine, render, sleep."""
        fps = 1000.0 / self.engine.config.tick_ms
        while self.running:
            self._handle_events()
            if not self.running:
                break
            self.engine.step()
            self._draw(self.engine.snapshot())
            self.clock.tick(fps)

        pygame.quit()

    def _handle_events(self) -> None:
        """Feed the latest arrow key into the engine; any other key clears it."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_c):
                    self.running = False
                else:
                    self.engine.submit_input(
                        self._KEYMAP.get(event.key, PlayerInput.NONE),
                    )

    def _draw(self, frame: FrameSnapshot) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        if frame.scene is Scene.TITLE:
            self._draw_title(frame)
        else:
            self._draw_level(frame)
        pygame.display.flip()

    def _text(self, text: str, colour: tuple[int, int, int], col: int, row: int) -> int:
        """Blit ``text`` at a character position and return the next column."""
        surf = self.font.render(text, True, colour)
        self.screen.blit(surf, (col * self._char_w, row * self._char_h))
        return col + len(text)

    def _cell(self, cell: Cell, counter: int, col: int, row: int) -> int:
        text, colour = glyph_for(cell, counter)
        return self._text(text, colour, col, row)

    def _draw_title(self, frame: FrameSnapshot) -> None:
        """Show the level number and the diamond tally."""
        cols = self._win_w // self._char_w
        rows = self._win_h // self._char_h
        title = f"LEVEL {frame.level}"
        self._text(title, _TEXT, (cols - len(title)) // 2, rows // 2 - 1)
        col = (cols - 12) // 2
        col = self._cell(Cell.diamond(), frame.counter, col, rows // 2 + 1)
        self._text(f"  x  {frame.initial_diamonds}", _TEXT, col, rows // 2 + 1)

    def _draw_level(self, frame: FrameSnapshot) -> None:
        """Draw the HUD, the metal frame and every cell."""
        cols = self._win_w // self._char_w
        self._text(f"LEVEL {frame.level}", _TEXT, 0, 0)
        tally = f"{frame.diamonds_collected} / {frame.initial_diamonds} "
        col = self._text(tally, _TEXT, cols - len(tally) - 3, 0)
        self._cell(Cell.diamond(), frame.counter, col, 0)

        border = frame.width + 2
        for i in range(border):
            self._cell(METAL, frame.counter, i * 3, 1)
            self._cell(METAL, frame.counter, i * 3, frame.height + 2)
        for y in range(frame.height):
            col = self._cell(METAL, frame.counter, 0, y + 2)
            for x in range(frame.width):
                col = self._cell(frame.cell_at(x, y), frame.counter, col, y + 2)
            self._cell(METAL, frame.counter, col, y + 2)
