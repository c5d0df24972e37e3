"""Config — load game parameters from YAML files.

Grid size, scene timers and the tick cadence live in YAML and are
parsed into a typed dataclass here, so the engine is not tied to one
playfield size.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from rockfall.world.grid import DEFAULT_HEIGHT, DEFAULT_WIDTH


@dataclass
class GameConfig:
    """Top-level game configuration.

    Attributes:
        seed: RNG seed for reproducible caves; None draws OS entropy.
        grid_width: Number of grid columns.
        grid_height: Number of grid rows.
        title_ticks: Ticks the title card is shown before play starts.
        gameover_ticks: Ticks rocks keep settling after death.
        levelup_ticks: Ticks rocks keep settling after a level is won.
        tick_ms: Wall-clock milliseconds per tick for the client loop.
        full_range_player: Let the generator place the player anywhere
            instead of within the first 256 cells.
    """

    seed: int | None = None
    grid_width: int = DEFAULT_WIDTH
    grid_height: int = DEFAULT_HEIGHT
    title_ticks: int = 10
    gameover_ticks: int = 5
    levelup_ticks: int = 5
    tick_ms: int = 60
    full_range_player: bool = False

    def __post_init__(self) -> None:
        """Validate sizes and timers.

        Raises:
            ValueError: On non-positive dimensions or cadence, or
                negative scene timers.
        """
        if self.grid_width <= 0 or self.grid_height <= 0:
            msg = (
                "grid dimensions must be positive, "
                f"got {self.grid_width}x{self.grid_height}"
            )
            raise ValueError(msg)
        if self.tick_ms <= 0:
            msg = f"tick_ms must be positive, got {self.tick_ms}"
            raise ValueError(msg)
        for name in ("title_ticks", "gameover_ticks", "levelup_ticks"):
            if getattr(self, name) < 0:
                msg = f"{name} must not be negative"
                raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated GameConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If a value fails validation.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            grid_width=data.get("grid_width", cls.grid_width),
            grid_height=data.get("grid_height", cls.grid_height),
            title_ticks=data.get("title_ticks", cls.title_ticks),
            gameover_ticks=data.get("gameover_ticks", cls.gameover_ticks),
            levelup_ticks=data.get("levelup_ticks", cls.levelup_ticks),
            tick_ms=data.get("tick_ms", cls.tick_ms),
            full_range_player=bool(
                data.get("full_range_player", cls.full_range_player),
            ),
        )
