"""Entry point for ``python -m rockfall``.

Loads the default YAML config, builds a game engine and opens a Pygame
window to play in.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pathlib

from rockfall.simulation.config import GameConfig
from rockfall.simulation.engine import GameEngine
from rockfall.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main() -> None:
    """Parse CLI args, create engine, launch renderer."""
    parser = argparse.ArgumentParser(
        prog="rockfall",
        description="Rockfall - dig for diamonds, dodge boulders",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=16,
        help="Font size in pixels (default: 16)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the config seed for reproducible caves",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = GameConfig.from_yaml(args.config)
    if args.seed is not None:
        config = dataclasses.replace(config, seed=args.seed)
    engine = GameEngine(config=config)

    renderer = PygameRenderer(engine=engine, cell_size=args.cell_size)
    renderer.run()


if __name__ == "__main__":
    main()
