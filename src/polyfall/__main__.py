"""Simple ASCII demo for the engine.

Run with: `python -m polyfall [--config settings.json] [--seed N]`

Plays a number of random inputs against a fresh session and prints the final
frame, which is a handy smoke test for a configuration file.
"""

from __future__ import annotations

import argparse
import json
import logging
import random
from pathlib import Path

from . import Action, GameConfig, render_grid
from .engine import Engine

LOGGER = logging.getLogger(__name__)


def _print_grid(grid: list[list[int]]) -> None:
    for row in grid:
        print("".join("#" if cell else "." for cell in row))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--config", type=Path, help="JSON file in the host config shape")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--steps", type=int, default=200, help="Random inputs to play")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = GameConfig()
    if args.config is not None:
        config = GameConfig.from_dict(json.loads(args.config.read_text()))
    config.validate()

    rng = random.Random(args.seed)
    engine = Engine(config, rng=rng)
    actions = list(Action)
    for _ in range(args.steps):
        if engine.state.game_over:
            break
        engine.apply(rng.choice(actions))
        engine.tick()

    state = engine.state
    _print_grid(render_grid(state.board, state.current))
    LOGGER.info(
        "score=%d lines=%d level=%d game_over=%s",
        state.score,
        state.lines,
        state.level,
        state.game_over,
    )


if __name__ == "__main__":
    main()
