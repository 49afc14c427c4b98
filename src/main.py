"""Entry point for the Segment Snake game."""

from __future__ import annotations

import argparse
import logging

from segment_snake.config import DEFAULT_VARIANT, GAME_SPEED, VARIANTS
from segment_snake.game import SegmentSnake


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Segment Snake")
    parser.add_argument(
        "--variant",
        choices=sorted(VARIANTS),
        default=DEFAULT_VARIANT,
        help="Game mode: bounded classic grid, open world, or open world with segments",
    )
    parser.add_argument(
        "--speed", type=int, default=GAME_SPEED, help="Tick period in milliseconds"
    )
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    game = SegmentSnake(args.variant, args.speed)
    game.start()


if __name__ == "__main__":
    main()
