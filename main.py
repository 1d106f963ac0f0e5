#!/usr/bin/env python3
"""
Floodsweep - Main entry point.

Usage:
    python main.py                      (fully interactive)
    python main.py fill [--width W] [--height H] [--percent P] [--seed S]
    python main.py mines [--width W] [--height H] [--percent P] [--seed S]
"""
import argparse
import logging

from src.floodsweep.board import BoardConfig, MineBoard, generate_terrain
from src.floodsweep.console import (
    Console, run_flood_fill, run_interactive, run_minesweeper,
)
from src.floodsweep.game import MineGame


def fill(args: argparse.Namespace) -> None:
    """Flood fill a generated board."""
    config = BoardConfig(args.width, args.height, args.percent)
    terrain = generate_terrain(config, args.seed)
    run_flood_fill(Console(), terrain, show_progress=not args.no_progress)


def mines(args: argparse.Namespace) -> None:
    """Play minesweeper on a generated board."""
    config = BoardConfig(args.width, args.height, args.percent)
    print(f"Board: {config.width}x{config.height} with {config.num_solid} mines")
    run_minesweeper(Console(), MineGame(MineBoard.generate(config, args.seed)))


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the board size and density options to a subcommand."""
    parser.add_argument("--width", type=int, default=20, help="Board width")
    parser.add_argument("--height", type=int, default=10, help="Board height")
    parser.add_argument(
        "--percent", type=int, default=20, help="Percent of impassable tiles"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for the layout"
    )


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Floodsweep - flood fill and minesweeper on a tile grid"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    fill_parser = subparsers.add_parser("fill", help="Flood fill a random board")
    add_board_arguments(fill_parser)
    fill_parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Only print the final grid, not every fill step",
    )

    mines_parser = subparsers.add_parser("mines", help="Play minesweeper")
    add_board_arguments(mines_parser)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "fill":
            fill(args)
        elif args.command == "mines":
            mines(args)
        else:
            run_interactive(Console())
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
