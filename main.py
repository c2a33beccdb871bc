#!/usr/bin/env python3
"""
Minesweeper engine - demo entry point.

Usage:
    python main.py [--width W] [--height H] [--mines N] [--seed S]
                   [--open X Y ...] [--flag X Y {none,unsure,sure} ...]
                   [--reveal] [--verbose]

Actions run in command-line order. Without any --open, (0, 0) is opened
after the flags. Defaults to a 10x10 board with 25 mines.
"""
import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

sys.path.insert(0, str(Path(__file__).parent / "src"))

from minesweeper import (  # noqa: E402
    BoardConfig,
    Flag,
    MinesweeperError,
    Point,
    new_game,
    open_cell,
    render,
    set_flag,
)
from minesweeper.serialize import dumps  # noqa: E402

logger = logging.getLogger(__name__)

Action = Union[Tuple[str, Point], Tuple[str, Point, Flag]]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Minesweeper engine demo")
    parser.add_argument("--width", type=int, default=10, help="Board width")
    parser.add_argument("--height", type=int, default=10, help="Board height")
    parser.add_argument("--mines", type=int, default=25, help="Number of mines")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--open",
        dest="actions",
        nargs=2,
        type=int,
        action="append",
        metavar=("X", "Y"),
        help="Open the cell at column X, row Y (repeatable)",
    )
    parser.add_argument(
        "--flag",
        dest="actions",
        nargs=3,
        action="append",
        metavar=("X", "Y", "FLAG"),
        help="Set FLAG (none, unsure, sure) on column X, row Y (repeatable)",
    )
    parser.add_argument(
        "--reveal", action="store_true", help="Print the full board as JSON"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def parse_actions(raw: Optional[List[Sequence]]) -> List[Action]:
    """
    Turn ``--open``/``--flag`` values into actions, keeping their order.

    Raises:
        KeyError: If a flag name is unknown.
        ValueError: If a coordinate is not an integer.
    """
    actions: List[Action] = []
    for values in raw or []:
        if len(values) == 2:
            x, y = values
            actions.append(("open", (int(x), int(y))))
        else:
            x, y, name = values
            actions.append(("flag", (int(x), int(y)), Flag[name.upper()]))
    if not any(action[0] == "open" for action in actions):
        actions.append(("open", (0, 0)))
    return actions


def main(argv: Optional[List[str]] = None) -> int:
    """Run the demo and return the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = BoardConfig(args.width, args.height, args.mines)
        rng = random.Random(args.seed)
        state = new_game(config, rng)

        for action in parse_actions(args.actions):
            if action[0] == "open":
                state = open_cell(state, action[1])
            else:
                state = set_flag(state, action[1], action[2])
    except (MinesweeperError, KeyError, ValueError) as error:
        logger.error("Invalid request: %s", error)
        return 2

    print(render(state))
    print(f"\nStatus: {state.status.name}")
    if args.reveal:
        print(dumps(state, reveal=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
