"""
Command Line
============

Entry point of the ``termplay`` console script.

Usage:
    termplay                          # menu
    termplay --game snake [--seed N]
    termplay -t [--game 2048] [--period weekly]
    termplay -t --scores-file path/to/board.scores
"""

from __future__ import annotations

import argparse
import curses
import logging
import sys
from typing import List, Optional

import yaml

from termplay.core.config_loader import GameConfig, load_config
from termplay.core.rng import RandomSource
from termplay.frontend.session import GAMES, BoardStores, run_game
from termplay.frontend.terminal import CursesView
from termplay.scoreboard.errors import ExitStatus, ScoreboardError
from termplay.scoreboard.report import print_report
from termplay.scoreboard.store import Period, ScoreStore, board_path

logger = logging.getLogger(__name__)

PROG = "termplay"


class _ArgumentParser(argparse.ArgumentParser):
    """Reports usage errors with the EX_USAGE status."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(ExitStatus.USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        description="Terminal minigames with shared high-score boards.",
    )
    parser.add_argument(
        "--game",
        choices=GAMES,
        default=None,
        help="Game to play (shows a menu if omitted)"
    )
    parser.add_argument(
        "-t", "--table",
        action="store_true",
        help="Print the top scores and exit"
    )
    parser.add_argument(
        "--period",
        choices=[p.value for p in Period],
        default=Period.ALL_TIME.value,
        help="Board printed by -t"
    )
    parser.add_argument(
        "--scores-file",
        type=str,
        default=None,
        help="Board file printed by -t (overrides --game/--period)"
    )
    parser.add_argument(
        "--scores-dir",
        type=str,
        default=None,
        help="Directory holding the board files"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to game_config.yaml (uses the bundled one if not specified)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible game"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Write a log to this file"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug messages"
    )
    return parser


def configure_logging(log_file: Optional[str], verbose: bool) -> None:
    """Log to a file only; the terminal belongs to curses."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def print_table(args: argparse.Namespace, config: GameConfig) -> None:
    if args.scores_file:
        path = args.scores_file
    else:
        path = board_path(config.scores_dir, args.game or GAMES[0], Period(args.period))
    with ScoreStore.open(path, config) as store:
        print_report(store.load())


def _play(screen, args: argparse.Namespace, config: GameConfig) -> None:
    view = CursesView(screen, config)

    game = args.game
    if game is None:
        choice = view.choose("termplay", GAMES)
        if choice is None:
            return
        game = GAMES[choice]

    with BoardStores.open(game, config) as stores:
        result = run_game(game, view, config, stores, RandomSource(args.seed))
    logger.info(
        "%s session done: score %d, weekly rank %s, all-time rank %s",
        result.game, result.score, result.weekly_rank, result.all_time_rank,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.verbose)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"{PROG}: {e}", file=sys.stderr)
        return ExitStatus.USAGE
    if args.scores_dir:
        config = config.with_scores_dir(args.scores_dir)

    try:
        if args.table:
            print_table(args, config)
        else:
            curses.wrapper(_play, args, config)
    except ScoreboardError as e:
        logger.error("%s", e)
        print(f"{PROG}: {e}", file=sys.stderr)
        return e.exit_status
    except KeyboardInterrupt:
        return ExitStatus.OK

    return ExitStatus.OK


if __name__ == "__main__":
    sys.exit(main())
