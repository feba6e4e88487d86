"""
Game Sessions
=============

Drives one game from start to the scoreboard.

Usage:
    stores = BoardStores.open("2048", config)
    result = run_game("2048", view, config, stores, RandomSource(seed))
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Tuple

from termplay.core.config_loader import GameConfig
from termplay.core.grid_engine import GridEngine
from termplay.core.rng import RandomSource
from termplay.core.rules import REASON_QUIT, REASON_SELF, REASON_SPOILED, REASON_WALL
from termplay.core.snake_engine import SnakeEngine
from termplay.frontend.view import DIRECTIONS, Command, View
from termplay.scoreboard.record import Score, sanitize_name
from termplay.scoreboard.report import board_layout
from termplay.scoreboard.store import Period, ScoreStore, board_path

logger = logging.getLogger(__name__)

GAMES = ("2048", "snake")

END_MESSAGES = {
    REASON_SPOILED: "You ate spoiled food!",
    REASON_WALL: "You eated the wall D:",
    REASON_SELF: "You eated yourself :(",
    REASON_QUIT: "You are satisfied.",
}


@dataclass
class SessionResult:
    """Outcome of one game."""
    game: str
    score: int
    reason: str
    name: str = ""
    weekly_rank: Optional[int] = None       # Zero-based committed ranks
    all_time_rank: Optional[int] = None


class BoardStores:
    """The weekly and all-time stores of one game."""

    def __init__(self, weekly: ScoreStore, all_time: ScoreStore):
        self.weekly = weekly
        self.all_time = all_time

    @classmethod
    def open(cls, game: str, config: GameConfig, today: Optional[date] = None) -> "BoardStores":
        """Open (creating if needed) both board files of a game."""
        directory = config.scores_dir
        weekly = ScoreStore.open(board_path(directory, game, Period.WEEKLY, today), config)
        try:
            all_time = ScoreStore.open(board_path(directory, game, Period.ALL_TIME), config)
        except Exception:
            weekly.close()
            raise
        return cls(weekly, all_time)

    def close(self) -> None:
        self.weekly.close()
        self.all_time.close()

    def __enter__(self) -> "BoardStores":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def play_2048(view: View, engine: GridEngine) -> int:
    """
    Input-driven 2048 loop.

    Returns:
        Final score.
    """
    engine.start()
    while True:
        view.draw(engine.snapshot())
        command = view.wait_input()
        if command is Command.QUIT:
            engine.quit()
            return engine.score
        direction = DIRECTIONS.get(command)
        if direction is not None:
            engine.step(direction)


def play_snake(
    view: View,
    engine: SnakeEngine,
    tick_seconds: float,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Real-time snake loop: tick, draw, sleep, poll.

    Returns:
        Final score.
    """
    while not engine.is_over:
        engine.tick()
        view.draw(engine.snapshot())
        sleep(tick_seconds)
        command = view.poll_input()
        if command is Command.QUIT:
            engine.quit()
        elif command in DIRECTIONS:
            engine.steer(DIRECTIONS[command])

    view.draw(engine.snapshot())

    # Arrow keys still held from play must not skip the scoreboard
    view.drain_input()
    command = view.wait_input()
    while command in DIRECTIONS:
        command = view.wait_input()
    return engine.score


def record_score(
    view: View,
    stores: BoardStores,
    score: int,
    config: GameConfig,
) -> Tuple[str, Optional[int], Optional[int]]:
    """
    Show the weekly board with the new score and commit it.

    The ranks shown before the name is entered are provisional; the
    committed ranks are returned.

    Returns:
        (name, weekly_rank, all_time_rank); ranks are None when not ranked.
    """
    record = Score.now(score)

    weekly_board = stores.weekly.load()
    weekly_index = weekly_board.insert(record)
    all_time_index = stores.all_time.provisional_rank(record)

    layout = board_layout(weekly_board, weekly_index, config.scoreboard.top, "TOP SCORES THIS WEEK")
    footer: List[str] = []
    if all_time_index is not None:
        footer.append(f"All-time rank: {all_time_index + 1}")

    view.show_board(layout, footer)

    name = ""
    weekly_rank: Optional[int] = None
    all_time_rank: Optional[int] = None
    if weekly_index is not None or all_time_index is not None:
        max_length = config.scoreboard.name_length - 1
        name = sanitize_name(view.read_name(layout, max_length), config.scoreboard.name_length)
        named = record.with_name(name)
        if weekly_index is not None:
            weekly_rank = stores.weekly.commit(named)
        if all_time_index is not None:
            all_time_rank = stores.all_time.commit(named)

    view.wait_input()
    return name, weekly_rank, all_time_rank


def run_game(
    game: str,
    view: View,
    config: GameConfig,
    stores: BoardStores,
    rng: Optional[RandomSource] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> SessionResult:
    """
    Play one game and record its score.

    Args:
        game: One of GAMES.
        view: Presentation layer.
        config: Game configuration.
        stores: Boards of this game.
        rng: Random source shared by the engine. Unseeded if None.
        sleep: Delay between snake ticks.

    Returns:
        SessionResult describing the game and its ranks.
    """
    if game == "2048":
        engine = GridEngine(config, rng)
        score = play_2048(view, engine)
    elif game == "snake":
        engine = SnakeEngine(config, rng)
        score = play_snake(view, engine, config.timing.snake_tick_seconds, sleep)
    else:
        raise ValueError(f"Unknown game: {game}")

    logger.info("%s finished: score %d (%s)", game, score, engine.termination_reason)
    name, weekly_rank, all_time_rank = record_score(view, stores, score, config)
    return SessionResult(
        game=game,
        score=score,
        reason=engine.termination_reason,
        name=name,
        weekly_rank=weekly_rank,
        all_time_rank=all_time_rank,
    )
