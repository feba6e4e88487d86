"""
Grid Engine
===========

2048 tile slide/merge state machine.

Cells hold tile ranks: 0 is empty and rank r is displayed as 2^r. Every move
is slide, merge, slide along one axis. The engine never ends the game on its
own; a stuck board simply stops accepting moves until the player quits.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from termplay.core.config_loader import GameConfig, get_config
from termplay.core.rng import RandomSource
from termplay.core.rules import Direction, REASON_QUIT, TerminationResult
from termplay.core.scoring import ScoreEvent, ScoreTracker
from termplay.core.state_snapshot import GridSnapshot, freeze_ranks

logger = logging.getLogger(__name__)


class GridEngine:
    """
    Main 2048 simulation class.

    One move = slide toward the edge, merge equal neighbours once, slide again.
    The caller spawns a new tile after every move that changed the board.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[RandomSource] = None,
    ):
        """
        Initialize engine with an empty board.

        Args:
            config: Game configuration. Uses default if None.
            rng: Random source for spawning. Unseeded if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._size = config.grid.size
        self._double_odds = config.grid.double_spawn_odds
        self._rng = rng if rng is not None else RandomSource()
        self._scorer = ScoreTracker()

        self._grid = np.zeros((self._size, self._size), dtype=np.uint8)
        self._moves: int = 0
        self._last_merges: List[ScoreEvent] = []
        self._merged = np.zeros((self._size, self._size), dtype=bool)
        self._termination = TerminationResult.none()

    @property
    def grid(self) -> np.ndarray:
        """Rank matrix (live view; mutate only through the engine)."""
        return self._grid

    @property
    def size(self) -> int:
        return self._size

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def moves(self) -> int:
        """Number of moves that changed the board."""
        return self._moves

    @property
    def last_merges(self) -> List[ScoreEvent]:
        """Merges performed by the most recent move."""
        return list(self._last_merges)

    @property
    def last_merged(self) -> np.ndarray:
        """Mask of cells holding a tile created by a merge in the most recent move."""
        return self._merged.copy()

    @property
    def is_over(self) -> bool:
        return self._termination.terminated

    @property
    def termination_reason(self) -> str:
        return self._termination.reason

    def load(self, ranks) -> None:
        """
        Replace the board contents.

        Args:
            ranks: size x size nested sequence or array of ranks.
        """
        grid = np.asarray(ranks, dtype=np.uint8)
        if grid.shape != (self._size, self._size):
            raise ValueError(f"expected a {self._size}x{self._size} grid, got {grid.shape}")
        self._grid = grid.copy()
        self._merged[:] = False

    def start(self) -> None:
        """Begin a game: two tiles on an empty board."""
        self.spawn()
        self.spawn()

    @staticmethod
    def _lines(cells: np.ndarray, direction: Direction) -> np.ndarray:
        """
        View of a board-shaped array with one line per row, index 0 at the
        leading edge.

        Writes through the view land in ``cells``.
        """
        if direction is Direction.LEFT:
            return cells
        if direction is Direction.RIGHT:
            return cells[:, ::-1]
        if direction is Direction.UP:
            return cells.T
        return cells.T[:, ::-1]

    @staticmethod
    def _slide(line: np.ndarray, merged: np.ndarray) -> None:
        occupied = line != 0
        tiles = line[occupied]
        flags = merged[occupied]
        line[:] = 0
        merged[:] = False
        line[:len(tiles)] = tiles
        merged[:len(flags)] = flags

    def _merge(self, line: np.ndarray, merged: np.ndarray) -> None:
        for i in range(len(line) - 1):
            rank = int(line[i])
            if not rank or rank != int(line[i + 1]):
                continue
            line[i] = rank + 1
            line[i + 1] = 0
            merged[i] = True
            self._last_merges.append(self._scorer.apply_merge(rank + 1))

    def move(self, direction: Direction) -> bool:
        """
        Slide, merge and slide toward ``direction``.

        Args:
            direction: Edge the tiles move toward.

        Returns:
            True if any cell changed.
        """
        before = self._grid.copy()
        self._last_merges = []
        self._merged[:] = False

        lines = self._lines(self._grid, direction)
        flags = self._lines(self._merged, direction)
        for line, merged in zip(lines, flags):
            self._slide(line, merged)
            self._merge(line, merged)
            self._slide(line, merged)

        changed = not np.array_equal(before, self._grid)
        if changed:
            self._moves += 1
        return changed

    def spawn(self) -> Tuple[int, int, int]:
        """
        Place a new tile on a uniformly random empty cell.

        Returns:
            (y, x, rank) of the new tile.

        Raises:
            ValueError: If the board has no empty cell.
        """
        empty = np.flatnonzero(self._grid == 0)
        if empty.size == 0:
            raise ValueError("cannot spawn on a full grid")

        index = int(self._rng.choice(empty))
        rank = 2 if self._rng.one_in(self._double_odds) else 1
        y, x = divmod(index, self._size)
        self._grid[y, x] = rank
        return (y, x, rank)

    def step(self, direction: Direction) -> bool:
        """
        Apply one player move: spawn a tile if the board changed.

        Returns:
            True if the board changed.
        """
        if self.is_over:
            return False
        changed = self.move(direction)
        if changed:
            self.spawn()
        return changed

    def has_moves(self) -> bool:
        """True if some direction would change the board (informational only)."""
        grid = self._grid
        if not grid.all():
            return True
        return bool((grid[:, 1:] == grid[:, :-1]).any() or (grid[1:, :] == grid[:-1, :]).any())

    def quit(self) -> None:
        """End the game at the player's request."""
        if not self.is_over:
            self._termination = TerminationResult.game_over(REASON_QUIT)
            logger.info("2048 ended with score %d after %d moves", self.score, self._moves)

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(
            ranks=freeze_ranks(self._grid),
            score=self.score,
            moves=self._moves,
            terminated=self.is_over,
            termination_reason=self.termination_reason,
        )
