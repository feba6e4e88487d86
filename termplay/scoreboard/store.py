"""
Score Store
===========

A score board persisted to a file shared by every player on the machine.

Reads are unlocked. A commit holds an exclusive ``flock`` on the file across
re-read, insert and write-back, so concurrent sessions are totally ordered
and a record is never lost to a racing writer.

Usage:
    with ScoreStore.open(path) as store:
        shown_at = store.provisional_rank(record)   # for display only
        ...
        rank = store.commit(record.with_name(name))  # authoritative
"""

from __future__ import annotations

import fcntl
import logging
import os
from contextlib import contextmanager
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Union

from termplay.core.config_loader import GameConfig, get_config
from termplay.scoreboard.board import ScoreBoard
from termplay.scoreboard.errors import FileAccessError, ScoreIOError
from termplay.scoreboard.record import Score, record_dtype

logger = logging.getLogger(__name__)


class Period(Enum):
    """Time span a board covers."""
    WEEKLY = "weekly"
    ALL_TIME = "all-time"


def board_path(
    directory: Union[str, Path],
    game: str,
    period: Period,
    today: Optional[date] = None,
) -> Path:
    """
    Resolve the file backing a board.

    Format: {game}.scores for all-time boards and
    {game}-{ISO year}-W{ISO week}.scores for weekly boards.

    Example:
        >>> board_path("/var/games", "2048", Period.WEEKLY, date(2026, 10, 19))
        PosixPath('/var/games/2048-2026-W43.scores')
    """
    directory = Path(directory)
    if period is Period.ALL_TIME:
        return directory / f"{game}.scores"

    if today is None:
        today = date.today()
    year, week, _ = today.isocalendar()
    return directory / f"{game}-{year}-W{week:02d}.scores"


class ScoreStore:
    """
    File-backed score board.

    The file is opened (and created if needed) once and kept open for the
    store's lifetime; every access reloads the board from it.
    """

    def __init__(self, path: Union[str, Path], config: Optional[GameConfig] = None):
        """
        Initialize store. Call open() before use.

        Args:
            path: Board file.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._path = Path(path)
        self._capacity = config.scoreboard.capacity
        self._name_length = config.scoreboard.name_length
        self._record_size = record_dtype(self._name_length).itemsize
        self._file = None

    @classmethod
    def open(cls, path: Union[str, Path], config: Optional[GameConfig] = None) -> "ScoreStore":
        """Create a store and open its file."""
        store = cls(path, config)
        store.open_file()
        return store

    @property
    def path(self) -> Path:
        return self._path

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def name_length(self) -> int:
        return self._name_length

    def open_file(self) -> None:
        """
        Open the board file read/write, creating it if missing.

        Raises:
            FileAccessError: If the file or its directory cannot be created
                or opened.
        """
        if self._file is not None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self._path, os.O_RDWR | os.O_CREAT, 0o644)
            self._file = os.fdopen(fd, "r+b")
        except OSError as e:
            raise FileAccessError(self._path, e) from e
        logger.debug("opened score file %s", self._path)

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "ScoreStore":
        self.open_file()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_file(self):
        if self._file is None:
            raise ScoreIOError("read", self._path, ValueError("score file is not open"))
        return self._file

    def load(self) -> ScoreBoard:
        """
        Read the board from disk.

        Raises:
            ScoreIOError: If the read fails.
        """
        f = self._require_file()
        try:
            f.seek(0)
            data = f.read(self._capacity * self._record_size)
        except OSError as e:
            raise ScoreIOError("read", self._path, e) from e
        return ScoreBoard.from_bytes(data, self._capacity, self._name_length)

    def save(self, board: ScoreBoard) -> None:
        """
        Write the full board image back to disk.

        Raises:
            ScoreIOError: If the write fails.
        """
        f = self._require_file()
        try:
            f.seek(0)
            f.write(board.to_bytes(self._name_length))
            f.flush()
        except OSError as e:
            raise ScoreIOError("write", self._path, e) from e

    @contextmanager
    def lock(self) -> Iterator[None]:
        """
        Hold the exclusive file lock for the duration of the block.

        Blocks until the lock is available; there is no timeout.

        Raises:
            ScoreIOError: If the lock cannot be taken.
        """
        f = self._require_file()
        try:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
        except OSError as e:
            raise ScoreIOError("flock", self._path, e) from e
        try:
            yield
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def provisional_rank(self, record: Score) -> Optional[int]:
        """
        Where the record would rank right now, without the lock.

        Display only: other sessions may commit before this one does, so the
        committed rank can differ.
        """
        return self.load().insert(record)

    def commit(self, record: Score) -> Optional[int]:
        """
        Durably rank a record.

        Under the exclusive lock: re-read the board, insert, write it back.

        Args:
            record: Record to insert.

        Returns:
            Zero-based rank of the record, or None if it did not rank.
        """
        with self.lock():
            board = self.load()
            rank = board.insert(record)
            self.save(board)

        if rank is None:
            logger.info("score %d did not rank on %s", record.score, self._path)
        else:
            logger.info("score %d committed at rank %d on %s", record.score, rank + 1, self._path)
        return rank
