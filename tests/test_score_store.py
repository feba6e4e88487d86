"""
Tests for board files: loading, committing and concurrent writers.
"""

import multiprocessing
import time
from dataclasses import replace
from datetime import date

import numpy as np
import pytest

from termplay.scoreboard.errors import ExitStatus, FileAccessError, ScoreIOError
from termplay.scoreboard.record import Score, record_dtype
from termplay.scoreboard.store import Period, ScoreStore, board_path


def _commit_worker(path, config, points, name):
    with ScoreStore.open(path, config) as store:
        store.commit(Score.now(points, name))


def _commit_many(path, config, scores):
    with ScoreStore.open(path, config) as store:
        for points in scores:
            store.commit(Score.now(points, f"p{points}"))


@pytest.fixture
def board_file(tmp_path):
    return tmp_path / "scores" / "2048.scores"


@pytest.fixture
def store(board_file, config):
    with ScoreStore.open(board_file, config) as store:
        yield store


class TestBoardPath:
    """File naming."""

    def test_all_time(self, tmp_path):
        """All-time boards are named after the game."""
        assert board_path(tmp_path, "snake", Period.ALL_TIME) == tmp_path / "snake.scores"

    def test_weekly_uses_iso_week(self, tmp_path):
        """Weekly boards carry the ISO year and week."""
        path = board_path(tmp_path, "2048", Period.WEEKLY, date(2027, 1, 1))

        assert path.name == "2048-2026-W53.scores"


class TestLoad:
    """Reading boards that are missing, empty or short."""

    def test_open_creates_file_and_directory(self, store, board_file):
        """A missing file is created empty."""
        assert board_file.exists()
        assert len(store.load()) == 0

    def test_short_file(self, store, board_file):
        """A file holding fewer records than capacity reads as a partial board."""
        store.commit(Score.now(42, "a"))
        with open(board_file, "r+b") as f:
            f.truncate(48 + 10)

        assert store.load().scores == [42]

    def test_unopened_store(self, board_file, config):
        """Using a closed store is an I/O error."""
        store = ScoreStore(board_file, config)

        with pytest.raises(ScoreIOError):
            store.load()

    def test_unwritable_location(self, tmp_path, config):
        """A path whose directory is a regular file cannot be opened."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(FileAccessError) as info:
            ScoreStore.open(blocker / "2048.scores", config)

        assert info.value.exit_status == ExitStatus.CANTCREAT
        assert str(blocker) in str(info.value)


class TestCommit:
    """Single-writer commits."""

    def test_commit_persists(self, store, board_file, config):
        """Committed records are visible to a fresh store."""
        assert store.commit(Score.now(100, "ada")) == 0
        assert store.commit(Score.now(300, "bob")) == 0

        with ScoreStore.open(board_file, config) as other:
            board = other.load()
        assert board.scores == [300, 100]
        assert [r.name for r in board] == ["bob", "ada"]

    def test_file_holds_full_image(self, store, board_file, config):
        """A commit writes every slot."""
        store.commit(Score.now(5, "x"))

        assert board_file.stat().st_size == config.scoreboard.capacity * 48

    def test_zero_score_not_committed(self, store):
        """A zero score returns no rank."""
        assert store.commit(Score.now(0, "z")) is None
        assert len(store.load()) == 0

    def test_provisional_rank_does_not_write(self, store):
        """The provisional rank leaves the file untouched."""
        store.commit(Score.now(50))

        assert store.provisional_rank(Score.now(70)) == 0
        assert store.load().scores == [50]

    def test_committed_rank_can_differ(self, store, board_file, config):
        """Another writer between display and commit shifts the rank."""
        record = Score.now(70, "me")
        assert store.provisional_rank(record) == 0

        with ScoreStore.open(board_file, config) as other:
            other.commit(Score.now(90, "them"))

        assert store.commit(record) == 1

    def test_commit_keeps_existing_bytes(self, board_file, config):
        """Records already on the board are written back byte for byte."""
        small = replace(config, scoreboard=replace(config.scoreboard, capacity=3))
        array = np.zeros(2, dtype=record_dtype(32))
        array[0] = (1_600_000_000, 500, b"A" * 32)
        array[1] = (1_600_000_001, 300, b"Ren\xe9")
        before = array.tobytes()
        board_file.parent.mkdir(parents=True)
        board_file.write_bytes(before)

        with ScoreStore.open(board_file, small) as store:
            assert store.commit(Score.now(10, "new")) == 2
            # Full board: the image is rewritten without a new entry
            assert store.commit(Score.now(5, "low")) is None

        after = board_file.read_bytes()
        assert after[:len(before)] == before


class TestConcurrency:
    """Commits from separate processes are serialized by the file lock."""

    @pytest.mark.parametrize("order", [(500, 300), (300, 500)])
    def test_both_commits_survive(self, store, board_file, config, order):
        """Two sessions committing at once both end up on the board."""
        ctx = multiprocessing.get_context("fork")
        with store.lock():
            workers = [
                ctx.Process(target=_commit_worker, args=(board_file, config, points, str(points)))
                for points in order
            ]
            for worker in workers:
                worker.start()
                time.sleep(0.05)
            # Both workers are now waiting on the lock
            time.sleep(0.2)
            assert len(store.load()) == 0

        for worker in workers:
            worker.join(timeout=10)
            assert worker.exitcode == 0

        board = store.load()
        assert board.scores == [500, 300]
        assert [r.name for r in board] == ["500", "300"]

    def test_many_writers(self, store, board_file, config):
        """No record is lost under contention."""
        ctx = multiprocessing.get_context("fork")
        batches = [list(range(1 + 10 * i, 11 + 10 * i)) for i in range(6)]

        workers = [
            ctx.Process(target=_commit_many, args=(board_file, config, batch))
            for batch in batches
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join(timeout=30)
            assert worker.exitcode == 0

        assert store.load().scores == sorted(range(1, 61), reverse=True)
