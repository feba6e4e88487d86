"""
Tests for game sessions driven by a scripted view.
"""

from dataclasses import replace
from datetime import date

import pytest

from termplay.core.rules import REASON_QUIT, REASON_WALL
from termplay.core.state_snapshot import GridSnapshot, SnakeSnapshot
from termplay.frontend.session import BoardStores, record_score, run_game
from termplay.frontend.view import Command
from termplay.scoreboard.record import Score

TODAY = date(2026, 10, 19)


class ScriptedView:
    """
    Headless view replaying canned input.

    ``polls`` feeds poll_input (None once exhausted) and ``keys`` feeds
    wait_input (OTHER once exhausted).
    """

    def __init__(self, keys=(), polls=(), name="ada"):
        self.keys = list(keys)
        self.polls = list(polls)
        self.name = name
        self.draws = []
        self.boards = []
        self.name_requests = 0
        self.drains = 0

    def draw(self, state):
        self.draws.append(state)

    def poll_input(self):
        return self.polls.pop(0) if self.polls else None

    def wait_input(self):
        return self.keys.pop(0) if self.keys else Command.OTHER

    def drain_input(self):
        self.drains += 1

    def choose(self, title, options):
        return 0

    def show_board(self, layout, footer=()):
        self.boards.append((layout, list(footer)))

    def read_name(self, layout, max_length):
        self.name_requests += 1
        return self.name


class FakeClock:
    def __init__(self):
        self.sleeps = []

    def __call__(self, seconds):
        self.sleeps.append(seconds)


@pytest.fixture
def stores_for(scores_config):
    opened = []

    def _open(game, config=scores_config):
        stores = BoardStores.open(game, config, TODAY)
        opened.append(stores)
        return stores

    yield _open
    for stores in opened:
        stores.close()


class Test2048Session:
    """Input-driven sessions."""

    def test_play_and_record(self, scores_config, stores_for, last_choice_rng):
        """A scored game is named and committed to both boards."""
        view = ScriptedView(keys=[Command.LEFT, Command.OTHER, Command.QUIT])
        stores = stores_for("2048")

        result = run_game("2048", view, scores_config, stores, last_choice_rng)

        assert result.score == 4
        assert result.reason == REASON_QUIT
        assert result.name == "ada"
        assert (result.weekly_rank, result.all_time_rank) == (0, 0)
        assert stores.weekly.load()[0] == stores.all_time.load()[0]
        assert stores.all_time.load()[0].name == "ada"

    def test_draws_every_turn(self, scores_config, stores_for, last_choice_rng):
        """The board is redrawn before each key."""
        view = ScriptedView(keys=[Command.UP, Command.QUIT])

        run_game("2048", view, scores_config, stores_for("2048"), last_choice_rng)

        assert len(view.draws) == 2
        assert all(isinstance(state, GridSnapshot) for state in view.draws)

    def test_zero_score_not_named(self, scores_config, stores_for, last_choice_rng):
        """Quitting at once ranks nowhere and asks for no name."""
        view = ScriptedView(keys=[Command.QUIT])
        stores = stores_for("2048")

        result = run_game("2048", view, scores_config, stores, last_choice_rng)

        assert result.score == 0
        assert view.name_requests == 0
        assert result.weekly_rank is None and result.all_time_rank is None
        assert len(stores.weekly.load()) == 0
        assert len(view.boards) == 1


class TestSnakeSession:
    """Real-time sessions."""

    def test_runs_into_wall(self, scores_config, stores_for, last_choice_rng):
        """With no input the snake hits the right wall."""
        view = ScriptedView()
        clock = FakeClock()

        result = run_game("snake", view, scores_config, stores_for("snake"), last_choice_rng, clock)

        assert result.reason == REASON_WALL
        assert result.score == 0
        assert len(clock.sleeps) == 24
        assert clock.sleeps[0] == scores_config.timing.snake_tick_seconds
        assert len(view.draws) == 25
        assert all(isinstance(state, SnakeSnapshot) for state in view.draws)

    def test_steering_and_quit(self, scores_config, stores_for, last_choice_rng):
        """Polled commands steer the snake and can quit."""
        view = ScriptedView(polls=[Command.DOWN, None, Command.QUIT])

        result = run_game("snake", view, scores_config, stores_for("snake"), last_choice_rng, FakeClock())

        assert result.reason == REASON_QUIT
        assert view.draws[-1].head == (14, 25)

    def test_direction_keys_do_not_skip_board(self, scores_config, stores_for, last_choice_rng):
        """Held arrow keys after the crash are discarded."""
        view = ScriptedView(keys=[Command.LEFT, Command.RIGHT, Command.SELECT, Command.UP])

        run_game("snake", view, scores_config, stores_for("snake"), last_choice_rng, FakeClock())

        assert view.drains == 1
        # LEFT and RIGHT are skipped, SELECT leaves the game and UP the board
        assert view.keys == []
        assert len(view.boards) == 1


class TestRecordScore:
    """Posting a score to the boards."""

    def test_weekly_only(self, scores_config, stores_for):
        """A score too low for a full all-time board still makes the weekly one."""
        small = replace(scores_config, scoreboard=replace(scores_config.scoreboard, capacity=2))
        stores = stores_for("snake", small)
        stores.all_time.commit(Score.now(100, "x"))
        stores.all_time.commit(Score.now(90, "y"))
        view = ScriptedView(name="low")

        name, weekly_rank, all_time_rank = record_score(view, stores, 5, small)

        assert (name, weekly_rank, all_time_rank) == ("low", 0, None)
        assert stores.all_time.load().scores == [100, 90]
        layout, footer = view.boards[0]
        assert footer == []
        assert layout.cursor_row == 2

    def test_all_time_rank_in_footer(self, scores_config, stores_for):
        """The all-time rank is shown under the weekly board."""
        stores = stores_for("2048")
        stores.all_time.commit(Score.now(100, "x"))
        view = ScriptedView()

        record_score(view, stores, 50, scores_config)

        assert view.boards[0][1] == ["All-time rank: 2"]

    def test_name_is_sanitized(self, scores_config, stores_for):
        """Control characters never reach the file."""
        stores = stores_for("2048")
        view = ScriptedView(name="a\tb")

        name, _, _ = record_score(view, stores, 7, scores_config)

        assert name == "a b"
        assert stores.weekly.load()[0].name == "a b"


def test_unknown_game(scores_config, stores_for):
    """Only the bundled games can be played."""
    with pytest.raises(ValueError):
        run_game("tetris", ScriptedView(), scores_config, stores_for("2048"))
