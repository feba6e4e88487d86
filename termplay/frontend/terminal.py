"""
Terminal View
=============

curses presentation of both games, the menu and the scoreboard screen.

Controls:
    - h/j/k/l or arrow keys: Move
    - q: Quit the current game
"""

from __future__ import annotations

import curses
from typing import Optional, Sequence

from termplay.core.config_loader import GameConfig
from termplay.core.rules import Freshness
from termplay.core.state_snapshot import GridSnapshot, SnakeSnapshot
from termplay.frontend.session import END_MESSAGES
from termplay.frontend.view import CHAR_COMMANDS, Command, ViewState
from termplay.scoreboard.report import NAME_COLUMN, BoardLayout

KEY_COMMANDS = {
    curses.KEY_LEFT: Command.LEFT,
    curses.KEY_DOWN: Command.DOWN,
    curses.KEY_UP: Command.UP,
    curses.KEY_RIGHT: Command.RIGHT,
    curses.KEY_ENTER: Command.SELECT,
}

# 2048 layout
TILE_HEIGHT = 3
TILE_WIDTH = 7
GRID_Y = 2
GRID_X = 2
TILE_COLORS = 12
EMPTY_PAIR = 13

# Snake colour pairs
GREEN_PAIR = 14
YELLOW_PAIR = 15
RED_PAIR = 16

# Scoreboard layout
BOARD_Y = 0
BOARD_X = 2


def map_key(key: int) -> Command:
    """Translate a curses key code into a command."""
    if key in KEY_COMMANDS:
        return KEY_COMMANDS[key]
    if 0 <= key < 256:
        return CHAR_COMMANDS.get(chr(key), Command.OTHER)
    return Command.OTHER


class CursesView:
    """
    View over a curses screen.

    Expects to run inside ``curses.wrapper``, which restores the terminal on
    exit.
    """

    def __init__(self, screen, config: GameConfig):
        self._screen = screen
        self._config = config
        self._init_screen()

    def _init_screen(self) -> None:
        curses.noecho()
        curses.cbreak()
        self._set_cursor(0)
        self._screen.keypad(True)
        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            self._init_colors()

    def _init_colors(self) -> None:
        bright = 8 if curses.COLORS > 8 else 0
        backgrounds = [
            curses.COLOR_RED, curses.COLOR_GREEN, curses.COLOR_YELLOW,
            curses.COLOR_BLUE, curses.COLOR_MAGENTA, curses.COLOR_CYAN,
        ]
        for i, color in enumerate(backgrounds):
            curses.init_pair(1 + i, curses.COLOR_WHITE, color)
            curses.init_pair(7 + i, curses.COLOR_WHITE, bright + color)
        curses.init_pair(EMPTY_PAIR, curses.COLOR_WHITE, curses.COLOR_BLACK)
        curses.init_pair(GREEN_PAIR, curses.COLOR_GREEN, -1)
        curses.init_pair(YELLOW_PAIR, curses.COLOR_YELLOW, -1)
        curses.init_pair(RED_PAIR, curses.COLOR_RED, -1)

    @staticmethod
    def _set_cursor(visibility: int) -> None:
        try:
            curses.curs_set(visibility)
        except curses.error:
            pass  # terminal cannot hide the cursor

    def _put(self, y: int, x: int, text: str, attr: int = curses.A_NORMAL) -> None:
        try:
            self._screen.addstr(y, x, text, attr)
        except curses.error:
            pass  # clipped by a small terminal

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def poll_input(self) -> Optional[Command]:
        self._screen.nodelay(True)
        key = self._screen.getch()
        if key == -1:
            return None
        return map_key(key)

    def wait_input(self) -> Command:
        self._screen.nodelay(False)
        return map_key(self._screen.getch())

    def drain_input(self) -> None:
        self._screen.nodelay(True)
        while self._screen.getch() != -1:
            pass
        self._screen.nodelay(False)

    # ------------------------------------------------------------------
    # Games
    # ------------------------------------------------------------------

    def draw(self, state: ViewState) -> None:
        if isinstance(state, GridSnapshot):
            self._draw_grid(state)
        elif isinstance(state, SnakeSnapshot):
            self._draw_snake(state)
        else:
            raise TypeError(f"cannot draw {type(state).__name__}")
        self._screen.refresh()

    def _draw_grid(self, state: GridSnapshot) -> None:
        score_x = GRID_X + state.size * TILE_WIDTH - 10
        self._screen.erase()
        self._put(0, score_x, f"{state.score:>10}")
        for y in range(state.size):
            for x in range(state.size):
                self._draw_tile(state, y, x)

    def _draw_tile(self, state: GridSnapshot, y: int, x: int) -> None:
        rank = int(state.ranks[y, x])
        if rank:
            attr = curses.A_BOLD | curses.color_pair(1 + (rank - 1) % TILE_COLORS)
            label = str(state.tile_value(y, x))
        else:
            attr = curses.color_pair(EMPTY_PAIR)
            label = "."

        top = GRID_Y + TILE_HEIGHT * y
        left = GRID_X + TILE_WIDTH * x
        pad_left = (TILE_WIDTH - len(label) + 1) // 2
        pad_right = TILE_WIDTH - len(label) - pad_left
        self._put(top, left, " " * TILE_WIDTH, attr)
        self._put(top + 1, left, " " * pad_left + label + " " * max(pad_right, 0), attr)
        self._put(top + 2, left, " " * TILE_WIDTH, attr)

    def _draw_snake(self, state: SnakeSnapshot) -> None:
        rows, cols = state.rows, state.cols
        self._screen.erase()

        try:
            self._screen.hline(rows, 0, curses.ACS_HLINE, cols)
            self._screen.vline(0, cols, curses.ACS_VLINE, rows)
            self._screen.addch(rows, cols, curses.ACS_LRCORNER)
        except curses.error:
            pass  # clipped by a small terminal

        self._put(0, cols + 2, str(state.score))
        if state.terminated:
            self._put(2, cols + 2, END_MESSAGES.get(state.termination_reason, state.termination_reason))
            self._put(3, cols + 2, "Press any key to")
            self._put(4, cols + 2, "view the scoreboard.")

        for item in state.food:
            y, x = item.position
            if item.freshness is Freshness.SPOILED:
                self._put(y, x, "*", curses.color_pair(RED_PAIR))
            elif item.freshness is Freshness.RIPE:
                self._put(y, x, "%", curses.color_pair(YELLOW_PAIR))
            else:
                self._put(y, x, "&", curses.color_pair(GREEN_PAIR))

        for i, (y, x) in enumerate(state.body):
            glyph = "*" if i + 1 == len(state.body) else "#"
            self._put(y, x, glyph, curses.color_pair(YELLOW_PAIR))

        head_y, head_x = state.head
        if 0 <= head_y < rows and 0 <= head_x < cols:
            self._put(head_y, head_x, "@", curses.A_BOLD)

    # ------------------------------------------------------------------
    # Menu and scoreboard
    # ------------------------------------------------------------------

    def choose(self, title: str, options: Sequence[str]) -> Optional[int]:
        selected = 0
        while True:
            self._screen.erase()
            self._put(0, 2, title, curses.A_BOLD)
            for i, option in enumerate(options):
                attr = curses.A_REVERSE if i == selected else curses.A_NORMAL
                self._put(2 + i, 4, option, attr)
            self._put(3 + len(options), 2, "j/k to move, enter to play, q to quit")
            self._screen.refresh()

            command = self.wait_input()
            if command is Command.QUIT:
                return None
            if command is Command.SELECT:
                return selected
            if command is Command.DOWN:
                selected = (selected + 1) % len(options)
            elif command is Command.UP:
                selected = (selected - 1) % len(options)

    def show_board(self, layout: BoardLayout, footer: Sequence[str] = ()) -> None:
        self._screen.erase()
        last_row = 0
        for line in layout.lines:
            attr = curses.A_BOLD if line.highlighted else curses.A_NORMAL
            self._put(BOARD_Y + line.row, BOARD_X, line.text, attr)
            last_row = max(last_row, line.row)
        for i, text in enumerate(footer):
            self._put(BOARD_Y + last_row + 2 + i, BOARD_X, text)
        self._screen.refresh()

    def read_name(self, layout: BoardLayout, max_length: int) -> str:
        if layout.cursor_row is not None:
            y = BOARD_Y + layout.cursor_row
            x = BOARD_X + NAME_COLUMN
        else:
            # Ranked on another board only: ask below the footer
            y = BOARD_Y + max(line.row for line in layout.lines) + 4
            self._put(y, BOARD_X, "Name: ")
            x = BOARD_X + len("Name: ")
        self._set_cursor(1)
        curses.echo()
        self._screen.nodelay(False)
        self._screen.attron(curses.A_BOLD)
        try:
            raw = self._screen.getstr(y, x, max_length)
        finally:
            self._screen.attroff(curses.A_BOLD)
            curses.noecho()
            self._set_cursor(0)
        return raw.decode("utf-8", errors="replace")
