"""
Board Report
============

Formats board tables, both for the read-only report printed by ``-t`` and
for the scoreboard screen shown after a game.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, TextIO

from termplay.scoreboard.board import ScoreBoard
from termplay.scoreboard.errors import SoftwareError
from termplay.scoreboard.record import Score

RANK_WIDTH = 4
SCORE_WIDTH = 10
NAME_WIDTH = 31
DATE_WIDTH = 10
TABLE_WIDTH = RANK_WIDTH + 2 + SCORE_WIDTH + 2 + NAME_WIDTH + 2 + DATE_WIDTH
NAME_COLUMN = RANK_WIDTH + 2 + SCORE_WIDTH + 2
TITLE = "TOP SCORES"


def format_date(timestamp: int) -> str:
    """
    Local calendar date of a record.

    Raises:
        SoftwareError: If the timestamp cannot be converted to local time.
    """
    try:
        return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError) as e:
        raise SoftwareError("localtime", e) from e


def format_score(index: int, record: Score) -> str:
    """One table row: rank, score, name and date."""
    return (
        f"{index + 1:>{RANK_WIDTH}}. "
        f"{record.score:>{SCORE_WIDTH}}  "
        f"{record.display_name:<{NAME_WIDTH}}  "
        f"{format_date(record.date):>{DATE_WIDTH}}"
    )


def title_line(title: str = TITLE) -> str:
    """Title roughly centred over the table."""
    return title.rjust(TABLE_WIDTH // 2 + (len(title) + 3) // 2)


def separator_line() -> str:
    return "=" * TABLE_WIDTH


def report_lines(board: ScoreBoard, title: str = TITLE) -> List[str]:
    """Title, separator and every occupied row."""
    lines = [title_line(title), separator_line()]
    for i, record in enumerate(board):
        lines.append(format_score(i, record))
    return lines


def print_report(board: ScoreBoard, out: Optional[TextIO] = None, title: str = TITLE) -> None:
    """Print the read-only report."""
    if out is None:
        out = sys.stdout
    for line in report_lines(board, title):
        print(line, file=out)


@dataclass(frozen=True)
class BoardLine:
    """A line of the scoreboard screen, relative to the table's top."""
    row: int
    text: str
    highlighted: bool = False


@dataclass(frozen=True)
class BoardLayout:
    """Everything the scoreboard screen draws."""
    lines: List[BoardLine]
    cursor_row: Optional[int]        # Row of the player's record, if ranked


def board_layout(
    board: ScoreBoard,
    new_index: Optional[int],
    top: int = 15,
    title: str = TITLE,
) -> BoardLayout:
    """
    Lay out the scoreboard screen.

    The first ``top`` records are listed. When the player's record ranks
    lower than that, a second rule follows and a window around it is shown:
    two records above, the record itself, and up to two below.

    Args:
        board: Board including the player's record.
        new_index: Index of the player's record, or None if not ranked.
        top: Number of rows listed from the top.
        title: Table title.

    Returns:
        BoardLayout with lines and the row to park the cursor on.
    """
    offset = (TABLE_WIDTH - len(title) + 1) // 2
    lines = [
        BoardLine(0, " " * offset + title),
        BoardLine(1, separator_line()),
    ]
    cursor_row: Optional[int] = None

    for i in range(min(top, len(board))):
        highlighted = i == new_index
        if highlighted:
            cursor_row = 2 + i
        lines.append(BoardLine(2 + i, format_score(i, board[i]), highlighted))

    if new_index is None or new_index < top:
        return BoardLayout(lines=lines, cursor_row=cursor_row)

    cursor_row = top + 5
    lines.append(BoardLine(cursor_row - 3, separator_line()))
    lines.append(BoardLine(cursor_row - 2, format_score(new_index - 2, board[new_index - 2])))
    lines.append(BoardLine(cursor_row - 1, format_score(new_index - 1, board[new_index - 1])))
    lines.append(BoardLine(cursor_row, format_score(new_index, board[new_index]), True))
    for below in (1, 2):
        index = new_index + below
        if index < len(board):
            lines.append(BoardLine(cursor_row + below, format_score(index, board[index])))
    return BoardLayout(lines=lines, cursor_row=cursor_row)
