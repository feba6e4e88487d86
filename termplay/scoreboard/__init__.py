"""
Scoreboard Package
==================

Durable, rank-ordered high-score boards shared by all games.

Main exports:
- Score: one board entry
- ScoreBoard: in-memory ranked board
- ScoreStore: file-backed board with locked commits
- Period, board_path: weekly and all-time board files
"""

from termplay.scoreboard.errors import (
    ExitStatus,
    ScoreboardError,
    FileAccessError,
    ScoreIOError,
    SoftwareError,
)
from termplay.scoreboard.record import Score, sanitize_name
from termplay.scoreboard.board import ScoreBoard
from termplay.scoreboard.store import Period, ScoreStore, board_path
from termplay.scoreboard.report import board_layout, print_report, report_lines

__all__ = [
    "ExitStatus",
    "ScoreboardError",
    "FileAccessError",
    "ScoreIOError",
    "SoftwareError",
    "Score",
    "sanitize_name",
    "ScoreBoard",
    "Period",
    "ScoreStore",
    "board_path",
    "board_layout",
    "print_report",
    "report_lines",
]
