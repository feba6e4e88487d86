"""
View Interface
==============

What the game sessions need from a presentation layer, and the player
commands they understand.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Protocol, Sequence, Union

from termplay.core.rules import Direction
from termplay.core.state_snapshot import GridSnapshot, SnakeSnapshot
from termplay.scoreboard.report import BoardLayout


class Command(Enum):
    """Player input after key mapping."""
    LEFT = "left"
    DOWN = "down"
    UP = "up"
    RIGHT = "right"
    QUIT = "quit"
    SELECT = "select"
    OTHER = "other"       # Any other key; games ignore it


DIRECTIONS: Dict[Command, Direction] = {
    Command.LEFT: Direction.LEFT,
    Command.DOWN: Direction.DOWN,
    Command.UP: Direction.UP,
    Command.RIGHT: Direction.RIGHT,
}

# vi keys
CHAR_COMMANDS: Dict[str, Command] = {
    "h": Command.LEFT,
    "j": Command.DOWN,
    "k": Command.UP,
    "l": Command.RIGHT,
    "q": Command.QUIT,
    "\n": Command.SELECT,
    "\r": Command.SELECT,
    " ": Command.SELECT,
}


ViewState = Union[GridSnapshot, SnakeSnapshot]


class View(Protocol):
    """
    Presentation layer used by the sessions.

    Implementations must offer at least two emphasis levels so the player's
    own record stands out on the board.
    """

    def draw(self, state: ViewState) -> None: ...

    def poll_input(self) -> Optional[Command]:
        """Next pending command, or None without waiting."""
        ...

    def wait_input(self) -> Command:
        """Block until a key is pressed."""
        ...

    def drain_input(self) -> None:
        """Discard pending keys."""
        ...

    def choose(self, title: str, options: Sequence[str]) -> Optional[int]:
        """Menu selection; None if the player quit."""
        ...

    def show_board(self, layout: BoardLayout, footer: Sequence[str] = ()) -> None: ...

    def read_name(self, layout: BoardLayout, max_length: int) -> str: ...
