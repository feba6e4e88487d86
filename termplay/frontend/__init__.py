"""
Frontend Package
================

Terminal presentation and the game sessions that drive the engines.
"""

from termplay.frontend.view import Command, View
from termplay.frontend.session import GAMES, BoardStores, SessionResult, run_game

__all__ = ["Command", "View", "GAMES", "BoardStores", "SessionResult", "run_game"]
