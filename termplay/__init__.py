"""
termplay Package
================

Terminal minigames (2048 and Snake) behind a shared menu, with durable
high-score boards shared by every player on the machine.

- core: game engines, configuration, randomness, scoring and rules
- scoreboard: ranked record store with locked commits
- frontend: curses view, game sessions and the command line

All tunable parameters are in game_config.yaml.
"""

__version__ = "1.0.0"
