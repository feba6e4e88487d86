"""
termplay Core - The game simulations.

This module provides the two deterministic engines and their supporting
systems (configuration, randomness, scoring, rules).

Main exports:
- GridEngine: 2048 slide/merge state machine
- SnakeEngine: tick-driven snake and food simulation
- RandomSource: injectable, seedable randomness
- GameConfig: Configuration loaded from game_config.yaml
"""

from termplay.core.config_loader import GameConfig, load_config, get_config
from termplay.core.rng import RandomSource
from termplay.core.bounded import BoundedSequence
from termplay.core.rules import Direction, Freshness, FoodRules, TerminationResult
from termplay.core.scoring import ScoreEvent, ScoreTracker
from termplay.core.grid_engine import GridEngine
from termplay.core.snake_engine import FoodItem, SnakeEngine
from termplay.core.state_snapshot import GridSnapshot, SnakeSnapshot

__all__ = [
    "GameConfig",
    "load_config",
    "get_config",
    "RandomSource",
    "BoundedSequence",
    "Direction",
    "Freshness",
    "FoodRules",
    "TerminationResult",
    "ScoreEvent",
    "ScoreTracker",
    "GridEngine",
    "FoodItem",
    "SnakeEngine",
    "GridSnapshot",
    "SnakeSnapshot",
]
