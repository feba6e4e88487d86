"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


@dataclass(frozen=True)
class GridConfig:
    """2048 board settings."""
    size: int                    # Board is size x size cells
    double_spawn_odds: int       # New tile is rank 2 one time in N


@dataclass(frozen=True)
class SnakeConfig:
    """Snake arena geometry."""
    rows: int
    cols: int


@dataclass(frozen=True)
class FoodConfig:
    """Food lifecycle parameters."""
    capacity: int                # Maximum food items on the board
    chance: int                  # Spawn probability per tick is 1/chance
    ripe: int                    # Age above which a meal scores double
    spoil: int                   # Age above which eating ends the game
    mulch: int                   # Age above which uneaten food disappears


@dataclass(frozen=True)
class ScoreboardConfig:
    """High-score board storage."""
    capacity: int                # Records per board file
    name_length: int             # Bytes in the on-disk name buffer
    directory: str               # Where board files live
    top: int                     # Rows shown above the fold


@dataclass(frozen=True)
class TimingConfig:
    """Real-time loop settings."""
    snake_tick_seconds: float


@dataclass(frozen=True)
class GameConfig:
    """
    Complete configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    grid: GridConfig
    snake: SnakeConfig
    food: FoodConfig
    scoreboard: ScoreboardConfig
    timing: TimingConfig

    @property
    def scores_dir(self) -> Path:
        """Board directory with ``~`` expanded."""
        return Path(os.path.expanduser(self.scoreboard.directory))

    def with_scores_dir(self, directory: str) -> "GameConfig":
        """Clone with a different board directory."""
        scoreboard = ScoreboardConfig(
            capacity=self.scoreboard.capacity,
            name_length=self.scoreboard.name_length,
            directory=str(directory),
            top=self.scoreboard.top,
        )
        return GameConfig(
            grid=self.grid,
            snake=self.snake,
            food=self.food,
            scoreboard=scoreboard,
            timing=self.timing,
        )


def _parse_food(food_data: dict, snake: SnakeConfig) -> FoodConfig:
    """Parse food settings, deriving freshness thresholds from the arena size."""
    ripe = int(food_data.get("ripe", snake.rows + snake.cols))
    spoil = int(food_data.get("spoil", ripe + snake.cols))
    mulch = int(food_data.get("mulch", spoil * 10))
    return FoodConfig(
        capacity=int(food_data.get("capacity", 25)),
        chance=int(food_data.get("chance", 15)),
        ripe=ripe,
        spoil=spoil,
        mulch=mulch,
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.grid.size < 2:
        raise ValueError(f"grid.size must be at least 2, got {config.grid.size}")

    if config.grid.double_spawn_odds < 1:
        raise ValueError(
            f"grid.double_spawn_odds must be positive, got {config.grid.double_spawn_odds}"
        )

    # Positions are stored in a byte each, as in the on-screen arena
    if not (1 <= config.snake.rows <= 255 and 1 <= config.snake.cols <= 255):
        raise ValueError(
            f"snake arena must be between 1x1 and 255x255, "
            f"got {config.snake.rows}x{config.snake.cols}"
        )

    food = config.food
    if food.capacity < 1:
        raise ValueError(f"food.capacity must be positive, got {food.capacity}")
    if food.chance < 1:
        raise ValueError(f"food.chance must be positive, got {food.chance}")
    if not (0 <= food.ripe < food.spoil < food.mulch):
        raise ValueError(
            f"food thresholds must satisfy ripe < spoil < mulch, "
            f"got ripe={food.ripe} spoil={food.spoil} mulch={food.mulch}"
        )

    board = config.scoreboard
    if board.capacity < 1:
        raise ValueError(f"scoreboard.capacity must be positive, got {board.capacity}")
    if board.name_length < 2:
        raise ValueError(f"scoreboard.name_length must be at least 2, got {board.name_length}")
    if board.top < 1:
        raise ValueError(f"scoreboard.top must be positive, got {board.top}")

    if config.timing.snake_tick_seconds <= 0:
        raise ValueError(
            f"timing.snake_tick_seconds must be positive, got {config.timing.snake_tick_seconds}"
        )


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f) or {}

    grid_data = raw.get("grid", {})
    grid = GridConfig(
        size=int(grid_data.get("size", 4)),
        double_spawn_odds=int(grid_data.get("double_spawn_odds", 10)),
    )

    snake_data = raw.get("snake", {})
    snake = SnakeConfig(
        rows=int(snake_data.get("rows", 24)),
        cols=int(snake_data.get("cols", 48)),
    )

    food = _parse_food(raw.get("food", {}), snake)

    board_data = raw.get("scoreboard", {})
    scoreboard = ScoreboardConfig(
        capacity=int(board_data.get("capacity", 1000)),
        name_length=int(board_data.get("name_length", 32)),
        directory=str(board_data.get("directory", "~/.local/share/termplay")),
        top=int(board_data.get("top", 15)),
    )

    timing_data = raw.get("timing", {})
    timing = TimingConfig(
        snake_tick_seconds=float(timing_data.get("snake_tick_seconds", 0.15)),
    )

    config = GameConfig(
        grid=grid,
        snake=snake,
        food=food,
        scoreboard=scoreboard,
        timing=timing,
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
