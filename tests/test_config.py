"""
Tests for configuration loading and validation.
"""

from pathlib import Path

import pytest
import yaml

from termplay.core.config_loader import get_config, load_config, reload_config


def _write_config(tmp_path, data):
    path = tmp_path / "game_config.yaml"
    path.write_text(yaml.safe_dump(data))
    return str(path)


class TestDefaults:
    """The bundled configuration."""

    def test_bundled_values(self, config):
        """Defaults match the classic games."""
        assert config.grid.size == 4
        assert config.grid.double_spawn_odds == 10
        assert (config.snake.rows, config.snake.cols) == (24, 48)
        assert config.food.capacity == 25
        assert config.food.chance == 15
        assert config.scoreboard.capacity == 1000
        assert config.scoreboard.name_length == 32
        assert config.scoreboard.top == 15

    def test_thresholds_derived_from_arena(self, tmp_path):
        """Unset food thresholds follow the arena size."""
        path = _write_config(tmp_path, {"snake": {"rows": 10, "cols": 20}})

        config = load_config(path)

        assert config.food.ripe == 30
        assert config.food.spoil == 50
        assert config.food.mulch == 500

    def test_scores_dir_expands_home(self, config):
        """The board directory may start with ~."""
        assert "~" not in str(config.scores_dir)

    def test_with_scores_dir(self, config, tmp_path):
        """Overriding the directory keeps everything else."""
        moved = config.with_scores_dir(str(tmp_path))

        assert moved.scores_dir == Path(tmp_path)
        assert moved.scoreboard.capacity == config.scoreboard.capacity
        assert moved.food == config.food

    def test_get_config_is_cached(self):
        """get_config returns the same object until reloaded."""
        assert get_config() is get_config()
        reloaded = reload_config()
        assert get_config() is reloaded


class TestValidation:
    """Invalid files are rejected."""

    def test_missing_file(self, tmp_path):
        """A missing path raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    @pytest.mark.parametrize("data", [
        {"grid": {"size": 1}},
        {"grid": {"double_spawn_odds": 0}},
        {"snake": {"rows": 0}},
        {"snake": {"cols": 300}},
        {"food": {"ripe": 100, "spoil": 90}},
        {"food": {"capacity": 0}},
        {"scoreboard": {"name_length": 1}},
        {"scoreboard": {"top": 0}},
        {"timing": {"snake_tick_seconds": 0}},
    ])
    def test_invalid_values(self, tmp_path, data):
        """Out-of-range settings raise ValueError."""
        with pytest.raises(ValueError):
            load_config(_write_config(tmp_path, data))

    def test_empty_file_uses_defaults(self, tmp_path):
        """An empty YAML document is a valid configuration."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        config = load_config(str(path))

        assert config.grid.size == 4
