"""
Shared test fixtures.
"""

import pytest

from termplay.core.config_loader import load_config
from termplay.core.rng import RandomSource


class LastChoiceRandom(RandomSource):
    """
    Always draws the largest value below the bound.

    one_in() is then never true, so snake food only appears when the board
    has none, on the last free cell in row-major order.
    """

    def below(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return bound - 1


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def last_choice_rng():
    return LastChoiceRandom()


@pytest.fixture
def scores_config(config, tmp_path):
    """Default configuration with boards under a temporary directory."""
    return config.with_scores_dir(str(tmp_path / "scores"))
