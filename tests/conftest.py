"""
Pytest fixtures for Hirn tests.
"""

import os
import random

import pytest

# Headless charts for the plot tests
os.environ.setdefault("MPLBACKEND", "Agg")

from game.board import Board
from game.ruleset import CLASSIC_RULES, DEFAULT_RULES
from game.timer import StepClock


@pytest.fixture
def clock() -> StepClock:
    """Manually advanced millisecond clock starting at 0."""
    return StepClock()


@pytest.fixture
def rng() -> random.Random:
    """Seeded entropy source."""
    return random.Random(1234)


@pytest.fixture
def hirn_rules() -> dict:
    """4 colors, 4 pegs, no repetition, 99 attempts, 90 minutes."""
    return DEFAULT_RULES


@pytest.fixture
def classic_rules() -> dict:
    """6 colors, 4 pegs, repetition allowed."""
    return CLASSIC_RULES


@pytest.fixture
def short_rules() -> dict:
    """Classic palette with 3 attempts and a 10 second budget."""
    return dict(CLASSIC_RULES, name="short", max_attempts=3, max_time_ms=10_000)


@pytest.fixture
def make_board(clock, rng):
    """Factory for boards with a fixed secret on the test clock."""

    def _make(secret, rules=None):
        board = Board(rules=rules, clock=clock, rng=rng)
        board.initialize_game(secret=secret)
        return board

    return _make


@pytest.fixture
def board(make_board) -> Board:
    """Hirn board with secret RGBY."""
    return make_board("RGBY")
