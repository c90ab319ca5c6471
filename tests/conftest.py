from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from game.raiders.config import GameConfig
from game.raiders.engine import GameEngine
from game.raiders.ports import QueueController


class FakeGenerator:
    """Deterministic RandomGenerator: always the low end of every range"""

    def __init__(self, probability: float = 1.0, integer=None):
        self.probability = probability
        self.integer = integer
        self.probability_draws = 0

    def generate_probability(self) -> float:
        self.probability_draws += 1
        return self.probability

    def generate_integer_in_range(self, lo: int, hi: int) -> int:
        return lo if self.integer is None else self.integer

    def generate_double_in_range(self, lo: float, hi: float) -> float:
        return lo


class RecordingVisualizer:
    def __init__(self):
        self.frames = []

    def render_space_field(self, field) -> None:
        self.frames.append(field.snapshot())


class RecordingRepository:
    def __init__(self):
        self.scores = []
        self.leaderboard = []

    def save_score(self, record):
        self.scores.append(dict(record))

    def save_leaderboard(self, record):
        self.leaderboard.append(dict(record))
        return True


class SteppingClock:
    """Each call is one second later than the previous one"""

    def __init__(self, start=datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + timedelta(seconds=1)
        return current


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def make_engine():
    def _make(commands=(), generator=None, repository=None, clock=None, **overrides):
        cfg = GameConfig.from_dict(overrides)
        engine = GameEngine(
            cfg,
            generator or FakeGenerator(),
            QueueController(commands),
            RecordingVisualizer(),
            repository=repository,
            clock=clock or SteppingClock(),
        )
        return engine
    return _make
