"""
Ports the core consumes: random source, player input and rendering
"""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional, Protocol

import numpy as np

if TYPE_CHECKING:
    from .space_field import SpaceField


class PlayerCommand(Enum):
    MOVE_SHIP_UP = 1
    MOVE_SHIP_DOWN = 2
    MOVE_SHIP_LEFT = 3
    MOVE_SHIP_RIGHT = 4
    LAUNCH_MISSILE = 5
    PAUSE_GAME = 6


class RandomGenerator(Protocol):
    def generate_probability(self) -> float:
        ...

    def generate_integer_in_range(self, lo: int, hi: int) -> int:
        ...

    def generate_double_in_range(self, lo: float, hi: float) -> float:
        ...


class Controller(Protocol):
    def next_player_command(self) -> Optional[PlayerCommand]:
        ...


class Visualizer(Protocol):
    def render_space_field(self, field: SpaceField) -> None:
        ...


class NumpyRandomGenerator:
    """RandomGenerator backed by a seeded numpy Generator"""

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    def generate_probability(self) -> float:
        # random() samples [0, 1)
        return float(self.rng.random())

    def generate_integer_in_range(self, lo: int, hi: int) -> int:
        """Inclusive on both ends"""
        return int(self.rng.integers(lo, hi, endpoint=True))

    def generate_double_in_range(self, lo: float, hi: float) -> float:
        if lo == hi:
            return float(lo)
        return float(self.rng.uniform(lo, hi))


class QueueController:
    """Non-blocking FIFO of commands; empty queue means no command this tick"""

    def __init__(self, commands: Iterable[PlayerCommand] = ()):
        self._queue = deque(commands)

    def push(self, command: PlayerCommand):
        self._queue.append(command)

    def clear(self):
        self._queue.clear()

    def __len__(self):
        return len(self._queue)

    def next_player_command(self) -> Optional[PlayerCommand]:
        if not self._queue:
            return None
        return self._queue.popleft()


class RandomController:
    """Issues a random command (or nothing) every tick; used for demos"""

    def __init__(self, generator: RandomGenerator, idle_probability: float = 0.5,
                 allow_pause: bool = False):
        self.generator = generator
        self.idle_probability = idle_probability
        self._commands = [c for c in PlayerCommand if allow_pause or c is not PlayerCommand.PAUSE_GAME]

    def next_player_command(self) -> Optional[PlayerCommand]:
        if self.generator.generate_probability() < self.idle_probability:
            return None
        idx = self.generator.generate_integer_in_range(0, len(self._commands) - 1)
        return self._commands[idx]


class NullVisualizer:
    """Discards frames; handy for headless runs"""

    def __init__(self):
        self.frames = 0

    def render_space_field(self, field: SpaceField) -> None:
        self.frames += 1
