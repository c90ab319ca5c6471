"""
GameEngine - fixed-rate tick loop driving the space field
----------------------------------------------------------
One tick runs, always in this order:

    player input -> (if playing) explosions -> elastic collisions
    -> missile/asteroid hits and score -> movement -> trimming
    -> asteroid spawn -> render -> persist

``execute(n)`` runs exactly n ticks back to back for tests and RL
rollouts; ``execute()`` paces forever at the configured frame rate.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from .config import GameConfig
from .entities import SpaceObject
from .physics import DegenerateVectorError
from .ports import Controller, PlayerCommand, RandomGenerator, Visualizer
from .scoreboard import PersistenceError, ScoreRepository
from .space_field import SpaceField

logger = logging.getLogger(__name__)

TIME_FORMAT = "%H:%M:%S"


@dataclass
class GameState:
    """Session record; score only ever grows"""
    score: float = 0.0
    start_time: str = ""
    end_time: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "startTime": self.start_time, "endTime": self.end_time}


def impacting_pairs(objects: List[SpaceObject]) -> List[Tuple[SpaceObject, SpaceObject]]:
    """Every unordered overlapping pair, first-inserted object first"""
    pairs = []
    for i in range(len(objects)):
        for j in range(i + 1, len(objects)):
            if objects[i].impacts(objects[j]):
                pairs.append((objects[i], objects[j]))
    return pairs


class GameEngine:
    """Owns one SpaceField and one GameState for a whole session"""

    def __init__(
        self,
        config: GameConfig,
        generator: RandomGenerator,
        controller: Controller,
        visualizer: Visualizer,
        repository: Optional[ScoreRepository] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.generator = generator
        self.controller = controller
        self.visualizer = visualizer
        self.repository = repository
        self.clock = clock or datetime.now

        self.field = SpaceField(config, generator)
        self.state = GameState()
        self.playing = True
        self.tick_count = 0

    # ----------------------------
    # Loop drivers
    # ----------------------------

    def execute(self, max_iterations: Optional[int] = None) -> int:
        """Run the game loop; returns the number of ticks performed"""
        if max_iterations is not None:
            ticks = max(0, max_iterations)
            for _ in range(ticks):
                self.tick()
            return ticks

        logger.info("Game loop started at %d fps (%d ms/frame)",
                    self.config.frame_rate, self.config.ms_per_frame)
        while True:
            started = time.perf_counter()
            self.tick()
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            time.sleep(max(0.0, self.config.ms_per_frame - elapsed_ms) / 1000.0)

    def tick(self):
        self.process_player_input()
        self.update_space_objects()
        self.render_space_field()
        self.save_score()
        self.save_leaderboard()
        self.tick_count += 1

    # ----------------------------
    # Tick phases
    # ----------------------------

    def process_player_input(self):
        command = self.controller.next_player_command()
        if command is None:
            return

        ship = self.field.ship
        if command is PlayerCommand.MOVE_SHIP_UP:
            ship.boost_up()
        elif command is PlayerCommand.MOVE_SHIP_DOWN:
            ship.boost_down()
        elif command is PlayerCommand.MOVE_SHIP_LEFT:
            ship.boost_left()
        elif command is PlayerCommand.MOVE_SHIP_RIGHT:
            ship.boost_right()
        elif command is PlayerCommand.LAUNCH_MISSILE:
            self.field.generate_missile()
        elif command is PlayerCommand.PAUSE_GAME:
            self.playing = not self.playing
            logger.info("Game %s", "resumed" if self.playing else "paused")

    def update_space_objects(self):
        if not self.playing:
            return
        self.handle_explosions()
        self.handle_collisions()
        self.handle_missile_asteroid_collisions()
        self.move_space_objects()
        self.trim_space_objects()
        self.generate_asteroids()

    def handle_explosions(self):
        self.field.handle_explosions()

    def handle_collisions(self):
        # Find every overlap first, then bounce; positions do not change here
        for first, second in impacting_pairs(self.field.space_objects):
            try:
                first.collide_with(second, self.config.coefficient_restitution)
            except DegenerateVectorError:
                logger.debug("Skipping collision between coincident %s and %s",
                             first.type, second.type)

    def handle_missile_asteroid_collisions(self):
        self.state.score += self.field.handle_missile_asteroid_collisions()

    def move_space_objects(self):
        self.field.move_ship()
        self.field.move_asteroids()
        self.field.move_missiles()

    def trim_space_objects(self):
        self.field.trim_asteroids()
        self.field.trim_missiles()

    def generate_asteroids(self):
        probability = self.generator.generate_probability()
        if probability <= self.config.asteroid_probability:
            self.field.generate_asteroid()

    def render_space_field(self):
        self.visualizer.render_space_field(self.field)

    # ----------------------------
    # Persistence
    # ----------------------------

    def current_time_as_string(self) -> str:
        return self.clock().strftime(TIME_FORMAT)

    def save_score(self):
        now = self.current_time_as_string()
        if not self.state.start_time:
            self.state.start_time = now
        self.state.end_time = now

        if self.repository is None:
            return
        try:
            self.repository.save_score(self.state.to_dict())
        except PersistenceError as exc:
            logger.warning("Could not save score: %s", exc)

    def save_leaderboard(self):
        if self.repository is None:
            return
        try:
            self.repository.save_leaderboard(self.state.to_dict())
        except PersistenceError as exc:
            logger.warning("Could not update leaderboard: %s", exc)
