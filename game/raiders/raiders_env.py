"""
RaidersEnv - Gymnasium wrapper around the Galaxy Raiders engine
---------------------------------------------------------------
- The engine does the simulation; one env step is one engine tick
- Discrete action space: 0 = no command, 1..6 = PlayerCommand values
- Reward: score gained during the tick (missile kills)
- Vector observation: ship state + top-K nearest asteroids
- Optional Arcade rendering ("human" mode)

Quick test:
    python -m game.raiders.raiders_env
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .engine import GameEngine
from .physics import clamp
from .ports import NumpyRandomGenerator, PlayerCommand, QueueController
from .space_field import SpaceField


class RaidersEnv(gym.Env):
    """Asteroid-shooting environment driven by GameEngine ticks"""

    metadata = {"render_modes": ["human"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        config: Optional[GameConfig] = None,
        max_steps: int = 1800,  # 60s at 30 FPS
        k_asteroids: int = 5,
        velocity_scale: float = 10.0,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.config = config or GameConfig()
        self.max_steps = max_steps
        self.k_asteroids = k_asteroids
        self.velocity_scale = velocity_scale

        self.action_space = spaces.Discrete(len(PlayerCommand) + 1)

        # Ship: pos(2) vel(2) playing(1)
        # Each asteroid: rel pos(2) rel vel(2)
        obs_dim = 2 + 2 + 1 + self.k_asteroids * 4
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self.engine: GameEngine = None  # type: ignore
        self.controller = QueueController()
        self._visualizer = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._step_count = 0
        self.controller.clear()
        generator = NumpyRandomGenerator(seed)
        # The env is its own visualizer so "human" rendering follows each tick
        self.engine = GameEngine(self.config, generator, self.controller, self)

        return self._get_obs(), self._get_info()

    def step(self, action):
        action = int(action)
        if action > 0:
            self.controller.push(PlayerCommand(action))

        score_before = self.engine.state.score
        self.engine.tick()
        reward = float(self.engine.state.score - score_before)

        self._step_count += 1
        # The ship is indestructible, so episodes only end by truncation
        terminated = False
        truncated = self._step_count >= self.max_steps

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render_space_field(self, field: SpaceField) -> None:
        if self.render_mode == "human":
            self.render()

    def render(self):
        if self.render_mode is None or self.engine is None:
            return None

        if self._visualizer is None:
            from .visualizers import ArcadeVisualizer
            self._visualizer = ArcadeVisualizer(self.config.space_field_width,
                                                self.config.space_field_height,
                                                score_source=lambda: self.engine.state.score)
        self._visualizer.render_space_field(self.engine.field)
        return None

    def close(self):
        if self._visualizer is not None:
            self._visualizer.close()
            self._visualizer = None

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        field = self.engine.field
        ship = field.ship
        width, height = field.width, field.height
        vs = max(1e-6, self.velocity_scale)

        obs_parts = [ship.center.x / width * 2 - 1, ship.center.y / height * 2 - 1,  # map to [-1,1]
                     clamp(ship.velocity.dx / vs, -1, 1), clamp(ship.velocity.dy / vs, -1, 1),
                     1.0 if self.engine.playing else -1.0]

        asteroids_sorted = sorted(
            field.asteroids,
            key=lambda a: ship.center.distance(a.center)
        )
        for i in range(self.k_asteroids):
            if i < len(asteroids_sorted):
                a = asteroids_sorted[i]
                obs_parts += [
                    clamp((a.center.x - ship.center.x) / width, -1, 1),
                    clamp((a.center.y - ship.center.y) / height, -1, 1),
                    clamp((a.velocity.dx - ship.velocity.dx) / vs, -1, 1),
                    clamp((a.velocity.dy - ship.velocity.dy) / vs, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.clip(np.array(obs_parts, dtype=np.float32), -1.0, 1.0)

    def _get_info(self) -> Dict[str, Any]:
        field = self.engine.field
        return {
            "score": self.engine.state.score,
            "playing": self.engine.playing,
            "num_asteroids": len(field.asteroids),
            "num_missiles": len(field.missiles),
            "num_explosions": len(field.explosions),
            "step": self._step_count,
        }


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, max_steps: int = 600, seed: Optional[int] = 42) -> float:
    """Run a random episode and return the final score"""
    env = RaidersEnv(render_mode="human" if render else None, max_steps=max_steps)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        # Never pause during a random rollout
        if action == PlayerCommand.PAUSE_GAME.value:
            action = 0
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(env.config.ms_per_frame / 1000.0)

    print(f"Random episode score: {total}")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
