"""
Game configuration: defaults, validation and loaders
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

MILLISECONDS_PER_SECOND = 1000


class ConfigurationError(Exception):
    """Missing or invalid tunable; raised before the game loop starts"""


# Engine parameters
ENGINE_CONFIG = {
    "frame_rate": 30,              # ticks per second
    "space_field_width": 800,
    "space_field_height": 600,
    "asteroid_probability": 0.05,  # per-tick spawn chance
    "coefficient_restitution": 0.8,
}

# Ship parameters
SHIP_CONFIG = {
    "ship_boost": 1.0,             # velocity delta per move command
    "ship_radius": 10.0,
    "ship_mass": 500.0,
}

# Missile parameters
MISSILE_CONFIG = {
    "missile_velocity": 5.0,
    "missile_radius": 2.0,
    "missile_mass": 1.0,
    "missile_distance_from_ship": 1.0,
}

# Asteroid parameters
ASTEROID_CONFIG = {
    "asteroid_min_velocity": 1.0,
    "asteroid_max_velocity": 3.0,
    "asteroid_min_radius": 5.0,
    "asteroid_max_radius": 20.0,
    "asteroid_mass_multiplier": 10.0,  # mass = radius * multiplier
}

# Explosion and scoring parameters
SCORE_CONFIG = {
    "explosion_radius": 10.0,
    "explosion_duration_ticks": 3,
    "missile_kill_score": 10.0,    # flat points per destroyed asteroid
    "score_per_radius": 0.0,       # extra points per unit of asteroid radius
}

# Persistence parameters
PERSISTENCE_CONFIG = {
    "scoreboard_path": "score/Scoreboard.json",
    "leaderboard_path": "score/Leaderboard.json",
    "leaderboard_size": 3,
}

DEFAULT_CONFIG: Dict[str, Any] = {
    **ENGINE_CONFIG,
    **SHIP_CONFIG,
    **MISSILE_CONFIG,
    **ASTEROID_CONFIG,
    **SCORE_CONFIG,
    **PERSISTENCE_CONFIG,
}


@dataclass(frozen=True)
class GameConfig:
    """Every tunable the core understands, validated on construction"""
    frame_rate: int = ENGINE_CONFIG["frame_rate"]
    space_field_width: int = ENGINE_CONFIG["space_field_width"]
    space_field_height: int = ENGINE_CONFIG["space_field_height"]
    asteroid_probability: float = ENGINE_CONFIG["asteroid_probability"]
    coefficient_restitution: float = ENGINE_CONFIG["coefficient_restitution"]

    ship_boost: float = SHIP_CONFIG["ship_boost"]
    ship_radius: float = SHIP_CONFIG["ship_radius"]
    ship_mass: float = SHIP_CONFIG["ship_mass"]

    missile_velocity: float = MISSILE_CONFIG["missile_velocity"]
    missile_radius: float = MISSILE_CONFIG["missile_radius"]
    missile_mass: float = MISSILE_CONFIG["missile_mass"]
    missile_distance_from_ship: float = MISSILE_CONFIG["missile_distance_from_ship"]

    asteroid_min_velocity: float = ASTEROID_CONFIG["asteroid_min_velocity"]
    asteroid_max_velocity: float = ASTEROID_CONFIG["asteroid_max_velocity"]
    asteroid_min_radius: float = ASTEROID_CONFIG["asteroid_min_radius"]
    asteroid_max_radius: float = ASTEROID_CONFIG["asteroid_max_radius"]
    asteroid_mass_multiplier: float = ASTEROID_CONFIG["asteroid_mass_multiplier"]

    explosion_radius: float = SCORE_CONFIG["explosion_radius"]
    explosion_duration_ticks: int = SCORE_CONFIG["explosion_duration_ticks"]
    missile_kill_score: float = SCORE_CONFIG["missile_kill_score"]
    score_per_radius: float = SCORE_CONFIG["score_per_radius"]

    scoreboard_path: str = PERSISTENCE_CONFIG["scoreboard_path"]
    leaderboard_path: str = PERSISTENCE_CONFIG["leaderboard_path"]
    leaderboard_size: int = PERSISTENCE_CONFIG["leaderboard_size"]

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            expected = _FIELD_TYPES[f.name]
            if expected is str:
                if not isinstance(value, str) or not value.strip():
                    raise ConfigurationError(f"'{f.name}' must be a non-empty string")
                continue
            # bool is an int subclass but never a sensible tunable
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"'{f.name}' must be numeric, got {value!r}")
            if expected is int and not float(value).is_integer():
                raise ConfigurationError(f"'{f.name}' must be an integer, got {value!r}")
            if expected is int:
                object.__setattr__(self, f.name, int(value))
            else:
                object.__setattr__(self, f.name, float(value))

        self._check(self.frame_rate > 0, "frame_rate must be positive")
        self._check(self.space_field_width > 0, "space_field_width must be positive")
        self._check(self.space_field_height > 0, "space_field_height must be positive")
        self._check(0.0 <= self.asteroid_probability <= 1.0,
                    "asteroid_probability must be within [0, 1]")
        self._check(0.0 < self.coefficient_restitution <= 1.0,
                    "coefficient_restitution must be within (0, 1]")
        self._check(self.ship_boost >= 0.0, "ship_boost must not be negative")
        for name in ("ship_radius", "ship_mass", "missile_radius", "missile_mass",
                     "asteroid_min_radius", "asteroid_mass_multiplier", "explosion_radius"):
            self._check(getattr(self, name) > 0.0, f"{name} must be positive")
        self._check(self.missile_distance_from_ship >= 0.0,
                    "missile_distance_from_ship must not be negative")
        self._check(0.0 <= self.asteroid_min_velocity <= self.asteroid_max_velocity,
                    "asteroid velocity range must satisfy 0 <= min <= max")
        self._check(self.asteroid_min_radius <= self.asteroid_max_radius,
                    "asteroid radius range must satisfy min <= max")
        self._check(self.explosion_duration_ticks >= 1,
                    "explosion_duration_ticks must be at least 1")
        self._check(self.missile_kill_score >= 0.0 and self.score_per_radius >= 0.0,
                    "score values must not be negative")
        self._check(self.leaderboard_size >= 1, "leaderboard_size must be at least 1")

    @staticmethod
    def _check(condition: bool, message: str):
        if not condition:
            raise ConfigurationError(message)

    @property
    def ms_per_frame(self) -> int:
        return MILLISECONDS_PER_SECOND // self.frame_rate

    @classmethod
    def from_dict(cls, overrides: Optional[Mapping[str, Any]] = None) -> GameConfig:
        overrides = dict(overrides or {})
        unknown = sorted(set(overrides) - set(_FIELD_TYPES))
        if unknown:
            raise ConfigurationError(f"Unknown config option(s): {', '.join(unknown)}")
        return cls(**overrides)

    @classmethod
    def from_json(cls, path: Path) -> GameConfig:
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Could not read config file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a JSON object")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, prefix: str = "GR__") -> GameConfig:
        """Read ``<prefix><OPTION_NAME>`` variables, e.g. ``GR__FRAME_RATE=60``"""
        environ = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}
        for name, expected in _FIELD_TYPES.items():
            raw = environ.get(prefix + name.upper())
            if raw is None:
                continue
            if expected is str:
                overrides[name] = raw
                continue
            try:
                overrides[name] = expected(raw)
            except ValueError as exc:
                raise ConfigurationError(
                    f"{prefix + name.upper()} must be {expected.__name__}, got {raw!r}"
                ) from exc
        return cls.from_dict(overrides)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _field_type(default: Any) -> type:
    if isinstance(default, str):
        return str
    if isinstance(default, int):
        return int
    return float


_FIELD_TYPES: Dict[str, type] = {name: _field_type(value) for name, value in DEFAULT_CONFIG.items()}
