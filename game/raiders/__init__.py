"""Galaxy Raiders module - real-time simulation core of an arcade space shooter"""

from .config import ConfigurationError, GameConfig
from .engine import GameEngine, GameState
from .entities import Asteroid, Explosion, Missile, SpaceObject, SpaceShip
from .physics import DegenerateVectorError, Point2D, Vector2D
from .ports import NullVisualizer, NumpyRandomGenerator, PlayerCommand, QueueController, RandomController
from .scoreboard import PersistenceError, ScoreRepository
from .space_field import SpaceField

__all__ = [
    'ConfigurationError', 'GameConfig',
    'GameEngine', 'GameState',
    'Asteroid', 'Explosion', 'Missile', 'SpaceObject', 'SpaceShip',
    'DegenerateVectorError', 'Point2D', 'Vector2D',
    'NullVisualizer', 'NumpyRandomGenerator', 'PlayerCommand', 'QueueController', 'RandomController',
    'PersistenceError', 'ScoreRepository',
    'SpaceField',
]
