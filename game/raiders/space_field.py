"""
SpaceField - the rectangular arena holding the ship, asteroids, missiles
and explosions
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Tuple

from .config import GameConfig
from .entities import Asteroid, Explosion, Missile, SpaceObject, SpaceShip
from .physics import Point2D, Vector2D
from .ports import RandomGenerator

logger = logging.getLogger(__name__)


class SpaceField:
    """Owns every live object and the spawn / move / trim rules for them.

    Coordinates grow right (x) and up (y). Asteroids enter from the top edge
    and drift down; the ship starts at the bottom center and launches
    missiles along its heading.
    """

    def __init__(self, config: GameConfig, generator: RandomGenerator):
        self.config = config
        self.generator = generator

        self.width = config.space_field_width
        self.height = config.space_field_height

        self.ship: SpaceShip = self._initialize_ship()
        self.asteroids: List[Asteroid] = []
        self.missiles: List[Missile] = []
        self.explosions: List[Explosion] = []

    @property
    def space_objects(self) -> List[SpaceObject]:
        """Objects taking part in elastic collisions, in insertion order"""
        return [self.ship, *self.asteroids, *self.missiles]

    # ----------------------------
    # Spawning
    # ----------------------------

    def _initialize_ship(self) -> SpaceShip:
        cfg = self.config
        return SpaceShip(
            center=Point2D(self.width / 2, cfg.ship_radius),
            velocity=Vector2D(0.0, 0.0),
            radius=cfg.ship_radius,
            mass=cfg.ship_mass,
            boost=cfg.ship_boost,
        )

    def generate_missile(self) -> Missile:
        missile = self._create_missile()
        self.missiles.append(missile)
        return missile

    def _create_missile(self) -> Missile:
        cfg = self.config
        heading = self.ship.heading
        # Spawn just outside the hull so the missile does not hit the ship
        offset = self.ship.radius + cfg.missile_radius + cfg.missile_distance_from_ship
        return Missile(
            center=self.ship.center + heading * offset,
            velocity=heading * cfg.missile_velocity,
            radius=cfg.missile_radius,
            mass=cfg.missile_mass,
        )

    def generate_asteroid(self) -> Asteroid:
        asteroid = self._create_asteroid_with_random_properties()
        self.asteroids.append(asteroid)
        logger.debug("Spawned asteroid at (%.1f, %.1f) r=%.1f",
                     asteroid.center.x, asteroid.center.y, asteroid.radius)
        return asteroid

    def _create_asteroid_with_random_properties(self) -> Asteroid:
        radius = self.generator.generate_double_in_range(
            self.config.asteroid_min_radius, self.config.asteroid_max_radius
        )
        return Asteroid(
            center=self._generate_random_asteroid_position(),
            velocity=self._generate_random_asteroid_velocity(),
            radius=radius,
            mass=radius * self.config.asteroid_mass_multiplier,
        )

    def _generate_random_asteroid_position(self) -> Point2D:
        # Spawn on the top edge, away from the corners
        x = self.generator.generate_integer_in_range(1, max(1, math.ceil(self.width - 1)))
        return Point2D(float(x), float(self.height))

    def _generate_random_asteroid_velocity(self) -> Vector2D:
        speed = self.generator.generate_double_in_range(
            self.config.asteroid_min_velocity, self.config.asteroid_max_velocity
        )
        return Vector2D(0.0, -speed)

    # ----------------------------
    # Movement and trimming
    # ----------------------------

    def move_ship(self):
        self.ship.move(self.width, self.height)

    def move_asteroids(self):
        for asteroid in self.asteroids:
            asteroid.move()

    def move_missiles(self):
        for missile in self.missiles:
            missile.move()

    def trim_asteroids(self):
        self.asteroids = [a for a in self.asteroids if not a.is_out_of_bounds(self.width, self.height)]

    def trim_missiles(self):
        self.missiles = [m for m in self.missiles if not m.is_out_of_bounds(self.width, self.height)]

    # ----------------------------
    # Explosions and destructive hits
    # ----------------------------

    def handle_explosions(self):
        for explosion in self.explosions:
            explosion.tick_down()
        self.explosions = [e for e in self.explosions if not e.expired]

    def handle_missile_asteroid_collisions(self) -> float:
        """Destroy every overlapping missile/asteroid pair and return the score gained.

        Pairs are matched in (missile, asteroid) list order; an entity that
        has already been consumed this tick is not matched again.
        """
        hits: List[Tuple[Missile, Asteroid]] = []
        consumed = set()
        for missile in self.missiles:
            for asteroid in self.asteroids:
                if id(asteroid) in consumed:
                    continue
                if missile.impacts(asteroid):
                    hits.append((missile, asteroid))
                    consumed.add(id(missile))
                    consumed.add(id(asteroid))
                    break

        if not hits:
            return 0.0

        self.missiles = [m for m in self.missiles if id(m) not in consumed]
        self.asteroids = [a for a in self.asteroids if id(a) not in consumed]

        score = 0.0
        for missile, asteroid in hits:
            self.explosions.append(self._create_explosion(missile, asteroid))
            score += self.kill_score(asteroid)

        logger.debug("%d asteroid(s) destroyed, +%.1f points", len(hits), score)
        return score

    def kill_score(self, asteroid: Asteroid) -> float:
        return self.config.missile_kill_score + self.config.score_per_radius * asteroid.radius

    def _create_explosion(self, missile: Missile, asteroid: Asteroid) -> Explosion:
        # Point on the line of centers where the two surfaces meet
        weight = missile.radius / (missile.radius + asteroid.radius)
        impact_point = missile.center + (asteroid.center - missile.center) * weight
        return Explosion(
            center=impact_point,
            velocity=Vector2D(0.0, 0.0),
            radius=self.config.explosion_radius,
            mass=0.0,
            ticks_remaining=self.config.explosion_duration_ticks,
        )

    # ----------------------------
    # Views
    # ----------------------------

    def snapshot(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "ship": self.ship.to_dict(),
            "asteroids": [a.to_dict() for a in self.asteroids],
            "missiles": [m.to_dict() for m in self.missiles],
            "explosions": [e.to_dict() for e in self.explosions],
        }
