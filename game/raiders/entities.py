"""
Space object dataclasses: ship, asteroids, missiles and explosions
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from .physics import Point2D, Vector2D, clamp


@dataclass(eq=False)
class SpaceObject:
    """Circular body living in the space field.

    Velocities are expressed in field units per tick, so one call to
    ``move`` advances an object by exactly one tick.
    """
    type: ClassVar[str] = "SpaceObject"
    symbol: ClassVar[str] = "?"
    massless_allowed: ClassVar[bool] = False

    center: Point2D
    velocity: Vector2D
    radius: float
    mass: float

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError(f"{self.type} radius must be positive, got {self.radius}")
        if self.mass < 0 or (self.mass == 0 and not self.massless_allowed):
            raise ValueError(f"{self.type} mass must be positive, got {self.mass}")

    def impacts(self, other: SpaceObject) -> bool:
        """Overlap test; touching circles do not impact"""
        if other is self:
            return False
        return self.center.distance(other.center) < self.radius + other.radius

    def collide_with(self, other: SpaceObject, coefficient_restitution: float):
        """Exchange momentum along the line of centers.

        Only the normal components change. Positions are left untouched, so
        objects that still overlap next tick will collide again.
        Raises DegenerateVectorError when both centers coincide.
        """
        normal = (other.center - self.center).unit

        v1 = self.velocity.dot(normal)
        v2 = other.velocity.dot(normal)
        m1, m2 = self.mass, other.mass
        momentum = m1 * v1 + m2 * v2
        total = m1 + m2

        new_v1 = (momentum + m2 * coefficient_restitution * (v2 - v1)) / total
        new_v2 = (momentum + m1 * coefficient_restitution * (v1 - v2)) / total

        self.velocity = self.velocity + normal * (new_v1 - v1)
        other.velocity = other.velocity + normal * (new_v2 - v2)

    def is_out_of_bounds(self, width: float, height: float) -> bool:
        r = self.radius
        x, y = self.center.x, self.center.y
        return x < -r or x > width + r or y < -r or y > height + r

    def move(self):
        self.center = self.center + self.velocity

    @property
    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * self.velocity.magnitude ** 2

    @property
    def momentum(self) -> Vector2D:
        return self.velocity * self.mass

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "symbol": self.symbol,
            "x": self.center.x,
            "y": self.center.y,
            "vx": self.velocity.dx,
            "vy": self.velocity.dy,
            "radius": self.radius,
            "mass": self.mass,
        }


@dataclass(eq=False)
class SpaceShip(SpaceObject):
    """Player ship; boosts add velocity without any speed cap"""
    type: ClassVar[str] = "SpaceShip"
    symbol: ClassVar[str] = "@"

    boost: float = 1.0
    heading: Vector2D = field(default_factory=lambda: Vector2D(0.0, 1.0))

    def boost_up(self):
        self.velocity = self.velocity + Vector2D(0.0, self.boost)

    def boost_down(self):
        self.velocity = self.velocity + Vector2D(0.0, -self.boost)

    def boost_left(self):
        self.velocity = self.velocity + Vector2D(-self.boost, 0.0)

    def boost_right(self):
        self.velocity = self.velocity + Vector2D(self.boost, 0.0)

    def move(self, width: Optional[float] = None, height: Optional[float] = None):
        super().move()
        if width is None or height is None:
            return

        # Clamp into the field and stop the motion that pushed us out
        r = self.radius
        x = clamp(self.center.x, r, width - r)
        y = clamp(self.center.y, r, height - r)
        dx = 0.0 if x != self.center.x else self.velocity.dx
        dy = 0.0 if y != self.center.y else self.velocity.dy
        self.center = Point2D(x, y)
        self.velocity = Vector2D(dx, dy)


@dataclass(eq=False)
class Asteroid(SpaceObject):
    type: ClassVar[str] = "Asteroid"
    symbol: ClassVar[str] = "."


@dataclass(eq=False)
class Missile(SpaceObject):
    type: ClassVar[str] = "Missile"
    symbol: ClassVar[str] = "^"


@dataclass(eq=False)
class Explosion(SpaceObject):
    """Short-lived marker left where a missile destroyed an asteroid"""
    type: ClassVar[str] = "Explosion"
    symbol: ClassVar[str] = "*"
    massless_allowed: ClassVar[bool] = True

    ticks_remaining: int = 3

    def tick_down(self):
        if self.ticks_remaining > 0:
            self.ticks_remaining -= 1

    @property
    def expired(self) -> bool:
        return self.ticks_remaining <= 0

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["ticks_remaining"] = self.ticks_remaining
        return data
