"""Asteroid entities, size classes and silhouettes."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from pygame.math import Vector2

from astro_arcade.math.geometry import FieldBounds, wrap_position
from astro_arcade.world.tuning import (
    ASTEROID_SPIN_RANGE,
    SILHOUETTE_JAGGEDNESS,
    SILHOUETTE_VERTEX_RANGE,
)


Silhouette = Tuple[Tuple[float, float], ...]


class AsteroidSize(Enum):
    """Size classes ordered from largest to smallest."""

    LARGE = (40.0, 20)
    MEDIUM = (20.0, 50)
    SMALL = (10.0, 100)

    def __init__(self, diameter: float, points: int) -> None:
        self.diameter = diameter
        self.points = points

    @property
    def radius(self) -> float:
        return self.diameter * 0.5

    @property
    def fragment(self) -> Optional["AsteroidSize"]:
        """Size of the children produced when this class is destroyed."""

        return _FRAGMENTS[self]

    def __lt__(self, other: "AsteroidSize") -> bool:
        if not isinstance(other, AsteroidSize):
            return NotImplemented
        return self.diameter < other.diameter


_FRAGMENTS = {
    AsteroidSize.LARGE: AsteroidSize.MEDIUM,
    AsteroidSize.MEDIUM: AsteroidSize.SMALL,
    AsteroidSize.SMALL: None,
}

FRAGMENT_COUNT = 2


def build_silhouette(radius: float, rng: random.Random) -> Silhouette:
    """Return a jagged polygon as vertex offsets relative to the centre."""

    count = rng.randint(*SILHOUETTE_VERTEX_RANGE)
    low, high = SILHOUETTE_JAGGEDNESS
    vertices = []
    for index in range(count):
        angle = (index / count) * 2.0 * math.pi
        distance = radius * rng.uniform(low, high)
        vertices.append((distance * math.cos(angle), distance * math.sin(angle)))
    return tuple(vertices)


@dataclass(eq=False)
class Asteroid:
    position: Vector2
    velocity: Vector2
    size: AsteroidSize
    silhouette: Silhouette
    angle: float = 0.0
    spin: float = 0.0

    @classmethod
    def create(
        cls,
        position: Vector2,
        velocity: Vector2,
        size: AsteroidSize,
        rng: Optional[random.Random] = None,
    ) -> "Asteroid":
        rng = rng or random.Random()
        return cls(
            position=Vector2(position),
            velocity=Vector2(velocity),
            size=size,
            silhouette=build_silhouette(size.radius, rng),
            angle=rng.uniform(0.0, 2.0 * math.pi),
            spin=rng.uniform(-ASTEROID_SPIN_RANGE, ASTEROID_SPIN_RANGE),
        )

    @property
    def radius(self) -> float:
        return self.size.radius

    @property
    def points(self) -> int:
        return self.size.points

    def update(self, bounds: FieldBounds) -> None:
        self.position += self.velocity
        self.angle += self.spin
        wrap_position(self.position, bounds, self.radius)


__all__ = ["Asteroid", "AsteroidSize", "FRAGMENT_COUNT", "Silhouette", "build_silhouette"]
