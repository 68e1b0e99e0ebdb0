"""Distance and wrap helpers shared by every entity."""
from __future__ import annotations

from dataclasses import dataclass
from math import cos, sin

from pygame.math import Vector2


@dataclass
class FieldBounds:
    """Current playfield size, updated by the resize collaborator."""

    width: float
    height: float

    @property
    def center(self) -> Vector2:
        return Vector2(self.width / 2.0, self.height / 2.0)


def distance(a: Vector2, b: Vector2) -> float:
    return a.distance_to(b)


def circles_overlap(a: Vector2, radius_a: float, b: Vector2, radius_b: float) -> bool:
    return distance(a, b) < radius_a + radius_b


def wrap_coordinate(value: float, bound: float, margin: float) -> float:
    """Map ``value`` into ``[-margin, bound + margin)``.

    The field is treated as a ring of length ``bound + 2 * margin`` so an
    object leaving one edge reappears just outside the opposite edge.
    """

    span = bound + 2.0 * margin
    if span <= 0.0:
        return value
    offset = (value + margin) % span
    # Float modulo can round up to exactly ``span``.
    if offset >= span:
        offset -= span
    return offset - margin


def wrap_position(position: Vector2, bounds: FieldBounds, margin: float) -> Vector2:
    position.x = wrap_coordinate(position.x, bounds.width, margin)
    position.y = wrap_coordinate(position.y, bounds.height, margin)
    return position


def heading_vector(angle: float, length: float = 1.0) -> Vector2:
    return Vector2(cos(angle) * length, sin(angle) * length)


def inside_bounds(position: Vector2, bounds: FieldBounds) -> bool:
    return 0.0 <= position.x <= bounds.width and 0.0 <= position.y <= bounds.height


__all__ = [
    "FieldBounds",
    "circles_overlap",
    "distance",
    "heading_vector",
    "inside_bounds",
    "wrap_coordinate",
    "wrap_position",
]
