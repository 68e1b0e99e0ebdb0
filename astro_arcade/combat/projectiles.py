"""Craft projectiles."""
from __future__ import annotations

from dataclasses import dataclass

from pygame.math import Vector2

from astro_arcade.math.geometry import FieldBounds, inside_bounds
from astro_arcade.world.tuning import PROJECTILE_LIFETIME, PROJECTILE_RADIUS


@dataclass(eq=False)
class Projectile:
    """Straight-flying shot. Unlike the craft and asteroids it never wraps."""

    position: Vector2
    velocity: Vector2
    radius: float = PROJECTILE_RADIUS
    lifetime: int = PROJECTILE_LIFETIME

    def update(self) -> None:
        self.position += self.velocity
        self.lifetime -= 1

    def is_expired(self, bounds: FieldBounds) -> bool:
        return self.lifetime <= 0 or not inside_bounds(self.position, bounds)


__all__ = ["Projectile"]
