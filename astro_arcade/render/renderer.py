"""Vector drawing of simulation snapshots."""
from __future__ import annotations

import math
import time
from typing import Callable, Dict, List, Optional, Tuple

import pygame
from pygame.math import Vector2

from astro_arcade.render.state import AsteroidView, CraftView, PowerUpView, RenderSnapshot
from astro_arcade.world.powerups import POWERUP_EFFECTS, PowerUpKind
from astro_arcade.world.tuning import CRAFT_SIZE, POWERUP_LIFETIME

BACKGROUND = (4, 6, 14)
CRAFT_FILL = (127, 176, 214)
CRAFT_OUTLINE = (14, 64, 94)
FLAME_COLOR = (255, 160, 40)
FLAME_CORE = (255, 240, 200)
SHIELD_COLOR = (0, 220, 255)
PROJECTILE_COLOR = (255, 230, 80)
ASTEROID_FILL = (112, 112, 112)
ASTEROID_OUTLINE = (48, 48, 48)
POWERUP_COLORS: Dict[PowerUpKind, Tuple[int, int, int]] = {
    PowerUpKind.SHIELD: (0, 180, 255),
    PowerUpKind.RAPID_FIRE: (0, 255, 100),
    PowerUpKind.SPREAD_SHOT: (255, 150, 0),
}

# Craft outline in local space, nose pointing along +x.
CRAFT_HULL: Tuple[Tuple[float, float], ...] = (
    (CRAFT_SIZE * 0.78, 0.0),
    (CRAFT_SIZE * 0.22, -CRAFT_SIZE * 0.62),
    (-CRAFT_SIZE * 0.9, 0.0),
    (CRAFT_SIZE * 0.22, CRAFT_SIZE * 0.62),
)
BLINK_PERIOD = 0.1
PULSE_RATE = 0.1
PULSE_AMPLITUDE = 0.15


def transform_points(
    points: Tuple[Tuple[float, float], ...], origin: Vector2, angle: float
) -> List[Tuple[float, float]]:
    """Rotate local offsets by ``angle`` and translate them to ``origin``."""

    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return [
        (origin.x + x * cos_a - y * sin_a, origin.y + x * sin_a + y * cos_a)
        for x, y in points
    ]


def power_up_pulse(lifetime: int) -> float:
    """Scale factor of the pulsing orb, derived from ticks lived so far."""

    phase = (POWERUP_LIFETIME - lifetime) * PULSE_RATE
    return 1.0 + math.sin(phase) * PULSE_AMPLITUDE


class ArcadeRenderer:
    """Draws a :class:`RenderSnapshot`. Never touches live simulation state."""

    def __init__(self, surface: pygame.Surface, clock: Callable[[], float] = time.monotonic) -> None:
        self.surface = surface
        self.clock = clock
        self.font: Optional[pygame.font.Font] = None

    def set_surface(self, surface: pygame.Surface) -> None:
        self.surface = surface

    def draw(self, snapshot: RenderSnapshot) -> None:
        self.surface.fill(BACKGROUND)
        self._draw_stars(snapshot)
        if snapshot.craft is not None:
            self._draw_craft(snapshot.craft)
        for projectile in snapshot.projectiles:
            center = (int(projectile.position.x), int(projectile.position.y))
            pygame.draw.circle(self.surface, PROJECTILE_COLOR, center, max(1, int(projectile.radius * 1.2)))
        for asteroid in snapshot.asteroids:
            self._draw_asteroid(asteroid)
        for power_up in snapshot.power_ups:
            self._draw_power_up(power_up)

    def _draw_stars(self, snapshot: RenderSnapshot) -> None:
        for star in snapshot.stars:
            level = int(255 * star.alpha)
            pygame.draw.circle(
                self.surface,
                (level, level, level),
                (int(star.position.x), int(star.position.y)),
                max(1, round(star.radius)),
            )

    def _draw_craft(self, craft: CraftView) -> None:
        if craft.invincible and int(self.clock() / BLINK_PERIOD) % 2 == 0:
            return
        if craft.flame_length > 0.0:
            flame = (
                (-CRAFT_SIZE / 2.4, CRAFT_SIZE / 5.0),
                (-CRAFT_SIZE / 2.0 - craft.flame_length, 0.0),
                (-CRAFT_SIZE / 2.4, -CRAFT_SIZE / 5.0),
            )
            pygame.draw.polygon(self.surface, FLAME_COLOR, transform_points(flame, craft.position, craft.angle))
            core = (
                (-CRAFT_SIZE / 2.4, CRAFT_SIZE / 10.0),
                (-CRAFT_SIZE / 2.0 - craft.flame_length * 0.5, 0.0),
                (-CRAFT_SIZE / 2.4, -CRAFT_SIZE / 10.0),
            )
            pygame.draw.polygon(self.surface, FLAME_CORE, transform_points(core, craft.position, craft.angle))
        hull = transform_points(CRAFT_HULL, craft.position, craft.angle)
        pygame.draw.polygon(self.surface, CRAFT_FILL, hull)
        pygame.draw.polygon(self.surface, CRAFT_OUTLINE, hull, 2)
        if craft.shield_active:
            center = (int(craft.position.x), int(craft.position.y))
            pygame.draw.circle(self.surface, SHIELD_COLOR, center, int(craft.radius + 5), 3)

    def _draw_asteroid(self, asteroid: AsteroidView) -> None:
        outline = transform_points(asteroid.silhouette, asteroid.position, asteroid.angle)
        if len(outline) < 3:
            return
        pygame.draw.polygon(self.surface, ASTEROID_FILL, outline)
        pygame.draw.polygon(self.surface, ASTEROID_OUTLINE, outline, 2)

    def _draw_power_up(self, power_up: PowerUpView) -> None:
        color = POWERUP_COLORS.get(power_up.kind, (200, 200, 200))
        radius = max(2, int(power_up.radius * power_up_pulse(power_up.lifetime)))
        center = (int(power_up.position.x), int(power_up.position.y))
        pygame.draw.circle(self.surface, color, center, radius)
        if self.font is None:
            self.font = pygame.font.SysFont("consolas", 12, bold=True)
        symbol = self.font.render(POWERUP_EFFECTS[power_up.kind].symbol, True, (255, 255, 255))
        self.surface.blit(symbol, symbol.get_rect(center=center))


__all__ = ["ArcadeRenderer", "power_up_pulse", "transform_points"]
