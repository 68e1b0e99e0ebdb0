"""Procedural creation of asteroid waves, fragments and power-ups."""
from __future__ import annotations

import math
import random
from typing import List, Optional

from pygame.math import Vector2

from astro_arcade.engine.logger import ChannelLogger, GameLogger
from astro_arcade.math.geometry import FieldBounds, distance, heading_vector
from astro_arcade.world.asteroids import Asteroid, AsteroidSize
from astro_arcade.world.powerups import PowerUp, PowerUpKind
from astro_arcade.world.starfield import Star, generate_stars
from astro_arcade.world.state import GameState
from astro_arcade.world.tuning import (
    ASTEROID_SPEED,
    CRAFT_SIZE,
    FRAGMENT_SPEED_RANGE,
    MAX_SPAWN_ATTEMPTS,
    POWERUP_CHANCE,
)

# Fresh waves keep this much room around the craft.
SAFE_SPAWN_DISTANCE = AsteroidSize.LARGE.diameter * 3.0 + CRAFT_SIZE / 2.0


class Spawner:
    """Creates entities into a :class:`GameState` using an injectable RNG."""

    def __init__(
        self,
        state: GameState,
        rng: Optional[random.Random] = None,
        logger: Optional[GameLogger] = None,
    ) -> None:
        self.state = state
        self.rng = rng or random.Random()
        self._log: Optional[ChannelLogger] = logger.channel("spawner") if logger else None

    def spawn_wave(
        self,
        count: int,
        source: Optional[Asteroid] = None,
        size: AsteroidSize = AsteroidSize.LARGE,
    ) -> List[Asteroid]:
        spawned: List[Asteroid] = []
        for _ in range(count):
            if source is not None:
                position = Vector2(source.position)
                low, high = FRAGMENT_SPEED_RANGE
                speed = self.rng.uniform(low, high) * ASTEROID_SPEED
                velocity = heading_vector(self.rng.uniform(0.0, 2.0 * math.pi), speed)
            else:
                position = self._safe_position()
                velocity = Vector2(
                    self.rng.uniform(-ASTEROID_SPEED, ASTEROID_SPEED),
                    self.rng.uniform(-ASTEROID_SPEED, ASTEROID_SPEED),
                )
            asteroid = Asteroid.create(position, velocity, size, self.rng)
            self.state.asteroids.append(asteroid)
            spawned.append(asteroid)
        if self._log and source is None:
            self._log.info("Spawned wave of %d %s asteroids", count, size.name.lower())
        return spawned

    def _safe_position(self) -> Vector2:
        bounds = self.state.bounds
        craft = self.state.craft
        position = self._random_point(bounds)
        if craft is None:
            return position
        attempts = 1
        while distance(position, craft.position) < SAFE_SPAWN_DISTANCE:
            if attempts >= MAX_SPAWN_ATTEMPTS:
                if self._log:
                    self._log.warning(
                        "No safe asteroid spawn found in %dx%d field after %d attempts",
                        bounds.width,
                        bounds.height,
                        attempts,
                    )
                break
            position = self._random_point(bounds)
            attempts += 1
        return position

    def _random_point(self, bounds: FieldBounds) -> Vector2:
        return Vector2(self.rng.uniform(0.0, bounds.width), self.rng.uniform(0.0, bounds.height))

    def try_spawn_power_up(self, position: Vector2) -> Optional[PowerUp]:
        if self.rng.random() >= POWERUP_CHANCE:
            return None
        kind = self.rng.choice(list(PowerUpKind))
        power_up = PowerUp(position=Vector2(position), kind=kind)
        self.state.power_ups.append(power_up)
        if self._log:
            self._log.debug("Power-up %s dropped at (%.0f, %.0f)", kind.value, position.x, position.y)
        return power_up

    def spawn_stars(self, bounds: FieldBounds) -> List[Star]:
        return generate_stars(bounds, self.rng)


__all__ = ["SAFE_SPAWN_DISTANCE", "Spawner"]
