"""Player craft entity."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pygame.math import Vector2

from astro_arcade.combat.projectiles import Projectile
from astro_arcade.math.geometry import FieldBounds, heading_vector, wrap_position
from astro_arcade.world.powerups import NO_POWERUP_LABEL, POWERUP_EFFECTS, PowerUpKind
from astro_arcade.world.tuning import (
    BASE_FIRE_DELAY,
    BASE_THRUST,
    CRAFT_DEFAULT_HEADING,
    CRAFT_SIZE,
    CRAFT_TURN_SPEED,
    FRICTION,
    INVINCIBILITY_TICKS,
    MAX_FLAME_LENGTH,
    POWERUP_EFFECT_DURATION,
    PROJECTILE_SPEED,
    SPREAD_ANGLE,
)


@dataclass
class Craft:
    """The player's ship.

    Created once per session and reset in place after each lost life. Timers
    count simulation ticks.
    """

    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2)
    angle: float = CRAFT_DEFAULT_HEADING
    radius: float = CRAFT_SIZE / 2.0
    invincible_ticks: int = 0
    shield_active: bool = False
    spread_shot: bool = False
    power_up: Optional[PowerUpKind] = None
    power_up_ticks: int = 0
    fire_delay: int = BASE_FIRE_DELAY
    ticks_since_shot: int = BASE_FIRE_DELAY
    thrusting: bool = False
    flame_length: float = 0.0

    @classmethod
    def centered(cls, bounds: FieldBounds) -> "Craft":
        return cls(position=bounds.center)

    @property
    def heading(self) -> Vector2:
        return heading_vector(self.angle)

    @property
    def nose(self) -> Vector2:
        return self.position + heading_vector(self.angle, CRAFT_SIZE / 2.0)

    @property
    def is_invincible(self) -> bool:
        return self.invincible_ticks > 0

    @property
    def power_up_label(self) -> str:
        if self.power_up is None:
            return NO_POWERUP_LABEL
        return POWERUP_EFFECTS[self.power_up].label

    def rotate(self, direction: int) -> None:
        if direction not in (-1, 1):
            raise ValueError(f"rotation direction must be -1 or 1, got {direction!r}")
        self.angle += CRAFT_TURN_SPEED * direction

    def apply_thrust(self, multiplier: float = 1.0) -> None:
        self.velocity += heading_vector(self.angle, BASE_THRUST * multiplier)
        self.thrusting = True

    def update(self, bounds: FieldBounds) -> None:
        self.velocity *= FRICTION
        self.position += self.velocity
        wrap_position(self.position, bounds, self.radius)

        # Booster flame is presentation only.
        if self.thrusting:
            self.flame_length = min(self.flame_length + 2.0, MAX_FLAME_LENGTH)
        else:
            self.flame_length = max(self.flame_length - 1.0, 0.0)
        self.thrusting = False

        if self.invincible_ticks > 0:
            self.invincible_ticks -= 1
        if self.power_up_ticks > 0:
            self.power_up_ticks -= 1
            if self.power_up_ticks == 0:
                self.deactivate_power_up()
        if self.ticks_since_shot < self.fire_delay:
            self.ticks_since_shot += 1

    def can_fire(self) -> bool:
        return self.ticks_since_shot >= self.fire_delay

    def try_fire(self) -> List[Projectile]:
        """Fire if the cooldown allows it and return the new projectiles."""

        if not self.can_fire():
            return []
        self.ticks_since_shot = 0
        nose = self.nose
        if self.spread_shot:
            angles = (self.angle, self.angle - SPREAD_ANGLE, self.angle + SPREAD_ANGLE)
        else:
            angles = (self.angle,)
        return [
            Projectile(position=Vector2(nose), velocity=heading_vector(angle, PROJECTILE_SPEED))
            for angle in angles
        ]

    def reset_after_death(self, bounds: FieldBounds) -> None:
        self.position = bounds.center
        self.velocity = Vector2()
        self.angle = CRAFT_DEFAULT_HEADING
        self.invincible_ticks = INVINCIBILITY_TICKS
        self.deactivate_power_up()

    def activate_power_up(self, kind: PowerUpKind) -> None:
        self.deactivate_power_up()
        effect = POWERUP_EFFECTS[kind]
        self.power_up = kind
        self.power_up_ticks = POWERUP_EFFECT_DURATION
        self.shield_active = effect.shield
        self.fire_delay = effect.fire_delay
        self.spread_shot = effect.spread

    def deactivate_power_up(self) -> None:
        if self.power_up is None:
            return
        self.power_up = None
        self.power_up_ticks = 0
        self.shield_active = False
        self.fire_delay = BASE_FIRE_DELAY
        self.spread_shot = False


__all__ = ["Craft"]
