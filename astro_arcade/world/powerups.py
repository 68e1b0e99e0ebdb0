"""Collectible power-ups and the effects they grant."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from pygame.math import Vector2

from astro_arcade.world.tuning import (
    BASE_FIRE_DELAY,
    POWERUP_LIFETIME,
    POWERUP_RADIUS,
    RAPID_FIRE_DELAY,
)


class PowerUpKind(Enum):
    SHIELD = "shield"
    RAPID_FIRE = "rapid_fire"
    SPREAD_SHOT = "spread_shot"


@dataclass(frozen=True)
class PowerUpEffect:
    """Craft modifiers applied while a power-up is active."""

    label: str
    symbol: str
    shield: bool = False
    fire_delay: int = BASE_FIRE_DELAY
    spread: bool = False


POWERUP_EFFECTS: Dict[PowerUpKind, PowerUpEffect] = {
    PowerUpKind.SHIELD: PowerUpEffect(label="Shield Active!", symbol="S", shield=True),
    PowerUpKind.RAPID_FIRE: PowerUpEffect(
        label="Rapid Fire!", symbol="R", fire_delay=RAPID_FIRE_DELAY
    ),
    PowerUpKind.SPREAD_SHOT: PowerUpEffect(label="Spread Shot!", symbol="W", spread=True),
}

NO_POWERUP_LABEL = "None"


@dataclass(eq=False)
class PowerUp:
    position: Vector2
    kind: PowerUpKind
    radius: float = POWERUP_RADIUS
    lifetime: int = POWERUP_LIFETIME

    @property
    def effect(self) -> PowerUpEffect:
        return POWERUP_EFFECTS[self.kind]

    def update(self) -> None:
        self.lifetime -= 1

    def is_expired(self) -> bool:
        return self.lifetime <= 0


__all__ = [
    "NO_POWERUP_LABEL",
    "POWERUP_EFFECTS",
    "PowerUp",
    "PowerUpEffect",
    "PowerUpKind",
]
