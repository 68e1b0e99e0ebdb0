"""Game state aggregate owned by the simulation loop."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from astro_arcade.combat.projectiles import Projectile
from astro_arcade.math.geometry import FieldBounds
from astro_arcade.ships.craft import Craft
from astro_arcade.world.asteroids import Asteroid
from astro_arcade.world.powerups import PowerUp
from astro_arcade.world.starfield import Star
from astro_arcade.world.tuning import (
    STARTING_LIVES,
    STARTING_THRUST_MULTIPLIER,
    STARTING_WAVE_SIZE,
)


class GamePhase(Enum):
    PLAYING = "playing"
    LEVEL_TRANSITION = "level_transition"
    GAME_OVER = "game_over"


@dataclass
class ControlIntent:
    """Normalised player intent sampled once per tick.

    Held booleans mirror the controls being pressed. The two thrust triggers
    are one-shot and are cleared by the simulation after it consumes them.
    """

    turn_left: bool = False
    turn_right: bool = False
    thrusting: bool = False
    firing: bool = False
    decrease_thrust: bool = False
    increase_thrust: bool = False

    def consume_decrease_thrust(self) -> bool:
        value = self.decrease_thrust
        self.decrease_thrust = False
        return value

    def consume_increase_thrust(self) -> bool:
        value = self.increase_thrust
        self.increase_thrust = False
        return value


@dataclass(frozen=True)
class HUDStatus:
    score: int
    lives: int
    thrust_multiplier: float
    power_up_label: str
    message: Optional[str] = None


@dataclass
class GameState:
    bounds: FieldBounds
    craft: Optional[Craft] = None
    score: int = 0
    lives: int = STARTING_LIVES
    phase: GamePhase = GamePhase.PLAYING
    wave_size: int = STARTING_WAVE_SIZE
    thrust_multiplier: float = STARTING_THRUST_MULTIPLIER
    intent: ControlIntent = field(default_factory=ControlIntent)
    projectiles: List[Projectile] = field(default_factory=list)
    asteroids: List[Asteroid] = field(default_factory=list)
    power_ups: List[PowerUp] = field(default_factory=list)
    stars: List[Star] = field(default_factory=list)
    message: Optional[str] = None

    @classmethod
    def new_session(cls, bounds: FieldBounds) -> "GameState":
        return cls(bounds=bounds, craft=Craft.centered(bounds))

    @property
    def is_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER

    @property
    def is_playing(self) -> bool:
        return self.phase is GamePhase.PLAYING

    def hud_status(self) -> HUDStatus:
        label = self.craft.power_up_label if self.craft else "None"
        return HUDStatus(
            score=self.score,
            lives=self.lives,
            thrust_multiplier=self.thrust_multiplier,
            power_up_label=label,
            message=self.message,
        )


__all__ = ["ControlIntent", "GamePhase", "GameState", "HUDStatus"]
