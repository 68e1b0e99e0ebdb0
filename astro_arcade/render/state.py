"""Read-only per-tick snapshots handed to the render collaborator."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from pygame.math import Vector2

from astro_arcade.world.asteroids import AsteroidSize, Silhouette
from astro_arcade.world.powerups import PowerUpKind
from astro_arcade.world.starfield import Star
from astro_arcade.world.state import GamePhase, GameState


@dataclass(frozen=True)
class CraftView:
    position: Vector2
    angle: float
    radius: float
    invincible: bool
    shield_active: bool
    flame_length: float


@dataclass(frozen=True)
class ProjectileView:
    position: Vector2
    radius: float


@dataclass(frozen=True)
class AsteroidView:
    position: Vector2
    angle: float
    radius: float
    size: AsteroidSize
    silhouette: Silhouette


@dataclass(frozen=True)
class PowerUpView:
    position: Vector2
    kind: PowerUpKind
    radius: float
    lifetime: int


@dataclass(frozen=True)
class RenderSnapshot:
    width: float
    height: float
    phase: GamePhase
    craft: Optional[CraftView]
    projectiles: Tuple[ProjectileView, ...]
    asteroids: Tuple[AsteroidView, ...]
    power_ups: Tuple[PowerUpView, ...]
    stars: Tuple[Star, ...]

    @classmethod
    def capture(cls, state: GameState) -> "RenderSnapshot":
        """Copy everything the renderer needs so it cannot reach live state."""

        craft = state.craft
        craft_view = None
        if craft is not None:
            craft_view = CraftView(
                position=Vector2(craft.position),
                angle=craft.angle,
                radius=craft.radius,
                invincible=craft.is_invincible,
                shield_active=craft.shield_active,
                flame_length=craft.flame_length,
            )
        return cls(
            width=state.bounds.width,
            height=state.bounds.height,
            phase=state.phase,
            craft=craft_view,
            projectiles=tuple(
                ProjectileView(position=Vector2(p.position), radius=p.radius)
                for p in state.projectiles
            ),
            asteroids=tuple(
                AsteroidView(
                    position=Vector2(a.position),
                    angle=a.angle,
                    radius=a.radius,
                    size=a.size,
                    silhouette=a.silhouette,
                )
                for a in state.asteroids
            ),
            power_ups=tuple(
                PowerUpView(
                    position=Vector2(p.position),
                    kind=p.kind,
                    radius=p.radius,
                    lifetime=p.lifetime,
                )
                for p in state.power_ups
            ),
            stars=tuple(state.stars),
        )


__all__ = [
    "AsteroidView",
    "CraftView",
    "PowerUpView",
    "ProjectileView",
    "RenderSnapshot",
]
