"""Pairwise overlap detection and its game-state consequences."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from pygame.math import Vector2

from astro_arcade.engine.logger import ChannelLogger, GameLogger
from astro_arcade.math.geometry import circles_overlap
from astro_arcade.world.asteroids import FRAGMENT_COUNT, Asteroid
from astro_arcade.world.spawner import Spawner
from astro_arcade.world.state import GameState
from astro_arcade.world.tuning import CRAFT_HIT_SCALE

if TYPE_CHECKING:  # pragma: no cover - only used for typing
    from astro_arcade.world.progression import GameStateMachine


@dataclass
class CollisionReport:
    projectile_hits: int = 0
    shield_hits: int = 0
    lives_lost: int = 0
    power_ups_collected: int = 0

    @property
    def any(self) -> bool:
        return bool(
            self.projectile_hits or self.shield_hits or self.lives_lost or self.power_ups_collected
        )


class CollisionResolver:
    """Runs the per-tick collision pass.

    Categories are evaluated in a fixed order (projectiles, craft against
    asteroids, craft against power-ups). Within a category the first overlap
    found in reverse iteration order wins and scanning stops, so a single
    pass never removes the same entity twice.
    """

    def __init__(
        self,
        state: GameState,
        spawner: Spawner,
        machine: "GameStateMachine",
        logger: Optional[GameLogger] = None,
    ) -> None:
        self.state = state
        self.spawner = spawner
        self.machine = machine
        self._log: Optional[ChannelLogger] = logger.channel("collisions") if logger else None

    def resolve(self) -> CollisionReport:
        report = CollisionReport()
        self._projectiles_vs_asteroids(report)
        self._craft_vs_asteroids(report)
        self._craft_vs_power_ups(report)
        if self._log and report.any:
            self._log.debug(
                "Collisions: %d projectile hits, %d shield hits, %d lives lost, %d power-ups",
                report.projectile_hits,
                report.shield_hits,
                report.lives_lost,
                report.power_ups_collected,
            )
        return report

    def _projectiles_vs_asteroids(self, report: CollisionReport) -> None:
        projectiles = self.state.projectiles
        for index in range(len(projectiles) - 1, -1, -1):
            projectile = projectiles[index]
            asteroids = self.state.asteroids
            for asteroid in reversed(asteroids):
                if circles_overlap(projectile.position, projectile.radius, asteroid.position, asteroid.radius):
                    del projectiles[index]
                    self.split_asteroid(asteroid)
                    report.projectile_hits += 1
                    break

    def _craft_vs_asteroids(self, report: CollisionReport) -> None:
        craft = self.state.craft
        if craft is None or craft.invincible_ticks > 0:
            return
        for asteroid in reversed(self.state.asteroids):
            if circles_overlap(craft.position, craft.radius * CRAFT_HIT_SCALE, asteroid.position, asteroid.radius):
                if craft.shield_active:
                    self.split_asteroid(asteroid)
                    craft.deactivate_power_up()
                    self.machine.publish()
                    report.shield_hits += 1
                    if self._log:
                        self._log.info("Shield absorbed a %s asteroid", asteroid.size.name.lower())
                else:
                    self.machine.lose_life()
                    report.lives_lost += 1
                break

    def _craft_vs_power_ups(self, report: CollisionReport) -> None:
        craft = self.state.craft
        if craft is None:
            return
        power_ups = self.state.power_ups
        for index in range(len(power_ups) - 1, -1, -1):
            power_up = power_ups[index]
            if circles_overlap(craft.position, craft.radius, power_up.position, power_up.radius):
                craft.activate_power_up(power_up.kind)
                del power_ups[index]
                self.machine.publish()
                report.power_ups_collected += 1
                if self._log:
                    self._log.info("Picked up %s", power_up.kind.value)
                break

    def split_asteroid(self, asteroid: Asteroid) -> None:
        """Destroy ``asteroid``, award its points and spawn its fragments."""

        asteroids = self.state.asteroids
        if asteroid not in asteroids:
            return
        last_position = Vector2(asteroid.position)
        self.machine.add_score(asteroid.points)
        fragment = asteroid.size.fragment
        if fragment is not None:
            self.spawner.spawn_wave(FRAGMENT_COUNT, asteroid, fragment)
        asteroids.remove(asteroid)
        self.spawner.try_spawn_power_up(last_position)
        if not asteroids and not self.state.is_over:
            self.machine.level_up()


__all__ = ["CollisionReport", "CollisionResolver"]
