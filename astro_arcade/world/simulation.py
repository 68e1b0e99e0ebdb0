"""Fixed-cadence simulation driver."""
from __future__ import annotations

import random
from typing import Callable, Optional

from astro_arcade.combat.collisions import CollisionReport, CollisionResolver
from astro_arcade.engine.logger import ChannelLogger, GameLogger
from astro_arcade.engine.scheduler import ScheduledTask, Scheduler
from astro_arcade.math.geometry import FieldBounds
from astro_arcade.render.state import RenderSnapshot
from astro_arcade.world.asteroids import AsteroidSize
from astro_arcade.world.progression import GameStateMachine
from astro_arcade.world.spawner import Spawner
from astro_arcade.world.state import ControlIntent, GameState, HUDStatus
from astro_arcade.world.tuning import LEVEL_TRANSITION_DELAY, TICK_RATE


class SimulationLoop:
    """Owns the :class:`GameState` and advances it one tick at a time.

    Each tick is a callback on the shared :class:`Scheduler` that reschedules
    itself while the game is playing. A tick applies the sampled control
    intent, updates every entity, resolves collisions and hands a snapshot to
    the render collaborator.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        bounds: FieldBounds,
        rng: Optional[random.Random] = None,
        logger: Optional[GameLogger] = None,
        render: Optional[Callable[[RenderSnapshot], None]] = None,
        hud: Optional[Callable[[HUDStatus], None]] = None,
        intent_source: Optional[Callable[[], ControlIntent]] = None,
        tick_rate: float = TICK_RATE,
        transition_delay: float = LEVEL_TRANSITION_DELAY,
    ) -> None:
        self.scheduler = scheduler
        self.rng = rng or random.Random()
        self.logger = logger
        self.render = render
        self.hud = hud
        self.intent_source = intent_source
        self.tick_interval = 1.0 / tick_rate
        self.transition_delay = transition_delay
        self.ticks = 0
        self.last_report = CollisionReport()
        self._tick_task: Optional[ScheduledTask] = None
        self._log: Optional[ChannelLogger] = logger.channel("physics") if logger else None
        self._bind(GameState(bounds=FieldBounds(bounds.width, bounds.height)))

    def _bind(self, state: GameState) -> None:
        self.state = state
        self.spawner = Spawner(state, self.rng, self.logger)
        self.machine = GameStateMachine(
            state,
            self.spawner,
            self.scheduler,
            self,
            hud=self.hud,
            logger=self.logger,
            transition_delay=self.transition_delay,
        )
        self.resolver = CollisionResolver(state, self.spawner, self.machine, self.logger)

    @property
    def running(self) -> bool:
        return self._tick_task is not None and self._tick_task.pending

    def reset(self) -> None:
        """Start a fresh session, discarding any pending tick or transition."""

        self.halt()
        self.machine.cancel_pending()
        bounds = self.state.bounds
        self._bind(GameState.new_session(FieldBounds(bounds.width, bounds.height)))
        self.ticks = 0
        self.state.stars = self.spawner.spawn_stars(self.state.bounds)
        self.spawner.spawn_wave(self.state.wave_size, None, AsteroidSize.LARGE)
        if self.logger:
            self.logger.channel("progression").info("New game started")
        self.machine.publish()
        self.resume()

    def halt(self) -> None:
        if self._tick_task is not None:
            self._tick_task.cancel()
            self._tick_task = None

    def resume(self) -> None:
        if self.state.is_over:
            return
        self.halt()
        self._tick_task = self.scheduler.call_later(self.tick_interval, self._scheduled_tick)

    def _scheduled_tick(self) -> None:
        self._tick_task = None
        self.tick()
        if self.state.is_playing and self._tick_task is None:
            self._tick_task = self.scheduler.call_later(self.tick_interval, self._scheduled_tick)

    def tick(self) -> None:
        state = self.state
        if not state.is_playing:
            return
        self.ticks += 1
        if self.intent_source is not None:
            state.intent = self.intent_source()
        self._apply_intent(state.intent)
        active_power_up = state.craft.power_up if state.craft else None
        self._update_entities()
        if state.craft is not None and state.craft.power_up is not active_power_up:
            self.machine.publish()
        self.last_report = self.resolver.resolve()
        if self.render is not None:
            self.render(self.snapshot())

    def _apply_intent(self, intent: ControlIntent) -> None:
        state = self.state
        craft = state.craft
        if craft is not None:
            if intent.turn_left:
                craft.rotate(-1)
            if intent.turn_right:
                craft.rotate(1)
            if intent.thrusting:
                craft.apply_thrust(state.thrust_multiplier)
            if intent.firing:
                state.projectiles.extend(craft.try_fire())
        if intent.consume_decrease_thrust():
            self.machine.adjust_thrust(-1)
        if intent.consume_increase_thrust():
            self.machine.adjust_thrust(1)

    def _update_entities(self) -> None:
        state = self.state
        bounds = state.bounds
        if state.craft is not None:
            state.craft.update(bounds)
        live_projectiles = []
        for projectile in state.projectiles:
            projectile.update()
            if not projectile.is_expired(bounds):
                live_projectiles.append(projectile)
        state.projectiles[:] = live_projectiles
        for asteroid in state.asteroids:
            asteroid.update(bounds)
        live_power_ups = []
        for power_up in state.power_ups:
            power_up.update()
            if not power_up.is_expired():
                live_power_ups.append(power_up)
        state.power_ups[:] = live_power_ups

    def resize(self, width: float, height: float) -> None:
        bounds = self.state.bounds
        bounds.width = float(width)
        bounds.height = float(height)
        self.state.stars = self.spawner.spawn_stars(bounds)
        if self._log:
            self._log.debug("Field resized to %.0fx%.0f", bounds.width, bounds.height)

    def snapshot(self) -> RenderSnapshot:
        return RenderSnapshot.capture(self.state)


__all__ = ["SimulationLoop"]
