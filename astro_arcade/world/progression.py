"""Score, lives and level progression."""
from __future__ import annotations

from typing import Callable, Optional, Protocol

from astro_arcade.engine.logger import ChannelLogger, GameLogger
from astro_arcade.engine.scheduler import ScheduledTask, Scheduler
from astro_arcade.world.asteroids import AsteroidSize
from astro_arcade.world.spawner import Spawner
from astro_arcade.world.state import GamePhase, GameState, HUDStatus
from astro_arcade.world.tuning import (
    LEVEL_TRANSITION_DELAY,
    MAX_THRUST_MULTIPLIER,
    MIN_THRUST_MULTIPLIER,
    THRUST_ADJUST_STEP,
)

LEVEL_CLEAR_MESSAGE = "LEVEL CLEAR! Next wave..."
GAME_OVER_MESSAGE = "GAME OVER! Score: {score}"


class LoopControl(Protocol):
    def halt(self) -> None:
        ...

    def resume(self) -> None:
        ...


class GameStateMachine:
    """Moves a :class:`GameState` between playing, level transition and game over.

    The level transition is the only suspension point: the loop is halted and a
    scheduled task resumes it after ``transition_delay`` seconds unless the game
    ended or was reset in the meantime.
    """

    def __init__(
        self,
        state: GameState,
        spawner: Spawner,
        scheduler: Scheduler,
        loop: LoopControl,
        hud: Optional[Callable[[HUDStatus], None]] = None,
        logger: Optional[GameLogger] = None,
        transition_delay: float = LEVEL_TRANSITION_DELAY,
    ) -> None:
        self.state = state
        self.spawner = spawner
        self.scheduler = scheduler
        self.loop = loop
        self.hud = hud
        self.transition_delay = transition_delay
        self._transition: Optional[ScheduledTask] = None
        self._log: Optional[ChannelLogger] = logger.channel("progression") if logger else None

    @property
    def transition_pending(self) -> bool:
        return self._transition is not None and self._transition.pending

    def publish(self) -> None:
        if self.hud is not None:
            self.hud(self.state.hud_status())

    def add_score(self, points: int) -> None:
        self.state.score += max(0, points)
        self.publish()

    def lose_life(self) -> None:
        state = self.state
        if state.is_over:
            return
        state.lives -= 1
        if state.lives <= 0:
            state.lives = 0
            self.game_over()
            return
        if self._log:
            self._log.info("Life lost, %d remaining", state.lives)
        if state.craft is not None:
            state.craft.reset_after_death(state.bounds)
        self.publish()

    def game_over(self) -> None:
        state = self.state
        state.phase = GamePhase.GAME_OVER
        if state.craft is not None:
            state.craft.deactivate_power_up()
        state.message = GAME_OVER_MESSAGE.format(score=state.score)
        self.loop.halt()
        if self._log:
            self._log.info("Game over with score %d", state.score)
        self.publish()

    def level_up(self) -> None:
        state = self.state
        if not state.is_playing:
            return
        self.loop.halt()
        state.wave_size += 1
        state.phase = GamePhase.LEVEL_TRANSITION
        state.message = LEVEL_CLEAR_MESSAGE
        if state.craft is not None:
            state.craft.reset_after_death(state.bounds)
        self.cancel_pending()
        self._transition = self.scheduler.call_later(self.transition_delay, self._finish_transition)
        if self._log:
            self._log.info("Level clear, next wave has %d asteroids", state.wave_size)
        self.publish()

    def _finish_transition(self) -> None:
        self._transition = None
        state = self.state
        if state.phase is not GamePhase.LEVEL_TRANSITION:
            return
        state.message = None
        self.spawner.spawn_wave(state.wave_size, None, AsteroidSize.LARGE)
        state.phase = GamePhase.PLAYING
        self.publish()
        self.loop.resume()

    def cancel_pending(self) -> None:
        if self._transition is not None:
            self._transition.cancel()
            self._transition = None

    def adjust_thrust(self, direction: int) -> float:
        state = self.state
        if direction > 0:
            value = min(MAX_THRUST_MULTIPLIER, state.thrust_multiplier + THRUST_ADJUST_STEP)
        else:
            value = max(MIN_THRUST_MULTIPLIER, state.thrust_multiplier - THRUST_ADJUST_STEP)
        state.thrust_multiplier = round(value, 1)
        self.publish()
        return state.thrust_multiplier


__all__ = [
    "GAME_OVER_MESSAGE",
    "GameStateMachine",
    "LEVEL_CLEAR_MESSAGE",
    "LoopControl",
]
