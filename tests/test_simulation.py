import logging
import random

import pytest
from pygame.math import Vector2

from astro_arcade.engine.logger import DEFAULT_CHANNELS, GameLogger, LoggerConfig
from astro_arcade.engine.scheduler import Scheduler
from astro_arcade.math.geometry import FieldBounds, inside_bounds
from astro_arcade.render.state import RenderSnapshot
from astro_arcade.world.asteroids import AsteroidSize
from astro_arcade.world.powerups import PowerUp, PowerUpKind
from astro_arcade.world.simulation import SimulationLoop
from astro_arcade.world.state import ControlIntent, GamePhase
from astro_arcade.world.tuning import (
    BASE_THRUST,
    CRAFT_DEFAULT_HEADING,
    CRAFT_TURN_SPEED,
    MAX_THRUST_MULTIPLIER,
    MIN_THRUST_MULTIPLIER,
    PROJECTILE_LIFETIME,
    STARTING_LIVES,
)


def _quiet_logger() -> GameLogger:
    channels = {name: False for name in DEFAULT_CHANNELS}
    return GameLogger(LoggerConfig(level=logging.CRITICAL, channels=channels))


def _make_simulation(seed: int = 3, **kwargs) -> SimulationLoop:
    sim = SimulationLoop(
        Scheduler(),
        FieldBounds(800, 600),
        rng=random.Random(seed),
        logger=_quiet_logger(),
        **kwargs,
    )
    sim.reset()
    return sim


def _empty_field(sim: SimulationLoop) -> None:
    sim.state.asteroids.clear()
    sim.state.power_ups.clear()


def test_tick_is_noop_outside_play() -> None:
    sim = _make_simulation()
    sim.state.phase = GamePhase.LEVEL_TRANSITION
    position = Vector2(sim.state.asteroids[0].position)
    sim.tick()
    assert sim.ticks == 0
    assert sim.state.asteroids[0].position == position


def test_turn_and_thrust_intent_are_applied() -> None:
    sim = _make_simulation()
    _empty_field(sim)
    sim.state.intent = ControlIntent(turn_left=True, thrusting=True)
    sim.tick()
    craft = sim.state.craft
    assert craft.angle == pytest.approx(CRAFT_DEFAULT_HEADING - CRAFT_TURN_SPEED)
    assert craft.velocity.length() == pytest.approx(BASE_THRUST * 0.99)
    assert craft.flame_length > 0.0


def test_opposing_turns_cancel_out() -> None:
    sim = _make_simulation()
    _empty_field(sim)
    sim.state.intent = ControlIntent(turn_left=True, turn_right=True)
    sim.tick()
    assert sim.state.craft.angle == pytest.approx(CRAFT_DEFAULT_HEADING)


def test_thrust_multiplier_scales_acceleration() -> None:
    sim = _make_simulation()
    _empty_field(sim)
    sim.state.thrust_multiplier = 2.0
    sim.state.intent = ControlIntent(thrusting=True)
    sim.tick()
    assert sim.state.craft.velocity.length() == pytest.approx(BASE_THRUST * 2.0 * 0.99)


def test_thrust_triggers_fire_once() -> None:
    sim = _make_simulation()
    _empty_field(sim)
    sim.state.intent = ControlIntent(increase_thrust=True)
    sim.tick()
    sim.tick()
    assert sim.state.thrust_multiplier == pytest.approx(1.1)
    assert not sim.state.intent.increase_thrust
    sim.state.intent.decrease_thrust = True
    sim.tick()
    sim.tick()
    assert sim.state.thrust_multiplier == pytest.approx(1.0)


def test_holding_fire_respects_cooldown() -> None:
    sim = _make_simulation()
    _empty_field(sim)
    sim.state.intent = ControlIntent(firing=True)
    sim.tick()
    assert len(sim.state.projectiles) == 1
    for _ in range(14):
        sim.tick()
    assert len(sim.state.projectiles) == 1
    sim.tick()
    assert len(sim.state.projectiles) == 2


def test_projectiles_expire() -> None:
    sim = _make_simulation()
    _empty_field(sim)
    sim.state.intent = ControlIntent(firing=True)
    sim.tick()
    sim.state.intent = ControlIntent()
    for _ in range(PROJECTILE_LIFETIME):
        sim.tick()
    assert sim.state.projectiles == []


def test_power_ups_expire() -> None:
    sim = _make_simulation()
    _empty_field(sim)
    sim.state.power_ups.append(PowerUp(position=Vector2(20, 20), kind=PowerUpKind.SHIELD, lifetime=3))
    for _ in range(2):
        sim.tick()
    assert len(sim.state.power_ups) == 1
    sim.tick()
    assert sim.state.power_ups == []


def test_scheduler_drives_ticks_at_fixed_cadence() -> None:
    sim = _make_simulation()
    _empty_field(sim)
    for _ in range(10):
        sim.scheduler.advance(sim.tick_interval)
    assert sim.ticks == 10
    assert sim.running


def test_halted_loop_does_not_tick() -> None:
    sim = _make_simulation()
    sim.halt()
    sim.scheduler.advance(1.0)
    assert sim.ticks == 0
    sim.resume()
    sim.scheduler.advance(sim.tick_interval)
    assert sim.ticks == 1


def test_intent_source_is_sampled_every_tick() -> None:
    calls = []

    def source() -> ControlIntent:
        calls.append(1)
        return ControlIntent(turn_right=True)

    sim = _make_simulation(intent_source=source)
    _empty_field(sim)
    sim.tick()
    sim.tick()
    assert len(calls) == 2
    assert sim.state.craft.angle == pytest.approx(CRAFT_DEFAULT_HEADING + 2 * CRAFT_TURN_SPEED)


def test_render_receives_detached_snapshot() -> None:
    frames = []
    sim = _make_simulation(render=frames.append)
    sim.tick()
    assert len(frames) == 1
    snapshot = frames[0]
    assert isinstance(snapshot, RenderSnapshot)
    assert snapshot.phase is GamePhase.PLAYING
    assert len(snapshot.asteroids) == len(sim.state.asteroids)
    snapshot.craft.position.x += 100
    assert sim.state.craft.position.x != snapshot.craft.position.x


def test_resize_updates_bounds_and_stars() -> None:
    sim = _make_simulation()
    sim.resize(320, 240)
    assert sim.state.bounds == FieldBounds(320, 240)
    assert all(inside_bounds(star.position, sim.state.bounds) for star in sim.state.stars)
    sim.reset()
    assert sim.state.bounds == FieldBounds(320, 240)


def test_reset_restores_a_fresh_session() -> None:
    sim = _make_simulation()
    sim.state.score = 500
    sim.state.lives = 0
    sim.machine.game_over()
    sim.reset()
    state = sim.state
    assert state.phase is GamePhase.PLAYING
    assert state.score == 0
    assert state.lives == STARTING_LIVES
    assert state.message is None
    assert state.projectiles == []
    assert sim.running


def test_four_large_asteroids_clear_for_2080_points(monkeypatch) -> None:
    sim = _make_simulation()
    monkeypatch.setattr(sim.spawner, "try_spawn_power_up", lambda position: None)
    level_ups = []
    real_level_up = sim.machine.level_up

    def counting_level_up() -> None:
        level_ups.append(1)
        real_level_up()

    monkeypatch.setattr(sim.machine, "level_up", counting_level_up)
    assert [a.size for a in sim.state.asteroids] == [AsteroidSize.LARGE] * 4
    while sim.state.asteroids:
        sim.resolver.split_asteroid(sim.state.asteroids[-1])
    assert sim.state.score == 4 * 20 + 8 * 50 + 16 * 100 == 2080
    assert level_ups == [1]
    assert sim.state.phase is GamePhase.LEVEL_TRANSITION


@pytest.mark.parametrize("seed", range(4))
def test_random_play_keeps_state_consistent(seed: int) -> None:
    rng = random.Random(seed)

    def source() -> ControlIntent:
        return ControlIntent(
            turn_left=rng.random() < 0.3,
            turn_right=rng.random() < 0.3,
            thrusting=rng.random() < 0.5,
            firing=rng.random() < 0.6,
            decrease_thrust=rng.random() < 0.05,
            increase_thrust=rng.random() < 0.05,
        )

    sim = _make_simulation(seed=seed, intent_source=source)
    bounds = sim.state.bounds
    last_score = 0
    last_lives = STARTING_LIVES
    for _ in range(3000):
        sim.scheduler.advance(sim.tick_interval)
        state = sim.state
        assert state.score >= last_score
        assert 0 <= state.lives <= last_lives
        assert MIN_THRUST_MULTIPLIER <= state.thrust_multiplier <= MAX_THRUST_MULTIPLIER
        for projectile in state.projectiles:
            assert inside_bounds(projectile.position, bounds)
            assert projectile.lifetime > 0
        for power_up in state.power_ups:
            assert power_up.lifetime > 0
        for asteroid in state.asteroids:
            assert -asteroid.radius <= asteroid.position.x < bounds.width + asteroid.radius
            assert -asteroid.radius <= asteroid.position.y < bounds.height + asteroid.radius
        craft = state.craft
        assert craft.invincible_ticks >= 0
        assert (craft.power_up is None) == (craft.power_up_ticks == 0)
        if state.phase is GamePhase.PLAYING:
            assert state.asteroids
        last_score = state.score
        last_lives = state.lives
        if state.is_over:
            assert not sim.running
            break


def test_power_up_expiry_is_published_to_hud() -> None:
    published = []
    sim = _make_simulation(hud=published.append)
    _empty_field(sim)
    sim.state.craft.activate_power_up(PowerUpKind.RAPID_FIRE)
    sim.state.craft.power_up_ticks = 2
    sim.machine.publish()
    assert published[-1].power_up_label == "Rapid Fire!"
    for _ in range(5):
        sim.tick()
    assert sim.state.craft.power_up is None
    assert published[-1].power_up_label == "None"
