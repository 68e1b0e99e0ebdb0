import logging
import random

import pytest
from pygame.math import Vector2

from astro_arcade.combat.projectiles import Projectile
from astro_arcade.engine.logger import DEFAULT_CHANNELS, GameLogger, LoggerConfig
from astro_arcade.engine.scheduler import Scheduler
from astro_arcade.math.geometry import FieldBounds
from astro_arcade.world.asteroids import Asteroid, AsteroidSize
from astro_arcade.world.powerups import PowerUp, PowerUpKind
from astro_arcade.world.simulation import SimulationLoop
from astro_arcade.world.state import GamePhase
from astro_arcade.world.tuning import CRAFT_DEFAULT_HEADING, INVINCIBILITY_TICKS


def _quiet_logger() -> GameLogger:
    channels = {name: False for name in DEFAULT_CHANNELS}
    return GameLogger(LoggerConfig(level=logging.CRITICAL, channels=channels))


def _make_simulation(monkeypatch, seed: int = 7) -> SimulationLoop:
    sim = SimulationLoop(Scheduler(), FieldBounds(800, 600), rng=random.Random(seed), logger=_quiet_logger())
    sim.reset()
    sim.state.asteroids.clear()
    monkeypatch.setattr(sim.spawner, "try_spawn_power_up", lambda position: None)
    return sim


def _asteroid(x: float, y: float, size: AsteroidSize = AsteroidSize.LARGE) -> Asteroid:
    return Asteroid.create(Vector2(x, y), Vector2(), size, random.Random(1))


def _projectile(x: float, y: float) -> Projectile:
    return Projectile(position=Vector2(x, y), velocity=Vector2())


def test_large_split_yields_two_medium_and_twenty_points(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    target = _asteroid(100, 100)
    sim.state.asteroids.append(target)
    sim.resolver.split_asteroid(target)
    assert sim.state.score == 20
    assert target not in sim.state.asteroids
    assert [a.size for a in sim.state.asteroids] == [AsteroidSize.MEDIUM, AsteroidSize.MEDIUM]
    assert all(a.position == Vector2(100, 100) for a in sim.state.asteroids)


def test_medium_split_yields_two_small_and_fifty_points(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    target = _asteroid(100, 100, AsteroidSize.MEDIUM)
    sim.state.asteroids.append(target)
    sim.resolver.split_asteroid(target)
    assert sim.state.score == 50
    assert [a.size for a in sim.state.asteroids] == [AsteroidSize.SMALL, AsteroidSize.SMALL]


def test_small_split_yields_nothing_and_hundred_points(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    target = _asteroid(100, 100, AsteroidSize.SMALL)
    other = _asteroid(700, 500)
    sim.state.asteroids.extend([target, other])
    sim.resolver.split_asteroid(target)
    assert sim.state.score == 100
    assert sim.state.asteroids == [other]
    assert sim.state.is_playing


def test_split_of_removed_asteroid_is_ignored(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    stray = _asteroid(100, 100)
    sim.resolver.split_asteroid(stray)
    assert sim.state.score == 0
    assert sim.state.asteroids == []


def test_split_attempts_power_up_at_last_position() -> None:
    sim = SimulationLoop(Scheduler(), FieldBounds(800, 600), rng=random.Random(4), logger=_quiet_logger())
    sim.reset()
    sim.state.asteroids.clear()
    calls = []
    sim.spawner.try_spawn_power_up = lambda position: calls.append(Vector2(position))
    target = _asteroid(120, 80, AsteroidSize.SMALL)
    sim.state.asteroids.extend([target, _asteroid(700, 500)])
    sim.resolver.split_asteroid(target)
    assert calls == [Vector2(120, 80)]


def test_projectile_destroys_at_most_one_asteroid(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    first = _asteroid(100, 100, AsteroidSize.SMALL)
    second = _asteroid(102, 100, AsteroidSize.SMALL)
    keeper = _asteroid(700, 500)
    sim.state.asteroids.extend([keeper, first, second])
    sim.state.projectiles.append(_projectile(101, 100))
    report = sim.resolver.resolve()
    assert report.projectile_hits == 1
    assert sim.state.projectiles == []
    # Reverse iteration order: the most recently added overlap wins.
    assert sim.state.asteroids == [keeper, first]
    assert sim.state.score == 100


def test_each_projectile_resolves_independently(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    a = _asteroid(100, 100, AsteroidSize.SMALL)
    b = _asteroid(300, 100, AsteroidSize.SMALL)
    keeper = _asteroid(700, 500)
    sim.state.asteroids.extend([keeper, a, b])
    miss = _projectile(500, 50)
    sim.state.projectiles.extend([_projectile(100, 100), miss, _projectile(300, 100)])
    sim.resolver.resolve()
    assert sim.state.projectiles == [miss]
    assert sim.state.asteroids == [keeper]
    assert sim.state.score == 200


def test_unshielded_craft_hit_loses_one_life_and_resets(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    craft = sim.state.craft
    craft.position = Vector2(150, 150)
    craft.velocity = Vector2(2, 1)
    craft.angle = 0.3
    craft.invincible_ticks = 0
    sim.state.asteroids.append(_asteroid(150, 150))
    report = sim.resolver.resolve()
    assert report.lives_lost == 1
    assert sim.state.lives == 4
    assert craft.position == Vector2(400, 300)
    assert craft.velocity == Vector2(0, 0)
    assert craft.angle == pytest.approx(CRAFT_DEFAULT_HEADING)
    assert craft.invincible_ticks == INVINCIBILITY_TICKS
    assert len(sim.state.asteroids) == 1


def test_craft_hit_uses_reduced_radius(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    craft = sim.state.craft
    craft.invincible_ticks = 0
    # 20 (asteroid) + 0.8 * 10 (craft) = 28; place the asteroid just outside.
    sim.state.asteroids.append(_asteroid(craft.position.x + 28.5, craft.position.y))
    sim.resolver.resolve()
    assert sim.state.lives == 5


def test_invincible_craft_ignores_asteroids(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    craft = sim.state.craft
    craft.invincible_ticks = 5
    sim.state.asteroids.append(_asteroid(craft.position.x, craft.position.y))
    sim.resolver.resolve()
    assert sim.state.lives == 5


def test_shield_absorbs_one_asteroid(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    craft = sim.state.craft
    craft.invincible_ticks = 0
    craft.activate_power_up(PowerUpKind.SHIELD)
    hit = _asteroid(craft.position.x, craft.position.y, AsteroidSize.SMALL)
    also_touching = _asteroid(craft.position.x + 1, craft.position.y, AsteroidSize.SMALL)
    far = _asteroid(50, 50)
    sim.state.asteroids.extend([far, also_touching, hit])
    report = sim.resolver.resolve()
    assert report.shield_hits == 1
    assert report.lives_lost == 0
    assert sim.state.lives == 5
    assert sim.state.asteroids == [far, also_touching]
    assert craft.power_up is None
    assert not craft.shield_active
    assert sim.state.score == 100


def test_last_life_lost_ends_game_without_reset(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    sim.state.lives = 1
    craft = sim.state.craft
    craft.position = Vector2(150, 150)
    craft.invincible_ticks = 0
    sim.state.asteroids.append(_asteroid(150, 150))
    sim.resolver.resolve()
    assert sim.state.phase is GamePhase.GAME_OVER
    assert sim.state.lives == 0
    assert craft.position == Vector2(150, 150)
    assert craft.invincible_ticks == 0


def test_power_up_pickup_takes_first_match_only(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    craft = sim.state.craft
    sim.state.asteroids.append(_asteroid(50, 50))
    under = PowerUp(position=Vector2(craft.position), kind=PowerUpKind.RAPID_FIRE)
    top = PowerUp(position=Vector2(craft.position), kind=PowerUpKind.SPREAD_SHOT)
    sim.state.power_ups.extend([under, top])
    report = sim.resolver.resolve()
    assert report.power_ups_collected == 1
    assert craft.power_up is PowerUpKind.SPREAD_SHOT
    assert sim.state.power_ups == [under]


def test_last_asteroid_triggers_level_up(monkeypatch) -> None:
    sim = _make_simulation(monkeypatch)
    target = _asteroid(100, 100, AsteroidSize.SMALL)
    sim.state.asteroids.append(target)
    sim.state.projectiles.append(_projectile(100, 100))
    sim.resolver.resolve()
    assert sim.state.asteroids == []
    assert sim.state.phase is GamePhase.LEVEL_TRANSITION
    assert sim.state.wave_size == 5
