"""Gameplay tunables. Speeds and timers are expressed per simulation tick."""
from __future__ import annotations

from math import pi

TICK_RATE = 45.0
LEVEL_TRANSITION_DELAY = 2.0  # seconds of real time

CRAFT_SIZE = 20.0
CRAFT_TURN_SPEED = 0.1
CRAFT_DEFAULT_HEADING = -pi / 2.0
CRAFT_HIT_SCALE = 0.8
BASE_THRUST = 0.1
FRICTION = 0.99
INVINCIBILITY_TICKS = 180
MAX_FLAME_LENGTH = CRAFT_SIZE

PROJECTILE_SPEED = 5.0
PROJECTILE_LIFETIME = 60
PROJECTILE_RADIUS = 3.0
SPREAD_ANGLE = 0.25

BASE_FIRE_DELAY = 15
RAPID_FIRE_DELAY = 5

ASTEROID_SPEED = 0.7
ASTEROID_SPIN_RANGE = 0.01
FRAGMENT_SPEED_RANGE = (0.5, 2.0)
SILHOUETTE_VERTEX_RANGE = (8, 12)
SILHOUETTE_JAGGEDNESS = (0.7, 1.3)
MAX_SPAWN_ATTEMPTS = 200

POWERUP_CHANCE = 0.15
POWERUP_LIFETIME = 480
POWERUP_EFFECT_DURATION = 600
POWERUP_RADIUS = 8.0

STARTING_LIVES = 5
STARTING_WAVE_SIZE = 4
STARTING_THRUST_MULTIPLIER = 1.0
MIN_THRUST_MULTIPLIER = 0.5
MAX_THRUST_MULTIPLIER = 2.0
THRUST_ADJUST_STEP = 0.1

STAR_COUNT = 170
STAR_RADIUS_RANGE = (0.3, 1.5)
STAR_ALPHA_RANGE = (0.3, 0.8)
