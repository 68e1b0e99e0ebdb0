"""Background star-field data handed to the renderer."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List

from pygame.math import Vector2

from astro_arcade.math.geometry import FieldBounds
from astro_arcade.world.tuning import STAR_ALPHA_RANGE, STAR_COUNT, STAR_RADIUS_RANGE


@dataclass(frozen=True)
class Star:
    position: Vector2
    radius: float
    alpha: float


def generate_stars(bounds: FieldBounds, rng: random.Random, count: int = STAR_COUNT) -> List[Star]:
    return [
        Star(
            position=Vector2(rng.uniform(0.0, bounds.width), rng.uniform(0.0, bounds.height)),
            radius=rng.uniform(*STAR_RADIUS_RANGE),
            alpha=rng.uniform(*STAR_ALPHA_RANGE),
        )
        for _ in range(count)
    ]


__all__ = ["Star", "generate_stars"]
