from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .seed import SeededRng

logger = logging.getLogger(__name__)

Point = tuple[float, float]

DEFAULT_RADIUS = 50.0


@dataclass(frozen=True, slots=True)
class Round:
    index: int
    seed: int
    true_angle: int  # whole degrees in [0, 360)
    offset_rad: float  # rotation of the first ray; drawing only
    ray_a: Point
    ray_b: Point
    radius: float = DEFAULT_RADIUS

    @property
    def center(self) -> Point:
        return (self.radius, self.radius)


class RoundGenerator:
    """Deterministic generator for one angle round per seed.

    Both rays are drawn from the center of a circle of ``radius`` centred at
    ``(radius, radius)``; the true angle is the difference between them.
    """

    def __init__(self, *, radius: float = DEFAULT_RADIUS) -> None:
        if radius <= 2.0:
            raise ValueError("radius must be > 2")
        self._radius = float(radius)

    @property
    def radius(self) -> float:
        return self._radius

    def generate(self, seed: int, *, round_index: int = 0) -> Round:
        rng = SeededRng(seed)
        # Draw order matters for reproducibility: angle first, then offset.
        angle_deg = rng.randrange(0, 360)
        offset_deg = rng.randrange(0, 360)

        angle = math.radians(angle_deg)
        offset = math.radians(offset_deg)
        r = self._radius

        ray_a = (r + r * math.cos(offset), r + r * math.sin(offset))
        ray_b = (r + r * math.cos(offset + angle), r + r * math.sin(offset + angle))

        rnd = Round(
            index=int(round_index),
            seed=int(seed),
            true_angle=int(angle_deg),
            offset_rad=offset,
            ray_a=ray_a,
            ray_b=ray_b,
            radius=r,
        )
        logger.debug("round %d: seed=%d angle=%d offset=%d", rnd.index, rnd.seed, angle_deg, offset_deg)
        return rnd
