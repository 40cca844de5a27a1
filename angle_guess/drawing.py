"""Abstract drawing description for one round.

The rendering surface receives a :class:`Drawing` and paints its discs in
order, then its rays. Nothing here depends on a concrete graphics library.
"""

from __future__ import annotations

from dataclasses import dataclass

from .rounds import Point, Round

Color = tuple[int, int, int]

BLACK: Color = (0, 0, 0)
RED: Color = (255, 0, 0)
WHITE: Color = (255, 255, 255)


@dataclass(frozen=True, slots=True)
class Disc:
    center: Point
    radius: float
    color: Color
    clip: tuple[Point, ...] | None = None  # polygon; paint only inside it


@dataclass(frozen=True, slots=True)
class Ray:
    start: Point
    end: Point
    color: Color


@dataclass(frozen=True, slots=True)
class Drawing:
    size: float  # square viewbox edge
    discs: tuple[Disc, ...]
    rays: tuple[Ray, ...]


def wedge_polygon(rnd: Round) -> tuple[Point, ...]:
    return (rnd.center, rnd.ray_a, rnd.ray_b)


def build_drawing(rnd: Round) -> Drawing:
    """Describe the disc, the highlighted wedge ring and both rays.

    The clip triangle is always the minor wedge. Below 180 degrees the red ring
    is clipped to it; from 180 up the ring is drawn whole and the triangle is
    painted back over in black, so the colour marks the reflex side.
    """

    center = rnd.center
    r = rnd.radius
    inner = r / 2.0
    mask = wedge_polygon(rnd)

    discs: list[Disc] = [Disc(center, r, BLACK)]
    if rnd.true_angle < 180:
        discs.append(Disc(center, inner, RED, clip=mask))
        discs.append(Disc(center, inner - 1.0, BLACK))
    else:
        discs.append(Disc(center, inner, RED))
        discs.append(Disc(center, inner - 1.0, BLACK))
        # Triangle fill: its vertices lie on the outer circle, so a clipped
        # full-radius disc covers exactly the triangle.
        discs.append(Disc(center, r, BLACK, clip=mask))

    rays = (
        Ray(center, rnd.ray_a, WHITE),
        Ray(center, rnd.ray_b, WHITE),
    )
    return Drawing(size=r * 2.0, discs=tuple(discs), rays=rays)
