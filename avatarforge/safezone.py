"""Silhouette geometry and the safe-zone constraint.

Each element is treated as a disc of radius element.extent. It must sit
inside the silhouette with a margin to spare. Elements that do not fit
are pulled toward the silhouette's anchor and shrunk, twice at most,
then dropped.
"""

import logging
import math
from dataclasses import dataclass

from .layout import LayoutPlan

logger = logging.getLogger(__name__)

SHAPES = ("rounded", "circle", "triangle")


@dataclass(frozen=True)
class SafeZoneConfig:
    """Tuning constants for the safe zone (empirical, not load-bearing)."""
    margin_ratio: float = 0.02
    first_pull: float = 0.25
    first_shrink: float = 0.85
    second_pull: float = 0.5
    second_shrink: float = 0.7
    corner_ratio: float = 0.15

    def __post_init__(self):
        for name in ("first_pull", "second_pull"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ValueError(f"{name} must be within [0, 1]")
        for name in ("first_shrink", "second_shrink"):
            if not 0.0 < getattr(self, name) <= 1.0:
                raise ValueError(f"{name} must be within (0, 1]")
        if self.margin_ratio < 0:
            raise ValueError("margin_ratio must be non-negative")
        if not 0.0 <= self.corner_ratio <= 0.5:
            raise ValueError("corner_ratio must be within [0, 0.5]")

    @property
    def stages(self):
        return ((self.first_pull, self.first_shrink),
                (self.second_pull, self.second_shrink))


@dataclass(frozen=True)
class Silhouette:
    """The outer clip boundary of a size x size avatar."""
    kind: str
    size: float
    corner_ratio: float = 0.15

    def __post_init__(self):
        if self.kind not in SHAPES:
            raise ValueError(
                f"Unknown shape {self.kind!r} (expected one of: "
                f"{', '.join(SHAPES)})"
            )

    @property
    def corner_radius(self):
        return self.size * self.corner_ratio

    @property
    def vertices(self):
        """Triangle corners: apex at top centre, base along the bottom."""
        s = float(self.size)
        return ((s / 2, 0.0), (s, s), (0.0, s))

    @property
    def anchor(self):
        """Point elements are pulled toward.

        The triangle's centroid sits below its bounding-box centre, so
        its pull is biased downward toward the visual mass.
        """
        if self.kind == "triangle":
            (ax, ay), (bx, by), (cx, cy) = self.vertices
            return ((ax + bx + cx) / 3.0, (ay + by + cy) / 3.0)
        return (self.size / 2.0, self.size / 2.0)

    def contains_disc(self, x, y, radius):
        """True if the disc at (x, y) with the given radius fits inside."""
        if self.kind == "circle":
            c = self.size / 2.0
            return math.hypot(x - c, y - c) + radius <= c
        if self.kind == "rounded":
            return _rounded_contains(x, y, radius, self.size,
                                     self.corner_radius)
        return _triangle_contains(x, y, radius, self.vertices)


def _rounded_contains(x, y, radius, size, corner):
    lo, hi = radius, size - radius
    if not (lo <= x <= hi and lo <= y <= hi):
        return False
    # Inside one of the four corner squares the disc must also clear the
    # corner arc.
    for cx in (corner, size - corner):
        for cy in (corner, size - corner):
            in_x = x < cx if cx == corner else x > cx
            in_y = y < cy if cy == corner else y > cy
            if in_x and in_y and math.hypot(x - cx, y - cy) + radius > corner:
                return False
    return True


def _incircle(vertices):
    (ax, ay), (bx, by), (cx, cy) = vertices
    a = math.hypot(bx - cx, by - cy)
    b = math.hypot(ax - cx, ay - cy)
    c = math.hypot(ax - bx, ay - by)
    perimeter = a + b + c
    ix = (a * ax + b * bx + c * cx) / perimeter
    iy = (a * ay + b * by + c * cy) / perimeter
    area = abs((bx - ax) * (cy - ay) - (cx - ax) * (by - ay)) / 2.0
    return (ix, iy), 2.0 * area / perimeter


def barycentric(point, vertices):
    """Barycentric coordinates (u, v, w) of point in the triangle."""
    (ax, ay), (bx, by), (cx, cy) = vertices
    px, py = point
    det = (by - cy) * (ax - cx) + (cx - bx) * (ay - cy)
    u = ((by - cy) * (px - cx) + (cx - bx) * (py - cy)) / det
    v = ((cy - ay) * (px - cx) + (ax - cx) * (py - cy)) / det
    return u, v, 1.0 - u - v


def _triangle_contains(x, y, radius, vertices):
    # Shrink the triangle about its incentre by the disc radius, then the
    # disc fits iff its centre lies in the shrunken triangle.
    (ix, iy), inradius = _incircle(vertices)
    if radius >= inradius:
        return False
    k = (inradius - radius) / inradius
    inset = tuple((ix + k * (vx - ix), iy + k * (vy - iy))
                  for vx, vy in vertices)
    return all(c >= 0.0 for c in barycentric((x, y), inset))


def fits(element, silhouette, margin):
    return silhouette.contains_disc(element.x, element.y,
                                    element.extent + margin)


def constrain(plan, silhouette, config=None):
    """Correct or drop elements that would cross the silhouette edge.

    Returns a new LayoutPlan with order preserved. Each failing element
    gets up to two pull-and-shrink corrections toward the anchor before
    it is dropped.
    """
    if config is None:
        config = SafeZoneConfig()

    margin = config.margin_ratio * silhouette.size
    ax, ay = silhouette.anchor
    kept = []
    corrected = dropped = 0

    for element in plan:
        if fits(element, silhouette, margin):
            kept.append(element)
            continue

        candidate = element
        for pull, shrink in config.stages:
            candidate = candidate.moved(
                x=candidate.x + (ax - candidate.x) * pull,
                y=candidate.y + (ay - candidate.y) * pull,
                size=candidate.size * shrink,
            )
            if fits(candidate, silhouette, margin):
                kept.append(candidate)
                corrected += 1
                break
        else:
            dropped += 1
            logger.debug("Dropped %s element for %r outside %s silhouette",
                         element.kind, element.char, silhouette.kind)

    logger.debug("Safe zone (%s): kept %d, corrected %d, dropped %d",
                 silhouette.kind, len(kept), corrected, dropped)
    return LayoutPlan(tuple(kept))
