"""Shape primitives in element-local unit space, plus transforms.

An element is drawn in a local frame where the origin is its centre and
one unit equals the element's size. Its Transform places that frame on
the canvas. Screen coordinates are y-down; a positive rotation turns
clockwise on screen, matching SVG's rotate().
"""

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Line:
    start: tuple
    end: tuple


@dataclass(frozen=True)
class Polyline:
    points: tuple
    closed: bool = False


@dataclass(frozen=True)
class Circle:
    center: tuple
    radius: float


@dataclass(frozen=True)
class Ellipse:
    center: tuple
    rx: float
    ry: float


@dataclass(frozen=True)
class Arc:
    """Circular arc from start to end angle, in degrees, sweeping clockwise."""
    center: tuple
    radius: float
    start: float
    end: float


@dataclass(frozen=True)
class Path:
    """Open or closed path of straight and Bezier segments.

    Segments are tuples: ("L", point), ("Q", control, point) or
    ("C", control1, control2, point).
    """
    start: tuple
    segments: tuple
    closed: bool = False


@dataclass(frozen=True)
class Transform:
    """Immutable placement of a local frame on the canvas."""
    x: float
    y: float
    rotation: float = 0.0
    scale: float = 1.0

    def _matrix(self):
        rad = math.radians(self.rotation)
        c, s = math.cos(rad), math.sin(rad)
        return np.array([[c, -s], [s, c]]) * self.scale

    def apply(self, points):
        """Map local (N, 2) points to canvas coordinates."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return pts @ self._matrix().T + np.array([self.x, self.y])

    def invert(self, points):
        """Map canvas (N, 2) points back to local coordinates."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        inv = np.linalg.inv(self._matrix())
        return (pts - np.array([self.x, self.y])) @ inv.T

    def scaled(self, factor):
        """The same placement on a canvas enlarged by factor."""
        return Transform(self.x * factor, self.y * factor, self.rotation,
                         self.scale * factor)

    def svg(self):
        return (f"translate({fmt(self.x)} {fmt(self.y)}) "
                f"rotate({fmt(self.rotation)}) scale({fmt(self.scale)})")


def fmt(value):
    """Compact decimal formatting shared by the vector backend."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _quad(p0, p1, p2, steps):
    t = np.linspace(0.0, 1.0, steps)[1:, None]
    p0, p1, p2 = (np.asarray(p, dtype=np.float64) for p in (p0, p1, p2))
    return (1 - t) ** 2 * p0 + 2 * (1 - t) * t * p1 + t ** 2 * p2


def _cubic(p0, p1, p2, p3, steps):
    t = np.linspace(0.0, 1.0, steps)[1:, None]
    p0, p1, p2, p3 = (np.asarray(p, dtype=np.float64)
                      for p in (p0, p1, p2, p3))
    return ((1 - t) ** 3 * p0 + 3 * (1 - t) ** 2 * t * p1
            + 3 * (1 - t) * t ** 2 * p2 + t ** 3 * p3)


def _ring(center, rx, ry, steps):
    a = np.linspace(0.0, 2 * np.pi, steps, endpoint=False)
    return np.stack([center[0] + rx * np.cos(a),
                     center[1] + ry * np.sin(a)], axis=-1)


def flatten(primitive, steps=32):
    """Approximate a primitive by a polyline.

    Returns (points, closed) with points an (N, 2) float array in the
    primitive's own coordinate space.
    """
    if isinstance(primitive, Line):
        return np.array([primitive.start, primitive.end],
                        dtype=np.float64), False

    if isinstance(primitive, Polyline):
        return np.array(primitive.points, dtype=np.float64), primitive.closed

    if isinstance(primitive, Circle):
        r = primitive.radius
        return _ring(primitive.center, r, r, steps * 2), True

    if isinstance(primitive, Ellipse):
        return _ring(primitive.center, primitive.rx, primitive.ry,
                     steps * 2), True

    if isinstance(primitive, Arc):
        a = np.radians(np.linspace(primitive.start, primitive.end, steps))
        cx, cy = primitive.center
        r = primitive.radius
        return np.stack([cx + r * np.cos(a), cy + r * np.sin(a)],
                        axis=-1), False

    if isinstance(primitive, Path):
        chunks = [np.array([primitive.start], dtype=np.float64)]
        current = primitive.start
        for segment in primitive.segments:
            op, *pts = segment
            if op == "L":
                chunks.append(np.array([pts[0]], dtype=np.float64))
            elif op == "Q":
                chunks.append(_quad(current, pts[0], pts[1], steps))
            elif op == "C":
                chunks.append(_cubic(current, pts[0], pts[1], pts[2], steps))
            else:
                raise ValueError(f"Unknown path segment: {op!r}")
            current = pts[-1]
        return np.concatenate(chunks), primitive.closed

    raise TypeError(f"Cannot flatten {type(primitive).__name__}")


def extent(primitive):
    """Largest distance from the local origin reached by the primitive."""
    points, _ = flatten(primitive, steps=16)
    return float(np.hypot(points[:, 0], points[:, 1]).max())
