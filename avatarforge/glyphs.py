"""Line-art glyph for every (kind, variant) in the character shape table.

Glyphs are authored on a 48x48 grid centred at (24, 24) and converted to
element-local unit space, so every glyph fits in a disc of radius 0.5.
"""

from dataclasses import dataclass

from .geometry import Arc, Circle, Ellipse, Line, Path, Polyline

GRID = 48.0


@dataclass(frozen=True)
class GlyphPart:
    primitive: object
    filled: bool = False
    weight: float = 1.0


def _p(x, y):
    return ((x - GRID / 2) / GRID, (y - GRID / 2) / GRID)


def _line(x1, y1, x2, y2, weight=1.0):
    return GlyphPart(Line(_p(x1, y1), _p(x2, y2)), weight=weight)


def _poly(*coords, closed=False):
    pts = tuple(_p(coords[i], coords[i + 1]) for i in range(0, len(coords), 2))
    return GlyphPart(Polyline(pts, closed=closed))


def _circle(cx, cy, r, filled=False):
    return GlyphPart(Circle(_p(cx, cy), r / GRID), filled=filled)


def _path(x, y, *segments, closed=False):
    converted = []
    for op, *coords in segments:
        pts = [_p(coords[i], coords[i + 1]) for i in range(0, len(coords), 2)]
        converted.append((op, *pts))
    return GlyphPart(Path(_p(x, y), tuple(converted), closed=closed))


GLYPHS = {
    ("triangle", 1): (_poly(24, 8, 40, 38, 8, 38, closed=True),),
    ("triangle-down", 1): (_poly(24, 40, 8, 10, 40, 10, closed=True),),
    ("concentric", 2): (_circle(24, 24, 16), _circle(24, 24, 8)),
    ("concentric", 3): (_circle(24, 24, 18), _circle(24, 24, 11),
                        _circle(24, 24, 4)),
    ("concentric", 4): (_circle(24, 24, 16), _circle(24, 24, 3, filled=True)),
    ("arc", 1): (_path(12, 32, ("Q", 24, 8, 36, 32)),),
    ("semicircle", 1): (GlyphPart(Arc(_p(24, 24), 12 / GRID, 180.0, 360.0)),),
    ("horizontal-lines", 2): (_line(10, 18, 38, 18), _line(10, 30, 38, 30)),
    ("horizontal-lines", 3): (_line(10, 14, 38, 14), _line(10, 24, 38, 24),
                              _line(10, 34, 38, 34)),
    ("spiral", 1): (_path(24, 24, ("C", 24, 20, 28, 20, 28, 24),
                          ("C", 28, 30, 18, 30, 18, 24),
                          ("C", 18, 16, 32, 16, 32, 24),
                          ("C", 32, 34, 14, 34, 14, 24)),),
    ("spiral", 2): (_path(24, 24, ("C", 24, 20, 20, 20, 20, 24),
                          ("C", 20, 30, 30, 30, 30, 24),
                          ("C", 30, 16, 16, 16, 16, 24),
                          ("C", 16, 34, 34, 34, 34, 24)),),
    ("spiral", 3): (_path(24, 24, ("C", 24, 28, 28, 28, 28, 24),
                          ("C", 28, 18, 18, 18, 18, 24),
                          ("C", 18, 32, 32, 32, 32, 24)),),
    ("cross-plus", 1): (_line(24, 10, 24, 38), _line(10, 24, 38, 24)),
    ("cross-plus", 2): (_line(24, 8, 24, 40, weight=1.5),
                        _line(8, 24, 40, 24, weight=1.5)),
    ("vertical-line", 1): (_line(24, 8, 24, 40),),
    ("hook", 1): (_path(20, 10, ("L", 20, 30), ("Q", 20, 38, 28, 38),
                        ("Q", 36, 38, 36, 30)),),
    ("arrow-right", 1): (_line(10, 24, 38, 24), _poly(28, 14, 38, 24, 28, 34)),
    ("arrow-down", 1): (_line(24, 10, 24, 38), _poly(14, 28, 24, 38, 34, 28)),
    ("corner", 1): (_poly(10, 10, 10, 38, 38, 38),),
    ("zigzag", 1): (_poly(10, 10, 38, 10, 10, 38, 38, 38),),
    ("zigzag", 2): (_poly(10, 32, 24, 12, 38, 32),),
    ("zigzag", 3): (_poly(8, 32, 16, 12, 24, 32, 32, 12, 40, 32),),
    ("zigzag", 4): (_poly(8, 12, 16, 32, 24, 12, 32, 32, 40, 12),),
    ("circle", 1): (_circle(24, 24, 14),),
    ("lollipop", 1): (_circle(24, 16, 10), _line(24, 26, 24, 42)),
    ("circle-tail", 1): (_circle(24, 20, 12), _line(32, 28, 40, 40)),
    ("lollipop-kick", 1): (_circle(20, 16, 10), _line(20, 26, 20, 38),
                           _line(20, 32, 34, 40)),
    ("wave", 1): (_path(10, 24, ("Q", 18, 10, 24, 24), ("Q", 30, 38, 38, 24)),),
    ("wave", 2): (_path(10, 16, ("Q", 18, 8, 24, 24), ("Q", 30, 40, 38, 32)),),
    ("tau", 1): (_line(10, 12, 38, 12), _line(24, 12, 24, 40)),
    ("cup", 1): (_path(12, 10, ("L", 12, 28), ("Q", 12, 40, 24, 40),
                       ("Q", 36, 40, 36, 28), ("L", 36, 10)),),
    ("cross", 1): (_line(10, 10, 38, 38), _line(38, 10, 10, 38)),
    ("fork", 1): (_line(10, 10, 24, 24), _line(38, 10, 24, 24),
                  _line(24, 24, 24, 40)),
    ("ellipse", 1): (GlyphPart(Ellipse(_p(24, 24), 10 / GRID, 16 / GRID)),),
    ("line-dot", 1): (_line(24, 16, 24, 40), _circle(24, 10, 3, filled=True)),
    ("triple-arc", 1): (_path(14, 14, ("Q", 24, 8, 34, 14)),
                        _path(14, 24, ("Q", 24, 18, 34, 24)),
                        _path(14, 34, ("Q", 24, 28, 34, 34))),
    ("flag", 1): (_line(14, 10, 14, 40),
                  _path(14, 10, ("L", 34, 10), ("L", 34, 24), ("L", 14, 24))),
    ("angle", 1): (_poly(10, 12, 38, 12, 10, 40),),
    ("dot", 1): (_circle(24, 24, 4, filled=True),),
    ("dot", 2): (_circle(17, 24, 4, filled=True), _circle(31, 24, 4, filled=True)),
    ("underscore", 1): (_line(8, 36, 40, 36),),
    ("dash", 1): (_line(12, 24, 36, 24),),
}

DEFAULT_GLYPH = (_circle(24, 24, 8),)


def glyph_for(kind, variant):
    """Return the GlyphPart tuple for a (kind, variant) key."""
    return GLYPHS.get((kind, variant), DEFAULT_GLYPH)
