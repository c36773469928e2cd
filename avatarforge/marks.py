"""Marks: the drawing instructions both renderers consume.

A mark is one primitive painted once, either filled or stroked, with an
optional blur. Element marks live in the element's local frame and are
placed by LayerElement.transform. Backdrop marks use canvas pixels
directly.

Building marks in one place keeps the raster and vector output
compositionally identical: the backends only differ in how they paint.
"""

from dataclasses import dataclass

from PIL import ImageColor

from .geometry import Arc, Circle, Polyline
from .glyphs import glyph_for


@dataclass(frozen=True)
class Stop:
    offset: float
    color: str
    alpha: float = 1.0


@dataclass(frozen=True)
class Solid:
    color: str
    alpha: float = 1.0


@dataclass(frozen=True)
class LinearGradient:
    start: tuple
    end: tuple
    stops: tuple


@dataclass(frozen=True)
class RadialGradient:
    """Radial gradient; focus, when set, offsets the t=0 point."""
    center: tuple
    radius: float
    stops: tuple
    focus: tuple = None


@dataclass(frozen=True)
class Mark:
    primitive: object
    paint: object
    stroke: float = None  # width in frame units; None means filled
    opacity: float = 1.0
    blur: float = 0.0  # Gaussian standard deviation in frame units

    @property
    def filled(self):
        return self.stroke is None


GLOW_OPACITY = 0.35


def glyph_marks(element):
    """Glow underlay plus crisp stroke for every part of the glyph."""
    colors = element.colors
    width = element.stroke_width / element.size
    parts = glyph_for(element.kind, element.variant)

    glows, cores = [], []
    for part in parts:
        w = width * part.weight
        if part.filled:
            glows.append(Mark(part.primitive, Solid(colors[2]), stroke=w,
                              opacity=GLOW_OPACITY, blur=w))
            cores.append(Mark(part.primitive, Solid(colors[0])))
        else:
            glows.append(Mark(part.primitive, Solid(colors[2]), stroke=w * 2,
                              opacity=GLOW_OPACITY, blur=w))
            cores.append(Mark(part.primitive, Solid(colors[0]), stroke=w))
    return tuple(glows + cores)


def _nebula(element):
    c0, c1, c2 = element.colors
    disc = Circle((0.0, 0.0), 0.5)
    paint = RadialGradient((0.0, 0.0), 0.5, (
        Stop(0.0, c0), Stop(0.4, c1, 0.67), Stop(0.7, c2, 0.33),
        Stop(1.0, c2, 0.0),
    ))
    return (Mark(disc, paint, blur=0.2),)


def _glow_orb(element):
    c0, c1, c2 = element.colors
    halo = Mark(Circle((0.0, 0.0), 1.5), RadialGradient((0.0, 0.0), 1.5, (
        Stop(0.0, c0, 0.8), Stop(0.3, c1, 0.4), Stop(0.6, c2, 0.13),
        Stop(1.0, c2, 0.0),
    )), opacity=0.6, blur=0.04)
    core = Mark(Circle((0.0, 0.0), 1.0), RadialGradient((0.0, 0.0), 1.0, (
        Stop(0.0, c0), Stop(0.5, c1), Stop(1.0, c2),
    ), focus=(-0.2, -0.2)))
    highlight = Mark(Circle((0.0, 0.0), 1.0), RadialGradient((0.0, 0.0), 0.6, (
        Stop(0.0, c0, 0.5), Stop(1.0, c0, 0.0),
    ), focus=(-0.3, -0.3)))
    return (halo, core, highlight)


def _ring(element):
    c0, c1, c2 = element.colors
    width = element.stroke_width / element.size
    arc = Arc((0.0, 0.0), 1.0, 0.0, 288.0)
    glow = Mark(arc, Solid(c0), stroke=width * 2, opacity=0.4, blur=width)
    body = Mark(arc, LinearGradient((-1.0, 0.0), (1.0, 0.0), (
        Stop(0.0, c2, 0.0), Stop(0.2, c2, 0.53), Stop(0.5, c0),
        Stop(0.8, c1, 0.53), Stop(1.0, c1, 0.0),
    )), stroke=width)
    return (glow, body)


_DIAMOND = ((0.0, -1.0), (0.5, 0.0), (0.0, 1.0), (-0.5, 0.0))
_FACET = ((0.0, -1.0), (0.25, -0.3), (0.0, 0.2), (-0.15, -0.2))


def _crystal(element):
    c0, c1, c2 = element.colors
    diamond = Polyline(_DIAMOND, closed=True)
    glow = Mark(diamond, Solid(c0), opacity=0.5, blur=0.25)
    body = Mark(diamond, LinearGradient((-1.0, -1.0), (1.0, 1.0), (
        Stop(0.0, c0), Stop(0.5, c1), Stop(1.0, c2),
    )))
    facet = Mark(Polyline(_FACET, closed=True),
                 LinearGradient((-0.3, -1.0), (0.3, 0.0), (
                     Stop(0.0, c0, 0.6), Stop(1.0, c0, 0.0),
                 )))
    return (glow, body, facet)


def _energy_arc(element):
    c0, c1, _ = element.colors
    width = element.stroke_width / element.size
    arc = Arc((0.0, 0.0), 1.0, -72.0, 72.0)
    glow = Mark(arc, Solid(c0), stroke=width * 2, opacity=0.35, blur=width)
    body = Mark(arc, LinearGradient((0.0, -1.0), (0.0, 1.0), (
        Stop(0.0, c0), Stop(0.5, c1, 0.8), Stop(1.0, c1, 0.0),
    )), stroke=width)
    return (glow, body)


def _star(element):
    c0, c1, c2 = element.colors
    glow = Mark(Circle((0.0, 0.0), 2.0), RadialGradient((0.0, 0.0), 2.0, (
        Stop(0.0, c0), Stop(0.3, c1, 0.67), Stop(0.6, c2, 0.27),
        Stop(1.0, c2, 0.0),
    )))
    core = Mark(Circle((0.0, 0.0), 0.5), Solid(c0))
    return (glow, core)


COSMIC_BUILDERS = {
    "nebula": _nebula,
    "glow-orb": _glow_orb,
    "ring": _ring,
    "crystal": _crystal,
    "energy-arc": _energy_arc,
    "star": _star,
}


def element_marks(element):
    """Marks for one LayerElement, in its local frame."""
    builder = COSMIC_BUILDERS.get(element.kind)
    if builder is not None:
        return builder(element)
    return glyph_marks(element)


def _canvas_rect(size):
    s = float(size)
    return Polyline(((0.0, 0.0), (s, 0.0), (s, s), (0.0, s)), closed=True)


def background_marks(backdrop, size):
    """Base fill (gradient or solid) and star dots, in canvas pixels."""
    rect = _canvas_rect(size)
    if backdrop.kind != "cosmos":
        return (Mark(rect, Solid(backdrop.fill)),)

    stops = tuple(Stop(offset, color) for offset, color in backdrop.gradient)
    marks = [Mark(rect, RadialGradient((size * 0.3, size * 0.3),
                                       size * 0.9, stops))]
    for star in backdrop.stars:
        marks.append(Mark(Circle((star.x, star.y), star.radius),
                          Solid("#FFFFFF"), opacity=star.opacity))
    return tuple(marks)


def vignette_marks(backdrop, size):
    """Edge darkening laid over the elements on cosmos backdrops."""
    if backdrop.kind != "cosmos":
        return ()
    center = (size / 2.0, size / 2.0)
    paint = RadialGradient(center, size * 0.6, (
        Stop(0.0, "#000000", 0.0), Stop(0.25, "#000000", 0.0),
        Stop(0.775, "#000000", 0.3), Stop(1.0, "#000000", 0.6),
    ))
    return (Mark(_canvas_rect(size), paint),)


# Watermark glyph: size relative to the canvas, hatch spacing relative to
# the canvas, and hatch line thickness relative to the spacing.
WATERMARK_SCALE = 0.72
HATCH_PERIOD = 0.035
HATCH_LINE = 0.35


def luminance(color):
    """Perceived brightness 0-255 of a colour token, or None if unknown."""
    try:
        r, g, b = ImageColor.getrgb(color)[:3]
    except (ValueError, AttributeError):
        return None
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def watermark_tone(backdrop):
    """(colour, opacity) for the watermark so it reads on the backdrop."""
    if backdrop.kind == "cosmos":
        return "#FFFFFF", 0.10
    lum = luminance(backdrop.fill)
    if lum is None or lum < 140:
        return "#FFFFFF", 0.12
    return "#000000", 0.07
