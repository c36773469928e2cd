"""Layout planning: where each character's element goes.

The planner turns the normalized character sequence into an ordered
LayoutPlan (draw order, back to front). The backdrop is planned from its
own sequence so background dressing and elements vary independently.
"""

import logging
import math
from dataclasses import dataclass, replace

from .geometry import Transform
from .palettes import hsl_to_hex, palette_for
from .shapes import lookup

logger = logging.getLogger(__name__)

GOLDEN_ANGLE = math.pi * (3 - math.sqrt(5))

# Radial placement: distance = size * (INNER + SPAN * sqrt(t)) * spread
INNER_RADIUS = 0.06
RADIAL_SPAN = 0.30
ANGLE_JITTER = 0.35
MAX_TILT = 35.0


@dataclass(frozen=True)
class LayerElement:
    """One placed visual element.

    size is the element's scale in pixels: its local drawing frame is
    size pixels per unit. reach is how far, in local units, its drawing
    extends from the centre (0.5 for glyphs, whose art fits a unit box).
    """
    kind: str
    x: float
    y: float
    size: float
    rotation: float
    opacity: float
    stroke_width: float
    colors: tuple
    variant: int = 1
    char: str = ""
    reach: float = 0.5

    @property
    def transform(self):
        return Transform(self.x, self.y, self.rotation, self.size)

    @property
    def extent(self):
        """Radius in pixels of the disc the element's drawing occupies.

        Glyph strokes carry a glow twice the stroke width, so a full
        stroke width is added rather than half of it.
        """
        return self.size * self.reach + self.stroke_width

    def moved(self, x, y, size):
        return replace(self, x=x, y=y, size=size)


@dataclass(frozen=True)
class LayoutPlan:
    """Ordered, immutable sequence of LayerElements (painter's order)."""
    elements: tuple = ()

    def __iter__(self):
        return iter(self.elements)

    def __len__(self):
        return len(self.elements)

    def __getitem__(self, index):
        return self.elements[index]


@dataclass(frozen=True)
class Star:
    x: float
    y: float
    radius: float
    opacity: float


@dataclass(frozen=True)
class Backdrop:
    """Background composition.

    kind is "cosmos" (gradient, dust, stars, vignette) or "solid". For a
    solid backdrop, fill is the caller's colour token, passed through
    as-is. clouds are soft LayerElements drawn straight onto the
    background and are not subject to the safe zone.
    """
    kind: str
    fill: str = None
    gradient: tuple = ()
    stars: tuple = ()
    dust_seed: int = 0
    clouds: tuple = ()

    def with_clouds(self, clouds):
        return replace(self, clouds=tuple(clouds))


def plan_layout(chars, size, tier, seq):
    """Place one glyph element per character, up to tier.max_elements.

    Elements follow a golden-angle spiral from the centre outward, so
    successive characters spread evenly without banding.
    """
    count = min(len(chars), tier.max_elements)
    center = size / 2.0
    elements = []

    for i in range(count):
        char = chars[i]
        shape = lookup(char)

        angle = i * GOLDEN_ANGLE + (seq.random() - 0.5) * ANGLE_JITTER
        t = math.sqrt((i + 0.5) / count)
        distance = size * (INNER_RADIUS + RADIAL_SPAN * t) * tier.spread

        element_size = size * tier.base_size * (0.8 + 0.5 * seq.random())
        rotation = (seq.random() - 0.5) * 2 * MAX_TILT
        opacity = 0.75 + 0.25 * seq.random()
        stroke = max(tier.min_stroke,
                     element_size * (0.06 + 0.04 * seq.random()))

        elements.append(LayerElement(
            kind=shape.kind,
            variant=shape.variant,
            x=center + math.cos(angle) * distance,
            y=center + math.sin(angle) * distance,
            size=element_size,
            rotation=rotation,
            opacity=opacity,
            stroke_width=stroke,
            colors=palette_for(char),
            char=char,
        ))

    logger.debug("Planned %d glyph elements (tier=%s)", len(elements),
                 tier.name)
    return LayoutPlan(tuple(elements))


def plan_backdrop(background, size, tier, seq):
    """Plan the background composition from the backdrop sequence.

    background is "cosmos", "white" or any other colour token. The hues
    and star field are drawn regardless of the background so the
    sequence is consumed the same way for every caller.
    """
    base_hue = 250 + seq.randint(40)
    second_hue = 280 + seq.randint(30)
    gradient = (
        (0.0, hsl_to_hex(base_hue, 50, 12)),
        (0.5, hsl_to_hex((base_hue + second_hue) / 2, 40, 7)),
        (1.0, hsl_to_hex(second_hue, 60, 4)),
    )

    scale = size / 256.0
    stars = []
    for _ in range(tier.star_count):
        x = seq.random() * size
        y = seq.random() * size
        radius = max(0.35, (0.4 + 1.2 * seq.random()) * scale)
        opacity = 0.1 + 0.25 * seq.random()
        stars.append(Star(x, y, radius, opacity))

    dust_seed = seq.randint(2 ** 16)

    if background == "cosmos":
        return Backdrop(kind="cosmos", gradient=gradient, stars=tuple(stars),
                        dust_seed=dust_seed)
    if background == "white":
        return Backdrop(kind="solid", fill="#FFFFFF")
    return Backdrop(kind="solid", fill=str(background))
