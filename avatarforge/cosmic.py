"""The "cosmic" art style: glowing orbs, rings, crystals, arcs and stars.

Element sizes here are radii: an orb of size s has a core of radius s
and a halo of radius 1.5 s, so reach is set per kind.
"""

import logging
import math

from .layout import LayerElement, LayoutPlan
from .palettes import palette_for

logger = logging.getLogger(__name__)

REACH = {
    "nebula": 0.5,
    "glow-orb": 1.5,
    "ring": 1.0,
    "crystal": 1.0,
    "energy-arc": 1.0,
    "star": 2.0,
}


def _pick(chars, index):
    return chars[index % len(chars)]


def _element(kind, char, x, y, size, rotation, opacity, stroke=0.0):
    return LayerElement(kind=kind, x=x, y=y, size=size, rotation=rotation,
                        opacity=opacity, stroke_width=stroke,
                        colors=palette_for(char), char=char,
                        reach=REACH[kind])


def allocate(wanted, budget):
    """Share an element budget across layers, one element per layer a turn.

    Every non-empty layer gets at least one element before any layer gets
    a second, and a larger budget never takes an element away.
    """
    quotas = [0] * len(wanted)
    remaining = budget
    while remaining > 0 and any(q < w for q, w in zip(quotas, wanted)):
        for i, w in enumerate(wanted):
            if remaining > 0 and quotas[i] < w:
                quotas[i] += 1
                remaining -= 1
    return quotas


def plan_cosmic(chars, size, tier, seq):
    """Layered composition driven by the identity characters.

    Layers are emitted back to front: orbs, rings, crystals, energy arcs,
    then small coloured stars. Every layer is drawn from the sequence in
    full, then trimmed to fit tier.max_elements, so placements for an
    identity stay the same across sizes. Empty input gives an empty plan.
    """
    if not chars:
        return LayoutPlan()

    n = len(chars)
    center = size / 2.0
    spread = tier.spread

    orbs = []
    num_orbs = 3 + seq.randint(2)
    for i in range(num_orbs):
        char = _pick(chars, i * 2)
        angle = (i / num_orbs) * math.pi * 2 + seq.random() * 0.5
        distance = size * (0.15 + seq.random() * 0.12) * spread
        orbs.append(_element(
            "glow-orb", char,
            center + math.cos(angle) * distance,
            center + math.sin(angle) * distance,
            size * (0.05 + seq.random() * 0.03),
            seq.random() * 360,
            0.85 + seq.random() * 0.15,
        ))

    rings = []
    num_rings = 2 + seq.randint(2)
    for i in range(num_rings):
        char = _pick(chars, i * 3)
        radius = size * (0.16 + i * 0.09)
        rings.append(_element(
            "ring", char, center, center, radius,
            seq.random() * 360,
            0.6 + seq.random() * 0.3,
            stroke=max(tier.min_stroke, radius * 0.04),
        ))

    crystals = []
    num_crystals = min(n, 6)
    for i in range(num_crystals):
        char = chars[i]
        angle = (i / num_crystals) * math.pi * 2 + seq.random() * 0.4
        distance = size * (0.22 + seq.random() * 0.1) * spread
        crystals.append(_element(
            "crystal", char,
            center + math.cos(angle) * distance,
            center + math.sin(angle) * distance,
            size * (0.06 + seq.random() * 0.04),
            math.degrees(angle) + seq.random() * 20,
            0.9 + seq.random() * 0.1,
        ))

    arcs = []
    num_arcs = 2 + seq.randint(2)
    for i in range(num_arcs):
        char = chars[seq.randint(n)]
        radius = size * (0.2 + i * 0.07)
        arcs.append(_element(
            "energy-arc", char, center, center, radius,
            i * 90 + seq.random() * 60,
            0.7 + seq.random() * 0.2,
            stroke=max(tier.min_stroke, radius * 0.08),
        ))

    stars = []
    num_stars = 4 + seq.randint(3)
    for _ in range(num_stars):
        char = chars[seq.randint(n)]
        angle = seq.random() * math.pi * 2
        distance = size * (0.1 + seq.random() * 0.35) * spread
        stars.append(_element(
            "star", char,
            center + math.cos(angle) * distance,
            center + math.sin(angle) * distance,
            max(0.5, size * (0.015 + seq.random() * 0.015)),
            0.0,
            0.8 + seq.random() * 0.2,
        ))

    layers = (orbs, rings, crystals, arcs, stars)
    quotas = allocate([len(layer) for layer in layers], tier.max_elements)
    elements = []
    for layer, quota in zip(layers, quotas):
        elements.extend(layer[:quota])

    logger.debug("Planned %d of %d cosmic elements (tier=%s)", len(elements),
                 sum(len(layer) for layer in layers), tier.name)
    return LayoutPlan(tuple(elements))


def plan_nebulae(chars, size, seq):
    """Large soft clouds laid onto the backdrop (2-3 of them)."""
    center = size / 2.0
    count = 2 + seq.randint(2)
    clouds = []
    for _ in range(count):
        index = seq.randint(len(chars))
        char = chars[index] if chars else ""
        angle = seq.random() * math.pi * 2
        distance = size * 0.1 + seq.random() * size * 0.2
        clouds.append(_element(
            "nebula", char,
            center + math.cos(angle) * distance,
            center + math.sin(angle) * distance,
            size * 0.5 + seq.random() * size * 0.3,
            seq.random() * 360,
            0.2 + seq.random() * 0.15,
        ))
    return tuple(clouds)
