"""Detail tiers chosen from the requested output size."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DetailTier:
    """Fidelity settings for one size band.

    min_stroke is in output pixels. It grows with size in absolute terms
    but shrinks relative to the canvas, so thin strokes stay visible once
    a small avatar is downscaled. spread > 1 pushes elements apart where
    the pixel budget is small.
    """
    name: str
    max_elements: int
    min_stroke: float
    spread: float
    base_size: float
    star_count: int


FULL = DetailTier("full", max_elements=16, min_stroke=2.0, spread=1.0,
                  base_size=0.10, star_count=24)
MEDIUM = DetailTier("medium", max_elements=10, min_stroke=1.5, spread=1.1,
                    base_size=0.12, star_count=14)
MINIMAL = DetailTier("minimal", max_elements=6, min_stroke=1.0, spread=1.25,
                     base_size=0.15, star_count=6)

TIERS = (MINIMAL, MEDIUM, FULL)

FULL_MIN_SIZE = 128
MEDIUM_MIN_SIZE = 64


def detail_for_size(size):
    """Map an output size in pixels to its DetailTier."""
    if size >= FULL_MIN_SIZE:
        return FULL
    if size >= MEDIUM_MIN_SIZE:
        return MEDIUM
    return MINIMAL
