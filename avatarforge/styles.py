"""Art styles: interchangeable planners behind one pipeline.

A style decides which elements a composition contains. Everything after
planning (safe zone, both renderers) is shared by all styles.
"""

from dataclasses import dataclass
from typing import Callable

from .cosmic import plan_cosmic, plan_nebulae
from .layout import plan_layout


def _no_clouds(chars, size, seq):
    return ()


@dataclass(frozen=True)
class Style:
    name: str
    plan: Callable  # (chars, size, tier, seq) -> LayoutPlan
    clouds: Callable = _no_clouds  # (chars, size, backdrop_seq) -> tuple
    description: str = ""


STYLES = {
    "glyph": Style("glyph", plan_layout,
                   description="One line-art glyph per character"),
    "cosmic": Style("cosmic", plan_cosmic, plan_nebulae,
                    description="Layered orbs, rings, crystals and stars"),
}

DEFAULT_STYLE = "glyph"


def get_style(name):
    try:
        return STYLES[name]
    except KeyError:
        raise ValueError(
            f"Unknown style {name!r} (expected one of: {', '.join(STYLES)})"
        ) from None
