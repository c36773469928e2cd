"""Main avatar rendering pipeline.

identity -> hash -> seeded sequence -> style planner -> safe zone ->
raster or vector backend. Every call builds its own sequences and plan,
so concurrent calls never share state.
"""

import logging
from dataclasses import dataclass, field

from .detail import detail_for_size
from .identity import normalize, watermark_letter
from .layout import plan_backdrop
from .prng import BACKDROP_SEED_OFFSET, SeededSequence, hash_identity
from .raster import encode, render_raster
from .safezone import SHAPES, SafeZoneConfig, Silhouette, constrain
from .styles import DEFAULT_STYLE, STYLES, get_style
from .vector import render_vector

logger = logging.getLogger(__name__)

FORMATS = ("raster", "vector")
IMAGE_FORMATS = ("png", "webp", "jpeg")


@dataclass
class RenderConfig:
    """Configuration for avatar rendering."""

    # Output
    size: int = 256
    format: str = "raster"
    image_format: str = "png"
    quality: int = None

    # Look
    background: str = "cosmos"
    shape: str = "rounded"
    style: str = DEFAULT_STYLE

    # Safe-zone tuning
    safe_zone: SafeZoneConfig = field(default_factory=SafeZoneConfig)

    def __post_init__(self):
        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise ValueError(f"size must be an integer, got {self.size!r}")
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        if self.format not in FORMATS:
            raise ValueError(
                f"Unknown format {self.format!r} (expected one of: "
                f"{', '.join(FORMATS)})"
            )
        self.image_format = str(self.image_format).lower()
        if self.image_format == "jpg":
            self.image_format = "jpeg"
        if self.image_format not in IMAGE_FORMATS:
            raise ValueError(
                f"Unknown image format {self.image_format!r} (expected one "
                f"of: {', '.join(IMAGE_FORMATS)})"
            )
        if self.quality is not None:
            try:
                self.quality = int(self.quality)
            except (TypeError, ValueError):
                raise ValueError(
                    f"quality must be an integer, got {self.quality!r}"
                ) from None
            if not 1 <= self.quality <= 100:
                raise ValueError(
                    f"quality must be within 1-100, got {self.quality}")
        if self.shape not in SHAPES:
            raise ValueError(
                f"Unknown shape {self.shape!r} (expected one of: "
                f"{', '.join(SHAPES)})"
            )
        if self.style not in STYLES:
            raise ValueError(
                f"Unknown style {self.style!r} (expected one of: "
                f"{', '.join(STYLES)})"
            )
        if not self.background:
            self.background = "cosmos"


@dataclass(frozen=True)
class Composition:
    """Everything a backend needs to draw one avatar."""
    identity: str
    chars: tuple
    seed: int
    tier: object
    silhouette: Silhouette
    backdrop: object
    base_plan: object  # before the safe zone
    plan: object
    watermark: str
    config: RenderConfig

    @property
    def size(self):
        return self.config.size


def compose(identity, config=None):
    """Plan the full composition for identity without drawing anything."""
    if config is None:
        config = RenderConfig()

    identity = identity or ""
    size = config.size
    chars = tuple(normalize(identity))
    seed = hash_identity(identity)
    tier = detail_for_size(size)
    style = get_style(config.style)

    # --- Pipeline ---

    # 1. Character-driven elements
    seq = SeededSequence(seed)
    base_plan = style.plan(chars, size, tier, seq)

    # 2. Background composition from its own sequence
    backdrop_seq = SeededSequence(seed + BACKDROP_SEED_OFFSET)
    backdrop = plan_backdrop(config.background, size, tier, backdrop_seq)
    clouds = style.clouds(chars, size, backdrop_seq)
    if clouds:
        backdrop = backdrop.with_clouds(clouds)

    # 3. Keep every element inside the silhouette
    silhouette = Silhouette(config.shape, size, config.safe_zone.corner_ratio)
    plan = constrain(base_plan, silhouette, config.safe_zone)

    logger.debug(
        "Composed %r: seed=%d tier=%s style=%s elements=%d/%d",
        identity, seed, tier.name, style.name, len(plan), len(base_plan),
    )

    return Composition(
        identity=identity,
        chars=chars,
        seed=seed,
        tier=tier,
        silhouette=silhouette,
        backdrop=backdrop,
        base_plan=base_plan,
        plan=plan,
        watermark=watermark_letter(chars),
        config=config,
    )


def render_image(identity, config=None):
    """Render identity to a PIL Image in RGBA mode."""
    return render_raster(compose(identity, config))


def render_svg(identity, config=None):
    """Render identity to an SVG document string."""
    return render_vector(compose(identity, config))


def render_artifact(identity, config=None):
    """Render identity according to config.format.

    Returns encoded image bytes for "raster" and an SVG string for
    "vector".
    """
    if config is None:
        config = RenderConfig()
    if config.format == "vector":
        return render_svg(identity, config)

    image = render_image(identity, config)
    return encode(image, config.image_format, config.quality)
