"""AvatarForge - Deterministic glyph avatars from identity strings."""

from .identity import is_valid_identity, normalize
from .palettes import palette_for
from .renderer import RenderConfig, compose, render_artifact
from .renderer import render_image as _render_image
from .renderer import render_svg as _render_svg
from .shapes import lookup, verify_uniqueness

__version__ = "0.1.0"
__all__ = [
    "render", "render_image", "render_svg", "generate", "RenderConfig",
    "compose", "normalize", "is_valid_identity", "lookup",
    "verify_uniqueness", "describe_identity",
]


def render(identity, size=256, background="cosmos", shape="rounded",
           format="raster", quality=None, **kwargs):
    """Render an avatar for an identity string.

    Args:
        identity: Any string; usually an email address. Characters outside
            [A-Z0-9@._+-] (after uppercasing) are ignored.
        size: Output width and height in pixels.
        background: "cosmos", "white", or any colour token.
        shape: Silhouette: "rounded", "circle" or "triangle".
        format: "raster" for encoded image bytes, "vector" for SVG text.
        quality: Encoder quality 1-100 for WEBP and JPEG.
        **kwargs: Additional RenderConfig parameters (image_format, style,
            safe_zone).

    Returns:
        bytes for raster output, str for vector output.
    """
    config = RenderConfig(size=size, background=background, shape=shape,
                          format=format, quality=quality, **kwargs)
    return render_artifact(identity, config)


def render_image(identity, size=256, **kwargs):
    """Render an avatar as a PIL Image in RGBA mode."""
    return _render_image(identity, RenderConfig(size=size, **kwargs))


def render_svg(identity, size=256, **kwargs):
    """Render an avatar as an SVG document string."""
    kwargs["format"] = "vector"
    return _render_svg(identity, RenderConfig(size=size, **kwargs))


def generate(identity, size=256, **kwargs):
    """Generate an avatar image.

    Same parameters as render(), but returns the PIL Image instead of
    encoded bytes.
    """
    return render_image(identity, size=size, **kwargs)


def describe_identity(identity):
    """Return (char, ShapeDefinition, palette) for each kept character."""
    return [(ch, lookup(ch), palette_for(ch)) for ch in normalize(identity)]
