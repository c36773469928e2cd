"""Raster backend: draws a Composition onto a Pillow RGBA image.

Drawing happens on a supersampled canvas which is downscaled at the end,
so strokes and silhouette edges come out anti-aliased.
"""

import logging
from dataclasses import replace
from io import BytesIO

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont

from .geometry import Transform, flatten
from .marks import (HATCH_LINE, HATCH_PERIOD, WATERMARK_SCALE, LinearGradient,
                    RadialGradient, Solid, background_marks, element_marks,
                    vignette_marks, watermark_tone)
from .noise import fbm_2d
from .prng import SeededSequence

logger = logging.getLogger(__name__)

FALLBACK_FILL = "#808080"
DUST_OPACITY = 0.12
DUST_COLOR = (200, 190, 255)


def supersample_factor(size):
    """Drawing scale for an output size; small avatars get more samples."""
    if size <= 128:
        return 4
    if size <= 512:
        return 2
    return 1


def parse_color(color):
    """(r, g, b, a) for a colour token; a is 0-255."""
    rgba = ImageColor.getrgb(color)
    if len(rgba) == 3:
        return rgba + (255,)
    return rgba


def render_raster(composition):
    """Render a Composition to a PIL Image in RGBA mode."""
    size = composition.size
    ss = supersample_factor(size)
    canvas_px = size * ss
    frame = Transform(0.0, 0.0, 0.0, float(ss))
    backdrop = composition.backdrop

    if backdrop.kind == "solid":
        backdrop = replace(backdrop, fill=_resolve_fill(backdrop.fill))

    canvas = Image.new("RGBA", (canvas_px, canvas_px), (0, 0, 0, 0))

    # --- Pipeline ---

    # 1. Background fill, dust and stars
    base, *stars = background_marks(backdrop, size)
    _paint_mark(canvas, base, frame)
    if backdrop.kind == "cosmos":
        _paint_dust(canvas, backdrop.dust_seed)
    for mark in stars:
        _paint_mark(canvas, mark, frame)

    # 2. Soft clouds laid onto the background
    for cloud in backdrop.clouds:
        for mark in element_marks(cloud):
            _paint_mark(canvas, mark, cloud.transform.scaled(ss), cloud.opacity)

    # 3. Watermark letter
    if composition.watermark:
        _paint_watermark(canvas, composition.watermark, backdrop)

    # 4. Elements in plan order
    for element in composition.plan:
        transform = element.transform.scaled(ss)
        for mark in element_marks(element):
            _paint_mark(canvas, mark, transform, element.opacity)

    # 5. Vignette
    for mark in vignette_marks(backdrop, size):
        _paint_mark(canvas, mark, frame)

    # 6. Silhouette clip and downscale
    canvas = _apply_silhouette(canvas, composition.silhouette, ss)
    if ss > 1:
        canvas = canvas.resize((size, size), Image.Resampling.LANCZOS)

    logger.debug("Rasterized %dx%d avatar (supersample x%d)", size, size, ss)
    return canvas


def encode(image, image_format="png", quality=None):
    """Encode an RGBA image as PNG, WEBP or JPEG bytes.

    JPEG has no alpha channel, so the image is flattened onto white.
    """
    image_format = image_format.lower()
    params = {}
    if image_format == "jpeg":
        flat = Image.new("RGB", image.size, (255, 255, 255))
        flat.paste(image, mask=image.getchannel("A"))
        image = flat
    if quality is not None and image_format in ("jpeg", "webp"):
        params["quality"] = quality

    buffer = BytesIO()
    image.save(buffer, format=image_format.upper(), **params)
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# Internal drawing stages
# ---------------------------------------------------------------------------

def _resolve_fill(fill):
    """Return fill if Pillow can parse it, else a neutral grey."""
    try:
        ImageColor.getrgb(fill)
    except (ValueError, AttributeError):
        logger.warning("Unrecognised background %r, using %s", fill,
                       FALLBACK_FILL)
        return FALLBACK_FILL
    return fill


def _coverage(mark, transform, canvas_size):
    """Rasterize a mark's shape to an 'L' coverage mask."""
    points, closed = flatten(mark.primitive)
    xy = [tuple(p) for p in transform.apply(points)]

    mask = Image.new("L", canvas_size, 0)
    draw = ImageDraw.Draw(mask)

    if mark.filled:
        if len(xy) >= 3:
            draw.polygon(xy, fill=255)
    else:
        width = max(1, int(round(mark.stroke * transform.scale)))
        if closed:
            xy.append(xy[0])
        draw.line(xy, fill=255, width=width, joint="curve")
        if not closed:
            # Round caps
            r = width / 2.0
            for x, y in (xy[0], xy[-1]):
                draw.ellipse([x - r, y - r, x + r, y + r], fill=255)

    blur = mark.blur * transform.scale
    if blur >= 0.5:
        mask = mask.filter(ImageFilter.GaussianBlur(radius=blur))
    return mask


def _interpolate(stops, t):
    """Sample gradient stops at t (any shape) -> (rgb, alpha) arrays."""
    offsets = np.array([s.offset for s in stops], dtype=np.float64)
    colors = np.array([parse_color(s.color) for s in stops], dtype=np.float64)
    alphas = np.array([s.alpha for s in stops]) * colors[:, 3] / 255.0

    rgb = np.stack([np.interp(t, offsets, colors[:, c]) for c in range(3)],
                   axis=-1)
    return rgb, np.interp(t, offsets, alphas)


def _shade(paint, box, transform):
    """Evaluate a paint over a canvas box -> (rgb, alpha) arrays."""
    x0, y0, x1, y1 = box
    h, w = y1 - y0, x1 - x0

    if isinstance(paint, Solid):
        r, g, b, a = parse_color(paint.color)
        rgb = np.empty((h, w, 3), dtype=np.float64)
        rgb[:, :] = (r, g, b)
        return rgb, np.full((h, w), paint.alpha * a / 255.0)

    # Pixel centres mapped back into the paint's frame
    ys, xs = np.mgrid[y0:y1, x0:x1]
    pix = np.stack([xs.ravel() + 0.5, ys.ravel() + 0.5], axis=-1)
    local = transform.invert(pix)

    if isinstance(paint, LinearGradient):
        start = np.array(paint.start)
        d = np.array(paint.end) - start
        t = (local - start) @ d / max(float(d @ d), 1e-12)
    elif isinstance(paint, RadialGradient):
        center = np.array(paint.center)
        origin = center if paint.focus is None else np.array(paint.focus)
        reach = paint.radius + float(np.hypot(*(origin - center)))
        t = np.hypot(*(local - origin).T) / max(reach, 1e-12)
    else:
        raise TypeError(f"Unknown paint {type(paint).__name__}")

    return _interpolate(paint.stops, np.clip(t, 0.0, 1.0).reshape(h, w))


def _composite(canvas, rgb, alpha, dest=(0, 0)):
    layer = np.dstack([
        np.clip(rgb, 0, 255),
        np.clip(alpha * 255.0, 0, 255),
    ]).astype(np.uint8)
    canvas.alpha_composite(Image.fromarray(layer), dest=dest)


def _paint_mark(canvas, mark, transform, opacity=1.0):
    """Paint one mark onto the canvas, in place."""
    mask = _coverage(mark, transform, canvas.size)
    box = mask.getbbox()
    if box is None:
        return

    coverage = np.asarray(mask.crop(box), dtype=np.float64) / 255.0
    rgb, alpha = _shade(mark.paint, box, transform)
    _composite(canvas, rgb, coverage * alpha * mark.opacity * opacity,
               dest=box[:2])


def _paint_dust(canvas, dust_seed):
    """Faint fBm dust over the cosmos gradient."""
    w, h = canvas.size
    seq = SeededSequence(dust_seed)
    noise = fbm_2d(h, w, seq, octaves=4, cell=w * 0.25)
    alpha = np.clip((noise - 0.5) * 2.0, 0.0, 1.0) * DUST_OPACITY
    rgb = np.empty((h, w, 3), dtype=np.float64)
    rgb[:, :] = DUST_COLOR
    _composite(canvas, rgb, alpha)


def _paint_watermark(canvas, letter, backdrop):
    """Large crosshatched letter behind the elements."""
    w, h = canvas.size
    color, opacity = watermark_tone(backdrop)

    font = ImageFont.load_default(size=max(8, int(w * WATERMARK_SCALE)))
    mask = Image.new("L", canvas.size, 0)
    draw = ImageDraw.Draw(mask)
    left, top, right, bottom = draw.textbbox((0, 0), letter, font=font)
    origin = (w / 2.0 - (left + right) / 2.0, h / 2.0 - (top + bottom) / 2.0)
    draw.text(origin, letter, fill=255, font=font)

    period = max(3, int(round(w * HATCH_PERIOD)))
    line = max(1, int(round(period * HATCH_LINE)))
    ys, xs = np.mgrid[0:h, 0:w]
    hatch = (((xs + ys) % period) < line) | (((xs - ys) % period) < line)

    alpha = np.asarray(mask, dtype=np.float64) / 255.0 * hatch * opacity
    r, g, b, _ = parse_color(color)
    rgb = np.empty((h, w, 3), dtype=np.float64)
    rgb[:, :] = (r, g, b)
    _composite(canvas, rgb, alpha)


def silhouette_mask(silhouette, scale=1):
    """'L' mask of the silhouette at size * scale pixels."""
    px = int(round(silhouette.size * scale))
    mask = Image.new("L", (px, px), 0)
    draw = ImageDraw.Draw(mask)
    if silhouette.kind == "circle":
        draw.ellipse([0, 0, px - 1, px - 1], fill=255)
    elif silhouette.kind == "rounded":
        draw.rounded_rectangle([0, 0, px - 1, px - 1],
                               radius=int(round(silhouette.corner_radius * scale)),
                               fill=255)
    else:
        draw.polygon([(x * scale, y * scale) for x, y in silhouette.vertices],
                     fill=255)
    return mask


def _apply_silhouette(canvas, silhouette, scale):
    mask = np.asarray(silhouette_mask(silhouette, scale), dtype=np.float64)
    rgba = np.array(canvas, dtype=np.float64)
    rgba[:, :, 3] *= mask / 255.0
    return Image.fromarray(rgba.round().astype(np.uint8))
