"""Vector backend: emits a Composition as an SVG document.

The document mirrors the raster pipeline: background, dust, clouds,
watermark, one <g> per element in plan order, vignette, all clipped to
the silhouette.
"""

import logging
import math
import xml.etree.ElementTree as ET

from .geometry import Arc, Circle, Ellipse, Line, Path, Polyline, fmt
from .marks import (HATCH_LINE, HATCH_PERIOD, WATERMARK_SCALE, LinearGradient,
                    RadialGradient, Solid, background_marks, element_marks,
                    vignette_marks, watermark_tone)
from .prng import hash_identity

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
DUST_OPACITY = 0.12


class _Document:
    """Per-render SVG builder.

    Every id carries the document prefix, so several avatars inlined in
    one page never resolve each other's url(#...) references.
    """

    def __init__(self, size, prefix=""):
        self.size = size
        self.prefix = prefix
        self.root = ET.Element("svg", {
            "xmlns": SVG_NS,
            "width": str(size),
            "height": str(size),
            "viewBox": f"0 0 {size} {size}",
        })
        self.defs = ET.SubElement(self.root, "defs")
        self._counts = {}
        self._filters = {}

    def new_id(self, prefix):
        n = self._counts.get(prefix, 0)
        self._counts[prefix] = n + 1
        return f"{self.prefix}{prefix}{n}"

    def blur_filter(self, deviation):
        """id of a Gaussian blur filter, shared by equal deviations."""
        key = fmt(deviation)
        if key not in self._filters:
            fid = self.new_id("blur")
            node = ET.SubElement(self.defs, "filter", {
                "id": fid, "x": "-50%", "y": "-50%",
                "width": "200%", "height": "200%",
            })
            ET.SubElement(node, "feGaussianBlur", {"stdDeviation": key})
            self._filters[key] = fid
        return self._filters[key]

    def paint(self, paint):
        """Attribute value for a paint, adding gradient defs as needed."""
        if isinstance(paint, Solid):
            return paint.color, paint.alpha

        if isinstance(paint, LinearGradient):
            gid = self.new_id("lin")
            node = ET.SubElement(self.defs, "linearGradient", {
                "id": gid, "gradientUnits": "userSpaceOnUse",
                "x1": fmt(paint.start[0]), "y1": fmt(paint.start[1]),
                "x2": fmt(paint.end[0]), "y2": fmt(paint.end[1]),
            })
        elif isinstance(paint, RadialGradient):
            gid = self.new_id("rad")
            attrs = {
                "id": gid, "gradientUnits": "userSpaceOnUse",
                "cx": fmt(paint.center[0]), "cy": fmt(paint.center[1]),
                "r": fmt(paint.radius),
            }
            if paint.focus is not None:
                attrs["fx"] = fmt(paint.focus[0])
                attrs["fy"] = fmt(paint.focus[1])
            node = ET.SubElement(self.defs, "radialGradient", attrs)
        else:
            raise TypeError(f"Unknown paint {type(paint).__name__}")

        for stop in paint.stops:
            ET.SubElement(node, "stop", {
                "offset": fmt(stop.offset),
                "stop-color": stop.color,
                "stop-opacity": fmt(stop.alpha),
            })
        return f"url(#{gid})", 1.0

    def tostring(self):
        return ET.tostring(self.root, encoding="unicode")


def _path_data(primitive):
    """SVG path 'd' for Arc and Path primitives."""
    if isinstance(primitive, Arc):
        cx, cy = primitive.center
        r = primitive.radius
        sweep = primitive.end - primitive.start
        a0, a1 = math.radians(primitive.start), math.radians(primitive.end)
        x0, y0 = cx + r * math.cos(a0), cy + r * math.sin(a0)
        x1, y1 = cx + r * math.cos(a1), cy + r * math.sin(a1)
        large = 1 if abs(sweep) > 180 else 0
        direction = 1 if sweep > 0 else 0
        return (f"M{fmt(x0)} {fmt(y0)} A{fmt(r)} {fmt(r)} 0 {large} "
                f"{direction} {fmt(x1)} {fmt(y1)}")

    parts = [f"M{fmt(primitive.start[0])} {fmt(primitive.start[1])}"]
    for op, *pts in primitive.segments:
        coords = " ".join(f"{fmt(x)} {fmt(y)}" for x, y in pts)
        parts.append(f"{op}{coords}")
    if primitive.closed:
        parts.append("Z")
    return " ".join(parts)


def _shape_node(primitive):
    """(tag, attributes) describing a primitive."""
    if isinstance(primitive, Line):
        return "line", {
            "x1": fmt(primitive.start[0]), "y1": fmt(primitive.start[1]),
            "x2": fmt(primitive.end[0]), "y2": fmt(primitive.end[1]),
        }
    if isinstance(primitive, Polyline):
        points = " ".join(f"{fmt(x)},{fmt(y)}" for x, y in primitive.points)
        return ("polygon" if primitive.closed else "polyline"), {
            "points": points,
        }
    if isinstance(primitive, Circle):
        return "circle", {
            "cx": fmt(primitive.center[0]), "cy": fmt(primitive.center[1]),
            "r": fmt(primitive.radius),
        }
    if isinstance(primitive, Ellipse):
        return "ellipse", {
            "cx": fmt(primitive.center[0]), "cy": fmt(primitive.center[1]),
            "rx": fmt(primitive.rx), "ry": fmt(primitive.ry),
        }
    if isinstance(primitive, (Arc, Path)):
        return "path", {"d": _path_data(primitive)}
    raise TypeError(f"Cannot emit {type(primitive).__name__}")


def _emit_mark(doc, parent, mark):
    tag, attrs = _shape_node(mark.primitive)
    value, alpha = doc.paint(mark.paint)

    if mark.filled:
        attrs["fill"] = value
        if alpha < 1.0:
            attrs["fill-opacity"] = fmt(alpha)
    else:
        attrs.update({
            "fill": "none",
            "stroke": value,
            "stroke-width": fmt(mark.stroke),
            "stroke-linecap": "round",
            "stroke-linejoin": "round",
        })
        if alpha < 1.0:
            attrs["stroke-opacity"] = fmt(alpha)

    if mark.opacity < 1.0:
        attrs["opacity"] = fmt(mark.opacity)
    if mark.blur > 0:
        attrs["filter"] = f"url(#{doc.blur_filter(mark.blur)})"
    ET.SubElement(parent, tag, attrs)


def _emit_element(doc, parent, element, role):
    group = ET.SubElement(parent, "g", {
        "class": role,
        "data-kind": element.kind,
        "data-variant": str(element.variant),
        "data-char": element.char,
        "transform": element.transform.svg(),
        "opacity": fmt(element.opacity),
    })
    for mark in element_marks(element):
        _emit_mark(doc, group, mark)


def _clip_path(doc, silhouette):
    clip_id = doc.prefix + "clip"
    clip = ET.SubElement(doc.defs, "clipPath", {"id": clip_id})
    size = silhouette.size
    if silhouette.kind == "circle":
        half = fmt(size / 2.0)
        ET.SubElement(clip, "circle", {"cx": half, "cy": half, "r": half})
    elif silhouette.kind == "rounded":
        radius = fmt(silhouette.corner_radius)
        ET.SubElement(clip, "rect", {
            "width": str(size), "height": str(size), "rx": radius, "ry": radius,
        })
    else:
        points = " ".join(f"{fmt(x)},{fmt(y)}" for x, y in silhouette.vertices)
        ET.SubElement(clip, "polygon", {"points": points})
    return f"url(#{clip_id})"


def _dust(doc, parent, backdrop, size):
    fid = doc.new_id("dust")
    node = ET.SubElement(doc.defs, "filter", {
        "id": fid, "x": "0", "y": "0", "width": "100%", "height": "100%",
    })
    ET.SubElement(node, "feTurbulence", {
        "type": "fractalNoise",
        "baseFrequency": fmt(4.0 / size),
        "numOctaves": "4",
        "seed": str(backdrop.dust_seed),
    })
    ET.SubElement(node, "feColorMatrix", {
        "type": "matrix",
        "values": ("0 0 0 0 0.78  0 0 0 0 0.75  0 0 0 0 1  "
                   "0 0 0 2 -1"),
    })
    ET.SubElement(parent, "rect", {
        "class": "dust", "width": str(size), "height": str(size),
        "filter": f"url(#{fid})", "opacity": fmt(DUST_OPACITY),
    })


def _watermark(doc, parent, letter, backdrop, size):
    color, opacity = watermark_tone(backdrop)
    period = max(3.0, size * HATCH_PERIOD)
    pid = doc.new_id("hatch")
    pattern = ET.SubElement(doc.defs, "pattern", {
        "id": pid, "patternUnits": "userSpaceOnUse",
        "width": fmt(period), "height": fmt(period),
        "patternTransform": "rotate(45)",
    })
    ET.SubElement(pattern, "path", {
        "d": f"M0 0 V{fmt(period)} M0 0 H{fmt(period)}",
        "stroke": color,
        "stroke-width": fmt(period * HATCH_LINE * 2),
    })
    text = ET.SubElement(parent, "text", {
        "class": "watermark",
        "x": fmt(size / 2.0), "y": fmt(size / 2.0),
        "text-anchor": "middle", "dominant-baseline": "central",
        "font-family": "sans-serif", "font-weight": "bold",
        "font-size": fmt(size * WATERMARK_SCALE),
        "fill": f"url(#{pid})", "opacity": fmt(opacity),
    })
    text.text = letter


def id_prefix(composition):
    """Deterministic id prefix, distinct for each identity and look."""
    config = composition.config
    key = "|".join(str(part) for part in (
        composition.identity, config.size, config.shape, config.style,
        config.background,
    ))
    return f"af{hash_identity(key):x}-"


def render_vector(composition):
    """Render a Composition to an SVG document string."""
    size = composition.size
    backdrop = composition.backdrop
    doc = _Document(size, id_prefix(composition))

    body = ET.SubElement(doc.root, "g", {
        "clip-path": _clip_path(doc, composition.silhouette),
    })

    # 1. Background fill, dust and stars
    background = ET.SubElement(body, "g", {"class": "background"})
    base, *stars = background_marks(backdrop, size)
    _emit_mark(doc, background, base)
    if backdrop.kind == "cosmos":
        _dust(doc, background, backdrop, size)
    for mark in stars:
        _emit_mark(doc, background, mark)

    # 2. Clouds
    for cloud in backdrop.clouds:
        _emit_element(doc, background, cloud, "cloud")

    # 3. Watermark
    if composition.watermark:
        _watermark(doc, body, composition.watermark, backdrop, size)

    # 4. Elements in plan order
    for element in composition.plan:
        _emit_element(doc, body, element, "element")

    # 5. Vignette
    for mark in vignette_marks(backdrop, size):
        _emit_mark(doc, body, mark)

    logger.debug("Emitted SVG with %d elements", len(composition.plan))
    return doc.tostring()
