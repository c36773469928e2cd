"""Tests for the raster and vector renderers and the public API."""

import logging
import xml.etree.ElementTree as ET

import numpy as np
import pytest

SVG = "{http://www.w3.org/2000/svg}"


def _groups(root, role):
    return [g for g in root.iter(f"{SVG}g") if g.get("class") == role]


def test_generate_basic():
    from avatarforge import generate
    img = generate("alice@example.com", size=64)
    assert img.mode == "RGBA"
    assert img.size == (64, 64)


@pytest.mark.parametrize("size", [32, 100, 256])
def test_generate_sizes(size):
    from avatarforge import generate
    img = generate("a@b.co", size=size)
    assert img.size == (size, size)


def test_raster_reproducibility():
    from avatarforge import generate
    arr1 = np.array(generate("alice@example.com", size=64))
    arr2 = np.array(generate("alice@example.com", size=64))
    np.testing.assert_array_equal(arr1, arr2)


def test_different_identities_differ():
    from avatarforge import generate
    arr1 = np.array(generate("alice@example.com", size=64))
    arr2 = np.array(generate("bob@example.com", size=64))
    assert not np.array_equal(arr1, arr2)


@pytest.mark.parametrize("style", ["glyph", "cosmic"])
def test_raster_styles(style):
    from avatarforge import generate
    img = generate("a@b.co", size=64, style=style)
    arr = np.array(img)
    assert arr[32, 32, 3] == 255


def test_silhouette_corners_are_transparent():
    from avatarforge import generate
    arr = np.array(generate("a@b.co", size=64, shape="circle"))
    assert arr[0, 0, 3] == 0
    assert arr[63, 63, 3] == 0
    assert arr[32, 32, 3] == 255

    arr = np.array(generate("a@b.co", size=64, shape="triangle"))
    assert arr[2, 2, 3] == 0
    assert arr[2, 61, 3] == 0


def test_empty_identity_renders_background_only():
    from avatarforge import compose, generate
    comp = compose("")
    assert len(comp.plan) == 0
    assert comp.watermark is None
    img = generate("", size=32)
    assert img.size == (32, 32)


def test_white_background():
    from avatarforge import generate
    arr = np.array(generate("", size=32, background="white"))
    np.testing.assert_array_equal(arr[16, 16], [255, 255, 255, 255])


def test_custom_background_passes_through():
    from avatarforge import generate
    arr = np.array(generate("", size=32, background="#336699"))
    np.testing.assert_array_equal(arr[16, 16], [0x33, 0x66, 0x99, 255])


def test_unknown_background_falls_back(caplog):
    from avatarforge import generate
    with caplog.at_level(logging.WARNING):
        arr = np.array(generate("", size=32, background="not-a-colour"))
    assert "not-a-colour" in caplog.text
    np.testing.assert_array_equal(arr[16, 16], [128, 128, 128, 255])


def test_encode_png():
    from avatarforge import render
    data = render("a@b.co", size=64)
    assert isinstance(data, bytes)
    assert data[:8] == b"\x89PNG\r\n\x1a\n"


def test_encode_webp():
    from avatarforge import render
    data = render("a@b.co", size=64, image_format="webp", quality=80)
    assert data[:4] == b"RIFF"
    assert data[8:12] == b"WEBP"


@pytest.mark.parametrize("image_format", ["jpeg", "jpg"])
def test_encode_jpeg(image_format):
    from io import BytesIO
    from PIL import Image
    from avatarforge import render
    data = render("a@b.co", size=64, shape="circle",
                  image_format=image_format, quality=90)
    assert data[:2] == b"\xff\xd8"
    img = Image.open(BytesIO(data))
    assert img.mode == "RGB"
    # Transparent corners are flattened onto white
    assert min(img.getpixel((0, 0))) > 200


def test_supersample_factor():
    from avatarforge.raster import supersample_factor
    assert supersample_factor(32) == 4
    assert supersample_factor(128) == 4
    assert supersample_factor(256) == 2
    assert supersample_factor(512) == 2
    assert supersample_factor(1024) == 1


def test_svg_structure():
    from avatarforge import RenderConfig, compose, render
    svg = render("alice@example.com", size=128, format="vector")
    assert isinstance(svg, str)

    root = ET.fromstring(svg)
    assert root.tag == f"{SVG}svg"
    assert root.get("viewBox") == "0 0 128 128"

    clip = root.find(f"{SVG}defs/{SVG}clipPath")
    assert clip.get("id").endswith("clip")
    assert clip.find(f"{SVG}rect") is not None

    comp = compose("alice@example.com", RenderConfig(size=128))
    elements = _groups(root, "element")
    assert len(elements) == len(comp.plan)
    for group, element in zip(elements, comp.plan):
        assert group.get("data-kind") == element.kind
        assert group.get("data-char") == element.char
        assert len(group) > 0

    watermark = root.find(f".//{SVG}text")
    assert watermark.text == "A"


@pytest.mark.parametrize("shape, tag", [
    ("rounded", "rect"), ("circle", "circle"), ("triangle", "polygon"),
])
def test_svg_clip_shapes(shape, tag):
    from avatarforge import render_svg
    root = ET.fromstring(render_svg("a@b.co", size=64, shape=shape))
    clip = root.find(f"{SVG}defs/{SVG}clipPath")
    assert clip[0].tag == f"{SVG}{tag}"
    body = root.find(f"{SVG}g")
    assert body.get("clip-path") == f"url(#{clip.get('id')})"


def test_svg_reproducibility():
    from avatarforge import render_svg
    assert render_svg("alice@example.com") == render_svg("alice@example.com")
    assert render_svg("alice@example.com") != render_svg("bob@example.com")


def test_svg_ids_are_unique():
    from avatarforge import render_svg
    root = ET.fromstring(render_svg("alice@example.com", style="cosmic"))
    ids = [node.get("id") for node in root.iter() if node.get("id")]
    assert len(ids) == len(set(ids))


def _ids(svg):
    return {node.get("id") for node in ET.fromstring(svg).iter()
            if node.get("id")}


@pytest.mark.parametrize("first, second", [
    ({"shape": "circle"}, {"shape": "triangle"}),
    ({"style": "glyph"}, {"style": "cosmic"}),
    ({"size": 64}, {"size": 128}),
])
def test_svg_ids_differ_between_documents(first, second):
    from avatarforge import render_svg
    a = _ids(render_svg("a@b.co", **first))
    b = _ids(render_svg("a@b.co", **second))
    assert a and b
    assert a.isdisjoint(b)
    assert _ids(render_svg("a@b.co")).isdisjoint(_ids(render_svg("b@a.co")))


def test_svg_references_resolve_within_document():
    import re
    from avatarforge import render_svg
    svg = render_svg("alice@example.com", style="cosmic")
    ids = _ids(svg)
    refs = set(re.findall(r"url\(#([^)]+)\)", svg))
    assert refs
    assert refs <= ids


def test_svg_cosmos_has_dust_and_vignette():
    from avatarforge import render_svg
    root = ET.fromstring(render_svg("a@b.co"))
    turbulence = root.find(f".//{SVG}feTurbulence")
    assert turbulence is not None
    assert turbulence.get("type") == "fractalNoise"
    assert root.find(f".//{SVG}rect[@class='dust']") is not None

    plain = ET.fromstring(render_svg("a@b.co", background="white"))
    assert plain.find(f".//{SVG}feTurbulence") is None


def test_svg_custom_background_untouched():
    from avatarforge import render_svg
    svg = render_svg("", background="rebeccapurple")
    assert 'fill="rebeccapurple"' in svg
    root = ET.fromstring(svg)
    assert root.find(f".//{SVG}text") is None
    assert _groups(root, "element") == []


def test_svg_cosmic_clouds():
    from avatarforge import render_svg
    root = ET.fromstring(render_svg("a@b.co", style="cosmic"))
    assert 2 <= len(_groups(root, "cloud")) <= 3
    kinds = {g.get("data-kind") for g in _groups(root, "element")}
    assert "glow-orb" in kinds


def test_backends_share_composition():
    from avatarforge import RenderConfig, compose
    from avatarforge.raster import render_raster
    from avatarforge.vector import render_vector
    comp = compose("alice@example.com", RenderConfig(size=64))
    img = render_raster(comp)
    root = ET.fromstring(render_vector(comp))
    assert img.size == (64, 64)
    assert root.get("width") == "64"
    assert len(_groups(root, "element")) == len(comp.plan)


@pytest.mark.parametrize("kwargs", [
    {"size": 0},
    {"size": -5},
    {"size": 12.5},
    {"shape": "hexagon"},
    {"format": "gif"},
    {"image_format": "bmp"},
    {"quality": 0},
    {"quality": 101},
    {"quality": "high"},
    {"quality": "150"},
    {"quality": [80]},
    {"style": "watercolour"},
])
def test_config_validation(kwargs):
    from avatarforge import RenderConfig
    with pytest.raises(ValueError):
        RenderConfig(**kwargs)


def test_config_normalizes_jpg():
    from avatarforge import RenderConfig
    assert RenderConfig(image_format="JPG").image_format == "jpeg"


def test_config_accepts_numeric_quality_string():
    from avatarforge import RenderConfig, render
    assert RenderConfig(quality="80").quality == 80
    data = render("a@b.co", size=32, image_format="webp", quality="80")
    assert data[:4] == b"RIFF"


def test_unclipped_raster_stays_inside_grown_silhouette(monkeypatch):
    import dataclasses
    from PIL import ImageFilter
    from avatarforge import RenderConfig, compose, raster

    monkeypatch.setattr(raster, "_apply_silhouette",
                        lambda canvas, silhouette, scale: canvas)
    size = 128
    for shape in ("rounded", "circle", "triangle"):
        for style in ("glyph", "cosmic"):
            config = RenderConfig(size=size, shape=shape, style=style,
                                  background="#00000000")
            comp = compose("alice@example.com", config)
            backdrop = dataclasses.replace(comp.backdrop, clouds=())
            comp = dataclasses.replace(comp, watermark=None, backdrop=backdrop)
            alpha = np.array(raster.render_raster(comp))[..., 3]

            margin = int(np.ceil(config.safe_zone.margin_ratio * size)) + 1
            mask = raster.silhouette_mask(comp.silhouette)
            grown = np.array(mask.filter(
                ImageFilter.MaxFilter(2 * margin + 1)))
            outside = grown == 0
            assert outside.any(), shape
            assert alpha[outside].max() <= 16, (shape, style)


def test_describe_identity():
    from avatarforge import describe_identity
    rows = describe_identity("a.b")
    assert [char for char, _, _ in rows] == ["A", ".", "B"]
    assert rows[1][1].label == "Double Dot"
    assert len(rows[0][2]) == 3
    assert describe_identity("") == []
