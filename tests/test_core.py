"""Tests for hashing, the seeded sequence, identities and the shape table."""

import numpy as np
import pytest


def test_hash_empty_is_start_value():
    from avatarforge.prng import hash_identity
    assert hash_identity("") == 5381


def test_hash_known_value():
    from avatarforge.prng import hash_identity
    # (5381 * 33) ^ ord("a")
    assert hash_identity("a") == 177604


def test_hash_is_case_sensitive_on_raw_identity():
    from avatarforge.prng import hash_identity
    assert hash_identity("Alice@Example.com") != hash_identity("alice@example.com")


def test_hash_non_negative_for_long_strings():
    from avatarforge.prng import hash_identity
    for text in ("x" * 500, "someone.with.a.long.name@example.co.uk", "\U0001F600"):
        h = hash_identity(text)
        assert 0 <= h <= 2 ** 31


def test_sequence_first_draw():
    from avatarforge.prng import SeededSequence
    seq = SeededSequence(0)
    assert seq.random() == 12345 / 2 ** 31


def test_sequence_is_restartable():
    from avatarforge.prng import SeededSequence
    seq1, seq2 = SeededSequence(42), SeededSequence(42)
    first = [seq1.random() for _ in range(50)]
    second = [seq2.random() for _ in range(50)]
    assert first == second
    assert all(0.0 <= v < 1.0 for v in first)


def test_sequence_differs_by_seed():
    from avatarforge.prng import SeededSequence
    seq1, seq2 = SeededSequence(1), SeededSequence(2)
    assert [seq1.random() for _ in range(5)] != [seq2.random() for _ in range(5)]


def test_randint_always_consumes_a_draw():
    from avatarforge.prng import SeededSequence
    seq1, seq2 = SeededSequence(7), SeededSequence(7)
    assert seq1.randint(0) == 0
    seq2.random()
    assert seq1.random() == seq2.random()


def test_randint_range():
    from avatarforge.prng import SeededSequence
    seq = SeededSequence(99)
    values = [seq.randint(5) for _ in range(200)]
    assert set(values) <= set(range(5))


def test_sample_matches_sequential_draws():
    from avatarforge.prng import SeededSequence
    grid = SeededSequence(3).sample((2, 3))
    seq = SeededSequence(3)
    expected = np.array([seq.random() for _ in range(6)]).reshape(2, 3)
    np.testing.assert_array_equal(grid, expected)


def test_sequence_iterates():
    from itertools import islice
    from avatarforge.prng import SeededSequence
    values = list(islice(SeededSequence(5), 4))
    seq = SeededSequence(5)
    assert values == [seq.random() for _ in range(4)]


@pytest.mark.parametrize("raw, expected", [
    ("a@b.co", list("A@B.CO")),
    ("  Jane Doe+tag@Mail.com ", list("JANEDOE+TAG@MAIL.COM")),
    ("émile_1-2", list("MILE_1-2")),
    ("", []),
    (None, []),
    ("!!!", []),
])
def test_normalize(raw, expected):
    from avatarforge.identity import normalize
    assert normalize(raw) == expected


@pytest.mark.parametrize("identity, valid", [
    ("a@b.co", True),
    ("first.last+tag@sub.example.org", True),
    ("", False),
    ("no-at-sign.com", False),
    ("two@@example.com", False),
    ("@example.com", False),
    ("user@localhost", False),
    ("user@example.c", False),
    ("user name@example.com", False),
])
def test_is_valid_identity(identity, valid):
    from avatarforge.identity import is_valid_identity
    assert is_valid_identity(identity) is valid


def test_watermark_letter():
    from avatarforge.identity import watermark_letter
    assert watermark_letter(list("12A3B")) == "A"
    assert watermark_letter(list("123@.")) is None
    assert watermark_letter([]) is None


def test_shape_table_is_unique():
    from avatarforge.shapes import CHARACTER_SHAPES, verify_uniqueness
    report = verify_uniqueness()
    assert report.ok, report.colliding_pairs
    assert len(CHARACTER_SHAPES) == 41


def test_shape_table_covers_supported_alphabet():
    from avatarforge.shapes import SUPPORTED_CHARACTERS
    expected = set("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789@._-+")
    assert set(SUPPORTED_CHARACTERS) == expected


def test_fallback_never_collides():
    from avatarforge.shapes import (CHARACTER_SHAPES, FALLBACK_KIND,
                                    FALLBACK_VARIANT, lookup)
    fallback = lookup("?")
    assert fallback.key == (FALLBACK_KIND, FALLBACK_VARIANT)
    assert fallback.key not in {s.key for s in CHARACTER_SHAPES.values()}
    assert lookup("é").key == fallback.key


def test_lookup_is_case_insensitive():
    from avatarforge.shapes import lookup
    assert lookup("a") == lookup("A")
    assert lookup("A").label == "Triangle Up"


def test_uniqueness_reports_collisions():
    from avatarforge.shapes import ShapeDefinition, verify_uniqueness
    table = {
        "A": ShapeDefinition("A", "circle", 1, "x", "x"),
        "B": ShapeDefinition("B", "circle", 1, "y", "y"),
        "C": ShapeDefinition("C", "dot", 1, "z", "z"),
    }
    report = verify_uniqueness(table)
    assert not report.ok
    assert ("B", "A", ("circle", 1)) in report.colliding_pairs
    assert ("C", "?", ("dot", 1)) in report.colliding_pairs


def test_every_shape_has_a_glyph():
    from avatarforge.glyphs import GLYPHS
    from avatarforge.shapes import CHARACTER_SHAPES, FALLBACK_KIND, FALLBACK_VARIANT
    for shape in CHARACTER_SHAPES.values():
        assert shape.key in GLYPHS, shape
    assert (FALLBACK_KIND, FALLBACK_VARIANT) in GLYPHS


def test_glyphs_fit_unit_box():
    from avatarforge.geometry import extent
    from avatarforge.glyphs import GLYPHS
    for key, parts in GLYPHS.items():
        for part in parts:
            assert extent(part.primitive) <= 0.5 + 1e-9, key


def test_tiers_are_monotonic():
    from avatarforge.detail import detail_for_size
    sizes = [16, 32, 48, 63, 64, 100, 127, 128, 256, 512, 1024]
    tiers = [detail_for_size(s) for s in sizes]
    for small, large in zip(tiers, tiers[1:]):
        assert large.max_elements >= small.max_elements
        assert large.min_stroke >= small.min_stroke
        assert large.spread <= small.spread
        assert large.star_count >= small.star_count


@pytest.mark.parametrize("size, name", [
    (32, "minimal"), (63, "minimal"), (64, "medium"), (127, "medium"),
    (128, "full"), (512, "full"),
])
def test_tier_boundaries(size, name):
    from avatarforge.detail import detail_for_size
    assert detail_for_size(size).name == name


def test_palettes():
    from avatarforge.palettes import (CHARACTER_PALETTES, FALLBACK_PALETTE,
                                      hsl_to_hex, palette_for)
    from avatarforge.shapes import CHARACTER_SHAPES
    assert set(CHARACTER_PALETTES) == set(CHARACTER_SHAPES)
    assert palette_for("a") == CHARACTER_PALETTES["A"]
    assert palette_for("?") == FALLBACK_PALETTE
    assert hsl_to_hex(0, 100, 50) == "#FF0000"
    assert hsl_to_hex(120, 100, 25) == "#008000"


def test_fbm_deterministic_and_bounded():
    from avatarforge.noise import fbm_2d
    from avatarforge.prng import SeededSequence
    a = fbm_2d(32, 40, SeededSequence(11), cell=8.0)
    b = fbm_2d(32, 40, SeededSequence(11), cell=8.0)
    assert a.shape == (32, 40)
    np.testing.assert_array_equal(a, b)
    assert a.min() >= 0.0 and a.max() <= 1.0


def test_noise_passes_through_lattice_points():
    from avatarforge.noise import _upsample
    lattice = np.arange(20, dtype=np.float64).reshape(4, 5)
    grid = _upsample(lattice, 9, 13, 4.0)
    np.testing.assert_allclose(grid[::4, ::4], lattice[:3, :4])
    assert lattice[0, 0] < grid[2, 2] < lattice[1, 1]


def test_fbm_skips_fine_octaves():
    from avatarforge.noise import fbm_2d
    from avatarforge.prng import SeededSequence
    seq = SeededSequence(4)
    fbm_2d(16, 16, seq, octaves=6, cell=4.0, min_cell=2.0)
    # Two octaves: 6x6 then 10x10 lattice draws
    expected = SeededSequence(4)
    for _ in range(36 + 100):
        expected.random()
    assert seq.random() == expected.random()


def test_transform_roundtrip():
    from avatarforge.geometry import Transform
    t = Transform(10.0, 20.0, rotation=30.0, scale=4.0)
    pts = np.array([[0.0, 0.0], [0.5, -0.25], [1.0, 1.0]])
    np.testing.assert_allclose(t.invert(t.apply(pts)), pts, atol=1e-9)
    np.testing.assert_allclose(t.apply([[0.0, 0.0]]), [[10.0, 20.0]])
    assert t.svg() == "translate(10 20) rotate(30) scale(4)"


def test_fmt():
    from avatarforge.geometry import fmt
    assert fmt(1.0) == "1"
    assert fmt(0.12345) == "0.123"
    assert fmt(-0.0001) == "0"


def test_uniform_range():
    from avatarforge.prng import SeededSequence
    seq = SeededSequence(13)
    values = [seq.uniform(-2.0, 3.0) for _ in range(100)]
    assert all(-2.0 <= v < 3.0 for v in values)


def test_tiers_ordered_by_size():
    from avatarforge.detail import TIERS
    assert [t.name for t in TIERS] == ["minimal", "medium", "full"]
    assert [t.max_elements for t in TIERS] == sorted(t.max_elements for t in TIERS)
