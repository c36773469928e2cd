"""Character to shape mapping.

Every supported character maps to exactly one (kind, variant) pair. The
pairs are unique across the table, and the fallback used for unsupported
characters is never assigned to a character.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ShapeDefinition:
    """The glyph a character is drawn as."""
    char: str
    kind: str
    variant: int
    label: str
    description: str

    @property
    def key(self):
        return (self.kind, self.variant)


@dataclass(frozen=True)
class UniquenessReport:
    ok: bool
    colliding_pairs: tuple  # ((char_a, char_b, (kind, variant)), ...)


def _shape(char, kind, variant, label, description):
    return ShapeDefinition(char, kind, variant, label, description)


CHARACTER_SHAPES = {s.char: s for s in (
    # Letters
    _shape("A", "triangle", 1, "Triangle Up", "Upward pointing triangle"),
    _shape("B", "concentric", 2, "Double Ring", "Two concentric circles"),
    _shape("C", "arc", 1, "Open Arc", "Open curved arc"),
    _shape("D", "semicircle", 1, "Half Moon", "Half disc outline"),
    _shape("E", "horizontal-lines", 3, "Triple Lines", "Three horizontal lines"),
    _shape("F", "horizontal-lines", 2, "Double Lines", "Two horizontal lines"),
    _shape("G", "spiral", 1, "Spiral CW", "Clockwise spiral"),
    _shape("H", "cross-plus", 1, "Plus", "Plus sign cross"),
    _shape("I", "vertical-line", 1, "Pillar", "Single vertical line"),
    _shape("J", "hook", 1, "Hook", "Curved hook shape"),
    _shape("K", "arrow-right", 1, "Arrow Right", "Right pointing arrow"),
    _shape("L", "corner", 1, "Corner", "Right angle corner"),
    _shape("M", "zigzag", 3, "Mountain", "Mountain peaks zigzag"),
    _shape("N", "zigzag", 2, "Wave Peak", "Single wave peak"),
    _shape("O", "circle", 1, "Circle", "Simple circle"),
    _shape("P", "lollipop", 1, "Lollipop", "Circle on a stem"),
    _shape("Q", "circle-tail", 1, "Circle Tail", "Circle with diagonal tail"),
    _shape("R", "lollipop-kick", 1, "Lollipop Kick", "Lollipop with leg"),
    _shape("S", "wave", 2, "Snake", "S-shaped wave"),
    _shape("T", "tau", 1, "Tau", "T-shaped tau"),
    _shape("U", "cup", 1, "Cup", "U-shaped cup"),
    _shape("V", "triangle-down", 1, "Triangle Down", "Downward pointing triangle"),
    _shape("W", "zigzag", 4, "Double Valley", "Double valley zigzag"),
    _shape("X", "cross", 1, "Cross X", "Diagonal cross"),
    _shape("Y", "fork", 1, "Fork", "Y-shaped fork"),
    _shape("Z", "zigzag", 1, "Zag", "Z-shaped zigzag"),
    # Digits
    _shape("0", "ellipse", 1, "Ellipse", "Vertical ellipse"),
    _shape("1", "line-dot", 1, "Line & Dot", "Vertical line with dot"),
    _shape("2", "wave", 1, "Gentle Wave", "Gentle wave curve"),
    _shape("3", "triple-arc", 1, "Triple Arc", "Three stacked arcs"),
    _shape("4", "arrow-down", 1, "Arrow Down", "Downward arrow"),
    _shape("5", "flag", 1, "Flag", "Flag shape"),
    _shape("6", "spiral", 2, "Spiral CCW", "Counter-clockwise spiral"),
    _shape("7", "angle", 1, "Angle", "Right angle"),
    _shape("8", "concentric", 3, "Triple Ring", "Three concentric circles"),
    _shape("9", "spiral", 3, "Reverse Spiral", "Inverted spiral"),
    # Specials
    _shape("@", "concentric", 4, "At Ring", "Ring with center dot"),
    _shape(".", "dot", 2, "Double Dot", "Pair of dots"),
    _shape("_", "underscore", 1, "Base", "Horizontal base line"),
    _shape("-", "dash", 1, "Dash", "Horizontal dash"),
    _shape("+", "cross-plus", 2, "Plus Bold", "Bold plus sign"),
)}

SUPPORTED_CHARACTERS = "".join(CHARACTER_SHAPES)

FALLBACK_KIND = "dot"
FALLBACK_VARIANT = 1


def lookup(char):
    """Return the ShapeDefinition for char, or the fallback dot."""
    upper = (char or "").upper()
    shape = CHARACTER_SHAPES.get(upper)
    if shape is not None:
        return shape
    return ShapeDefinition(upper, FALLBACK_KIND, FALLBACK_VARIANT,
                           "Unknown", "Fallback shape")


def verify_uniqueness(table=None):
    """Check that no two characters share a (kind, variant) key.

    The fallback key counts as taken, so a character assigned to it is
    reported as colliding with the fallback (shown as "?").
    """
    if table is None:
        table = CHARACTER_SHAPES
    seen = {(FALLBACK_KIND, FALLBACK_VARIANT): "?"}
    collisions = []
    for char, shape in table.items():
        if shape.key in seen:
            collisions.append((char, seen[shape.key], shape.key))
        else:
            seen[shape.key] = char
    return UniquenessReport(ok=not collisions,
                            colliding_pairs=tuple(collisions))
