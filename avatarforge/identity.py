"""Identity string helpers used at the engine boundary."""

import re

SUPPORTED_PATTERN = re.compile(r"[^A-Z0-9@._+\-]")

# One "@", a non-empty local part, and a dotted domain ending in a label of
# two or more letters. No whitespace anywhere.
_EMAIL_PATTERN = re.compile(
    r"^[^\s@]+@[^\s@.]+(?:\.[^\s@.]+)*\.[A-Za-z]{2,}$"
)


def normalize(identity):
    """Uppercase identity and keep only characters in [A-Z0-9@._+-].

    Returns a list of single-character strings (possibly empty).
    """
    return list(SUPPORTED_PATTERN.sub("", (identity or "").upper()))


def is_valid_identity(identity):
    """Return True if identity looks like a plausible email address."""
    if not identity:
        return False
    return _EMAIL_PATTERN.match(identity) is not None


def watermark_letter(chars):
    """First alphabetic character of a normalized sequence, or None."""
    for ch in chars:
        if "A" <= ch <= "Z":
            return ch
    return None
