"""Quantity parsing and display formatting."""

import math
import re

from recipebox.logging_config import get_logger
from recipebox.normalize.lexicon import (
    DISPLAY_FRACTION_TOLERANCE,
    DISPLAY_FRACTIONS,
    UNICODE_FRACTIONS,
)

logger = get_logger(__name__)

_GLYPHS = "".join(UNICODE_FRACTIONS)

# "1½" written without a space
_ATTACHED_GLYPH_RE = re.compile(rf"^(\d+)([{_GLYPHS}])$")


# =============================================================================
# Parsing
# =============================================================================


def _parse_fraction(token: str) -> float | None:
    """Parse "N/D" into a float, or None when either side is not a number."""
    numerator, sep, denominator = token.partition("/")
    if not sep:
        return None
    try:
        return float(numerator) / float(denominator)
    except (ValueError, ZeroDivisionError):
        return None


def _parse_simple(token: str) -> float | None:
    """Parse a single token without internal whitespace."""
    if "/" in token:
        return _parse_fraction(token)

    if token in UNICODE_FRACTIONS:
        return UNICODE_FRACTIONS[token]

    attached = _ATTACHED_GLYPH_RE.match(token)
    if attached:
        return int(attached.group(1)) + UNICODE_FRACTIONS[attached.group(2)]

    try:
        return float(token)
    except ValueError:
        return None


def parse_quantity(token: str | None) -> float | None:
    """
    Parse a numeric quantity token into a float.

    Handles formats like:
    - "2", "1.5"
    - "1/2"
    - "1 1/2" and "1 ½" (mixed numbers)
    - "½" and "1½" (unicode fraction glyphs)

    Returns None instead of raising when the token cannot be read, when a
    denominator is zero, or when the result is not finite.
    """
    if not token:
        return None

    token = token.strip()
    if not token:
        return None

    parts = token.split()
    if len(parts) == 2 and ("/" in parts[1] or parts[1] in UNICODE_FRACTIONS):
        whole = _parse_simple(parts[0])
        fraction = _parse_simple(parts[1])
        if whole is None or fraction is None:
            value = None
        else:
            value = whole + fraction
    elif len(parts) == 1:
        value = _parse_simple(token)
    else:
        value = None

    if value is None or not math.isfinite(value):
        logger.debug(f"Unparseable quantity token {token!r}")
        return None

    return value


# =============================================================================
# Formatting
# =============================================================================


def format_quantity(quantity: float | None) -> str:
    """
    Render a quantity for display, preferring common culinary fractions.

    Examples:
        2 -> "2"
        2.5 -> "2 ½"
        0.333 -> "⅓"
        1.3 -> "1.3"
    """
    if quantity is None or not math.isfinite(quantity) or quantity == 0:
        return ""

    if quantity == int(quantity):
        return str(int(quantity))

    whole = int(quantity)
    fractional = abs(quantity - whole)

    for value, glyph in DISPLAY_FRACTIONS:
        if abs(fractional - value) < DISPLAY_FRACTION_TOLERANCE:
            if whole:
                return f"{whole} {glyph}"
            return f"-{glyph}" if quantity < 0 else glyph

    return f"{quantity:.2f}".rstrip("0").rstrip(".")
