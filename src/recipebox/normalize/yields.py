"""Recipe yield parsing and serving-multiplier scaling."""

import re
from dataclasses import dataclass

from recipebox.logging_config import get_logger
from recipebox.normalize.lexicon import (
    YIELD_ES_PLURALS,
    YIELD_FRACTIONS,
    YIELD_PLURAL_UNITS,
    YIELD_SINGULAR_UNITS,
)
from recipebox.normalize.quantity import format_quantity

logger = get_logger(__name__)

_GLYPHS = "".join(YIELD_FRACTIONS)

YIELD_RE = re.compile(rf"^(?P<amount>[\d\s./+{_GLYPHS}]+)(?P<unit>.*)$", re.DOTALL)
_PART_SPLIT_RE = re.compile(r"[\s+]+")
_ATTACHED_GLYPH_RE = re.compile(rf"^(\d+)([{_GLYPHS}])$")


@dataclass(frozen=True)
class Yield:
    """A recipe's stated output, e.g. 8 servings."""

    quantity: float | None
    unit: str


def _parse_part(part: str) -> float | None:
    """Parse one summand of a yield amount."""
    if "/" in part:
        numerator, _, denominator = part.partition("/")
        try:
            return float(numerator) / float(denominator)
        except (ValueError, ZeroDivisionError):
            return None

    if part in YIELD_FRACTIONS:
        return YIELD_FRACTIONS[part]

    attached = _ATTACHED_GLYPH_RE.match(part)
    if attached:
        return int(attached.group(1)) + YIELD_FRACTIONS[attached.group(2)]

    try:
        return float(part)
    except ValueError:
        return None


def parse_yield(text: str | None) -> Yield:
    """
    Parse a yield string into a quantity and unit.

    Examples:
        "8 servings" -> (8.0, "servings")
        "1 1/2 cups" -> (1.5, "cups")
        "2 + 1 loaves" -> (3.0, "loaves")
        "Makes plenty" -> (None, "Makes plenty")
    """
    original = (text or "").strip()
    failed = Yield(quantity=None, unit=original)

    match = YIELD_RE.match(original)
    if not match:
        return failed

    parts = [part for part in _PART_SPLIT_RE.split(match.group("amount")) if part]
    if not parts:
        return failed

    total = 0.0
    for part in parts:
        value = _parse_part(part)
        if value is None:
            logger.debug(f"Unparseable yield part {part!r} in {original!r}")
            return failed
        total += value

    return Yield(quantity=total, unit=match.group("unit").strip())


def _inflect_unit(unit: str, quantity: float) -> str:
    """Pluralize or singularize the first word of a yield unit."""
    if not unit:
        return unit

    word, sep, tail = unit.partition(" ")
    lower = word.lower()

    if quantity > 1:
        if lower in YIELD_SINGULAR_UNITS and not lower.endswith(("s", "es")):
            word = f"{word}s"
    elif lower in YIELD_PLURAL_UNITS:
        word = word[:-2] if lower in YIELD_ES_PLURALS else word[:-1]

    return f"{word}{sep}{tail}"


def format_scaled_yield(text: str | None, multiplier: float) -> str:
    """
    Scale a yield string by a serving multiplier.

    The original string comes back untouched when the multiplier is 1 (or
    not positive) or the yield has no usable quantity.

    Examples:
        ("4 servings", 2) -> "8 servings"
        ("4 servings", 0.25) -> "1 serving"
        ("1 cup", 3) -> "3 cups"
    """
    if not text or multiplier == 1 or multiplier <= 0:
        return text or ""

    parsed = parse_yield(text)
    if not parsed.quantity:
        return text

    scaled = parsed.quantity * multiplier
    unit = _inflect_unit(parsed.unit, scaled)

    return f"{format_quantity(scaled)} {unit}".strip()
