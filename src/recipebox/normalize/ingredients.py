"""Ingredient line parsing and canonical-key normalization."""

import re
from dataclasses import dataclass

from recipebox.logging_config import get_logger
from recipebox.normalize.lexicon import (
    DESCRIPTOR_LEXICON,
    ES_PLURAL_STEMS,
    INVARIANT_PLURALS,
    NON_UNIT_DESCRIPTORS,
    UNICODE_FRACTIONS,
    UNIT_LEXICON,
)
from recipebox.normalize.quantity import format_quantity, parse_quantity
from recipebox.normalize.units import UnitSystem, convert_units

logger = get_logger(__name__)

_NUMERIC = rf"[\d{''.join(UNICODE_FRACTIONS)}]"

# quantity candidate, then an optional unit word that is followed by more text
INGREDIENT_LINE_RE = re.compile(
    rf"^(?P<quantity>{_NUMERIC}(?:[\d{''.join(UNICODE_FRACTIONS)}./]|\s+(?={_NUMERIC}))*)?"
    r"\s*"
    r"(?:(?P<unit>[A-Za-z.]+)\s+(?=\S))?"
    r"(?P<rest>.*)$",
    re.DOTALL,
)

_PARENTHETICAL_RE = re.compile(r"\([^)]*\)")
_UNIT_WORDS_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(unit) for unit in UNIT_LEXICON) + r")(?:es|s)?\b"
)
_DESCRIPTORS_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(phrase) for phrase in DESCRIPTOR_LEXICON) + r")\b"
)
_APOSTROPHES_RE = re.compile(r"['’]")
_NON_LETTERS_RE = re.compile(r"[^\w\s]|[\d_]")


@dataclass(frozen=True)
class ParsedIngredient:
    """Structured form of one ingredient line."""

    quantity: float | None
    unit: str | None
    description: str


def parse_ingredient(text: str | None) -> ParsedIngredient:
    """
    Split an ingredient line into quantity, unit and description.

    Examples:
        "2 cups flour" -> (2.0, "cups", "flour")
        "1 1/2 tsp salt" -> (1.5, "tsp", "salt")
        "2 large eggs" -> (2.0, None, "large eggs")
        "Salt and pepper to taste" -> (None, None, "Salt and pepper to taste")

    Never raises. When no quantity can be read, the whole trimmed line is the
    description and the unit is cleared.
    """
    original = (text or "").strip()
    match = INGREDIENT_LINE_RE.match(original)

    quantity_token = (match.group("quantity") or "").strip()
    unit = match.group("unit")
    description = match.group("rest").strip()

    quantity = parse_quantity(quantity_token)
    if quantity is None:
        description = " ".join(part for part in (quantity_token, unit, description) if part)
        unit = None

    if unit and unit.lower() in NON_UNIT_DESCRIPTORS:
        description = f"{unit} {description}".strip()
        unit = None

    # A bare number names no ingredient
    if quantity is not None and not description:
        quantity = None

    # Fallback: without a quantity the line is plain descriptive text
    if quantity is None:
        if original:
            logger.debug(f"No quantity in ingredient line {original!r}")
        return ParsedIngredient(quantity=None, unit=None, description=original)

    return ParsedIngredient(quantity=quantity, unit=unit, description=description)


def _singularize(key: str) -> str:
    """Drop a plural suffix from the last word of a normalized key."""
    last_word = key.rsplit(" ", 1)[-1]

    if key.endswith("es") and last_word.startswith(ES_PLURAL_STEMS):
        return key[:-2]

    if (
        key.endswith("s")
        and not key.endswith("ss")
        and len(key) > 2
        and last_word not in INVARIANT_PLURALS
    ):
        return key[:-1]

    return key


def normalize_ingredient(text: str | None) -> str:
    """
    Reduce an ingredient line to its canonical matching key.

    - Parse the line and keep the description
    - Lowercase
    - Remove parenthetical asides
    - Turn digits and punctuation into spaces
    - Remove unit words and preparation phrases until none are left
    - Singularize

    An empty result means the line cannot be matched against others.
    """
    name = parse_ingredient(text).description.lower()
    if not name:
        return ""

    name = _PARENTHETICAL_RE.sub(" ", name)
    name = _APOSTROPHES_RE.sub("", name)
    # "14oz" -> "oz", which the unit pass below removes
    name = _NON_LETTERS_RE.sub(" ", name)
    name = " ".join(name.split())

    stripped = None
    while stripped != name:
        stripped = name
        name = _UNIT_WORDS_RE.sub(" ", name)
        name = _DESCRIPTORS_RE.sub(" ", name)
        name = " ".join(name.split())

    return _singularize(name)


def format_ingredient(
    text: str | None,
    multiplier: float = 1.0,
    unit_system: UnitSystem | None = None,
) -> str:
    """
    Render an ingredient line scaled by a serving multiplier.

    The quantity is multiplied, optionally converted to ``unit_system``, and
    formatted with culinary fractions. Lines without a quantity come back
    trimmed and otherwise untouched.
    """
    parsed = parse_ingredient(text)
    if parsed.quantity is None:
        return parsed.description

    quantity = parsed.quantity * multiplier
    unit = parsed.unit
    if unit_system is not None:
        converted = convert_units(quantity, unit, unit_system)
        quantity, unit = converted.value, converted.unit

    parts = [format_quantity(quantity), unit or "", parsed.description]
    return " ".join(part for part in parts if part)
