"""Static lookup tables shared by the ingredient text pipeline.

Tables are ordered where order decides precedence (longest phrase first,
first matching rule wins), so keep additions in the right position.
"""

# =============================================================================
# Fraction Tables
# =============================================================================

# Glyphs accepted when parsing a quantity token
UNICODE_FRACTIONS: dict[str, float] = {
    "½": 0.5,
    "¼": 0.25,
    "¾": 0.75,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "⅕": 0.2,
    "⅖": 0.4,
    "⅗": 0.6,
    "⅘": 0.8,
    "⅙": 1 / 6,
    "⅚": 5 / 6,
    "⅛": 0.125,
    "⅜": 0.375,
    "⅝": 0.625,
    "⅞": 0.875,
}

# Canonical fractions used for display, checked in this order
DISPLAY_FRACTIONS: tuple[tuple[float, str], ...] = (
    (0.125, "⅛"),
    (1 / 6, "⅙"),
    (0.2, "⅕"),
    (0.25, "¼"),
    (1 / 3, "⅓"),
    (0.375, "⅜"),
    (0.4, "⅖"),
    (0.5, "½"),
    (0.6, "⅗"),
    (0.625, "⅝"),
    (2 / 3, "⅔"),
    (0.75, "¾"),
    (0.8, "⅘"),
    (5 / 6, "⅚"),
    (0.875, "⅞"),
)

DISPLAY_FRACTION_TOLERANCE = 0.001

# Yields use their own, smaller glyph table
YIELD_FRACTIONS: dict[str, float] = {
    "½": 0.5,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 0.25,
    "¾": 0.75,
    "⅛": 0.125,
    "⅜": 0.375,
    "⅝": 0.625,
}

# =============================================================================
# Ingredient Line Lexicons
# =============================================================================

# Words that can sit in the unit slot of a line but describe the ingredient
NON_UNIT_DESCRIPTORS: frozenset[str] = frozenset(
    {
        "large",
        "small",
        "medium",
        "big",
        "extra",
        "whole",
        "fresh",
        "ripe",
        "chopped",
        "diced",
        "minced",
        "sliced",
        "grated",
        "shredded",
        "crushed",
        "peeled",
        "boneless",
        "skinless",
        "frozen",
        "dried",
        "optional",
        "to",
        "taste",
        "of",
        "about",
        "heaping",
        "scant",
        "generous",
        "thin",
        "thick",
        "ground",
        "softened",
        "melted",
        "cold",
        "warm",
        "hot",
    }
)

# Unit words removed from a description during normalization (a trailing "s"
# is matched separately). Multi-word units come first.
UNIT_LEXICON: tuple[str, ...] = (
    "fl oz",
    "fluid ounce",
    "tablespoon",
    "tbsp",
    "tbs",
    "teaspoon",
    "tsp",
    "cup",
    "ounce",
    "oz",
    "pound",
    "lb",
    "kilogram",
    "kg",
    "gram",
    "g",
    "milliliter",
    "ml",
    "liter",
    "litre",
    "l",
    "pint",
    "quart",
    "gallon",
    "clove",
    "can",
    "jar",
    "package",
    "pkg",
    "packet",
    "stick",
    "slice",
    "piece",
    "bunch",
    "sprig",
    "pinch",
    "dash",
    "handful",
)

# Preparation phrases removed during normalization, longest phrases first
DESCRIPTOR_LEXICON: tuple[str, ...] = (
    "at room temperature",
    "room temperature",
    "finely chopped",
    "roughly chopped",
    "coarsely chopped",
    "thinly sliced",
    "finely diced",
    "freshly ground",
    "lightly beaten",
    "to taste",
    "for garnish",
    "for serving",
    "extra large",
    "cut into pieces",
    "chopped",
    "diced",
    "minced",
    "sliced",
    "grated",
    "shredded",
    "crushed",
    "cubed",
    "julienned",
    "peeled",
    "seeded",
    "pitted",
    "halved",
    "quartered",
    "trimmed",
    "rinsed",
    "drained",
    "melted",
    "softened",
    "beaten",
    "sifted",
    "packed",
    "divided",
    "optional",
    "fresh",
    "freshly",
    "large",
    "medium",
    "small",
    "boneless",
    "skinless",
    "ripe",
    "whole",
)

# Nouns that look plural but must keep their trailing "s"
INVARIANT_PLURALS: frozenset[str] = frozenset(
    {"greens", "oats", "pasta", "rice", "hummus", "molasses"}
)

# Words whose plural drops "es" rather than "s"
ES_PLURAL_STEMS: tuple[str, ...] = ("tomato", "potato")

# =============================================================================
# Yield Pluralization
# =============================================================================

YIELD_SINGULAR_UNITS: frozenset[str] = frozenset({"cup", "serving", "loin", "piece"})

YIELD_PLURAL_UNITS: frozenset[str] = frozenset(
    {"cups", "servings", "loins", "pieces", "batches", "washes"}
)

# Plurals formed with "es"
YIELD_ES_PLURALS: frozenset[str] = frozenset({"batches", "washes"})
