"""Storage category detection for shopping-list items."""

import re
from enum import Enum

from recipebox.logging_config import get_logger

logger = get_logger(__name__)


class IngredientCategory(str, Enum):
    """Where an item lives in the kitchen."""

    PANTRY = "Pantry"
    FROZEN = "Frozen"
    MEAT = "Meat"
    DAIRY = "Dairy"
    PRODUCE = "Produce"


# =============================================================================
# Keyword Tables
# =============================================================================

# Shelf-stable forms that override any fresh-ingredient keyword
PANTRY_MODIFIERS: tuple[str, ...] = (
    "powder",
    "dried",
    "canned",
    "oil",
    "flour",
    "sugar",
    "rice",
    "pasta",
    "bean",
    "baking",
    "yeast",
    "vinegar",
    "sauce",
    "broth",
    "stock",
    "extract",
    "syrup",
    "honey",
    "noodle",
    "cornstarch",
    "breadcrumb",
    "cereal",
    "oat",
    "lentil",
    "chickpea",
    "peanut butter",
    "coconut milk",
)

# Spices sold ground; "ground" plus one of these is a pantry item
GROUND_SPICES: tuple[str, ...] = (
    "pepper",
    "cumin",
    "cinnamon",
    "ginger",
    "clove",
    "nutmeg",
    "coriander",
)

FROZEN_KEYWORDS: tuple[str, ...] = ("frozen", "ice cream")

MEAT_KEYWORDS: tuple[str, ...] = (
    "ground beef",
    "ground chicken",
    "ground turkey",
    "ground pork",
    "ground lamb",
    "beef",
    "chicken",
    "pork",
    "turkey",
    "lamb",
    "veal",
    "duck",
    "bacon",
    "sausage",
    "ham",
    "steak",
    "prosciutto",
    "pancetta",
    "chorizo",
    "salmon",
    "tuna",
    "cod",
    "fish",
    "shrimp",
    "prawn",
    "mince",
)

DAIRY_KEYWORDS: tuple[str, ...] = (
    "milk",
    "buttermilk",
    "cheese",
    "butter",
    "cream",
    "sour cream",
    "yogurt",
    "yoghurt",
    "egg",
    "parmesan",
    "mozzarella",
    "cheddar",
    "ricotta",
    "feta",
)

PRODUCE_KEYWORDS: tuple[str, ...] = (
    "tomato",
    "potato",
    "onion",
    "garlic",
    "shallot",
    "carrot",
    "celery",
    "lettuce",
    "spinach",
    "kale",
    "cabbage",
    "broccoli",
    "cauliflower",
    "zucchini",
    "eggplant",
    "cucumber",
    "bell pepper",
    "mushroom",
    "avocado",
    "lemon",
    "lime",
    "orange",
    "apple",
    "banana",
    "berry",
    "berries",
    "grape",
    "herb",
    "basil",
    "parsley",
    "cilantro",
    "mint",
    "scallion",
    "leek",
    "corn",
    "pea",
    "squash",
    "ginger",
)

SPICE_KEYWORDS: tuple[str, ...] = (
    "salt",
    "pepper",
    "paprika",
    "cumin",
    "cinnamon",
    "nutmeg",
    "oregano",
    "thyme",
    "rosemary",
    "chili flakes",
    "seasoning",
    "spice",
    "bay leaf",
    "vanilla",
)


# Short keywords that hide inside longer words ("eggplant", "cauliflower",
# "goat", "minced"); these only match as whole words, plural allowed
WHOLE_WORD_KEYWORDS: frozenset[str] = frozenset(
    {
        "egg",
        "flour",
        "oil",
        "pea",
        "corn",
        "oat",
        "rice",
        "ham",
        "cod",
        "lime",
        "mint",
        "mince",
        "butter",
    }
)


def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    """Substring match for any keyword, except whole-word ones."""
    alternatives = [
        rf"\b{re.escape(keyword)}(?:es|s)?\b"
        if keyword in WHOLE_WORD_KEYWORDS
        else re.escape(keyword)
        for keyword in keywords
    ]
    return re.compile("|".join(alternatives))


_PANTRY_MODIFIERS_RE = _keyword_pattern(PANTRY_MODIFIERS)
_GROUND_SPICES_RE = _keyword_pattern(GROUND_SPICES)

# Evaluated in order after the pantry override; first match wins
CATEGORY_RULES: tuple[tuple[IngredientCategory, re.Pattern[str]], ...] = (
    (IngredientCategory.FROZEN, _keyword_pattern(FROZEN_KEYWORDS)),
    (IngredientCategory.MEAT, _keyword_pattern(MEAT_KEYWORDS)),
    (IngredientCategory.DAIRY, _keyword_pattern(DAIRY_KEYWORDS)),
    (IngredientCategory.PRODUCE, _keyword_pattern(PRODUCE_KEYWORDS)),
    (IngredientCategory.PANTRY, _keyword_pattern(SPICE_KEYWORDS)),
)


def _is_pantry_override(name: str) -> bool:
    if _PANTRY_MODIFIERS_RE.search(name):
        return True
    return "ground" in name and _GROUND_SPICES_RE.search(name) is not None


def detect_ingredient_category(name: str | None) -> IngredientCategory:
    """
    Classify an item name into a storage category.

    Shelf-stable forms ("garlic powder", "ground cumin") are checked before
    the fresh keyword lists so they never land in Produce or Meat. Anything
    unrecognized is Pantry.
    """
    name = (name or "").lower()

    if _is_pantry_override(name):
        return IngredientCategory.PANTRY

    for category, pattern in CATEGORY_RULES:
        if pattern.search(name):
            return category

    logger.debug(f"No category keyword in {name!r}, defaulting to pantry")
    return IngredientCategory.PANTRY
