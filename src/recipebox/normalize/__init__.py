"""Ingredient text pipeline: parse, normalize, categorize and convert."""

from recipebox.normalize.categories import IngredientCategory, detect_ingredient_category
from recipebox.normalize.ingredients import (
    ParsedIngredient,
    format_ingredient,
    normalize_ingredient,
    parse_ingredient,
)
from recipebox.normalize.quantity import format_quantity, parse_quantity
from recipebox.normalize.units import ConvertedQuantity, UnitSystem, convert_units
from recipebox.normalize.yields import Yield, format_scaled_yield, parse_yield

__all__ = [
    "ConvertedQuantity",
    "IngredientCategory",
    "ParsedIngredient",
    "UnitSystem",
    "Yield",
    "convert_units",
    "detect_ingredient_category",
    "format_ingredient",
    "format_quantity",
    "format_scaled_yield",
    "normalize_ingredient",
    "parse_ingredient",
    "parse_quantity",
    "parse_yield",
]
