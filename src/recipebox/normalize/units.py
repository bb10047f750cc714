"""Display-time conversion between imperial and metric units."""

from dataclasses import dataclass
from enum import Enum

from recipebox.logging_config import get_logger

logger = get_logger(__name__)


class UnitSystem(str, Enum):
    """Target measurement system for display."""

    IMPERIAL = "imperial"
    METRIC = "metric"


@dataclass(frozen=True)
class ConversionRule:
    """Multiply by ``factor`` and relabel as ``target_unit``."""

    factor: float
    target_unit: str


# =============================================================================
# Unit Conversion Tables
# =============================================================================


def _rules(units: tuple[str, ...], factor: float, target_unit: str) -> dict[str, ConversionRule]:
    rule = ConversionRule(factor=factor, target_unit=target_unit)
    return {unit: rule for unit in units}


# Conversions applied when displaying in metric
TO_METRIC: dict[str, ConversionRule] = {
    **_rules(("oz", "ounce", "ounces"), 28.35, "g"),
    **_rules(("lb", "lbs", "pound", "pounds"), 453.59, "g"),
    **_rules(("fl oz", "fluid ounce", "fluid ounces"), 29.57, "ml"),
    **_rules(("cup", "cups"), 236.588, "ml"),
    **_rules(("tbsp", "tablespoon", "tablespoons"), 14.79, "ml"),
    **_rules(("tsp", "teaspoon", "teaspoons"), 4.93, "ml"),
}

# Conversions applied when displaying in imperial
TO_IMPERIAL: dict[str, ConversionRule] = {
    **_rules(("g", "gram", "grams"), 1 / 28.35, "oz"),
    **_rules(("kg", "kilogram", "kilograms"), 35.274, "oz"),
    **_rules(("ml", "milliliter", "milliliters"), 1 / 29.57, "fl oz"),
    **_rules(("l", "liter", "liters"), 33.814, "fl oz"),
    **_rules(("tsp", "teaspoon", "teaspoons"), 1 / 3, "tbsp"),
    **_rules(("tbsp", "tablespoon", "tablespoons"), 3.0, "tsp"),
}

CONVERSION_TABLES: dict[UnitSystem, dict[str, ConversionRule]] = {
    UnitSystem.METRIC: TO_METRIC,
    UnitSystem.IMPERIAL: TO_IMPERIAL,
}


@dataclass(frozen=True)
class ConvertedQuantity:
    """Result of a unit conversion."""

    value: float | None
    unit: str | None


def convert_units(
    quantity: float | None,
    unit: str | None,
    system: UnitSystem,
) -> ConvertedQuantity:
    """
    Convert a quantity and unit into the target unit system.

    Each unit has at most one rule per target system, so a value is converted
    once and never re-evaluated against its original label. Unknown units
    and missing values pass through unchanged.

    Args:
        quantity: The parsed quantity.
        unit: The unit as written in the recipe.
        system: Target unit system.

    Returns:
        ConvertedQuantity with the value rounded to 2 decimals.
    """
    if quantity is None or not unit:
        return ConvertedQuantity(value=quantity, unit=unit)

    rule = CONVERSION_TABLES[UnitSystem(system)].get(unit.lower().strip().rstrip("."))
    if rule is None:
        logger.debug(f"No {UnitSystem(system).value} conversion for unit {unit!r}")
        return ConvertedQuantity(value=quantity, unit=unit)

    return ConvertedQuantity(
        value=round(quantity * rule.factor, 2),
        unit=rule.target_unit,
    )
