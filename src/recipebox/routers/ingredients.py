"""API routes for the ingredient text pipeline."""

from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from recipebox.config import get_settings
from recipebox.logging_config import get_logger
from recipebox.normalize import (
    IngredientCategory,
    UnitSystem,
    convert_units,
    detect_ingredient_category,
    format_ingredient,
    format_quantity,
    format_scaled_yield,
    normalize_ingredient,
    parse_ingredient,
    parse_yield,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["ingredients"])


# Request/Response schemas
class TextRequest(BaseModel):
    """A single line of user-typed text."""

    text: str = ""


class ParsedIngredientResponse(BaseModel):
    """Structured ingredient line."""

    quantity: float | None
    unit: str | None
    description: str
    display_quantity: str


class NormalizedIngredientResponse(BaseModel):
    """Canonical matching key for an ingredient line."""

    text: str
    normalized_text: str


class CategoryResponse(BaseModel):
    """Storage category for an item name."""

    name: str
    category: IngredientCategory


class FormatIngredientRequest(BaseModel):
    """Ingredient line to render scaled and converted."""

    text: str
    multiplier: float = Field(default=1.0, gt=0)
    unit_system: UnitSystem | None = None


class FormattedTextResponse(BaseModel):
    """Rendered display text."""

    text: str


class ConvertRequest(BaseModel):
    """Quantity and unit to convert."""

    quantity: float | None = None
    unit: str | None = None
    system: UnitSystem | None = Field(
        default=None, description="Target system; defaults to the configured display system"
    )


class ConvertResponse(BaseModel):
    """Converted quantity."""

    value: float | None
    unit: str | None
    display_value: str


class YieldResponse(BaseModel):
    """Parsed recipe yield."""

    quantity: float | None
    unit: str


class ScaleYieldRequest(BaseModel):
    """Yield string and serving multiplier."""

    text: str
    multiplier: float = Field(default=1.0, gt=0)


# =============================================================================
# Ingredient Endpoints
# =============================================================================


@router.post("/ingredients/parse", response_model=ParsedIngredientResponse)
async def parse_ingredient_line(request: TextRequest) -> ParsedIngredientResponse:
    """Split an ingredient line into quantity, unit and description."""
    parsed = parse_ingredient(request.text)
    return ParsedIngredientResponse(
        quantity=parsed.quantity,
        unit=parsed.unit,
        description=parsed.description,
        display_quantity=format_quantity(parsed.quantity),
    )


@router.post("/ingredients/normalize", response_model=NormalizedIngredientResponse)
async def normalize_ingredient_line(request: TextRequest) -> NormalizedIngredientResponse:
    """Reduce an ingredient line to the key used to match it across recipes."""
    return NormalizedIngredientResponse(
        text=request.text,
        normalized_text=normalize_ingredient(request.text),
    )


@router.post("/ingredients/category", response_model=CategoryResponse)
async def categorize_ingredient(request: TextRequest) -> CategoryResponse:
    """Classify an item name into a storage category."""
    return CategoryResponse(
        name=request.text,
        category=detect_ingredient_category(request.text),
    )


@router.post("/ingredients/format", response_model=FormattedTextResponse)
async def format_ingredient_line(request: FormatIngredientRequest) -> FormattedTextResponse:
    """Render an ingredient line for a serving multiplier and unit system."""
    return FormattedTextResponse(
        text=format_ingredient(request.text, request.multiplier, request.unit_system)
    )


# =============================================================================
# Quantity and Unit Endpoints
# =============================================================================


@router.get("/quantities/format", response_model=FormattedTextResponse)
async def format_quantity_value(
    quantity: Annotated[float | None, Query(description="Quantity to render")] = None,
) -> FormattedTextResponse:
    """Render a quantity using culinary fractions."""
    return FormattedTextResponse(text=format_quantity(quantity))


@router.post("/units/convert", response_model=ConvertResponse)
async def convert_quantity(request: ConvertRequest) -> ConvertResponse:
    """Convert a quantity between imperial and metric."""
    system = request.system or get_settings().default_unit_system
    converted = convert_units(request.quantity, request.unit, system)
    return ConvertResponse(
        value=converted.value,
        unit=converted.unit,
        display_value=format_quantity(converted.value),
    )


# =============================================================================
# Yield Endpoints
# =============================================================================


@router.post("/yields/parse", response_model=YieldResponse)
async def parse_recipe_yield(request: TextRequest) -> YieldResponse:
    """Parse a recipe yield into a quantity and unit."""
    parsed = parse_yield(request.text)
    return YieldResponse(quantity=parsed.quantity, unit=parsed.unit)


@router.post("/yields/scale", response_model=FormattedTextResponse)
async def scale_recipe_yield(request: ScaleYieldRequest) -> FormattedTextResponse:
    """Scale a yield by a serving multiplier."""
    logger.debug(f"Scaling yield {request.text!r} by {request.multiplier}")
    return FormattedTextResponse(text=format_scaled_yield(request.text, request.multiplier))
