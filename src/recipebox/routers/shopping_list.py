"""API routes for the shopping list."""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from recipebox.config import get_settings
from recipebox.logging_config import get_logger
from recipebox.normalize import IngredientCategory, format_quantity
from recipebox.plan.shopping_list import EntryNotFoundError, IngredientGroup
from recipebox.schemas import Recipe, ShoppingListEntry
from recipebox.services.shopping import ShoppingListService
from recipebox.store import ItemNotFoundError, StoreError, get_store

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/shopping-list", tags=["shopping-list"])


# Request/Response schemas
class ShoppingListResponse(BaseModel):
    """All entries on the list."""

    entries: list[ShoppingListEntry]
    total: int


class RecipeGroupResponse(BaseModel):
    """Entries from one recipe."""

    recipe_name: str
    entries: list[ShoppingListEntry]


class RecipeGroupsResponse(BaseModel):
    """Entries grouped by recipe, excluding common ingredients."""

    groups: list[RecipeGroupResponse]
    total: int


class IngredientGroupResponse(BaseModel):
    """An ingredient shared across recipes."""

    normalized_text: str
    name: str
    quantity: float | None
    unit: str | None
    display_quantity: str
    recipe_sources: list[str] = Field(default_factory=list)
    entry_ids: list[str] = Field(default_factory=list)
    instance_count: int
    unchecked_count: int
    checked: bool
    category: IngredientCategory

    @classmethod
    def from_group(cls, group: IngredientGroup) -> "IngredientGroupResponse":
        return cls(
            normalized_text=group.normalized_text,
            name=group.name,
            quantity=group.quantity,
            unit=group.unit,
            display_quantity=format_quantity(group.quantity),
            recipe_sources=sorted(group.recipe_sources),
            entry_ids=group.entry_ids,
            instance_count=group.instance_count,
            unchecked_count=group.unchecked_count,
            checked=group.checked,
            category=group.category,
        )


class CommonIngredientsResponse(BaseModel):
    """Ingredients shared by two or more recipes."""

    groups: list[IngredientGroupResponse]
    total: int


class RemovedResponse(BaseModel):
    """Result of removing a recipe's entries."""

    recipe_id: str
    removed: int


# Dependency to get the shopping list service
def get_shopping_service() -> ShoppingListService:
    """Get shopping list service bound to the configured store."""
    return ShoppingListService(get_store(), get_settings().unassigned_recipe_label)


def _store_failure(action: str, error: StoreError) -> HTTPException:
    logger.error(f"Failed to {action}: {error}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )


# =============================================================================
# Views
# =============================================================================


@router.get("", response_model=ShoppingListResponse)
async def list_entries(
    service: ShoppingListService = Depends(get_shopping_service),
) -> ShoppingListResponse:
    """List every entry on the shopping list."""
    try:
        entries = await service.list_entries()
    except StoreError as e:
        raise _store_failure("load shopping list", e)
    return ShoppingListResponse(entries=entries, total=len(entries))


@router.get("/by-recipe", response_model=RecipeGroupsResponse)
async def list_by_recipe(
    service: ShoppingListService = Depends(get_shopping_service),
) -> RecipeGroupsResponse:
    """Entries grouped by recipe, without ingredients shown as common."""
    try:
        groups = await service.grouped_by_recipe()
    except StoreError as e:
        raise _store_failure("group shopping list", e)
    return RecipeGroupsResponse(
        groups=[
            RecipeGroupResponse(recipe_name=group.recipe_name, entries=group.entries)
            for group in groups
        ],
        total=len(groups),
    )


@router.get("/common", response_model=CommonIngredientsResponse)
async def list_common_ingredients(
    service: ShoppingListService = Depends(get_shopping_service),
) -> CommonIngredientsResponse:
    """Ingredients needed by two or more recipes, with summed quantities."""
    try:
        groups = await service.common_ingredients()
    except StoreError as e:
        raise _store_failure("aggregate shopping list", e)
    return CommonIngredientsResponse(
        groups=[IngredientGroupResponse.from_group(group) for group in groups],
        total=len(groups),
    )


# =============================================================================
# Mutations
# =============================================================================


@router.post(
    "/recipes",
    response_model=ShoppingListResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_recipe(
    recipe: Recipe,
    service: ShoppingListService = Depends(get_shopping_service),
) -> ShoppingListResponse:
    """Push a recipe's ingredient lines onto the shopping list."""
    try:
        entries = await service.add_recipe(recipe)
    except StoreError as e:
        raise _store_failure("add recipe to shopping list", e)
    return ShoppingListResponse(entries=entries, total=len(entries))


@router.delete("/recipes/{recipe_id}", response_model=RemovedResponse)
async def remove_recipe(
    recipe_id: str,
    service: ShoppingListService = Depends(get_shopping_service),
) -> RemovedResponse:
    """Remove every entry that came from a recipe."""
    try:
        removed = await service.remove_recipe(recipe_id)
    except StoreError as e:
        raise _store_failure("remove recipe from shopping list", e)
    return RemovedResponse(recipe_id=recipe_id, removed=removed)


@router.post("/entries/{entry_id}/toggle", response_model=ShoppingListEntry)
async def toggle_entry(
    entry_id: str,
    service: ShoppingListService = Depends(get_shopping_service),
) -> ShoppingListEntry:
    """Flip the checked state of one entry."""
    try:
        return await service.toggle_entry(entry_id)
    except (EntryNotFoundError, ItemNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError as e:
        raise _store_failure("toggle entry", e)


@router.post("/groups/{normalized_text}/toggle", response_model=ShoppingListResponse)
async def toggle_group(
    normalized_text: str,
    service: ShoppingListService = Depends(get_shopping_service),
) -> ShoppingListResponse:
    """Check or uncheck every entry sharing a normalized ingredient."""
    try:
        entries = await service.toggle_group(normalized_text)
    except (EntryNotFoundError, ItemNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StoreError as e:
        raise _store_failure("toggle ingredient group", e)
    return ShoppingListResponse(entries=entries, total=len(entries))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_shopping_list(
    service: ShoppingListService = Depends(get_shopping_service),
) -> None:
    """Remove every entry from the shopping list."""
    try:
        await service.clear()
    except StoreError as e:
        raise _store_failure("clear shopping list", e)
