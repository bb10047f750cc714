"""Shopping list aggregation across recipes."""

from recipebox.plan.shopping_list import (
    EntryNotFoundError,
    IngredientGroup,
    RecipeGroup,
    build_entries,
    common_ingredients,
    grouped_by_recipe,
    toggle_entry,
    toggle_group,
)

__all__ = [
    "EntryNotFoundError",
    "IngredientGroup",
    "RecipeGroup",
    "build_entries",
    "common_ingredients",
    "grouped_by_recipe",
    "toggle_entry",
    "toggle_group",
]
