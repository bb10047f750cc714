"""Shopping list operations backed by the keyed store."""

from recipebox.logging_config import LoggingContext, get_logger
from recipebox.plan.shopping_list import (
    DEFAULT_RECIPE_LABEL,
    IngredientGroup,
    RecipeGroup,
    build_entries,
    common_ingredients,
    grouped_by_recipe,
    toggle_entry,
    toggle_group,
)
from recipebox.schemas import SHOPPING_LIST_COLLECTION, Recipe, ShoppingListEntry
from recipebox.store.base import KeyedStore

logger = get_logger(__name__)


class ShoppingListService:
    """
    Reads and writes shopping-list entries through an injected store.

    Every view is computed from one snapshot of the collection, so a view
    never mixes entries from before and after a concurrent write.
    """

    def __init__(
        self,
        store: KeyedStore,
        fallback_label: str = DEFAULT_RECIPE_LABEL,
        collection: str = SHOPPING_LIST_COLLECTION,
    ):
        self.store = store
        self.fallback_label = fallback_label
        self.collection = collection

    async def list_entries(self) -> list[ShoppingListEntry]:
        """Get a snapshot of every entry on the list."""
        items = await self.store.get_all_items(self.collection)
        return [ShoppingListEntry.model_validate(item) for item in items]

    async def add_recipe(self, recipe: Recipe) -> list[ShoppingListEntry]:
        """Push every ingredient line of a recipe onto the list."""
        with LoggingContext(recipe_id=recipe.id, collection=self.collection):
            entries = build_entries(recipe.id, recipe.name, recipe.ingredients)
            for entry in entries:
                await self.store.add_item(self.collection, entry.to_store())

            logger.info(f"Added {len(entries)} entries from recipe {recipe.name!r}")
        return entries

    async def grouped_by_recipe(self) -> list[RecipeGroup]:
        return grouped_by_recipe(await self.list_entries(), self.fallback_label)

    async def common_ingredients(self) -> list[IngredientGroup]:
        return common_ingredients(await self.list_entries())

    async def toggle_entry(self, entry_id: str) -> ShoppingListEntry:
        """Flip the checked flag of a single entry."""
        updated = toggle_entry(await self.list_entries(), entry_id)
        await self.store.update_item(self.collection, updated.id, updated.to_store())
        return updated

    async def toggle_group(self, normalized_text: str) -> list[ShoppingListEntry]:
        """Check or uncheck every entry that shares a normalized key."""
        updated = toggle_group(await self.list_entries(), normalized_text)
        for entry in updated:
            await self.store.update_item(self.collection, entry.id, entry.to_store())

        logger.info(
            f"Set {len(updated)} entries for {normalized_text!r} to checked={updated[0].checked}"
        )
        return updated

    async def remove_recipe(self, recipe_id: str) -> int:
        """
        Delete every entry that came from a recipe.

        Returns:
            Number of entries removed.
        """
        removed = 0
        with LoggingContext(recipe_id=recipe_id, collection=self.collection):
            for entry in await self.list_entries():
                if entry.recipe_id == recipe_id:
                    await self.store.delete_item(self.collection, entry.id)
                    removed += 1

            logger.info(f"Removed {removed} entries for recipe {recipe_id}")
        return removed

    async def clear(self) -> None:
        """Empty the shopping list."""
        await self.store.clear_store(self.collection)
