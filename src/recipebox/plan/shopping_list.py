"""Shopping list views aggregated across recipes."""

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field

from recipebox.logging_config import get_logger
from recipebox.normalize.categories import IngredientCategory, detect_ingredient_category
from recipebox.normalize.ingredients import normalize_ingredient, parse_ingredient
from recipebox.schemas import ShoppingListEntry

logger = get_logger(__name__)

DEFAULT_RECIPE_LABEL = "Other Items"


class EntryNotFoundError(LookupError):
    """Raised when a toggle targets an entry or group that is not on the list."""


@dataclass
class IngredientGroup:
    """An ingredient shared by entries from two or more recipes."""

    normalized_text: str
    name: str
    quantity: float | None = None
    unit: str | None = None
    recipe_sources: set[str] = field(default_factory=set)
    entry_ids: list[str] = field(default_factory=list)
    instance_count: int = 0
    unchecked_count: int = 0
    category: IngredientCategory = IngredientCategory.PANTRY

    @property
    def checked(self) -> bool:
        """A group is checked once none of its entries are left unchecked."""
        return self.unchecked_count == 0

    def add(self, entry: ShoppingListEntry) -> None:
        """
        Fold an entry into the group.

        The first unit seen becomes the group's unit. Quantities written in
        any other unit are counted as instances but not summed.
        """
        self.instance_count += 1
        self.entry_ids.append(entry.id)
        if not entry.checked:
            self.unchecked_count += 1
        if entry.recipe_name:
            self.recipe_sources.add(entry.recipe_name)

        if not self.unit and entry.unit:
            self.unit = entry.unit

        if entry.quantity is not None and entry.unit == self.unit:
            self.quantity = (self.quantity or 0.0) + entry.quantity
        elif entry.quantity is not None:
            logger.debug(
                f"Not summing {entry.quantity} {entry.unit} into "
                f"{self.normalized_text!r} measured in {self.unit}"
            )


@dataclass
class RecipeGroup:
    """Entries from one recipe that are not shared with other recipes."""

    recipe_name: str
    entries: list[ShoppingListEntry] = field(default_factory=list)


# =============================================================================
# Entry Construction
# =============================================================================


def build_entries(
    recipe_id: str | None,
    recipe_name: str | None,
    lines: Iterable[str],
) -> list[ShoppingListEntry]:
    """
    Create one shopping-list entry per non-blank ingredient line.

    Args:
        recipe_id: Owning recipe ID, kept as a back-reference.
        recipe_name: Recipe name used for grouping and display.
        lines: Raw ingredient lines as typed in the recipe.

    Returns:
        New unchecked entries with parsed and normalized fields filled in.
    """
    entries = []
    for line in lines:
        text = (line or "").strip()
        if not text:
            continue

        parsed = parse_ingredient(text)
        entries.append(
            ShoppingListEntry(
                id=uuid.uuid4().hex,
                original_text=text,
                quantity=parsed.quantity,
                unit=parsed.unit,
                description=parsed.description,
                recipe_id=recipe_id,
                recipe_name=recipe_name,
                checked=False,
                normalized_text=normalize_ingredient(text),
            )
        )

    return entries


# =============================================================================
# Aggregated Views
# =============================================================================


def common_ingredients(entries: Iterable[ShoppingListEntry]) -> list[IngredientGroup]:
    """
    Group entries by normalized text and keep keys used by 2+ recipes.

    Entries with an empty key cannot be matched and are skipped.
    """
    snapshot = list(entries)
    groups: dict[str, IngredientGroup] = {}

    for entry in snapshot:
        key = entry.normalized_text
        if not key:
            continue
        if key not in groups:
            groups[key] = IngredientGroup(
                normalized_text=key,
                name=entry.description or key,
                category=detect_ingredient_category(key),
            )
        groups[key].add(entry)

    common = [group for group in groups.values() if len(group.recipe_sources) > 1]
    return sorted(common, key=lambda group: group.normalized_text)


def grouped_by_recipe(
    entries: Iterable[ShoppingListEntry],
    fallback_label: str = DEFAULT_RECIPE_LABEL,
) -> list[RecipeGroup]:
    """
    Group entries by recipe name, leaving out anything shown as common.

    Entries inside a group are sorted by their original text and groups are
    sorted by recipe name. Entries without a recipe go under
    ``fallback_label``.
    """
    snapshot = list(entries)
    common_keys = {group.normalized_text for group in common_ingredients(snapshot)}

    groups: dict[str, RecipeGroup] = {}
    for entry in snapshot:
        if entry.normalized_text and entry.normalized_text in common_keys:
            continue
        label = entry.recipe_name or fallback_label
        if label not in groups:
            groups[label] = RecipeGroup(recipe_name=label)
        groups[label].entries.append(entry)

    for group in groups.values():
        group.entries.sort(key=lambda entry: entry.original_text)

    return [groups[label] for label in sorted(groups)]


# =============================================================================
# Checked State
# =============================================================================


def toggle_entry(entries: Iterable[ShoppingListEntry], entry_id: str) -> ShoppingListEntry:
    """Return a copy of one entry with its checked flag flipped."""
    for entry in entries:
        if entry.id == entry_id:
            return entry.model_copy(update={"checked": not entry.checked})

    raise EntryNotFoundError(f"No shopping list entry with id {entry_id!r}")


def toggle_group(
    entries: Iterable[ShoppingListEntry],
    normalized_text: str,
) -> list[ShoppingListEntry]:
    """
    Return copies of every entry sharing ``normalized_text`` with a new state.

    If any member is unchecked the whole group becomes checked; only a fully
    checked group is unchecked.
    """
    members = [entry for entry in entries if entry.normalized_text == normalized_text]
    if not normalized_text or not members:
        raise EntryNotFoundError(f"No shopping list entries for {normalized_text!r}")

    new_state = not all(entry.checked for entry in members)
    return [entry.model_copy(update={"checked": new_state}) for entry in members]
