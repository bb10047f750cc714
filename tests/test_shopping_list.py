"""Unit tests for shopping list aggregation."""

import pytest

from recipebox.normalize.categories import IngredientCategory
from recipebox.plan.shopping_list import (
    EntryNotFoundError,
    build_entries,
    common_ingredients,
    grouped_by_recipe,
    toggle_entry,
    toggle_group,
)


@pytest.fixture
def two_recipe_entries():
    """Entries from two recipes that share olive oil and garlic."""
    return build_entries(
        "r1", "Garlic Pasta", ["2 tbsp olive oil", "3 cloves garlic", "8 oz spaghetti"]
    ) + build_entries("r2", "Tomato Salad", ["2 tbsp olive oil", "1 clove garlic", "2 tomatoes"])


class TestBuildEntries:
    """Tests for build_entries function."""

    def test_fields_filled_from_pipeline(self):
        """Test parsed and normalized fields."""
        [entry] = build_entries("r1", "Pasta", ["2 cups chopped Roma tomatoes"])

        assert entry.original_text == "2 cups chopped Roma tomatoes"
        assert entry.quantity == 2.0
        assert entry.unit == "cups"
        assert entry.description == "chopped Roma tomatoes"
        assert entry.normalized_text == "roma tomato"
        assert entry.recipe_id == "r1"
        assert entry.recipe_name == "Pasta"
        assert entry.checked is False
        assert entry.id

    def test_blank_lines_skipped(self):
        """Test that blank lines produce no entries."""
        entries = build_entries("r1", "Pasta", ["", "   ", "1 egg"])
        assert [entry.original_text for entry in entries] == ["1 egg"]

    def test_unique_ids(self):
        """Test every entry gets its own ID."""
        entries = build_entries("r1", "Pasta", ["1 egg", "1 egg"])
        assert entries[0].id != entries[1].id


class TestCommonIngredients:
    """Tests for common_ingredients function."""

    def test_sums_matching_units(self):
        """Test the same line from two recipes."""
        entries = build_entries("r1", "Pasta", ["2 tbsp olive oil"]) + build_entries(
            "r2", "Salad", ["2 tbsp olive oil"]
        )

        [group] = common_ingredients(entries)

        assert group.normalized_text == "olive oil"
        assert group.quantity == 4
        assert group.unit == "tbsp"
        assert group.recipe_sources == {"Pasta", "Salad"}
        assert group.instance_count == 2
        assert group.unchecked_count == 2
        assert group.checked is False
        assert group.category == IngredientCategory.PANTRY

    def test_groups_sorted_by_key(self, two_recipe_entries):
        """Test output order."""
        groups = common_ingredients(two_recipe_entries)
        assert [group.normalized_text for group in groups] == ["garlic", "olive oil"]

    def test_mismatched_unit_counted_but_not_summed(self):
        """Test that only the adopted unit contributes to the quantity."""
        entries = build_entries("r1", "Pasta", ["2 tbsp olive oil"]) + build_entries(
            "r2", "Salad", ["1 cup olive oil"]
        )

        [group] = common_ingredients(entries)

        assert group.unit == "tbsp"
        assert group.quantity == 2
        assert group.instance_count == 2
        assert len(group.recipe_sources) == 2

    def test_unitless_quantities(self):
        """Test counting items written without a unit."""
        entries = build_entries("r1", "Pasta", ["2 eggs"]) + build_entries(
            "r2", "Cake", ["3 large eggs"]
        )

        [group] = common_ingredients(entries)

        assert group.normalized_text == "egg"
        assert group.unit is None
        assert group.quantity == 5

    def test_no_quantities(self):
        """Test groups of lines without quantities."""
        entries = build_entries("r1", "Pasta", ["Salt to taste"]) + build_entries(
            "r2", "Salad", ["Salt to taste"]
        )

        [group] = common_ingredients(entries)

        assert group.normalized_text == "salt"
        assert group.quantity is None

    def test_single_recipe_not_common(self):
        """Test that repeats within one recipe do not count."""
        entries = build_entries("r1", "Pasta", ["2 tbsp olive oil", "1 tbsp olive oil"])
        assert common_ingredients(entries) == []

    def test_empty_keys_excluded(self):
        """Test that unmatchable lines never form a group."""
        entries = build_entries("r1", "Pasta", ["2 cups"]) + build_entries(
            "r2", "Salad", ["2 cups"]
        )
        assert common_ingredients(entries) == []

    def test_checked_when_all_members_checked(self, two_recipe_entries):
        """Test the derived checked flag."""
        entries = [
            entry.model_copy(update={"checked": entry.normalized_text == "olive oil"})
            for entry in two_recipe_entries
        ]

        groups = {group.normalized_text: group for group in common_ingredients(entries)}

        assert groups["olive oil"].checked is True
        assert groups["olive oil"].unchecked_count == 0
        assert groups["garlic"].checked is False


class TestGroupedByRecipe:
    """Tests for grouped_by_recipe function."""

    def test_excludes_common_ingredients(self, two_recipe_entries):
        """Test that shared ingredients only appear in the common view."""
        groups = grouped_by_recipe(two_recipe_entries)

        assert [group.recipe_name for group in groups] == ["Garlic Pasta", "Tomato Salad"]
        assert [entry.original_text for entry in groups[0].entries] == ["8 oz spaghetti"]
        assert [entry.original_text for entry in groups[1].entries] == ["2 tomatoes"]

    def test_entries_sorted_by_text(self):
        """Test ordering inside a group."""
        entries = build_entries("r1", "Pasta", ["8 oz spaghetti", "1 onion", "2 carrots"])

        [group] = grouped_by_recipe(entries)

        assert [entry.original_text for entry in group.entries] == [
            "1 onion",
            "2 carrots",
            "8 oz spaghetti",
        ]

    def test_fallback_label(self):
        """Test entries without a recipe."""
        entries = build_entries(None, None, ["1 lemon"])

        assert grouped_by_recipe(entries)[0].recipe_name == "Other Items"
        assert grouped_by_recipe(entries, fallback_label="Extras")[0].recipe_name == "Extras"

    def test_unmatchable_entries_stay_with_recipe(self):
        """Test that empty keys are shown under their recipe."""
        entries = build_entries("r1", "Pasta", ["2 cups"]) + build_entries(
            "r2", "Salad", ["2 cups"]
        )

        groups = grouped_by_recipe(entries)

        assert [len(group.entries) for group in groups] == [1, 1]

    def test_empty_list(self):
        """Test an empty shopping list."""
        assert grouped_by_recipe([]) == []


class TestToggles:
    """Tests for checked-state toggles."""

    def test_toggle_entry_flips_only_that_entry(self, two_recipe_entries):
        """Test a single toggle."""
        target = two_recipe_entries[0]

        updated = toggle_entry(two_recipe_entries, target.id)

        assert updated.id == target.id
        assert updated.checked is True
        assert target.checked is False

    def test_toggle_entry_unknown_id(self, two_recipe_entries):
        """Test toggling an ID that is not on the list."""
        with pytest.raises(EntryNotFoundError):
            toggle_entry(two_recipe_entries, "missing")

    def test_toggle_group_checks_all(self, two_recipe_entries):
        """Test that one group toggle checks every contributing entry."""
        updated = toggle_group(two_recipe_entries, "olive oil")

        assert len(updated) == 2
        assert all(entry.checked for entry in updated)
        assert {entry.recipe_name for entry in updated} == {"Garlic Pasta", "Tomato Salad"}

    def test_toggle_partially_checked_group(self, two_recipe_entries):
        """Test that a partly checked group becomes fully checked."""
        entries = list(two_recipe_entries)
        entries[0] = entries[0].model_copy(update={"checked": True})

        updated = toggle_group(entries, "olive oil")

        assert all(entry.checked for entry in updated)

    def test_toggle_fully_checked_group(self, two_recipe_entries):
        """Test that only a fully checked group is unchecked."""
        entries = [entry.model_copy(update={"checked": True}) for entry in two_recipe_entries]

        updated = toggle_group(entries, "olive oil")

        assert not any(entry.checked for entry in updated)

    def test_toggle_group_does_not_mutate_input(self, two_recipe_entries):
        """Test that toggles return copies."""
        toggle_group(two_recipe_entries, "olive oil")
        assert not any(entry.checked for entry in two_recipe_entries)

    def test_toggle_group_unknown_key(self, two_recipe_entries):
        """Test toggling a key with no entries."""
        with pytest.raises(EntryNotFoundError):
            toggle_group(two_recipe_entries, "saffron")
        with pytest.raises(EntryNotFoundError):
            toggle_group(two_recipe_entries, "")
