"""Tests for the HTTP API routes."""

from unittest.mock import AsyncMock

from recipebox.main import app
from recipebox.routers.shopping_list import get_shopping_service
from recipebox.services.shopping import ShoppingListService
from recipebox.store import StoreError


def _recipe_payload(recipe):
    return recipe.model_dump(mode="json", by_alias=True)


class TestIngredientRoutes:
    """Tests for the stateless ingredient pipeline endpoints."""

    def test_parse(self, client):
        """Test parsing an ingredient line."""
        response = client.post("/api/v1/ingredients/parse", json={"text": "1 1/2 cups flour"})

        assert response.status_code == 200
        assert response.json() == {
            "quantity": 1.5,
            "unit": "cups",
            "description": "flour",
            "display_quantity": "1 ½",
        }

    def test_parse_without_quantity(self, client):
        """Test a line that is only descriptive text."""
        response = client.post("/api/v1/ingredients/parse", json={"text": "Salt to taste"})

        data = response.json()
        assert data["quantity"] is None
        assert data["unit"] is None
        assert data["description"] == "Salt to taste"
        assert data["display_quantity"] == ""

    def test_normalize(self, client):
        """Test getting the matching key."""
        response = client.post(
            "/api/v1/ingredients/normalize", json={"text": "2 cups chopped Roma tomatoes"}
        )

        assert response.status_code == 200
        assert response.json()["normalized_text"] == "roma tomato"

    def test_category(self, client):
        """Test categorizing an item name."""
        response = client.post("/api/v1/ingredients/category", json={"text": "ground beef"})

        assert response.status_code == 200
        assert response.json() == {"name": "ground beef", "category": "Meat"}

    def test_format(self, client):
        """Test scaling and converting a line."""
        response = client.post(
            "/api/v1/ingredients/format",
            json={"text": "1 cup milk", "multiplier": 2, "unit_system": "metric"},
        )

        assert response.status_code == 200
        assert response.json() == {"text": "473.18 ml milk"}

    def test_format_rejects_non_positive_multiplier(self, client):
        """Test request validation."""
        response = client.post(
            "/api/v1/ingredients/format", json={"text": "1 cup milk", "multiplier": 0}
        )
        assert response.status_code == 422

    def test_format_quantity(self, client):
        """Test rendering a quantity."""
        assert client.get("/api/v1/quantities/format", params={"quantity": 2.5}).json() == {
            "text": "2 ½"
        }
        assert client.get("/api/v1/quantities/format").json() == {"text": ""}

    def test_convert_units(self, client):
        """Test converting to metric."""
        response = client.post(
            "/api/v1/units/convert", json={"quantity": 2, "unit": "cups", "system": "metric"}
        )

        assert response.status_code == 200
        assert response.json() == {"value": 473.18, "unit": "ml", "display_value": "473.18"}

    def test_convert_unknown_unit(self, client):
        """Test that unknown units pass through."""
        response = client.post(
            "/api/v1/units/convert", json={"quantity": 2, "unit": "pinch", "system": "imperial"}
        )
        assert response.json() == {"value": 2.0, "unit": "pinch", "display_value": "2"}

    def test_convert_uses_configured_default_system(self, client):
        """Test that a missing system falls back to the configured one."""
        response = client.post("/api/v1/units/convert", json={"quantity": 100, "unit": "g"})
        assert response.json() == {"value": 3.53, "unit": "oz", "display_value": "3.53"}

    def test_convert_rejects_unknown_system(self, client):
        """Test request validation of the unit system."""
        response = client.post(
            "/api/v1/units/convert", json={"quantity": 2, "unit": "cups", "system": "nautical"}
        )
        assert response.status_code == 422

    def test_parse_yield(self, client):
        """Test parsing a yield."""
        response = client.post("/api/v1/yields/parse", json={"text": "1 1/2 cups"})
        assert response.json() == {"quantity": 1.5, "unit": "cups"}

    def test_scale_yield(self, client):
        """Test scaling a yield."""
        response = client.post(
            "/api/v1/yields/scale", json={"text": "4 servings", "multiplier": 0.25}
        )
        assert response.json() == {"text": "1 serving"}


class TestShoppingListRoutes:
    """Tests for the shopping list endpoints."""

    def test_add_recipe(self, client, pasta_recipe):
        """Test pushing a recipe onto the list."""
        response = client.post(
            "/api/v1/shopping-list/recipes", json=_recipe_payload(pasta_recipe)
        )

        assert response.status_code == 201
        data = response.json()
        assert data["total"] == 4
        assert data["entries"][0]["original_text"] == "2 tbsp olive oil"
        assert data["entries"][0]["normalized_text"] == "olive oil"

        assert client.get("/api/v1/shopping-list").json()["total"] == 4

    def test_add_recipe_validation(self, client):
        """Test that a recipe needs a name."""
        response = client.post("/api/v1/shopping-list/recipes", json={"ingredients": ["1 egg"]})
        assert response.status_code == 422

    def test_common_and_by_recipe_views(self, client, pasta_recipe, salad_recipe):
        """Test the two grouped views."""
        client.post("/api/v1/shopping-list/recipes", json=_recipe_payload(pasta_recipe))
        client.post("/api/v1/shopping-list/recipes", json=_recipe_payload(salad_recipe))

        common = client.get("/api/v1/shopping-list/common").json()
        groups = {group["normalized_text"]: group for group in common["groups"]}
        assert set(groups) == {"garlic", "olive oil"}
        assert groups["olive oil"]["quantity"] == 4
        assert groups["olive oil"]["display_quantity"] == "4"
        assert groups["olive oil"]["recipe_sources"] == ["Garlic Pasta", "Tomato Salad"]
        assert groups["olive oil"]["category"] == "Pantry"
        assert groups["garlic"]["category"] == "Produce"

        by_recipe = client.get("/api/v1/shopping-list/by-recipe").json()
        assert [group["recipe_name"] for group in by_recipe["groups"]] == [
            "Garlic Pasta",
            "Tomato Salad",
        ]

    def test_toggle_entry(self, client, pasta_recipe):
        """Test toggling one entry."""
        entries = client.post(
            "/api/v1/shopping-list/recipes", json=_recipe_payload(pasta_recipe)
        ).json()["entries"]

        response = client.post(f"/api/v1/shopping-list/entries/{entries[0]['id']}/toggle")

        assert response.status_code == 200
        assert response.json()["checked"] is True

    def test_toggle_missing_entry(self, client):
        """Test toggling an unknown entry."""
        response = client.post("/api/v1/shopping-list/entries/missing/toggle")
        assert response.status_code == 404

    def test_toggle_group(self, client, pasta_recipe, salad_recipe):
        """Test toggling a common ingredient."""
        client.post("/api/v1/shopping-list/recipes", json=_recipe_payload(pasta_recipe))
        client.post("/api/v1/shopping-list/recipes", json=_recipe_payload(salad_recipe))

        response = client.post("/api/v1/shopping-list/groups/olive oil/toggle")

        assert response.status_code == 200
        assert response.json()["total"] == 2
        common = client.get("/api/v1/shopping-list/common").json()
        checked = {group["normalized_text"]: group["checked"] for group in common["groups"]}
        assert checked == {"garlic": False, "olive oil": True}

    def test_toggle_missing_group(self, client):
        """Test toggling a key with no entries."""
        response = client.post("/api/v1/shopping-list/groups/saffron/toggle")
        assert response.status_code == 404

    def test_remove_recipe(self, client, pasta_recipe, salad_recipe):
        """Test removing one recipe's entries."""
        client.post("/api/v1/shopping-list/recipes", json=_recipe_payload(pasta_recipe))
        client.post("/api/v1/shopping-list/recipes", json=_recipe_payload(salad_recipe))

        response = client.delete("/api/v1/shopping-list/recipes/recipe-pasta")

        assert response.json() == {"recipe_id": "recipe-pasta", "removed": 4}
        assert client.get("/api/v1/shopping-list").json()["total"] == 4

    def test_clear(self, client, pasta_recipe):
        """Test clearing the list."""
        client.post("/api/v1/shopping-list/recipes", json=_recipe_payload(pasta_recipe))

        response = client.delete("/api/v1/shopping-list")

        assert response.status_code == 204
        assert client.get("/api/v1/shopping-list").json() == {"entries": [], "total": 0}

    def test_store_failure_returns_500(self, client):
        """Test that backend errors are reported as server errors."""
        store = AsyncMock()
        store.get_all_items.side_effect = StoreError("database unavailable")
        app.dependency_overrides[get_shopping_service] = lambda: ShoppingListService(store)

        response = client.get("/api/v1/shopping-list/common")

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to aggregate shopping list"}
