"""Common data schemas stored in the keyed collections."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

SHOPPING_LIST_COLLECTION = "shopping_list"


class Recipe(BaseModel):
    """The parts of a recipe the ingredient pipeline reads."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    ingredients: list[str] = Field(default_factory=list)
    recipe_yield: str = Field(default="", alias="yield")
    servings_multiplier: float = Field(default=1.0, gt=0)


class ShoppingListEntry(BaseModel):
    """One ingredient line pushed to the shopping list from a recipe."""

    id: str
    original_text: str
    quantity: float | None = None
    unit: str | None = None
    description: str = ""
    recipe_id: str | None = None
    recipe_name: str | None = None
    checked: bool = False
    normalized_text: str = ""

    def to_store(self) -> dict[str, Any]:
        """Convert to the plain dict shape kept by the store."""
        return self.model_dump()
