"""Pytest configuration and shared fixtures."""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from recipebox.database import create_session_factory, init_models
from recipebox.main import app
from recipebox.routers.shopping_list import get_shopping_service
from recipebox.schemas import Recipe
from recipebox.services.shopping import ShoppingListService
from recipebox.store import InMemoryStore, SqlAlchemyStore

# =============================================================================
# Recipe Fixtures
# =============================================================================


@pytest.fixture
def pasta_recipe():
    """Weeknight pasta recipe."""
    return Recipe(
        id="recipe-pasta",
        name="Garlic Pasta",
        ingredients=[
            "2 tbsp olive oil",
            "3 cloves garlic, minced",
            "8 oz spaghetti",
            "Salt and pepper to taste",
        ],
        recipe_yield="4 servings",
    )


@pytest.fixture
def salad_recipe():
    """Tomato salad recipe."""
    return Recipe(
        id="recipe-salad",
        name="Tomato Salad",
        ingredients=[
            "2 tbsp olive oil",
            "2 cups chopped Roma tomatoes",
            "1 clove garlic",
            "",
            "Salt to taste",
        ],
        recipe_yield="2 servings",
    )


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def memory_store():
    """Empty in-memory store."""
    return InMemoryStore()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request, memory_store):
    """Each store backend in turn; SQL runs on a private in-memory SQLite database."""
    if request.param == "memory":
        yield memory_store
        return

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield SqlAlchemyStore(create_session_factory(engine))
    await engine.dispose()


@pytest.fixture
def shopping_service(memory_store):
    """Shopping list service over an empty in-memory store."""
    return ShoppingListService(memory_store)


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def client(shopping_service):
    """Test client whose shopping list routes use a fresh in-memory store."""
    app.dependency_overrides[get_shopping_service] = lambda: shopping_service
    yield TestClient(app)
    app.dependency_overrides.clear()
