"""API routers for the recipebox application."""

from recipebox.routers.ingredients import router as ingredients_router
from recipebox.routers.shopping_list import router as shopping_list_router

__all__ = [
    "ingredients_router",
    "shopping_list_router",
]
