"""Store-backed application services."""

from recipebox.services.shopping import ShoppingListService

__all__ = ["ShoppingListService"]
