"""Base interface for the persistent keyed store."""

from abc import ABC, abstractmethod
from typing import Any


class StoreError(Exception):
    """Base exception for store errors."""


class ItemNotFoundError(StoreError):
    """Raised when an item ID is not present in a collection."""

    def __init__(self, collection: str, item_id: str):
        super().__init__(f"No item {item_id!r} in collection {collection!r}")
        self.collection = collection
        self.item_id = item_id


class KeyedStore(ABC):
    """
    Named collections of dict items keyed by an opaque ``id`` field.

    Implementations return copies, so callers always work on a consistent
    snapshot of a collection.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return backend name for logging and identification."""
        pass

    @abstractmethod
    async def add_item(self, collection: str, item: dict[str, Any]) -> str:
        """
        Add an item to a collection.

        Args:
            collection: Collection name.
            item: Item payload. An ``id`` is assigned when missing.

        Returns:
            The item ID.

        Raises:
            StoreError: If the collection already holds an item with that ID.
        """
        pass

    @abstractmethod
    async def get_all_items(self, collection: str) -> list[dict[str, Any]]:
        """
        Get every item in a collection, in insertion order.

        Args:
            collection: Collection name.

        Returns:
            List of item payloads. Empty for an unknown collection.
        """
        pass

    @abstractmethod
    async def update_item(self, collection: str, item_id: str, item: dict[str, Any]) -> None:
        """
        Replace an existing item.

        Raises:
            ItemNotFoundError: If the item does not exist.
        """
        pass

    @abstractmethod
    async def delete_item(self, collection: str, item_id: str) -> None:
        """
        Delete an item.

        Raises:
            ItemNotFoundError: If the item does not exist.
        """
        pass

    @abstractmethod
    async def clear_store(self, collection: str) -> None:
        """Delete every item in a collection."""
        pass
