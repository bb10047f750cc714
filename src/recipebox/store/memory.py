"""In-memory keyed store."""

import asyncio
import copy
import uuid
from typing import Any

from recipebox.logging_config import get_logger
from recipebox.store.base import ItemNotFoundError, KeyedStore, StoreError

logger = get_logger(__name__)


class InMemoryStore(KeyedStore):
    """Keeps collections in process memory; used for development and tests."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = asyncio.Lock()

    @property
    def name(self) -> str:
        return "memory"

    async def add_item(self, collection: str, item: dict[str, Any]) -> str:
        async with self._lock:
            stored = copy.deepcopy(item)
            item_id = str(stored.get("id") or uuid.uuid4().hex)
            stored["id"] = item_id
            items = self._collections.setdefault(collection, {})
            if item_id in items:
                raise StoreError(f"Duplicate item {item_id!r} in collection {collection!r}")
            items[item_id] = stored
        logger.debug(f"Added item {item_id} to {collection}")
        return item_id

    async def get_all_items(self, collection: str) -> list[dict[str, Any]]:
        async with self._lock:
            return copy.deepcopy(list(self._collections.get(collection, {}).values()))

    async def update_item(self, collection: str, item_id: str, item: dict[str, Any]) -> None:
        async with self._lock:
            items = self._collections.get(collection, {})
            if item_id not in items:
                raise ItemNotFoundError(collection, item_id)
            stored = copy.deepcopy(item)
            stored["id"] = item_id
            items[item_id] = stored

    async def delete_item(self, collection: str, item_id: str) -> None:
        async with self._lock:
            items = self._collections.get(collection, {})
            if item_id not in items:
                raise ItemNotFoundError(collection, item_id)
            del items[item_id]

    async def clear_store(self, collection: str) -> None:
        async with self._lock:
            self._collections.pop(collection, None)
        logger.info(f"Cleared collection {collection}")
