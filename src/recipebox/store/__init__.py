"""Keyed store interface and backends."""

from functools import lru_cache

from recipebox.config import get_settings
from recipebox.database import AsyncSessionLocal
from recipebox.store.base import ItemNotFoundError, KeyedStore, StoreError
from recipebox.store.memory import InMemoryStore
from recipebox.store.sql import SqlAlchemyStore


@lru_cache
def get_store() -> KeyedStore:
    """Get the configured store backend (cached for the process)."""
    if get_settings().store_backend == "sql":
        return SqlAlchemyStore(AsyncSessionLocal)
    return InMemoryStore()


__all__ = [
    "InMemoryStore",
    "ItemNotFoundError",
    "KeyedStore",
    "SqlAlchemyStore",
    "StoreError",
    "get_store",
]
