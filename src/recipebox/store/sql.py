"""SQLAlchemy-backed keyed store."""

import uuid
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from recipebox.logging_config import get_logger
from recipebox.models import StoredItem
from recipebox.store.base import ItemNotFoundError, KeyedStore, StoreError

logger = get_logger(__name__)


class SqlAlchemyStore(KeyedStore):
    """Stores each item as a JSON payload row in ``stored_items``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @property
    def name(self) -> str:
        return "sql"

    async def _get_row(self, session: AsyncSession, collection: str, item_id: str) -> StoredItem:
        result = await session.execute(
            select(StoredItem).where(
                StoredItem.collection == collection,
                StoredItem.id == item_id,
            )
        )
        row = result.scalar_one_or_none()
        if row is None:
            raise ItemNotFoundError(collection, item_id)
        return row

    async def add_item(self, collection: str, item: dict[str, Any]) -> str:
        item_id = str(item.get("id") or uuid.uuid4().hex)
        payload = {**item, "id": item_id}

        async with self.session_factory() as session:
            session.add(StoredItem(collection=collection, id=item_id, payload=payload))
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise StoreError(f"Duplicate item {item_id!r} in collection {collection!r}") from e

        logger.debug(f"Added item {item_id} to {collection}")
        return item_id

    async def get_all_items(self, collection: str) -> list[dict[str, Any]]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(StoredItem.payload)
                .where(StoredItem.collection == collection)
                .order_by(StoredItem.seq)
            )
            return [dict(payload) for payload in result.scalars().all()]

    async def update_item(self, collection: str, item_id: str, item: dict[str, Any]) -> None:
        async with self.session_factory() as session:
            row = await self._get_row(session, collection, item_id)
            row.payload = {**item, "id": item_id}
            await session.commit()

    async def delete_item(self, collection: str, item_id: str) -> None:
        async with self.session_factory() as session:
            row = await self._get_row(session, collection, item_id)
            await session.delete(row)
            await session.commit()

    async def clear_store(self, collection: str) -> None:
        async with self.session_factory() as session:
            await session.execute(delete(StoredItem).where(StoredItem.collection == collection))
            await session.commit()
        logger.info(f"Cleared collection {collection}")
