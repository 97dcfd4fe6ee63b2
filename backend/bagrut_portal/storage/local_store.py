"""
Local key-value store.

A small getItem/setItem/removeItem API over the ``storage_items`` table,
with a capacity limit shared by every key. All reads and writes go through
a ``StoreTransaction``: one database transaction guarded by a process-wide
lock, so a load-mutate-save cycle can never interleave with another one
and a multi-key cascade commits or rolls back as a unit.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bagrut_portal.db.models import StorageItem

logger = logging.getLogger(__name__)


class QuotaExceededError(Exception):
    """Raised when a write would take the store past its capacity."""

    def __init__(self, key: str, required: int, quota: int):
        self.key = key
        self.required = required
        self.quota = quota
        super().__init__(
            f"Storage quota exceeded writing '{key}': {required} chars needed, quota is {quota}"
        )


class StoreTransaction:
    """Key-value operations bound to one open database session."""

    def __init__(self, session: AsyncSession, quota_chars: int | None):
        self._session = session
        self._quota_chars = quota_chars

    async def get_item(self, key: str) -> str | None:
        result = await self._session.execute(
            select(StorageItem.value).where(StorageItem.key == key)
        )
        return result.scalar_one_or_none()

    async def set_item(self, key: str, value: str) -> None:
        """
        Overwrite the value under ``key``.

        Raises QuotaExceededError before touching anything when the write
        would not fit, leaving the transaction usable.
        """
        if self._quota_chars is not None:
            used = await self.used_chars(exclude_key=key)
            required = used + len(value)
            if required > self._quota_chars:
                logger.warning("Quota exceeded writing %s (%d > %d chars)", key, required, self._quota_chars)
                raise QuotaExceededError(key, required, self._quota_chars)

        await self._session.execute(delete(StorageItem).where(StorageItem.key == key))
        await self._session.execute(insert(StorageItem).values(key=key, value=value))

    async def remove_item(self, key: str) -> None:
        await self._session.execute(delete(StorageItem).where(StorageItem.key == key))

    async def keys(self, prefix: str | None = None) -> list[str]:
        query = select(StorageItem.key)
        if prefix:
            query = query.where(StorageItem.key.startswith(prefix, autoescape=True))
        result = await self._session.execute(query.order_by(StorageItem.key))
        return list(result.scalars())

    async def used_chars(self, exclude_key: str | None = None) -> int:
        """Total characters stored, optionally ignoring one key."""
        query = select(func.coalesce(func.sum(func.length(StorageItem.value)), 0))
        if exclude_key is not None:
            query = query.where(StorageItem.key != exclude_key)
        result = await self._session.execute(query)
        return int(result.scalar_one())


class LocalStore:
    """
    Persistent key-value store with a capacity limit.

    Usage:
        async with store.transaction() as tx:
            raw = await tx.get_item("bagrut_exams")
            await tx.set_item("bagrut_exams", updated)

    The lock is not reentrant: never open a transaction while holding one.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        quota_chars: int | None = None,
    ):
        self._session_factory = session_factory
        self.quota_chars = quota_chars
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[StoreTransaction]:
        async with self._lock:
            async with self._session_factory() as session:
                try:
                    yield StoreTransaction(session, self.quota_chars)
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

    # Single-operation helpers, each in its own transaction

    async def get_item(self, key: str) -> str | None:
        async with self.transaction() as tx:
            return await tx.get_item(key)

    async def set_item(self, key: str, value: str) -> None:
        async with self.transaction() as tx:
            await tx.set_item(key, value)

    async def remove_item(self, key: str) -> None:
        async with self.transaction() as tx:
            await tx.remove_item(key)

    async def keys(self, prefix: str | None = None) -> list[str]:
        async with self.transaction() as tx:
            return await tx.keys(prefix)

    async def used_chars(self) -> int:
        async with self.transaction() as tx:
            return await tx.used_chars()
