"""Counters and registration statistics for the admin dashboard."""

from datetime import datetime, timezone

from bagrut_portal.schemas import MonthlyCount, UserRead
from bagrut_portal.storage import LocalStore
from bagrut_portal.storage import collections as c


async def get_users_count(store: LocalStore) -> int:
    async with store.transaction() as tx:
        return len(await c.USERS.load(tx))


async def get_exams_count(store: LocalStore) -> int:
    async with store.transaction() as tx:
        return len(await c.EXAMS.load(tx))


async def get_subjects_count(store: LocalStore) -> int:
    async with store.transaction() as tx:
        return len(await c.SUBJECTS.load(tx))


def _month_key(year: int, month: int) -> str:
    return f"{year}-{month:02d}"


async def get_users_by_month(
    store: LocalStore,
    months: int,
    *,
    now: datetime | None = None,
) -> list[MonthlyCount]:
    """
    Registrations per calendar month for the last ``months`` months.

    Oldest month first, current month last. Users created before the window
    are not counted.
    """
    now = now or datetime.now(timezone.utc)
    buckets: dict[str, int] = {}
    year, month = now.year, now.month
    for _ in range(months):
        buckets[_month_key(year, month)] = 0
        month -= 1
        if month == 0:
            year, month = year - 1, 12

    async with store.transaction() as tx:
        users = await c.USERS.load(tx)

    for user in users:
        key = _month_key(user.created_at.year, user.created_at.month)
        if key in buckets:
            buckets[key] += 1

    return [MonthlyCount(month=m, count=n) for m, n in reversed(buckets.items())]


async def get_recent_users(store: LocalStore, limit: int) -> list[UserRead]:
    """Newest users first."""
    async with store.transaction() as tx:
        users = await c.USERS.load(tx)

    newest = sorted(users, key=lambda u: u.created_at, reverse=True)
    return [u.public() for u in newest[:limit]]
