"""User administration: create, list, search, update and delete users."""

from datetime import datetime, timezone
from typing import Any

from bagrut_portal.schemas import UserCreate, UserRead, UserRecord
from bagrut_portal.services.results import Result, service_operation
from bagrut_portal.storage import LocalStore
from bagrut_portal.storage import collections as c


def find_by_email(users: list[UserRecord], email: str) -> UserRecord | None:
    """Case-insensitive email lookup."""
    email = email.lower()
    return next((u for u in users if u.email.lower() == email), None)


def build_user(users: list[UserRecord], data: UserCreate) -> UserRecord:
    return UserRecord(
        id=c.new_id("user", (u.id for u in users)),
        email=data.email,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
        birth_date=data.birth_date,
        role=data.role,
        created_at=datetime.now(timezone.utc),
    )


@service_operation("Add user")
async def add_user(store: LocalStore, data: UserCreate) -> Result[UserRead]:
    async with store.transaction() as tx:
        users = await c.USERS.load(tx)
        if find_by_email(users, data.email):
            return Result.already_exists("User already exists")

        new_user = build_user(users, data)
        await c.USERS.save(tx, [*users, new_user])

    return Result.ok(new_user.public())


@service_operation("Update profile")
async def update_profile(store: LocalStore, user_id: str, updates: dict[str, Any]) -> Result[UserRead]:
    """
    Merge ``updates`` into a user record.

    Passwords go through ``update_password``; a password key here is ignored.
    """
    updates = {k: v for k, v in updates.items() if k not in ("id", "password", "created_at")}

    async with store.transaction() as tx:
        users = await c.USERS.load(tx)
        index = next((i for i, u in enumerate(users) if u.id == user_id), None)
        if index is None:
            return Result.not_found("User")

        new_email = updates.get("email")
        if new_email:
            other = find_by_email(users, new_email)
            if other is not None and other.id != user_id:
                return Result.already_exists("User already exists")

        users[index] = UserRecord.model_validate({**users[index].model_dump(), **updates})
        await c.USERS.save(tx, users)

    return Result.ok(users[index].public())


@service_operation("Update password")
async def update_password(store: LocalStore, user_id: str, new_password: str) -> Result[None]:
    async with store.transaction() as tx:
        users = await c.USERS.load(tx)
        user = next((u for u in users if u.id == user_id), None)
        if user is None:
            return Result.not_found("User")

        user.password = new_password
        await c.USERS.save(tx, users)

    return Result.ok()


@service_operation("Delete user")
async def delete_user(store: LocalStore, user_id: str) -> Result[None]:
    async with store.transaction() as tx:
        users = await c.USERS.load(tx)
        remaining = [u for u in users if u.id != user_id]
        if len(remaining) == len(users):
            return Result.not_found("User")

        await c.USERS.save(tx, remaining)

    return Result.ok()


@service_operation("Get user")
async def get_user(store: LocalStore, user_id: str) -> Result[UserRead]:
    async with store.transaction() as tx:
        users = await c.USERS.load(tx)

    user = next((u for u in users if u.id == user_id), None)
    if user is None:
        return Result.not_found("User")
    return Result.ok(user.public())


@service_operation("Get users data")
async def get_users_data(store: LocalStore) -> Result[list[UserRead]]:
    async with store.transaction() as tx:
        users = await c.USERS.load(tx)
    return Result.ok([u.public() for u in users])


@service_operation("Search users")
async def search_users(store: LocalStore, query: str) -> Result[list[UserRead]]:
    """Match the query against email, first name and last name (case-insensitive)."""
    needle = query.lower()
    async with store.transaction() as tx:
        users = await c.USERS.load(tx)

    matches = [
        u
        for u in users
        if needle in u.email.lower()
        or needle in u.first_name.lower()
        or needle in u.last_name.lower()
    ]
    return Result.ok([u.public() for u in matches])
