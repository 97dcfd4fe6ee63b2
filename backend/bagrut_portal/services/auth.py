"""
Sign in / sign up and the cached session user.

Credentials are plaintext and matched by linear scan. The "session" is the
last signed-in user, cached in the store under ``currentUser``.
"""

import logging
from datetime import datetime, timezone

from pydantic import ValidationError

from bagrut_portal.schemas import MessageRead, UserCreate, UserRead, UserRole
from bagrut_portal.services.results import ErrorKind, Result, service_operation
from bagrut_portal.services.users import build_user, find_by_email
from bagrut_portal.storage import LocalStore
from bagrut_portal.storage import collections as c
from bagrut_portal.storage.seed import WELCOME_SUBJECT, welcome_content

logger = logging.getLogger(__name__)


@service_operation("Sign in")
async def sign_in(store: LocalStore, email: str, password: str) -> Result[UserRead]:
    async with store.transaction() as tx:
        users = await c.USERS.load(tx)

    user = find_by_email(users, email)
    if user is None or user.password != password:
        return Result.fail(ErrorKind.INVALID_CREDENTIALS, "Invalid login credentials")

    return Result.ok(user.public())


@service_operation("Sign up")
async def sign_up(store: LocalStore, data: UserCreate) -> Result[UserRead]:
    """
    Register a user and send them the welcome message.

    The welcome message comes from the first admin in the users collection;
    with no admin around the user is still created, just without it.
    """
    async with store.transaction() as tx:
        users = await c.USERS.load(tx)
        if find_by_email(users, data.email):
            return Result.already_exists("User already exists")

        new_user = build_user(users, data)
        await c.USERS.save(tx, [*users, new_user])

        admin = next((u for u in users if u.role == UserRole.ADMIN), None)
        if admin is not None:
            messages = await c.MESSAGES.load(tx)
            welcome = MessageRead(
                id=c.new_id("msg", (m.id for m in messages)),
                sender_id=admin.id,
                sender_name=admin.full_name,
                recipient_id=new_user.id,
                recipient_name=new_user.full_name,
                subject=WELCOME_SUBJECT,
                content=welcome_content(new_user.first_name),
                is_read=False,
                created_at=datetime.now(timezone.utc),
            )
            await c.MESSAGES.save(tx, [*messages, welcome])
        else:
            logger.warning("No admin user found, skipping welcome message for %s", new_user.id)

    return Result.ok(new_user.public())


async def cache_session_user(store: LocalStore, user: UserRead) -> None:
    await store.set_item(c.SESSION_USER_KEY, user.model_dump_json())


async def get_session_user(store: LocalStore) -> UserRead | None:
    """Return the cached session user, dropping the cache if it is unreadable."""
    raw = await store.get_item(c.SESSION_USER_KEY)
    if raw is None:
        return None
    try:
        return UserRead.model_validate_json(raw)
    except ValidationError as e:
        logger.error("Error parsing stored session user: %s", e)
        await store.remove_item(c.SESSION_USER_KEY)
        return None


async def clear_session_user(store: LocalStore) -> None:
    await store.remove_item(c.SESSION_USER_KEY)
