"""Database session management."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from bagrut_portal.config import get_settings
from bagrut_portal.db.base import Base

settings = get_settings()


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    In-memory SQLite databases live inside a single connection, so they get
    a StaticPool shared across sessions.
    """
    if url.startswith("sqlite") and url.split("://", 1)[1] in ("", "/:memory:"):
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(url, echo=echo, pool_pre_ping=True)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory with the settings every store session uses."""
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Create async engine
engine = build_engine(settings.database_url, echo=settings.debug)

# Session factory
AsyncSessionLocal = build_session_factory(engine)


async def init_db(bind: AsyncEngine = engine) -> None:
    """Create the storage table if it does not exist yet."""
    from bagrut_portal.db import models  # noqa: F401 - Import models to register them

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

