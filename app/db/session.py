# app/db/session.py
import os
from collections.abc import AsyncGenerator

from sqlalchemy import create_engine as create_sync_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.config import get_settings
from app.db.base import Base

# Register every ORM model on Base.metadata
from app.models import event, payment, schedule_rule, user  # noqa: F401

settings = get_settings()

# Detect if we're running under pytest
IS_TEST = "PYTEST_CURRENT_TEST" in os.environ or settings.APP_ENV == "test"

# ---------------------------------------------------------------------------
# Main application engine + session factory
# ---------------------------------------------------------------------------
engine = create_async_engine(
    settings.DB_URL,
    echo=False,
    future=True,
    # Tests drive the engine from several event loops (TestClient + asyncio
    # tests), so never reuse pooled connections across them.
    poolclass=NullPool if IS_TEST else None,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    autoflush=False,
    expire_on_commit=False,
    class_=AsyncSession,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides an async SQLAlchemy session.

    The session is automatically closed when the request is completed.
    """
    async with AsyncSessionLocal() as session:
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    FastAPI dependency returning the session factory.

    Gateways that may run concurrently inside one request open their own
    sessions from it, since a single AsyncSession must not be shared
    between concurrent tasks.
    """
    return AsyncSessionLocal


# ---------------------------------------------------------------------------
# PRODUCTION / DEV: DB init for app startup
# ---------------------------------------------------------------------------
async def init_db_for_startup() -> None:
    """
    Initialize DB schema for application startup.

    Creates missing tables only; existing data is left untouched.
    Typically you'd eventually replace this with Alembic migrations.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ---------------------------------------------------------------------------
# TESTS ONLY: reset schema using a SYNC engine
# ---------------------------------------------------------------------------

def build_sync_db_url(async_url: str) -> str:
    """
    Convert an async driver URL into its synchronous counterpart, e.g.

    - 'postgresql+asyncpg://...' -> 'postgresql://...'
    - 'sqlite+aiosqlite:///...'  -> 'sqlite:///...'
    """
    for async_driver in ("+asyncpg", "+aiosqlite"):
        if async_driver in async_url:
            return async_url.replace(async_driver, "")
    return async_url


def create_sync_engine_for_tests():
    """
    Build a synchronous engine bound to the same database as `engine`.
    """
    return create_sync_engine(build_sync_db_url(settings.DB_URL), future=True)


def reset_schema() -> None:
    """
    TEST-ONLY: run drop_all + create_all using a synchronous SQLAlchemy engine.

    This completely bypasses async drivers and event-loop issues.
    Do NOT call this from production code. Only from tests/fixtures.
    """
    sync_engine = create_sync_engine_for_tests()

    with sync_engine.begin() as conn:
        Base.metadata.drop_all(bind=conn)
        Base.metadata.create_all(bind=conn)

    sync_engine.dispose()
