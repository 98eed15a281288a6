"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL.  Every test gets a fresh engine, so tables and ids
start clean.  Domain tests take the ``store`` fixture, which runs each
test once against ``SqlAlchemyStore`` and once against ``InMemoryStore``.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from marketplace.infrastructure import models  # noqa: F401  (registers tables)
from marketplace.infrastructure.database import Base
from marketplace.infrastructure.memory import InMemoryStore
from marketplace.infrastructure.repositories import SqlAlchemyStore

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Fresh SQLite engine with all tables created."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(params=["sql", "memory"])
async def store(request, db_session):
    if request.param == "sql":
        return SqlAlchemyStore(db_session)
    return InMemoryStore()


@pytest.fixture
def switch_off(store):
    """Clear a flag (``is_active`` / ``is_available``) on a stored row."""

    async def _switch_off(table: str, entity_id: int, flag: str) -> None:
        if isinstance(store, SqlAlchemyStore):
            row = await getattr(store, table).get_by_id(entity_id)
            setattr(row, flag, False)
            await store.session.flush()
        else:
            setattr(getattr(store, table)[entity_id], flag, False)

    return _switch_off
