"""FastAPI dependency injection helpers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.config import settings
from marketplace.domain.store import MarketplaceStore
from marketplace.infrastructure.database import async_session_factory
from marketplace.infrastructure.memory import InMemoryStore
from marketplace.infrastructure.repositories import SqlAlchemyStore

_memory_store = InMemoryStore()


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_store(db: AsyncSession = Depends(get_db)) -> MarketplaceStore:
    """Store for this request, chosen by ``settings.store_backend``."""
    if settings.store_backend == "memory":
        return _memory_store
    return SqlAlchemyStore(db)
