# backend/farmops/core/database.py

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from farmops.core.config import settings

if not settings.DATABASE_URL:
    raise RuntimeError("DATABASE_URL must be set in environment")

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
)

# detached webhook tasks use objects after commit; keep them loaded
AsyncSessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

Base = declarative_base()


async def create_tables() -> None:
    """Dev/bootstrap only. Production schemas come from alembic."""
    import farmops.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Request-scoped session; uncommitted work is rolled back on error."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
