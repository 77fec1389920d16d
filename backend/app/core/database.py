"""Database engine construction and schema management"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from app.core.config import settings

Base = declarative_base()


def async_database_url(database_url: str) -> str:
    """Rewrite sync driver URLs to their async counterparts."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return database_url


def create_engine(database_url: Optional[str] = None) -> AsyncEngine:
    url = async_database_url(database_url or settings.DATABASE_URL)

    kwargs = {"echo": settings.SQL_ECHO}
    if url.startswith("sqlite") and ":memory:" in url:
        # One shared connection, otherwise every checkout sees an empty database
        kwargs["poolclass"] = StaticPool
    elif "postgresql" in url:
        kwargs["pool_pre_ping"] = True

    return create_async_engine(url, **kwargs)


async def init_db(engine: AsyncEngine):
    """Create tables that do not exist yet"""
    # Register models on Base.metadata
    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
