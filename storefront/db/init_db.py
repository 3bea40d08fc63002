import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.sql import text

from storefront.db.base import Base
import storefront.models  # noqa: F401  (registers the mapped tables)

logger = logging.getLogger(__name__)


class Database:
    """
    Store handle owning the async engine and session factory.

    One instance is built at application startup and handed to whoever
    needs a session; nothing in the package reaches for a global engine.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine = create_async_engine(url, echo=echo)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def init_db(database: Database) -> None:
    """Create tables and report-friendly indexes if they don't exist."""
    try:
        await database.create_all()
        async with database.engine.begin() as conn:
            await conn.execute(
                text("CREATE INDEX IF NOT EXISTS idx_purchases_customer_created ON purchases (customer_id, created_at)")
            )
        logger.info("Tables and indexes created successfully")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency for getting an async database session for one request."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
