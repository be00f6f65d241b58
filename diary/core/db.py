import logging
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

# Base class for all ORM models
Base = declarative_base()


class Database:
    """Owns the async engine and the session factory"""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: AsyncEngine = None
        self.session_factory: async_sessionmaker = None

    async def connect(self, create_schema: bool = False) -> None:
        """Open the engine; optionally create tables"""
        self.engine = create_async_engine(self.url, future=True, echo=self.echo)
        self.session_factory = async_sessionmaker(
            bind=self.engine, class_=AsyncSession, expire_on_commit=False
        )
        if create_schema:
            # Import models so they register on Base.metadata
            import diary.db.models  # noqa: F401

            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Database engine opened")

    async def disconnect(self) -> None:
        """Dispose the engine"""
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            logger.info("Database engine disposed")

    async def ping(self) -> bool:
        """Check that the database answers"""
        async with self.session_factory() as session:
            await session.execute(text("SELECT 1"))
        return True


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency yielding one session per request"""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        yield session
