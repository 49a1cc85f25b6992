# Standard library imports
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

# Third-party imports
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Local application imports
from consulta.core.monitoring.logging import get_logger
from consulta.models.base import Base

logger = get_logger(__name__)


class Database:
    """
    Explicitly constructed database client.

    Owns the async engine and the session factory. One instance is created
    per application and stored on `app.state.database`; request handlers
    obtain sessions from it through the `get_async_session` dependency.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        engine_kwargs: dict = {"echo": echo, "future": True}
        if url.startswith("sqlite"):
            # SQLite connections are cheap and not shareable across event loops
            engine_kwargs["poolclass"] = NullPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self.session_factory = async_sessionmaker(bind=self.engine, class_=AsyncSession, expire_on_commit=False)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    async def create_all(self) -> None:
        """Create all tables registered on Base.metadata."""
        # Local application imports
        import consulta.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def ping(self) -> int | None:
        async with self.session() as session:
            result = await session.execute(text("SELECT 1"))
            return result.scalar()

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")
