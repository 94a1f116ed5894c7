"""Database configuration and session management.

Provides the async SQLAlchemy engine handle and per-request sessions.
"""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

# Base class for models
Base = declarative_base()


class Database:
    """Process-wide database handle.

    Owns the async engine and the session factory. Opened once at
    application startup and disposed at shutdown.

    Example usage:
        database = Database("sqlite+aiosqlite:///catalog.db")
        await database.create_all()
        async with database.session_factory() as session:
            ...
        await database.dispose()
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        """Create engine and session factory.

        Args:
            url: SQLAlchemy async database URL.
            echo: Whether to log emitted SQL.
        """
        self.url = url
        self.engine = create_async_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Create all tables that don't exist yet."""
        # Register models on Base.metadata
        import catalog_api.catalog.models  # noqa: F401
        import catalog_api.infrastructure.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Check database connectivity.

        Returns:
            True if a trivial query succeeds.
        """
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Get the database handle opened by the application lifespan."""
    return request.app.state.database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Yields:
        AsyncSession for database operations.
    """
    database = get_database(request)
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
