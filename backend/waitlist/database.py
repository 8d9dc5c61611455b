"""
Database connection and session management.

The engine and session factory are built during the application lifespan and
kept on ``app.state``; request handlers receive sessions through ``get_db``.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from waitlist.config import Settings

# Base class for models
Base = declarative_base()


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured store.

    For the default SQLite store the parent directory is created if missing.
    """
    if settings.is_sqlite and not settings.database_url:
        db_dir = Path(settings.db_dir)
        if not db_dir.exists():
            db_dir.mkdir(parents=True, exist_ok=True)
        return create_async_engine(
            settings.sqlalchemy_url,
            echo=settings.debug,  # Log SQL queries in debug mode
        )

    return create_async_engine(
        settings.sqlalchemy_url,
        echo=settings.debug,
        pool_pre_ping=True,  # Verify connections before using
    )


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Initialize database tables."""
    # Register models on the metadata before creating tables
    import waitlist.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.
    Rolls back on error and always closes.
    """
    session_maker: async_sessionmaker[AsyncSession] = request.app.state.session_maker
    async with session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
