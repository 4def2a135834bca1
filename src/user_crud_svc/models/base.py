import logging
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from user_crud_svc.config import Settings


class Base(DeclarativeBase):
    pass


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the process-wide connection pool.

    The pool never grows past DB_POOL_SIZE connections. A caller that finds
    it exhausted waits up to DB_POOL_TIMEOUT seconds for a connection.
    """
    return create_async_engine(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=0,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        echo=settings.DEBUG,
    )


async def check_connection(engine: AsyncEngine) -> None:
    """Run a trivial query so an unreachable database fails at startup."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logging.error(e, exc_info=True)
        raise


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency yielding a session from the pool stored on app.state.
    """
    session_factory = request.app.state.sessionmaker
    async with session_factory() as session:
        yield session
