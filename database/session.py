"""
Async SQLAlchemy session factory for PostgreSQL.

The engine is built once per process from ``config.database_url``.  An
empty URL means "no store configured"; callers get ``None`` and report the
store as unavailable.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from database.models import Base

logger = logging.getLogger(__name__)


def build_session_factory(database_url: str) -> Optional[async_sessionmaker[AsyncSession]]:
    """Create the pooled engine and its session factory, or ``None``."""
    if not database_url:
        logger.warning("DATABASE_URL is not set; identity store unavailable")
        return None
    try:
        engine = create_async_engine(
            database_url,
            echo=False,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    except (ArgumentError, ImportError) as exc:
        logger.error("Database engine could not be created: %s", exc)
        return None
    logger.info("Database engine created")
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Create the ``identities`` table if it does not exist."""
    async with session_factory.begin() as session:
        await session.run_sync(
            lambda sync_session: Base.metadata.create_all(bind=sync_session.connection())
        )
