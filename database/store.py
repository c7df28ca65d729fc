"""
Identity store — the only component that talks to the relational database.

Handlers receive an ``IdentityStore`` through dependency injection
(``api.dependencies.get_identity_store``) so tests can swap in
``InMemoryIdentityStore``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import or_, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from auth.errors import StoreUnavailable
from auth.models import IdentityRecord
from database.models import Identity

logger = logging.getLogger(__name__)

_MAX_NUMERIC_ID = 2**31 - 1


def parse_numeric_id(identifier: str) -> Optional[int]:
    """Return ``identifier`` as a primary key if it looks like one."""
    if identifier.isascii() and identifier.isdigit():
        value = int(identifier)
        if value <= _MAX_NUMERIC_ID:
            return value
    return None


class IdentityStore(ABC):
    """Read/update access to identity records."""

    @abstractmethod
    async def find_by_login(self, identifier: str) -> Optional[IdentityRecord]:
        """Identity whose email or user_id equals ``identifier``."""

    @abstractmethod
    async def find_by_key(self, identifier: str) -> Optional[IdentityRecord]:
        """Identity addressed by numeric id or user_id."""

    @abstractmethod
    async def update_name(self, numeric_id: int, name: str) -> Optional[IdentityRecord]:
        """Set the display name; ``None`` when no row matched."""

    @abstractmethod
    async def check_connectivity(self) -> str:
        """One of ``connected``, ``disconnected`` or ``unknown``."""


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except (SQLAlchemyError, OSError) as exc:
        logger.exception("Identity store failure during %s", operation)
        raise StoreUnavailable() from exc


class SqlIdentityStore(IdentityStore):
    """``IdentityStore`` backed by an async SQLAlchemy session factory."""

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]]) -> None:
        self._session_factory = session_factory

    def _factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise StoreUnavailable()
        return self._session_factory

    async def find_by_login(self, identifier: str) -> Optional[IdentityRecord]:
        factory = self._factory()
        with _store_errors("login lookup"):
            async with factory() as session:
                result = await session.execute(
                    select(Identity)
                    .where(or_(Identity.email == identifier, Identity.user_id == identifier))
                    .order_by(Identity.id.asc())
                    .limit(1)
                )
                row = result.scalar_one_or_none()
        return IdentityRecord.model_validate(row) if row is not None else None

    async def find_by_key(self, identifier: str) -> Optional[IdentityRecord]:
        factory = self._factory()
        numeric_id = parse_numeric_id(identifier)
        condition = Identity.user_id == identifier
        if numeric_id is not None:
            condition = or_(Identity.id == numeric_id, condition)

        with _store_errors("profile lookup"):
            async with factory() as session:
                result = await session.execute(
                    select(Identity).where(condition).order_by(Identity.id.asc()).limit(1)
                )
                row = result.scalar_one_or_none()
        return IdentityRecord.model_validate(row) if row is not None else None

    async def update_name(self, numeric_id: int, name: str) -> Optional[IdentityRecord]:
        factory = self._factory()
        with _store_errors("profile update"):
            async with factory() as session:
                result = await session.execute(
                    select(Identity).where(Identity.id == numeric_id)
                )
                row = result.scalar_one_or_none()
                if row is None:
                    return None
                row.name = name
                row.updated_at = datetime.now(timezone.utc)
                await session.commit()
                logger.info("Updated name for identity %s", numeric_id)
                return IdentityRecord.model_validate(row)

    async def check_connectivity(self) -> str:
        if self._session_factory is None:
            return "unknown"
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except Exception as exc:
            logger.warning("Database health check failed: %s", exc)
            return "disconnected"
        return "connected"
