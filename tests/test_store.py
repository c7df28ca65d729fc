"""
Tests for the SQLAlchemy-backed identity store (database mocked).
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import OperationalError

from auth.errors import StoreUnavailable
from database.models import Identity
from database.store import SqlIdentityStore, parse_numeric_id


def _factory(session: MagicMock) -> MagicMock:
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory


def _session_returning(row) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = row
    session = MagicMock()
    session.execute = AsyncMock(return_value=result)
    session.commit = AsyncMock()
    return session


def _failing_session() -> MagicMock:
    session = MagicMock()
    session.execute = AsyncMock(
        side_effect=OperationalError("SELECT 1", {}, Exception("connection refused"))
    )
    return session


def _row() -> Identity:
    return Identity(id=282, user_id="jane.doe", email="a@b.com", name="Jane Doe", password_hash="$2b$hash")


class TestParseNumericId:
    def test_digits(self):
        assert parse_numeric_id("282") == 282

    @pytest.mark.parametrize("value", ["jane.doe", "-1", "1.5", "", "99999999999", "²", "٣", "1٣"])
    def test_not_numeric(self, value):
        assert parse_numeric_id(value) is None


class TestSqlIdentityStore:
    @pytest.mark.asyncio
    async def test_find_by_login(self):
        store = SqlIdentityStore(_factory(_session_returning(_row())))
        record = await store.find_by_login("a@b.com")
        assert record.id == 282
        assert record.password_hash == "$2b$hash"

    @pytest.mark.asyncio
    async def test_find_by_key_missing(self):
        store = SqlIdentityStore(_factory(_session_returning(None)))
        assert await store.find_by_key("282") is None

    @pytest.mark.asyncio
    async def test_update_name_commits(self):
        row = _row()
        session = _session_returning(row)
        store = SqlIdentityStore(_factory(session))
        record = await store.update_name(282, "Jane")
        assert record.name == "Jane"
        assert row.updated_at is not None
        session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_name_no_row(self):
        session = _session_returning(None)
        store = SqlIdentityStore(_factory(session))
        assert await store.update_name(999, "Jane") is None
        session.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_database_errors_become_store_unavailable(self):
        store = SqlIdentityStore(_factory(_failing_session()))
        with pytest.raises(StoreUnavailable):
            await store.find_by_login("a@b.com")
        with pytest.raises(StoreUnavailable):
            await store.update_name(282, "Jane")

    @pytest.mark.asyncio
    async def test_unconfigured_store(self):
        store = SqlIdentityStore(None)
        with pytest.raises(StoreUnavailable):
            await store.find_by_key("bob")
        assert await store.check_connectivity() == "unknown"

    @pytest.mark.asyncio
    async def test_connectivity(self):
        assert await SqlIdentityStore(_factory(_session_returning(None))).check_connectivity() == "connected"
        assert await SqlIdentityStore(_factory(_failing_session())).check_connectivity() == "disconnected"

    @pytest.mark.asyncio
    async def test_connectivity_survives_driver_errors(self):
        session = MagicMock()
        session.execute = AsyncMock(side_effect=RuntimeError("driver exploded"))
        store = SqlIdentityStore(_factory(session))
        assert await store.check_connectivity() == "disconnected"
