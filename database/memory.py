"""
In-memory ``IdentityStore`` for tests and local demos.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional

from auth.errors import StoreUnavailable
from auth.models import IdentityRecord
from auth.password import hash_password
from database.store import IdentityStore, parse_numeric_id


class InMemoryIdentityStore(IdentityStore):
    """
    Keeps identities in a dict keyed by numeric id.

    Set ``available = False`` to simulate an unreachable database.
    """

    def __init__(self) -> None:
        self._rows: Dict[int, IdentityRecord] = {}
        self.available = True
        self.update_calls = 0

    def add(
        self,
        id: int,
        user_id: str,
        email: str,
        password: str,
        name: Optional[str] = None,
        rounds: int = 4,
    ) -> IdentityRecord:
        """Insert an identity, hashing ``password`` with bcrypt."""
        now = datetime.now(timezone.utc)
        record = IdentityRecord(
            id=id,
            user_id=user_id,
            email=email,
            name=name,
            password_hash=hash_password(password, rounds=rounds),
            created_at=now,
            updated_at=now,
        )
        self._rows[id] = record
        return record

    def get(self, numeric_id: int) -> Optional[IdentityRecord]:
        return self._rows.get(numeric_id)

    def _check(self) -> None:
        if not self.available:
            raise StoreUnavailable()

    async def find_by_login(self, identifier: str) -> Optional[IdentityRecord]:
        self._check()
        for key in sorted(self._rows):
            row = self._rows[key]
            if identifier in (row.email, row.user_id):
                return row
        return None

    async def find_by_key(self, identifier: str) -> Optional[IdentityRecord]:
        self._check()
        numeric_id = parse_numeric_id(identifier)
        for key in sorted(self._rows):
            row = self._rows[key]
            if row.id == numeric_id or row.user_id == identifier:
                return row
        return None

    async def update_name(self, numeric_id: int, name: str) -> Optional[IdentityRecord]:
        self._check()
        self.update_calls += 1
        row = self._rows.get(numeric_id)
        if row is None:
            return None
        updated = row.model_copy(update={"name": name, "updated_at": datetime.now(timezone.utc)})
        self._rows[numeric_id] = updated
        return updated

    async def check_connectivity(self) -> str:
        return "connected" if self.available else "disconnected"
