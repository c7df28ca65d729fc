"""
Credential verification: identifier + plaintext secret -> identity record.
"""

from __future__ import annotations

import logging
from typing import Optional

from auth.errors import InvalidCredentials, MissingCredentials
from auth.models import IdentityRecord
from auth.password import burn_password_check, verify_password
from database.store import IdentityStore

logger = logging.getLogger(__name__)


async def verify_credentials(
    store: IdentityStore,
    identifier: Optional[str],
    secret: Optional[str],
) -> IdentityRecord:
    """
    Return the identity whose email or user_id is ``identifier`` and whose
    stored hash matches ``secret``.

    Raises ``MissingCredentials`` before touching the store when either
    value is empty, and ``InvalidCredentials`` for both an unknown
    identifier and a wrong secret.  Store failures propagate as
    ``StoreUnavailable``.
    """
    if not identifier or not secret:
        raise MissingCredentials()

    record = await store.find_by_login(identifier)
    if record is None:
        burn_password_check(secret)
        logger.info("Login failed: unknown identifier")
        raise InvalidCredentials()

    if not verify_password(secret, record.password_hash):
        logger.info("Login failed: bad secret for identity %s", record.id)
        raise InvalidCredentials()

    return record
