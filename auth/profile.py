"""
Profile read and update, keyed by validated token claims.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from auth.errors import NotFound, ValidationError
from auth.models import IdentityProjection, TokenClaims
from database.store import IdentityStore

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 100


def clean_name(name: Any, max_length: int = NAME_MAX_LENGTH) -> str:
    """Trim ``name`` and check it is a non-empty string within bounds."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Name is required")
    name = name.strip()
    if len(name) > max_length:
        raise ValidationError(f"Name must be at most {max_length} characters")
    return name


async def update_profile(
    store: IdentityStore,
    claims: TokenClaims,
    name: Any,
    max_length: int = NAME_MAX_LENGTH,
) -> IdentityProjection:
    """Rename the identity the token belongs to."""
    cleaned = clean_name(name, max_length)
    record = await store.update_name(claims.numeric_id, cleaned)
    if record is None:
        raise NotFound()
    logger.info("Profile updated for identity %s", claims.numeric_id)
    return record.to_projection()


async def read_profile(store: IdentityStore, identifier: Optional[str]) -> IdentityProjection:
    """Public projection of the identity addressed by numeric id or user_id."""
    if identifier is None or not identifier.strip():
        raise ValidationError("User ID is required")
    record = await store.find_by_key(identifier.strip())
    if record is None:
        raise NotFound()
    return record.to_projection()
