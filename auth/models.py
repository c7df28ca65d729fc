"""
Pydantic schemas for identities, token claims and auth requests.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ── Identity ───────────────────────────────────────────────────────────


class IdentityProjection(BaseModel):
    """Public view of an identity; never carries the password hash."""

    id: int
    user_id: str
    email: str
    name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class IdentityRecord(IdentityProjection):
    """Full stored identity, including the bcrypt hash."""

    model_config = ConfigDict(from_attributes=True)

    password_hash: str = ""

    def to_projection(self) -> IdentityProjection:
        return IdentityProjection(**self.model_dump(exclude={"password_hash"}))

    def to_claims(self) -> "TokenClaims":
        return TokenClaims(numeric_id=self.id, user_id=self.user_id, email=self.email)


# ── Token claims ───────────────────────────────────────────────────────


class TokenClaims(BaseModel):
    """
    Caller identity embedded in a token.

    Serialised with the wire names existing clients read: ``userId`` (numeric id),
    ``user_id`` and ``email``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    numeric_id: int = Field(..., alias="userId")
    user_id: str
    email: str

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# ── Request schemas ────────────────────────────────────────────────────


class LoginRequest(BaseModel):
    identifier: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("identifier", "email")
    )
    secret: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("secret", "password")
    )


class ProfileUpdateRequest(BaseModel):
    # Typed loosely so shape errors surface as our ValidationError.
    name: Any = None
