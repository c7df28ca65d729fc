"""
FastAPI dependencies for authentication.

``require_claims`` is the guard placed in front of protected routes: it
extracts the Bearer token, verifies it and hands the claims to the handler.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header

from api.dependencies import get_settings
from auth.jwt import extract_bearer, verify_token
from auth.models import TokenClaims
from config.settings import Settings


async def require_claims(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    settings: Settings = Depends(get_settings),
) -> TokenClaims:
    """Return the caller's claims or raise ``TokenMissing`` / ``TokenInvalid``."""
    token = extract_bearer(authorization)
    return verify_token(token, settings.signing_key)
