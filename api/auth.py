"""
Auth API routes — login, profile read/update, token check.

Route prefix: ``{config.api_prefix}/auth``
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_identity_store, get_settings
from auth.dependencies import require_claims
from auth.jwt import create_token
from auth.models import LoginRequest, ProfileUpdateRequest, TokenClaims
from auth.profile import read_profile, update_profile
from auth.verifier import verify_credentials
from config.settings import Settings
from database.store import IdentityStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login")
async def login(
    req: LoginRequest,
    store: IdentityStore = Depends(get_identity_store),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Login with email or user_id + password."""
    record = await verify_credentials(store, req.identifier, req.secret)
    token = create_token(
        record.to_claims(),
        settings.signing_key,
        expiry_seconds=settings.jwt_expiry_seconds,
    )
    logger.info("Login: identity %s (%s)", record.id, record.user_id)

    return {
        "success": True,
        "token": token,
        "user": record.to_projection().model_dump(mode="json"),
        "message": "Login successful",
        "redirect": "/dashboard",
    }


@router.put("/profile")
async def put_profile(
    req: ProfileUpdateRequest,
    claims: TokenClaims = Depends(require_claims),
    store: IdentityStore = Depends(get_identity_store),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Rename the authenticated identity. Any ``userId`` in the body is ignored."""
    projection = await update_profile(
        store, claims, req.name, max_length=settings.name_max_length
    )
    return {
        "success": True,
        "message": "Profile updated successfully",
        "user": projection.model_dump(mode="json"),
    }


@router.get("/profile")
async def get_profile(
    id: Optional[str] = Query(default=None),
    store: IdentityStore = Depends(get_identity_store),
) -> Dict[str, Any]:
    """Public profile lookup by numeric id or user_id."""
    projection = await read_profile(store, id)
    return {"success": True, "user": projection.model_dump(mode="json")}


@router.get("/verify")
async def verify(claims: TokenClaims = Depends(require_claims)) -> Dict[str, Any]:
    """Echo the claims of a valid token."""
    return {
        "success": True,
        "user": claims.to_payload(),
        "message": "Token is valid",
    }
