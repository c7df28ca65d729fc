"""
REST API routes (non-auth).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.dependencies import get_identity_store, get_settings
from config.settings import Settings
from database.store import IdentityStore

router = APIRouter()


@router.get("/health")
@router.get("/auth/health")
async def health_check(
    store: IdentityStore = Depends(get_identity_store),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Always 200; the store's state is reported, never raised."""
    return {
        "success": True,
        "service": settings.service_name,
        "status": "online",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": await store.check_connectivity(),
        "environment": settings.environment,
    }
