"""
FastAPI dependencies (shared across routes).

The settings object and identity store are created once by ``create_app``
and parked on ``app.state``; handlers receive them through ``Depends``.
"""

from __future__ import annotations

from fastapi import Request

from config.settings import Settings
from database.store import IdentityStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_identity_store(request: Request) -> IdentityStore:
    return request.app.state.identity_store
