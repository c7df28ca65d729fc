"""
Auth & profile service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from api.auth import router as auth_router
from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.pages import build_pages_router, mount_static_assets
from api.routes import router as api_router
from config.settings import Settings, config
from database.session import build_session_factory, create_tables
from database.store import IdentityStore, SqlIdentityStore

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncpg", "multipart"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[IdentityStore] = None,
) -> FastAPI:
    settings = settings or config
    session_factory = None
    if store is None:
        session_factory = build_session_factory(settings.database_url)
        store = SqlIdentityStore(session_factory)

    app = FastAPI(
        title=settings.service_name,
        version="2.1.4",
        description="Login, bearer-token validation and profile management.",
    )
    app.state.settings = settings
    app.state.identity_store = store

    register_middleware(app, settings)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth")
    app.include_router(api_router, prefix=settings.api_prefix)
    mount_static_assets(app, settings)
    app.include_router(build_pages_router(settings))

    @app.on_event("startup")
    async def on_startup():
        if settings.uses_dev_secret:
            logger.warning("JWT_SECRET is not set; using the development signing key")
        if settings.create_tables and session_factory is not None:
            logger.info("Creating database tables…")
            try:
                await create_tables(session_factory)
            except (SQLAlchemyError, OSError):
                logger.exception("Table creation failed; continuing without it")
        logger.info("Application ready to accept requests.")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
