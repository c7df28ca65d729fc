"""
HTML page delivery and catch-all routes.

Registered after every API router and static mount: unknown API paths get
a JSON 404, anything else falls back to ``index.html``.
"""

from __future__ import annotations

import logging
import pathlib

from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from config.settings import Settings

logger = logging.getLogger(__name__)

_BASE_DIR = pathlib.Path(__file__).resolve().parent.parent
_ASSET_MOUNTS = {
    "/public": "",
    "/css": "css",
    "/js": "js",
    "/images": "images",
}
_API_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def _resolve(directory: str) -> pathlib.Path:
    path = pathlib.Path(directory)
    return path if path.is_absolute() else _BASE_DIR / path


def mount_static_assets(app: FastAPI, settings: Settings) -> None:
    """Mount the asset directories that exist under ``settings.public_dir``."""
    public_dir = _resolve(settings.public_dir)
    for prefix, sub in _ASSET_MOUNTS.items():
        directory = public_dir / sub if sub else public_dir
        if directory.is_dir():
            app.mount(prefix, StaticFiles(directory=str(directory)), name=prefix.strip("/"))
        else:
            logger.debug("Static directory %s not found; %s not mounted", directory, prefix)


def build_pages_router(settings: Settings) -> APIRouter:
    templates_dir = _resolve(settings.templates_dir)
    router = APIRouter(include_in_schema=False)

    def page(filename: str) -> FileResponse:
        path = templates_dir / filename
        if not path.is_file():
            raise HTTPException(status_code=404, detail="Page not found")
        return FileResponse(path, media_type="text/html")

    @router.get("/")
    async def index_page() -> FileResponse:
        return page("index.html")

    @router.get("/login")
    async def login_page() -> FileResponse:
        return page("login.html")

    @router.get("/dashboard")
    async def dashboard_page() -> FileResponse:
        return page("dashboard.html")

    async def api_not_found() -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": "API endpoint not found"},
        )

    api_roots = {"/api", f"{settings.api_prefix}/auth"}
    for root in sorted(api_roots):
        router.add_api_route(root, api_not_found, methods=_API_METHODS)
        router.add_api_route(f"{root}/{{path:path}}", api_not_found, methods=_API_METHODS)

    @router.get("/{path:path}")
    async def spa_fallback(path: str) -> FileResponse:
        # Bare .html names are served straight from the templates directory.
        if path.endswith(".html") and "/" not in path:
            candidate = templates_dir / path
            if candidate.is_file():
                return FileResponse(candidate, media_type="text/html")
        return page("index.html")

    return router
