"""
WebUI routes for serving the chat shell and static assets.

This module intentionally keeps server-side logic minimal:
- Serves a single HTML shell for `/chat` and `/chat/*`.
- Redirects the bare root of the shell (`/app`) to `/chat`.
- Delegates all rendering and interaction to client-side JS, which talks to
  the `/api/*` endpoints.
- Uses FastAPI's StaticFiles to serve CSS/JS assets.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from polyglot_chat.translation.languages import DEFAULT_TARGET_LANGUAGE, LANGUAGES

# Resolve paths relative to this file for predictable packaging.
_WEB_ROOT = Path(__file__).resolve().parent
_TEMPLATES_DIR = _WEB_ROOT / "templates"
_STATIC_DIR = _WEB_ROOT / "static"
# Static asset version token for cache busting.
# Bump this when frontend assets change and deployments should force refresh.
CHAT_ASSET_VERSION = "20261018a"


templates = Jinja2Templates(directory=str(_TEMPLATES_DIR))


def _render_chat_shell(request: Request) -> HTMLResponse:
    """Render the chat shell with the language catalog pre-filled."""
    return templates.TemplateResponse(
        request,
        "chat_shell.html",
        {
            "asset_version": CHAT_ASSET_VERSION,
            "languages": LANGUAGES,
            "default_language": DEFAULT_TARGET_LANGUAGE,
        },
    )


def build_chat_router() -> APIRouter:
    """
    Build the chat WebUI router.

    The chat UI is a single-page shell; client-side code handles everything
    after the first load.
    """
    router = APIRouter()

    @router.get("/app")
    async def app_redirect():
        """Convenience alias for the shell."""
        return RedirectResponse(url="/chat")

    @router.get("/chat", response_class=HTMLResponse)
    async def chat_root(request: Request):
        """Serve the chat shell."""
        return _render_chat_shell(request)

    @router.get("/chat/{path:path}", response_class=HTMLResponse)
    async def chat_shell(request: Request, path: str):
        """Serve the same shell for any subpath so deep links still load."""
        _ = path  # Path is unused but retained for routing.
        return _render_chat_shell(request)

    return router


def register_web_routes(app: FastAPI) -> None:
    """
    Register WebUI routes and static assets on the FastAPI app.

    Static files must be mounted on the FastAPI app (not an APIRouter),
    otherwise Starlette will not serve the assets correctly.
    """
    app.mount("/web/static", StaticFiles(directory=str(_STATIC_DIR)), name="web-static")
    app.include_router(build_chat_router())
