"""Health and root endpoints.

Provides the root ``/`` endpoint (API identity and version) and the
``/health`` endpoint (liveness check plus conversation state).

The version string is read from ``polyglot_chat.__version__`` which is
resolved at import time via ``importlib.metadata``.
"""

from fastapi import APIRouter

from polyglot_chat import __version__
from polyglot_chat.chat.controller import ChatController


def router(controller: ChatController) -> APIRouter:
    """Build the health router with access to the chat controller."""
    api = APIRouter()

    @api.get("/")
    async def root():
        """Root endpoint showing API identity and current version."""
        return {"message": "Polyglot Chat API", "version": __version__}

    @api.get("/health")
    async def health_check():
        """Health check endpoint."""
        session = controller.service.sessions.current
        return {
            "status": "ok",
            "messages": len(controller.history),
            "busy": controller.service.busy,
            "target_language": controller.target_language,
            "session_generation": session.generation if session else None,
        }

    return api
