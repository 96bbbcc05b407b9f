"""
FastAPI backend server for Polyglot Chat.

This module builds the FastAPI application that serves both the JSON API
and the browser chat shell. It sets up:
- CORS middleware from the ``security`` config section
- The translation service, chat controller and attachment ingestor
- All API route endpoints and the web shell routes

``create_app`` builds a fresh application from a ``ServerConfig``; tests
use it with their own configuration. The module-level ``app`` is what
uvicorn imports (``polyglot_chat.api.server:app``).
"""

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from polyglot_chat import __version__
from polyglot_chat.api.routes import register_routes
from polyglot_chat.chat.controller import ChatController
from polyglot_chat.config import ServerConfig
from polyglot_chat.config import config as default_config
from polyglot_chat.services.attachments import AttachmentIngestor
from polyglot_chat.services.speech import get_speech_capability
from polyglot_chat.translation import TranslationService, TranslationSessionConfig
from polyglot_chat.web.routes import register_web_routes


def create_app(
    cfg: ServerConfig | None = None,
    *,
    service: TranslationService | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        cfg: Server configuration; defaults to the module-level singleton.
        service: Pre-built translation service (tests inject one with a
            fake renderer); built from ``cfg.gemini`` when omitted.

    Returns:
        A fully wired FastAPI app. The controller is exposed as
        ``app.state.controller`` for diagnostics and tests.
    """
    cfg = cfg or default_config

    app = FastAPI(
        title="Polyglot Chat",
        version=__version__,
        docs_url="/docs" if cfg.docs_should_be_enabled else None,
        redoc_url="/redoc" if cfg.docs_should_be_enabled else None,
    )

    # The web shell is served from this same app, so CORS only matters for
    # clients hosted elsewhere.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.security.cors_origins,
        allow_credentials=cfg.security.cors_allow_credentials,
        allow_methods=cfg.security.cors_allow_methods,
        allow_headers=cfg.security.cors_allow_headers,
    )

    if service is None:
        service = TranslationService.from_config(TranslationSessionConfig.from_settings(cfg.gemini))
    controller = ChatController(service=service)
    ingestor = AttachmentIngestor(max_bytes=cfg.attachments.max_bytes)
    speech = get_speech_capability(cfg.features.speech_provider)

    app.state.controller = controller

    register_routes(app, controller, ingestor, speech)
    register_web_routes(app)
    return app


app = create_app()

# ============================================================================
# SERVER STARTUP
# ============================================================================

if __name__ == "__main__":
    # Only runs when this file is executed directly (not when imported)
    import uvicorn

    host = os.getenv("POLYGLOT_HOST", default_config.server.host)
    port = int(os.getenv("POLYGLOT_PORT", default_config.server.port))

    uvicorn.run(app, host=host, port=port)
