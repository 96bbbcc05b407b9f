"""API route registration."""

from fastapi import FastAPI

from polyglot_chat.api.routes import chat, health, languages
from polyglot_chat.chat.controller import ChatController
from polyglot_chat.services.attachments import AttachmentIngestor
from polyglot_chat.services.speech import SpeechCapability


def register_routes(
    app: FastAPI,
    controller: ChatController,
    ingestor: AttachmentIngestor,
    speech: SpeechCapability,
) -> None:
    """Register all API routes with the FastAPI app."""
    app.include_router(health.router(controller))
    app.include_router(languages.router(speech, ingestor))
    app.include_router(chat.router(controller, ingestor))
