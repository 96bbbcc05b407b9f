"""Conversation endpoints (send, history, clear, language).

The send handler is a plain ``def`` so FastAPI runs it in its thread pool;
the Gemini round trip blocks for the duration of the request.
"""

import logging

from fastapi import APIRouter, HTTPException

from polyglot_chat.api.models import (
    ChangeLanguageRequest,
    ChangeLanguageResponse,
    ChatMessageModel,
    ClearHistoryResponse,
    HistoryResponse,
    SendMessageRequest,
    SendMessageResponse,
)
from polyglot_chat.chat.controller import ChatController
from polyglot_chat.services.attachments import AttachmentError, AttachmentIngestor
from polyglot_chat.translation.service import TranslationBusyError

logger = logging.getLogger(__name__)


def router(controller: ChatController, ingestor: AttachmentIngestor) -> APIRouter:
    """Build the chat router with access to the controller and ingestor."""
    api = APIRouter()

    @api.get("/api/chat/history", response_model=HistoryResponse)
    async def get_history():
        """Every message in the conversation, oldest first."""
        return HistoryResponse(
            messages=[ChatMessageModel.from_message(m) for m in controller.history.messages()],
            target_language=controller.target_language,
        )

    @api.post("/api/chat/send", response_model=SendMessageResponse)
    def send_message(request: SendMessageRequest):
        """
        Translate one message.

        Always answers 200 with an assistant message once the request is
        accepted, whatever the model did; ``outcome`` says how it went.
        Rejected up front with 400 for unusable attachments and 409 while
        another send is in flight.
        """
        try:
            attachments = [
                ingestor.ingest_data_url(upload.name, upload.mime_type, upload.data)
                for upload in request.attachments
            ]
        except AttachmentError as exc:
            logger.info("Rejected attachment: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        try:
            exchange = controller.send(request.text, attachments, request.target_language)
        except TranslationBusyError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc

        return SendMessageResponse(
            user_message=ChatMessageModel.from_message(exchange.user_message),
            assistant_message=ChatMessageModel.from_message(exchange.assistant_message),
            outcome=exchange.outcome.value,
            target_language=exchange.target_language,
            session_generation=exchange.session_generation,
        )

    @api.post("/api/chat/clear", response_model=ClearHistoryResponse)
    def clear_history():
        """Reset the remote session and empty the conversation."""
        try:
            controller.clear()
        except TranslationBusyError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return ClearHistoryResponse(success=True, message="Conversation cleared.")

    @api.post("/api/chat/language", response_model=ChangeLanguageResponse)
    async def change_language(request: ChangeLanguageRequest):
        """Set the target language; the session is rebuilt on the next send."""
        if not request.target_language.strip():
            raise HTTPException(status_code=400, detail="Target language is required")
        return ChangeLanguageResponse(
            target_language=controller.change_language(request.target_language)
        )

    return api
