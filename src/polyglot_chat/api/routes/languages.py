"""Language catalog and capability endpoints."""

from fastapi import APIRouter

from polyglot_chat.api.models import (
    CapabilitiesResponse,
    LanguageModel,
    LanguagesResponse,
)
from polyglot_chat.services.attachments import AttachmentIngestor
from polyglot_chat.services.speech import SpeechCapability
from polyglot_chat.translation.languages import (
    DEFAULT_TARGET_LANGUAGE,
    LANGUAGES,
    QUICK_COMMANDS,
)


def router(speech: SpeechCapability, ingestor: AttachmentIngestor) -> APIRouter:
    """Build the catalog router."""
    api = APIRouter()

    @api.get("/api/languages", response_model=LanguagesResponse)
    async def list_languages():
        """Target-language catalog and quick follow-up commands."""
        return LanguagesResponse(
            languages=[LanguageModel(**option.to_dict()) for option in LANGUAGES],
            quick_commands=list(QUICK_COMMANDS),
            default_language=DEFAULT_TARGET_LANGUAGE,
        )

    @api.get("/api/capabilities", response_model=CapabilitiesResponse)
    async def capabilities():
        """Optional client features the shell may enable."""
        return CapabilitiesResponse(
            **speech.describe(),
            max_attachment_bytes=ingestor.max_bytes,
        )

    return api
