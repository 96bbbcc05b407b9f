"""
Pydantic models for API requests and responses.

This module defines the data models used for communication between the
FastAPI backend and the web shell. Pydantic models provide:
- Automatic request/response validation
- Clear API documentation via FastAPI's automatic OpenAPI schema generation
- Serialization/deserialization to/from JSON

Field names on the translation payload follow the camelCase wire shape the
shell renders (``detectedLanguage``, ``primaryTranslation``,
``culturalNote``). Models are organized into two categories:
1. Request models: Data sent FROM the client TO the server
2. Response models: Data sent FROM the server TO the client
"""

from typing import Literal

from pydantic import BaseModel, Field

from polyglot_chat.translation.types import (
    Attachment,
    ChatMessage,
    TranslationResult,
)

# ============================================================================
# REQUEST MODELS (Client → Server)
# ============================================================================


class AttachmentUpload(BaseModel):
    """
    A file the user selected in the browser.

    Attributes:
        name: Original file name
        mime_type: Media type reported by the browser (``File.type``)
        data: Base64 content, optionally as a ``data:...;base64,`` URL
    """

    name: str
    mime_type: str = ""
    data: str


class SendMessageRequest(BaseModel):
    """
    Request to translate one user message.

    Attributes:
        text: What the user typed (may be empty when attaching files)
        target_language: Catalog code or name; omitted keeps the current one
        attachments: Files in the order the user added them
    """

    text: str = ""
    target_language: str | None = None
    attachments: list[AttachmentUpload] = Field(default_factory=list)


class ChangeLanguageRequest(BaseModel):
    """Request to change the target language for subsequent sends."""

    target_language: str


# ============================================================================
# RESPONSE MODELS (Server → Client)
# ============================================================================


class TonesModel(BaseModel):
    formal: str
    casual: str
    simple: str


class TranslationResultModel(BaseModel):
    """Structured translation as rendered in an assistant message."""

    original: str
    detectedLanguage: str
    primaryTranslation: str
    tones: TonesModel
    alternatives: list[str]
    culturalNote: str
    confidence: str

    @classmethod
    def from_result(cls, result: TranslationResult) -> "TranslationResultModel":
        return cls.model_validate(result.to_dict())


class AttachmentModel(BaseModel):
    kind: Literal["image", "text"]
    payload: str
    mimeType: str
    name: str

    @classmethod
    def from_attachment(cls, attachment: Attachment) -> "AttachmentModel":
        return cls.model_validate(attachment.to_dict())


class ChatMessageModel(BaseModel):
    """
    One conversation entry.

    ``content`` is a string for user messages and a translation for
    assistant messages.
    """

    id: str
    role: Literal["user", "assistant"]
    content: str | TranslationResultModel
    attachments: list[AttachmentModel] = Field(default_factory=list)
    timestamp: int

    @classmethod
    def from_message(cls, message: ChatMessage) -> "ChatMessageModel":
        return cls.model_validate(message.to_dict())


class SendMessageResponse(BaseModel):
    """
    Result of one send.

    Attributes:
        user_message: The message appended for the user's input
        assistant_message: The message appended for the model's reply
        outcome: Which branch produced the reply (``succeeded``,
            ``empty_blocked``, ``parse_failed``, ``schema_invalid``,
            ``transport_failed``)
        target_language: Resolved language name the request used
        session_generation: Remote session that served the request
    """

    user_message: ChatMessageModel
    assistant_message: ChatMessageModel
    outcome: str
    target_language: str
    session_generation: int | None = None


class HistoryResponse(BaseModel):
    messages: list[ChatMessageModel]
    target_language: str


class LanguageModel(BaseModel):
    code: str
    name: str


class LanguagesResponse(BaseModel):
    languages: list[LanguageModel]
    quick_commands: list[str]
    default_language: str


class ChangeLanguageResponse(BaseModel):
    target_language: str


class ClearHistoryResponse(BaseModel):
    success: bool
    message: str


class CapabilitiesResponse(BaseModel):
    provider: str
    speech_input: bool
    speech_output: bool
    max_attachment_bytes: int
