"""Value types shared across the translation layer.

All types here are frozen dataclasses: attachments, messages and results
are created once and never mutated.  ``to_dict()`` methods produce the
camelCase wire shape the web shell renders (``detectedLanguage``,
``primaryTranslation``, ``culturalNote``), which is also the shape the
remote model is asked to return.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AttachmentKind(str, Enum):
    """How an attachment is forwarded to the model."""

    IMAGE = "image"
    TEXT = "text"


class MessageRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class TranslationOutcome(str, Enum):
    """Terminal state of a single send.

    Every outcome still carries a fully-populated ``TranslationResult``;
    the tag only records which branch produced it.
    """

    SUCCEEDED = "succeeded"
    EMPTY_BLOCKED = "empty_blocked"
    PARSE_FAILED = "parse_failed"
    SCHEMA_INVALID = "schema_invalid"
    TRANSPORT_FAILED = "transport_failed"

    @property
    def is_success(self) -> bool:
        return self is TranslationOutcome.SUCCEEDED


@dataclass(frozen=True)
class Attachment:
    """A user-supplied file included with a translation request.

    Attributes:
        kind:      ``IMAGE`` or ``TEXT``.
        payload:   Base64 text (no data-URL prefix) for images; decoded
                   file content for text.
        mime_type: Declared media type, e.g. ``"image/png"``.
        name:      Original file name, for display only.
    """

    kind: AttachmentKind
    payload: str
    mime_type: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "payload": self.payload,
            "mimeType": self.mime_type,
            "name": self.name,
        }


@dataclass(frozen=True)
class Tones:
    """The three tone variants of one translation."""

    formal: str
    casual: str
    simple: str

    @classmethod
    def filled(cls, value: str) -> Tones:
        """All three variants set to the same placeholder."""
        return cls(formal=value, casual=value, simple=value)

    def to_dict(self) -> dict[str, str]:
        return {"formal": self.formal, "casual": self.casual, "simple": self.simple}


@dataclass(frozen=True)
class TranslationResult:
    """Structured reply rendered as one assistant message.

    Produced only by :mod:`polyglot_chat.translation.normalizer`.  On
    failure paths the fields hold placeholder values ("-", "Unknown",
    "0%", "Not available", "Low") so the renderer never sees a partial
    structure.
    """

    original: str
    detected_language: str
    primary_translation: str
    tones: Tones
    alternatives: tuple[str, ...] = ()
    cultural_note: str = "None"
    confidence: str = "0%"

    def to_dict(self) -> dict[str, Any]:
        return {
            "original": self.original,
            "detectedLanguage": self.detected_language,
            "primaryTranslation": self.primary_translation,
            "tones": self.tones.to_dict(),
            "alternatives": list(self.alternatives),
            "culturalNote": self.cultural_note,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class ModelReply:
    """Raw outcome of one remote round trip.

    Attributes:
        text:          Model text, or ``None`` when the model produced
                       nothing (usually a safety block).
        finish_reason: Finish reason of the first candidate as a string,
                       e.g. ``"STOP"`` or ``"SAFETY"``; ``None`` if absent.
    """

    text: str | None
    finish_reason: str | None = None


@dataclass(frozen=True)
class NormalizedReply:
    """Tagged result of normalisation, flattened to ``result`` at the edge.

    Attributes:
        result:  Always-valid translation result.
        outcome: Which branch produced it.
        detail:  Short diagnostic for logs (finish reason, parse error,
                 transport error); empty on success.
    """

    result: TranslationResult
    outcome: TranslationOutcome
    detail: str = ""


@dataclass(frozen=True)
class ChatMessage:
    """One entry in the conversation.

    ``content`` is the user's text for ``USER`` messages and a
    ``TranslationResult`` for ``ASSISTANT`` messages.
    """

    id: str
    role: MessageRole
    content: str | TranslationResult
    timestamp: int
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        content = (
            self.content.to_dict()
            if isinstance(self.content, TranslationResult)
            else self.content
        )
        return {
            "id": self.id,
            "role": self.role.value,
            "content": content,
            "attachments": [attachment.to_dict() for attachment in self.attachments],
            "timestamp": self.timestamp,
        }
