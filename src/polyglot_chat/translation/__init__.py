"""Gemini translation layer for polyglot_chat.

This package takes a user's text and attachments, sends them to a hosted
Gemini model inside a multi-turn chat, and turns the model's JSON reply
into a ``TranslationResult`` the web shell can render.

Architecture
------------
The layer does no linguistic work itself.  Translation, language
detection and tone adaptation are all done remotely; the local code owns
the chat handle, request construction and reply normalisation, and
guarantees that every send produces a fully-populated result.

Package structure
-----------------
types.py            Frozen value types: Attachment, TranslationResult,
                    ChatMessage, ModelReply, TranslationOutcome.
languages.py        Static target-language catalog and quick commands.
prompts.py          System instruction, response schema, safety settings.
config.py           TranslationSessionConfig: model, key and timeout.
request_builder.py  build_request: ordered content parts for one send.
renderer.py         GeminiRenderer: the only network-facing class.
session.py          SessionManager: one live chat, rebuilt on language
                    change or reset.
normalizer.py       normalize: fence stripping, JSON extraction, schema
                    check and placeholder fallbacks.
service.py          TranslationService: orchestrates the above; the
                    single public entry point.

Typical call flow
-----------------
1. ``service.send(text, attachments, target_language="es")``
2. SessionManager returns (or rebuilds) the chat for "Spanish"
3. build_request produces the content parts
4. GeminiRenderer sends them and returns text + finish reason
5. normalize returns a result tagged with its outcome
"""

from polyglot_chat.translation.config import TranslationSessionConfig
from polyglot_chat.translation.service import (
    SendResult,
    TranslationBusyError,
    TranslationService,
)
from polyglot_chat.translation.types import (
    Attachment,
    AttachmentKind,
    ChatMessage,
    MessageRole,
    TranslationOutcome,
    TranslationResult,
)

__all__ = [
    "Attachment",
    "AttachmentKind",
    "ChatMessage",
    "MessageRole",
    "SendResult",
    "TranslationBusyError",
    "TranslationOutcome",
    "TranslationResult",
    "TranslationService",
    "TranslationSessionConfig",
]
