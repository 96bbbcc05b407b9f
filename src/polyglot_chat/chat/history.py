"""In-memory conversation history.

The history is append-only: messages are never edited or removed one at a
time, only appended or cleared all at once.  Nothing is persisted; a
process restart starts with an empty conversation.
"""

from __future__ import annotations

import threading
import time
import uuid
from collections.abc import Sequence

from polyglot_chat.translation.types import (
    Attachment,
    ChatMessage,
    MessageRole,
    TranslationResult,
)


def _now_ms() -> int:
    return int(time.time() * 1000)


class ChatHistory:
    """Ordered, append-only sequence of ``ChatMessage``."""

    def __init__(self) -> None:
        self._messages: list[ChatMessage] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._messages)

    def messages(self) -> list[ChatMessage]:
        """Snapshot of the conversation, oldest first."""
        with self._lock:
            return list(self._messages)

    def append_user(self, text: str, attachments: Sequence[Attachment] = ()) -> ChatMessage:
        return self._append(MessageRole.USER, text, tuple(attachments))

    def append_assistant(self, result: TranslationResult) -> ChatMessage:
        return self._append(MessageRole.ASSISTANT, result, ())

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()

    def _append(
        self,
        role: MessageRole,
        content: str | TranslationResult,
        attachments: tuple[Attachment, ...],
    ) -> ChatMessage:
        message = ChatMessage(
            id=uuid.uuid4().hex,
            role=role,
            content=content,
            timestamp=_now_ms(),
            attachments=attachments,
        )
        with self._lock:
            self._messages.append(message)
        return message
