"""Chat session lifecycle.

Exactly one remote chat is live at a time.  It is created lazily on the
first send, rebuilt whenever the target language changes (the language is
baked into the system instruction), and dropped on reset so the next send
starts without any carried-over context.

State lives on a ``SessionManager`` instance owned by the service rather
than in module globals, so each test (and each app instance) gets its own.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslationSession:
    """A live remote chat bound to one target language.

    Attributes:
        chat:            SDK chat handle; carries the accumulated context.
        target_language: Language the system instruction was built for.
        generation:      1 for the first session a manager creates, 2 for
                         the next, and so on.  Distinguishes sessions in
                         logs, the health endpoint and tests.
    """

    chat: Any
    target_language: str
    generation: int


class SessionManager:
    """Owns the single live ``TranslationSession``.

    Args:
        chat_factory: Called with a target language to open a new remote
                      chat.  Normally ``GeminiRenderer.create_chat``.
    """

    def __init__(self, chat_factory: Callable[[str], Any]) -> None:
        self._chat_factory = chat_factory
        self._session: TranslationSession | None = None
        self._generation = 0

    @property
    def current(self) -> TranslationSession | None:
        return self._session

    @property
    def generation(self) -> int:
        """Number of sessions created so far."""
        return self._generation

    def get_or_create(self, target_language: str) -> TranslationSession:
        """Return the live session for ``target_language``.

        A new session replaces the old one when none exists or the
        remembered language differs.  If the factory raises, the previous
        session has already been discarded and the error propagates.
        """
        session = self._session
        if session is not None and session.target_language == target_language:
            return session

        if session is not None:
            logger.debug(
                "SessionManager: target language changed %r -> %r, discarding session %d",
                session.target_language,
                target_language,
                session.generation,
            )
        self._session = None

        chat = self._chat_factory(target_language)
        self._generation += 1
        self._session = TranslationSession(
            chat=chat,
            target_language=target_language,
            generation=self._generation,
        )
        logger.info(
            "SessionManager: started session %d for %s", self._generation, target_language
        )
        return self._session

    def reset(self) -> None:
        """Drop the live session and remembered language unconditionally."""
        if self._session is not None:
            logger.debug("SessionManager: reset session %d", self._session.generation)
        self._session = None
