"""Conversation controller used by the API routes.

``ChatController`` binds a ``ChatHistory`` to a ``TranslationService`` and
owns the user's current target language.  It implements the three user
commands:

- **send**: append the user message, translate, append the assistant
  message.  Every send yields exactly one assistant message.
- **clear**: reset the remote session and empty the history.
- **change language**: remember the new language; the session is rebuilt
  lazily on the next send.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from polyglot_chat.chat.history import ChatHistory
from polyglot_chat.translation.languages import DEFAULT_TARGET_LANGUAGE, resolve_target_language
from polyglot_chat.translation.normalizer import transport_failure
from polyglot_chat.translation.service import SendResult, TranslationService
from polyglot_chat.translation.types import Attachment, ChatMessage, TranslationOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExchangeResult:
    """The pair of messages one send appended, plus how it finished."""

    user_message: ChatMessage
    assistant_message: ChatMessage
    outcome: TranslationOutcome
    target_language: str
    session_generation: int | None


class ChatController:
    """Single-conversation front door over history and translation."""

    def __init__(
        self,
        *,
        service: TranslationService,
        history: ChatHistory | None = None,
        target_language: str = DEFAULT_TARGET_LANGUAGE,
    ) -> None:
        self._service = service
        self._history = history or ChatHistory()
        self._target_language = resolve_target_language(target_language)

    @property
    def service(self) -> TranslationService:
        return self._service

    @property
    def history(self) -> ChatHistory:
        return self._history

    @property
    def target_language(self) -> str:
        return self._target_language

    def change_language(self, target_language: str) -> str:
        """Remember a new target language and return its resolved name."""
        self._target_language = resolve_target_language(target_language)
        logger.info("ChatController: target language set to %s", self._target_language)
        return self._target_language

    def send(
        self,
        text: str,
        attachments: Sequence[Attachment] = (),
        target_language: str | None = None,
    ) -> ExchangeResult:
        """Run one exchange.

        ``target_language``, when given, also becomes the remembered
        language.  The user message is only appended once the in-flight
        slot is held, so a rejected send leaves the history untouched.

        Raises:
            TranslationBusyError: Another send is outstanding.
        """
        with self._service.exclusive():
            if target_language:
                self.change_language(target_language)
            user_message = self._history.append_user(text, attachments)
            sent = self._translate(text, attachments)
            assistant_message = self._history.append_assistant(sent.result)

        return ExchangeResult(
            user_message=user_message,
            assistant_message=assistant_message,
            outcome=sent.outcome,
            target_language=sent.target_language,
            session_generation=sent.session_generation,
        )

    def _translate(self, text: str, attachments: Sequence[Attachment]) -> SendResult:
        # Never raises: the user message is already in the history.
        target = self._target_language
        try:
            return self._service.send(text, attachments, target)
        except Exception as exc:
            logger.exception("ChatController: translation raised, recording as failure")
            failed = transport_failure(text, exc)
            session = self._service.sessions.current
            return SendResult(
                result=failed.result,
                outcome=failed.outcome,
                target_language=target,
                session_generation=session.generation if session else None,
            )

    def clear(self) -> None:
        """Start over: new remote conversation, empty history.

        Raises:
            TranslationBusyError: A send is outstanding; its reply would
                                  otherwise land in the cleared history.
        """
        with self._service.exclusive():
            self._service.reset_session()
            self._history.clear()
        logger.info("ChatController: history cleared")
