"""Translation service: the single public entry point of the layer.

``TranslationService`` orchestrates the other translation modules for one
user send:

1. ``resolve_target_language`` maps the client's choice to a display name.
2. ``SessionManager`` returns the live chat, rebuilding it on a language
   change.
3. ``build_request`` assembles the ordered content parts.
4. ``GeminiRenderer`` performs exactly one remote round trip.
5. ``normalize`` turns the reply into a ``TranslationResult``.

Failure contract
----------------
``send`` never raises for remote or content problems.  Empty replies,
malformed JSON, schema violations and transport failures all come back as
a ``SendResult`` whose ``result`` is fully populated and whose ``outcome``
says which branch produced it.  There is no retry loop.

The only exception ``send`` raises is ``TranslationBusyError``, when a
second send arrives while one is still outstanding.  The session state is
the one shared mutable resource and the language check in step 2 would
race, so only one request may be in flight.  The web shell disables input
while waiting; the API maps the error to HTTP 409 for any client that
does not.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

from polyglot_chat.translation.config import TranslationSessionConfig
from polyglot_chat.translation.languages import resolve_target_language
from polyglot_chat.translation.normalizer import normalize, transport_failure
from polyglot_chat.translation.renderer import GeminiRenderer, RendererError
from polyglot_chat.translation.request_builder import build_request
from polyglot_chat.translation.session import SessionManager
from polyglot_chat.translation.types import (
    Attachment,
    NormalizedReply,
    TranslationOutcome,
    TranslationResult,
)

logger = logging.getLogger(__name__)


class TranslationBusyError(RuntimeError):
    """A send was attempted while another is still in flight."""


@dataclass(frozen=True)
class SendResult:
    """Outcome of ``TranslationService.send``.

    Attributes:
        result:             Always-valid translation result.
        outcome:            Which normalisation branch produced it.
        target_language:    Resolved display name the request used.
        session_generation: Generation of the session that served the
                            request, or ``None`` if no session could be
                            opened.
    """

    result: TranslationResult
    outcome: TranslationOutcome
    target_language: str
    session_generation: int | None


class TranslationService:
    """Orchestrates session lookup, request building, rendering and normalisation.

    One instance is created per application and shared by every route.

    Attributes:
        _renderer: Calls the Gemini API.
        _sessions: Owns the live chat session.
        _lock:     Re-entrant lock enforcing a single in-flight send.
        _depth:    Nesting depth of ``exclusive()`` holders; non-zero means
                   a send is outstanding.
    """

    def __init__(
        self,
        *,
        renderer: GeminiRenderer,
        session_manager: SessionManager | None = None,
    ) -> None:
        self._renderer = renderer
        self._sessions = session_manager or SessionManager(renderer.create_chat)
        self._lock = threading.RLock()
        self._depth = 0

    @classmethod
    def from_config(cls, config: TranslationSessionConfig) -> TranslationService:
        """Build a service backed by a real ``GeminiRenderer``."""
        return cls(renderer=GeminiRenderer(config=config))

    # ── State ─────────────────────────────────────────────────────────────────

    @property
    def sessions(self) -> SessionManager:
        return self._sessions

    @property
    def busy(self) -> bool:
        """True while a send is outstanding."""
        return self._depth > 0

    @contextmanager
    def exclusive(self) -> Iterator[None]:
        """Hold the in-flight slot for the duration of the block.

        Re-entrant for the holding thread, so a caller that needs to do
        bookkeeping around ``send`` (the chat controller appending the
        user message) can claim the slot first and then call ``send``.

        Raises:
            TranslationBusyError: Another thread holds the slot.
        """
        if not self._lock.acquire(blocking=False):
            raise TranslationBusyError("A translation request is already in progress.")
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
            self._lock.release()

    def reset_session(self) -> None:
        """Forget the remote conversation; the next send starts fresh."""
        self._sessions.reset()

    # ── Primary send method ───────────────────────────────────────────────────

    def send(
        self,
        text: str,
        attachments: Sequence[Attachment] = (),
        target_language: str | None = None,
    ) -> SendResult:
        """Translate one user message.

        Args:
            text:            What the user typed (may be empty).
            attachments:     Ingested attachments, in the order added.
            target_language: Catalog code, catalog name, or free-form
                             language name.  Blank means the default.

        Returns:
            A ``SendResult``; never a bare error.

        Raises:
            TranslationBusyError: Another send is in flight.
        """
        with self.exclusive():
            target = resolve_target_language(target_language)
            normalized = self._round_trip(text, attachments, target)
            session = self._sessions.current

        if normalized.outcome.is_success:
            logger.debug("TranslationService: translated to %s", target)
        else:
            logger.warning(
                "TranslationService: send to %s finished as %s (%s)",
                target,
                normalized.outcome.value,
                normalized.detail,
            )
        return SendResult(
            result=normalized.result,
            outcome=normalized.outcome,
            target_language=target,
            session_generation=session.generation if session else None,
        )

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _round_trip(
        self,
        text: str,
        attachments: Sequence[Attachment],
        target: str,
    ) -> NormalizedReply:
        try:
            session = self._sessions.get_or_create(target)
            parts = build_request(text, attachments, target)
            reply = self._renderer.send(session.chat, parts)
        except (RendererError, ValueError) as exc:
            return transport_failure(text, exc)
        except Exception as exc:
            # Anything the SDK raises beyond its documented errors still has
            # to reach the user as a result, not a 500.
            logger.exception("TranslationService: unexpected failure during send")
            return transport_failure(text, exc)
        return normalize(reply.text, text, reply.finish_reason)
