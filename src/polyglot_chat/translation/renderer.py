"""Gemini renderer for the translation layer.

``GeminiRenderer`` is a thin, synchronous wrapper around the
``google-genai`` SDK.  It is the only place in the translation layer that
makes a network call.

Sync vs async
-------------
The renderer uses the SDK's synchronous chat API.  The API routes that
reach it are plain ``def`` handlers, which FastAPI runs inside a
thread-pool executor, so a blocking round trip here does not stall the
event loop.  The SDK's ``client.aio`` surface is the upgrade path if the
routes are ever made ``async def``.

Lazy client
-----------
``genai.Client`` refuses to construct without an API key.  The client is
therefore built on first use, so the application (and its web shell) can
start without a key and report the problem as a transport failure on the
first send.

Failure reporting
-----------------
The translation result has to show *why* a call failed, so every
network, SDK or configuration failure is raised as ``RendererError`` with a
human-readable message; the service turns that into a transport-failure
result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

import httpx
from google import genai
from google.genai import errors, types

from polyglot_chat.translation.config import TranslationSessionConfig
from polyglot_chat.translation.prompts import (
    RESPONSE_SCHEMA,
    build_safety_settings,
    build_system_instruction,
)
from polyglot_chat.translation.types import ModelReply

logger = logging.getLogger(__name__)

RESPONSE_MIME_TYPE = "application/json"


class RendererError(Exception):
    """A remote round trip could not be completed."""


def _default_client_factory(config: TranslationSessionConfig) -> genai.Client:
    return genai.Client(
        api_key=config.api_key,
        http_options=types.HttpOptions(timeout=config.timeout_ms),
    )


class GeminiRenderer:
    """Opens chat sessions and sends content parts to Gemini.

    One ``GeminiRenderer`` is created per ``TranslationService`` and reused
    for every session it opens.

    Attributes:
        _config:         Frozen translation config.
        _client_factory: Builds the SDK client; replaced in tests.
        _client:         SDK client, ``None`` until first use.
    """

    def __init__(
        self,
        *,
        config: TranslationSessionConfig,
        client_factory: Callable[[TranslationSessionConfig], Any] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or _default_client_factory
        self._client: Any = None

    @property
    def model(self) -> str:
        return self._config.model

    # ── Session creation ──────────────────────────────────────────────────────

    def build_chat_config(self, target_language: str) -> types.GenerateContentConfig:
        """Session configuration for ``target_language``.

        System instruction with the language appended, JSON response type
        and schema, and permissive safety thresholds.
        """
        return types.GenerateContentConfig(
            system_instruction=build_system_instruction(target_language),
            response_mime_type=RESPONSE_MIME_TYPE,
            response_schema=RESPONSE_SCHEMA,
            safety_settings=build_safety_settings(),
        )

    def create_chat(self, target_language: str) -> Any:
        """Open a new remote chat configured for ``target_language``.

        Raises:
            RendererError: The SDK client could not be built (missing key,
                           bad options).
        """
        client = self._get_client()
        chat = client.chats.create(
            model=self._config.model,
            config=self.build_chat_config(target_language),
        )
        logger.debug(
            "GeminiRenderer: opened chat (model=%s, target=%s)",
            self._config.model,
            target_language,
        )
        return chat

    # ── Primary send method ───────────────────────────────────────────────────

    def send(self, chat: Any, parts: Sequence[types.Part]) -> ModelReply:
        """Send one message on ``chat`` and return the raw reply.

        Args:
            chat:  Chat handle from :meth:`create_chat`.
            parts: Ordered content parts from the request builder.

        Returns:
            The reply text (``None`` when the model produced none) and the
            first candidate's finish reason.

        Raises:
            RendererError: Network failure, timeout, or an error status
                           from the API (auth, quota, bad request).
        """
        try:
            response = chat.send_message(list(parts))
        except errors.APIError as exc:
            logger.error("GeminiRenderer: API error %s: %s", exc.code, exc.message)
            raise RendererError(f"Gemini API error {exc.code}: {exc.message}") from exc
        except httpx.TimeoutException as exc:
            logger.warning(
                "GeminiRenderer: request timed out after %.1fs", self._config.timeout_seconds
            )
            raise RendererError(
                f"Request timed out after {self._config.timeout_seconds:.0f} seconds"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("GeminiRenderer: cannot reach Gemini: %s", exc)
            raise RendererError(f"Cannot reach the Gemini API: {exc}") from exc

        return ModelReply(text=response.text, finish_reason=_finish_reason(response))

    # ── Internal helpers ──────────────────────────────────────────────────────

    def _get_client(self) -> Any:
        if self._client is None:
            if not self._config.has_api_key:
                raise RendererError("Gemini API key is not configured (set GEMINI_API_KEY).")
            try:
                self._client = self._client_factory(self._config)
            except ValueError as exc:
                raise RendererError(f"Cannot create Gemini client: {exc}") from exc
        return self._client


def _finish_reason(response: Any) -> str | None:
    """Finish reason of the first candidate, or the prompt block reason.

    When the prompt itself is blocked there are no candidates at all and
    the reason lives on ``prompt_feedback`` instead.
    """
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        reason = getattr(candidates[0], "finish_reason", None)
    else:
        feedback = getattr(response, "prompt_feedback", None)
        reason = getattr(feedback, "block_reason", None)
    if reason is None:
        return None
    return str(getattr(reason, "value", reason))
