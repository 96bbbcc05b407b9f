"""Translation layer configuration.

``TranslationSessionConfig`` is a frozen dataclass holding the settings
the renderer needs to open chat sessions against Gemini.  It is derived
once from the server-level ``GeminiSettings`` when the application is
built and never mutated at runtime.

Configuration precedence
------------------------
The values come from :mod:`polyglot_chat.config`, which already applies
environment > ``config/server.ini`` > defaults.  ``from_dict`` exists for
tests and for the CLI, where a partial mapping is enough; missing keys
fall back to the same defaults as ``GeminiSettings``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from polyglot_chat.config import GeminiSettings

_DEFAULT_MODEL = "gemini-3-flash-preview"
_DEFAULT_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True)
class TranslationSessionConfig:
    """Immutable settings for the Gemini-backed translation layer.

    Attributes:
        api_key:         Gemini API key.  May be empty; the renderer then
                         reports a transport failure on the first send
                         instead of failing at start-up.
        model:           Gemini model name used for every chat session.
        timeout_seconds: HTTP timeout for a single round trip.  Expiry is
                         treated as a transport failure.
    """

    api_key: str
    model: str
    timeout_seconds: float

    @property
    def timeout_ms(self) -> int:
        """Timeout in milliseconds, the unit ``HttpOptions`` expects."""
        return int(self.timeout_seconds * 1000)

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())

    @classmethod
    def from_settings(cls, settings: GeminiSettings) -> TranslationSessionConfig:
        """Build from the ``gemini`` section of the server configuration."""
        return cls(
            api_key=settings.api_key,
            model=settings.model,
            timeout_seconds=float(settings.timeout_seconds),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TranslationSessionConfig:
        """Parse a plain mapping; missing fields fall back to defaults."""
        return cls(
            api_key=str(data.get("api_key", "")),
            model=str(data.get("model", _DEFAULT_MODEL)),
            timeout_seconds=float(data.get("timeout_seconds", _DEFAULT_TIMEOUT_SECONDS)),
        )
