"""
Speech capability abstraction.

Speech-to-text (dictating into the input box) and text-to-speech (reading
a translation aloud) are optional, host-provided features. The server
never probes for them; it is configured with one ``SpeechCapability`` and
reports it through ``GET /api/capabilities``. The web shell then decides
whether to show the microphone and speaker buttons.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SpeechUnsupportedError(RuntimeError):
    """The configured capability cannot perform the requested operation."""


class SpeechCapability(ABC):
    """Interface every speech provider implements."""

    name: str = "abstract"

    @property
    @abstractmethod
    def supports_input(self) -> bool:
        """True when dictation (speech-to-text) is available."""

    @property
    @abstractmethod
    def supports_output(self) -> bool:
        """True when read-aloud (text-to-speech) is available."""

    def synthesize(self, text: str, language_code: str) -> bytes:
        """Render ``text`` as audio on the server.

        Hook for a server-side text-to-speech provider.  Neither built-in
        provider synthesises on the server: ``BrowserSpeech`` leaves it to
        the Web Speech API and ``UnsupportedSpeech`` has no output at all.

        Raises:
            SpeechUnsupportedError: Server-side synthesis is not available.
        """
        raise SpeechUnsupportedError(f"{self.name} speech does not synthesise on the server.")

    def describe(self) -> dict[str, object]:
        return {
            "provider": self.name,
            "speech_input": self.supports_input,
            "speech_output": self.supports_output,
        }


class UnsupportedSpeech(SpeechCapability):
    """No speech features at all; the shell hides both buttons."""

    name = "unsupported"

    @property
    def supports_input(self) -> bool:
        return False

    @property
    def supports_output(self) -> bool:
        return False


class BrowserSpeech(SpeechCapability):
    """Speech handled entirely in the browser (Web Speech API).

    Advertises both features so the shell offers them; the browser does
    the work, so there is nothing to synthesise server-side.
    """

    name = "browser"

    @property
    def supports_input(self) -> bool:
        return True

    @property
    def supports_output(self) -> bool:
        return True


def get_speech_capability(name: str) -> SpeechCapability:
    """Return the capability registered under ``name``.

    Unknown names resolve to ``UnsupportedSpeech``.
    """
    if name.strip().lower() == BrowserSpeech.name:
        return BrowserSpeech()
    return UnsupportedSpeech()
