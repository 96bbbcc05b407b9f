"""Unit tests for the speech capability providers."""

import pytest

from polyglot_chat.services.speech import (
    BrowserSpeech,
    SpeechUnsupportedError,
    UnsupportedSpeech,
    get_speech_capability,
)


@pytest.mark.unit
class TestProviders:
    def test_unsupported_reports_nothing(self):
        assert UnsupportedSpeech().describe() == {
            "provider": "unsupported",
            "speech_input": False,
            "speech_output": False,
        }

    def test_browser_reports_both(self):
        described = BrowserSpeech().describe()
        assert described["provider"] == "browser"
        assert described["speech_input"] is True
        assert described["speech_output"] is True

    @pytest.mark.parametrize("provider", [UnsupportedSpeech(), BrowserSpeech()])
    def test_server_synthesis_unavailable(self, provider):
        with pytest.raises(SpeechUnsupportedError):
            provider.synthesize("hola", "es")

    def test_server_provider_overrides_synthesis(self):
        class ServerSpeech(BrowserSpeech):
            name = "server"

            def synthesize(self, text, language_code):
                return f"{language_code}:{text}".encode()

        assert ServerSpeech().synthesize("hola", "es") == b"es:hola"


@pytest.mark.unit
class TestRegistry:
    @pytest.mark.parametrize("name", ["browser", " Browser "])
    def test_browser(self, name):
        assert isinstance(get_speech_capability(name), BrowserSpeech)

    @pytest.mark.parametrize("name", ["unsupported", "", "azure"])
    def test_everything_else_unsupported(self, name):
        assert isinstance(get_speech_capability(name), UnsupportedSpeech)
