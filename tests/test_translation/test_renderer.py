"""Unit tests for GeminiRenderer."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import pytest
from google.genai import errors, types

from polyglot_chat.translation.config import TranslationSessionConfig
from polyglot_chat.translation.prompts import RESPONSE_SCHEMA
from polyglot_chat.translation.renderer import GeminiRenderer, RendererError, _finish_reason

MODEL = "gemini-test"


@pytest.fixture
def config():
    return TranslationSessionConfig(api_key="test-key", model=MODEL, timeout_seconds=10.0)


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def renderer(config, client):
    return GeminiRenderer(config=config, client_factory=lambda cfg: client)


def _response(text, finish_reason="STOP"):
    candidate = SimpleNamespace(finish_reason=types.FinishReason(finish_reason))
    return SimpleNamespace(text=text, candidates=[candidate], prompt_feedback=None)


class TestCreateChat:
    def test_uses_configured_model(self, renderer, client):
        renderer.create_chat("Spanish")
        kwargs = client.chats.create.call_args.kwargs
        assert kwargs["model"] == MODEL

    def test_system_instruction_names_target(self, renderer, client):
        renderer.create_chat("Japanese")
        chat_config = client.chats.create.call_args.kwargs["config"]
        assert "Current Target Language: Japanese." in str(chat_config.system_instruction)

    def test_json_response_with_schema(self, renderer):
        chat_config = renderer.build_chat_config("Spanish")
        assert chat_config.response_mime_type == "application/json"
        assert chat_config.response_schema == RESPONSE_SCHEMA

    def test_safety_thresholds_disabled(self, renderer):
        chat_config = renderer.build_chat_config("Spanish")
        assert chat_config.safety_settings
        assert all(
            s.threshold == types.HarmBlockThreshold.BLOCK_NONE
            for s in chat_config.safety_settings
        )

    def test_client_built_once(self, config, client):
        factory = MagicMock(return_value=client)
        renderer = GeminiRenderer(config=config, client_factory=factory)
        renderer.create_chat("Spanish")
        renderer.create_chat("French")
        factory.assert_called_once_with(config)

    def test_missing_api_key(self, client):
        config = TranslationSessionConfig(api_key="  ", model=MODEL, timeout_seconds=1)
        factory = MagicMock(return_value=client)
        renderer = GeminiRenderer(config=config, client_factory=factory)
        with pytest.raises(RendererError, match="GEMINI_API_KEY"):
            renderer.create_chat("Spanish")
        factory.assert_not_called()

    def test_client_construction_error_wrapped(self, config):
        renderer = GeminiRenderer(
            config=config, client_factory=MagicMock(side_effect=ValueError("bad options"))
        )
        with pytest.raises(RendererError, match="bad options"):
            renderer.create_chat("Spanish")


class TestSend:
    def test_returns_text_and_finish_reason(self, renderer):
        chat = MagicMock()
        chat.send_message.return_value = _response('{"a": 1}')
        reply = renderer.send(chat, [types.Part.from_text(text="hi")])
        assert reply.text == '{"a": 1}'
        assert reply.finish_reason == "STOP"

    def test_parts_forwarded_as_list(self, renderer):
        chat = MagicMock()
        chat.send_message.return_value = _response("ok")
        parts = (types.Part.from_text(text="a"), types.Part.from_text(text="b"))
        renderer.send(chat, parts)
        (sent,), _ = chat.send_message.call_args
        assert [p.text for p in sent] == ["a", "b"]

    def test_empty_text_passed_through(self, renderer):
        chat = MagicMock()
        chat.send_message.return_value = _response(None, "SAFETY")
        reply = renderer.send(chat, [])
        assert reply.text is None
        assert reply.finish_reason == "SAFETY"

    def test_api_error(self, renderer):
        chat = MagicMock()
        chat.send_message.side_effect = errors.APIError(
            429, {"error": {"message": "quota exceeded", "status": "RESOURCE_EXHAUSTED"}}
        )
        with pytest.raises(RendererError, match="429"):
            renderer.send(chat, [])

    def test_timeout(self, renderer):
        chat = MagicMock()
        chat.send_message.side_effect = httpx.ReadTimeout("slow")
        with pytest.raises(RendererError, match="timed out"):
            renderer.send(chat, [])

    def test_connection_error(self, renderer):
        chat = MagicMock()
        chat.send_message.side_effect = httpx.ConnectError("refused")
        with pytest.raises(RendererError, match="Cannot reach"):
            renderer.send(chat, [])


class TestFinishReason:
    def test_from_first_candidate(self):
        assert _finish_reason(_response("x", "MAX_TOKENS")) == "MAX_TOKENS"

    def test_prompt_block_reason_when_no_candidates(self):
        feedback = SimpleNamespace(block_reason=types.BlockedReason.SAFETY)
        response = SimpleNamespace(text=None, candidates=None, prompt_feedback=feedback)
        assert _finish_reason(response) == "SAFETY"

    def test_none_when_unreported(self):
        response = SimpleNamespace(text=None, candidates=[], prompt_feedback=None)
        assert _finish_reason(response) is None

    def test_plain_string_reason(self):
        response = SimpleNamespace(candidates=[SimpleNamespace(finish_reason="OTHER")])
        assert _finish_reason(response) == "OTHER"
