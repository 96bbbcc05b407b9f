"""Unit tests for request assembly."""

import base64

import pytest

from polyglot_chat.translation.request_builder import FALLBACK_GREETING, build_request
from polyglot_chat.translation.types import Attachment, AttachmentKind

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"


def _image(name="photo.png"):
    return Attachment(
        kind=AttachmentKind.IMAGE,
        payload=base64.b64encode(PNG_BYTES).decode("ascii"),
        mime_type="image/png",
        name=name,
    )


def _text(content="Bonjour", name="note.txt"):
    return Attachment(kind=AttachmentKind.TEXT, payload=content, mime_type="text/plain", name=name)


@pytest.mark.unit
class TestBuildRequest:
    def test_text_only(self):
        parts = build_request("Good morning", [], "Spanish")
        assert len(parts) == 1
        assert parts[0].text == "Translate to Spanish: Good morning"

    def test_nothing_sends_fallback_greeting(self):
        parts = build_request("", [], "Spanish")
        assert len(parts) == 1
        assert parts[0].text == FALLBACK_GREETING

    def test_whitespace_text_counts_as_empty(self):
        parts = build_request("   ", [], "French")
        assert [p.text for p in parts] == [FALLBACK_GREETING]

    def test_attachment_only_gets_file_instruction(self):
        parts = build_request("", [_text()], "German")
        assert parts[0].text == "Translate the content of this file to German."
        assert parts[1].text == "\n[File Content]: Bonjour"

    def test_image_becomes_inline_bytes(self):
        parts = build_request("What does this say?", [_image()], "English")
        assert len(parts) == 2
        assert parts[1].inline_data.data == PNG_BYTES
        assert parts[1].inline_data.mime_type == "image/png"

    def test_attachment_order_preserved(self):
        parts = build_request("hi", [_text("first"), _image(), _text("second")], "English")
        assert parts[0].text.startswith("Translate to English")
        assert parts[1].text.endswith("first")
        assert parts[2].inline_data is not None
        assert parts[3].text.endswith("second")

    def test_text_instruction_keeps_original_spacing(self):
        parts = build_request("  hola  ", [], "English")
        assert parts[0].text == "Translate to English:   hola  "

    def test_bad_image_payload_raises(self):
        bad = Attachment(
            kind=AttachmentKind.IMAGE, payload="not base64!!", mime_type="image/png", name="x.png"
        )
        with pytest.raises(ValueError, match="x.png"):
            build_request("", [bad], "English")
