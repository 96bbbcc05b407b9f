"""Build the ordered content parts for one translation request."""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Sequence

from google.genai import types

from polyglot_chat.translation.types import Attachment, AttachmentKind

logger = logging.getLogger(__name__)

# Sent when the user submits neither text nor attachments; the remote call
# must never be issued with zero parts.
FALLBACK_GREETING = "Hello"


def build_request(
    text: str,
    attachments: Sequence[Attachment],
    target_language: str,
) -> list[types.Part]:
    """Return the content parts for a single send, in order.

    1. An instruction part: ``"Translate to {target}: {text}"`` when text
       is non-empty, otherwise a generic "translate this file" instruction
       when attachments exist.
    2. One part per attachment, in the order the user added them: inline
       binary for images, an embedded ``[File Content]`` block for text.
    3. If there is nothing at all, a single ``FALLBACK_GREETING`` part.

    Args:
        text:            User text; surrounding whitespace is ignored when
                         deciding whether it is empty.
        attachments:     Attachments produced by the ingestor.
        target_language: Display name of the target language.

    Returns:
        A non-empty list of ``google.genai.types.Part``.
    """
    parts: list[types.Part] = []

    if text and text.strip():
        parts.append(types.Part.from_text(text=f"Translate to {target_language}: {text}"))
    elif attachments:
        parts.append(
            types.Part.from_text(
                text=f"Translate the content of this file to {target_language}."
            )
        )

    for attachment in attachments:
        if attachment.kind is AttachmentKind.IMAGE:
            parts.append(
                types.Part.from_bytes(
                    data=_decode_image_payload(attachment),
                    mime_type=attachment.mime_type,
                )
            )
        elif attachment.kind is AttachmentKind.TEXT:
            parts.append(types.Part.from_text(text=f"\n[File Content]: {attachment.payload}"))

    if not parts:
        parts.append(types.Part.from_text(text=FALLBACK_GREETING))

    return parts


def _decode_image_payload(attachment: Attachment) -> bytes:
    """Decode an image attachment's base64 payload to raw bytes.

    The ingestor validates base64 on the way in, so a failure here means an
    attachment was built by hand with bad data.
    """
    try:
        return base64.b64decode(attachment.payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        logger.error("request_builder: image %r has an invalid payload", attachment.name)
        raise ValueError(f"Attachment {attachment.name!r} is not valid base64") from exc
