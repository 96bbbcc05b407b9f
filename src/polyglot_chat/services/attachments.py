"""
Attachment ingestion for user-selected files.

Why this module exists:
    The translation core never reads files itself. Every file, whether it
    arrives as a browser upload (a base64 data URL) or a local path from the
    CLI, passes through ``AttachmentIngestor`` and comes out as an immutable
    ``Attachment`` with a known kind and a transportable payload.

Accepted types:
    - any ``image/*`` media type: payload is base64 text, no data-URL prefix
    - ``text/plain`` or a ``.txt`` file name: payload is the decoded text

The size limit is enforced here, on the raw bytes, before anything is sent
to the model.
"""

from __future__ import annotations

import base64
import binascii
import logging
import mimetypes
import re
from pathlib import Path

from polyglot_chat.translation.types import Attachment, AttachmentKind

logger = logging.getLogger(__name__)

# data:<mime>[;param...];base64,<payload>
_DATA_URL_PREFIX = re.compile(r"^data:[^,]*?;base64,", re.IGNORECASE)


class AttachmentError(ValueError):
    """A user-selected file cannot be attached."""


class UnsupportedAttachmentError(AttachmentError):
    """The file is neither an image nor plain text."""


class AttachmentTooLargeError(AttachmentError):
    """The file exceeds the configured size limit."""


class AttachmentIngestor:
    """
    Turns raw uploads into ``Attachment`` values.

    Args:
        max_bytes: Largest accepted file size, in raw (decoded) bytes.
                   ``0`` disables the limit.
    """

    def __init__(self, *, max_bytes: int) -> None:
        self._max_bytes = max_bytes

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def classify(self, mime_type: str, name: str = "") -> AttachmentKind:
        """
        Decide how a file is forwarded to the model from its media type.

        Raises:
            UnsupportedAttachmentError: Neither image nor plain text.
        """
        media = (mime_type or "").split(";", 1)[0].strip().lower()
        if media.startswith("image/"):
            return AttachmentKind.IMAGE
        if media == "text/plain" or name.lower().endswith(".txt"):
            return AttachmentKind.TEXT
        raise UnsupportedAttachmentError(
            f"Unsupported file type {mime_type or 'unknown'!r} for {name or 'attachment'!r}; "
            "only images and .txt files can be attached."
        )

    def ingest_bytes(self, name: str, mime_type: str, data: bytes) -> Attachment:
        """
        Build an attachment from raw file bytes.

        Raises:
            UnsupportedAttachmentError: Unsupported media type.
            AttachmentTooLargeError: ``data`` exceeds ``max_bytes``.
        """
        kind = self.classify(mime_type, name)
        if self._max_bytes and len(data) > self._max_bytes:
            raise AttachmentTooLargeError(
                f"{name!r} is {len(data)} bytes; the limit is {self._max_bytes} bytes."
            )

        if kind is AttachmentKind.IMAGE:
            payload = base64.b64encode(data).decode("ascii")
        else:
            payload = data.decode("utf-8", errors="replace")
            mime_type = mime_type or "text/plain"

        logger.debug("AttachmentIngestor: accepted %s %r (%d bytes)", kind.value, name, len(data))
        return Attachment(kind=kind, payload=payload, mime_type=mime_type, name=name)

    def ingest_data_url(self, name: str, mime_type: str, data: str) -> Attachment:
        """
        Build an attachment from a browser upload.

        ``data`` is base64, optionally prefixed ``data:<mime>;base64,`` as
        produced by ``FileReader.readAsDataURL``; the prefix is stripped.

        Raises:
            AttachmentError: ``data`` is not valid base64, or any error from
                             :meth:`ingest_bytes`.
        """
        encoded = _DATA_URL_PREFIX.sub("", data.strip(), count=1)
        try:
            raw = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise AttachmentError(f"{name!r} is not valid base64 data.") from exc
        return self.ingest_bytes(name, mime_type, raw)

    def ingest_path(self, path: Path | str) -> Attachment:
        """
        Build an attachment from a local file (CLI use).

        The media type is guessed from the file name.

        Raises:
            AttachmentError: Unsupported type or over the size limit.
            OSError: The file cannot be read.
        """
        file_path = Path(path)
        mime_type, _ = mimetypes.guess_type(file_path.name)
        return self.ingest_bytes(file_path.name, mime_type or "", file_path.read_bytes())
