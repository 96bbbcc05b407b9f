"""Response normaliser for the translation layer.

Turns whatever the model sent back into a fully-populated
``TranslationResult``.  Nothing in this module raises: every failure mode
is mapped to the same result shape with placeholder values, tagged with a
``TranslationOutcome`` so callers and logs can tell the branches apart.

Normalisation pipeline (each step may terminate)
-------------------------------------------------
1. **Empty output**: no text at all, usually a safety block.  The finish
   reason is surfaced in ``primary_translation``.
2. **Fence stripping**: the model is told not to wrap JSON in markdown
   fences but sometimes does.  A leading ```` ```json ```` or bare
   ```` ``` ```` and a trailing ```` ``` ```` are removed.
3. **Brace extraction**: slice from the first ``{`` to the last ``}`` so
   chatty preambles ("Sure! ...") and sign-offs are dropped.
4. **Parse + schema check**: ``json.loads`` followed by pydantic
   validation of the required keys.  Success returns the model's values.
5. **Parse failure**: the fence-stripped raw text becomes the primary
   translation so the user still sees something.  JSON that parses but
   fails the schema check takes the same branch, tagged
   ``SCHEMA_INVALID``.

Transport failures never reach ``normalize``; the service maps them with
:func:`transport_failure`.
"""

from __future__ import annotations

import json
import logging
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from polyglot_chat.translation.types import (
    NormalizedReply,
    Tones,
    TranslationOutcome,
    TranslationResult,
)

logger = logging.getLogger(__name__)

# Placeholder values used on failure branches.
UNKNOWN = "Unknown"
NO_TONE = "-"
TONE_NOT_AVAILABLE = "Not available"
ZERO_CONFIDENCE = "0%"
LOW_CONFIDENCE = "Low"

SAFETY_BLOCK_NOTE = "The model blocked the response, likely due to safety filters."
PARSE_FAILURE_NOTE = "Structured data parsing failed. Showing raw output."
TRANSPORT_FAILURE_MESSAGE = "An error occurred while communicating with the AI service."

_OPEN_JSON_FENCE = re.compile(r"^```json\s*", re.IGNORECASE)
_OPEN_FENCE = re.compile(r"^```\s*")
_CLOSE_FENCE = re.compile(r"\s*```$")


class _TonesPayload(BaseModel):
    formal: str
    casual: str
    simple: str


class TranslationPayload(BaseModel):
    """Schema the model's JSON must satisfy to be trusted as-is."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    original: str
    detected_language: str = Field(alias="detectedLanguage")
    primary_translation: str = Field(alias="primaryTranslation")
    tones: _TonesPayload
    alternatives: list[str]
    cultural_note: str = Field(alias="culturalNote")
    confidence: str

    @field_validator("confidence", mode="before")
    @classmethod
    def _number_to_string(cls, value):
        # Models occasionally answer 98 instead of "98%".
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"{value:g}%"
        return value

    def to_result(self) -> TranslationResult:
        return TranslationResult(
            original=self.original,
            detected_language=self.detected_language,
            primary_translation=self.primary_translation,
            tones=Tones(
                formal=self.tones.formal,
                casual=self.tones.casual,
                simple=self.tones.simple,
            ),
            alternatives=tuple(self.alternatives),
            cultural_note=self.cultural_note,
            confidence=self.confidence,
        )


# ── Text clean-up helpers ─────────────────────────────────────────────────────


def strip_code_fences(text: str) -> str:
    """Trim whitespace and remove a surrounding markdown code fence."""
    cleaned = text.strip()
    cleaned = _OPEN_JSON_FENCE.sub("", cleaned)
    cleaned = _OPEN_FENCE.sub("", cleaned)
    cleaned = _CLOSE_FENCE.sub("", cleaned)
    return cleaned


def extract_json_object(text: str) -> str:
    """Slice ``text`` to the span between its first ``{`` and last ``}``.

    Returns ``text`` unchanged when there is no such ordered pair.
    """
    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last != -1 and last > first:
        return text[first : last + 1]
    return text


# ── Failure-branch builders ───────────────────────────────────────────────────


def empty_reply(original_text: str, finish_reason: str | None) -> NormalizedReply:
    reason = finish_reason or UNKNOWN
    result = TranslationResult(
        original=original_text or "Input",
        detected_language=UNKNOWN,
        primary_translation=f"Translation could not be completed. (Reason: {reason})",
        tones=Tones.filled(NO_TONE),
        alternatives=(),
        cultural_note=SAFETY_BLOCK_NOTE,
        confidence=ZERO_CONFIDENCE,
    )
    return NormalizedReply(result, TranslationOutcome.EMPTY_BLOCKED, detail=reason)


def raw_text_reply(
    original_text: str,
    raw_text: str,
    *,
    outcome: TranslationOutcome,
    detail: str,
) -> NormalizedReply:
    result = TranslationResult(
        original=original_text or "File Content",
        detected_language=UNKNOWN,
        primary_translation=raw_text,
        tones=Tones.filled(TONE_NOT_AVAILABLE),
        alternatives=(),
        cultural_note=PARSE_FAILURE_NOTE,
        confidence=LOW_CONFIDENCE,
    )
    return NormalizedReply(result, outcome, detail=detail)


def transport_failure(original_text: str, error: BaseException | str) -> NormalizedReply:
    """Map a failed remote call to a result carrying the error detail."""
    if isinstance(error, BaseException):
        detail = str(error) or type(error).__name__
    else:
        detail = error
    result = TranslationResult(
        original=original_text or "Input",
        detected_language=UNKNOWN,
        primary_translation=TRANSPORT_FAILURE_MESSAGE,
        tones=Tones.filled(NO_TONE),
        alternatives=(),
        cultural_note=detail or "Unknown error",
        confidence=ZERO_CONFIDENCE,
    )
    return NormalizedReply(result, TranslationOutcome.TRANSPORT_FAILED, detail=detail)


# ── Primary entry point ───────────────────────────────────────────────────────


def normalize(
    raw_text: str | None,
    original_text: str = "",
    finish_reason: str | None = None,
) -> NormalizedReply:
    """Normalise raw model output into a ``NormalizedReply``.

    Args:
        raw_text:      Text returned by the model, or ``None``.
        original_text: What the user typed; used for ``original`` on
                       failure branches.
        finish_reason: Finish reason reported by the model, if any.

    Returns:
        A reply whose ``result`` is always fully populated.
    """
    # ── 1. Empty output ───────────────────────────────────────────────────
    if not raw_text or not raw_text.strip():
        logger.warning("normalize: empty model output (finish_reason=%s)", finish_reason)
        return empty_reply(original_text, finish_reason)

    # ── 2. Fence stripping ────────────────────────────────────────────────
    stripped = strip_code_fences(raw_text)

    # ── 3. Brace extraction ───────────────────────────────────────────────
    candidate = extract_json_object(stripped)

    # ── 4. Parse ──────────────────────────────────────────────────────────
    # ValueError also covers oversized integer literals; RecursionError
    # covers pathologically nested arrays.
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        logger.warning("normalize: JSON parse failed, falling back to raw text: %s", exc)
        return raw_text_reply(
            original_text, stripped, outcome=TranslationOutcome.PARSE_FAILED, detail=str(exc)
        )

    # ── 5. Schema check ───────────────────────────────────────────────────
    if not isinstance(data, dict):
        logger.warning("normalize: model returned JSON %s, not an object", type(data).__name__)
        return raw_text_reply(
            original_text,
            stripped,
            outcome=TranslationOutcome.SCHEMA_INVALID,
            detail=f"expected an object, got {type(data).__name__}",
        )
    try:
        payload = TranslationPayload.model_validate(data)
    except ValidationError as exc:
        missing = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        logger.warning("normalize: model JSON failed schema check on %s", ", ".join(missing))
        return raw_text_reply(
            original_text,
            stripped,
            outcome=TranslationOutcome.SCHEMA_INVALID,
            detail="invalid fields: " + ", ".join(missing),
        )

    return NormalizedReply(payload.to_result(), TranslationOutcome.SUCCEEDED)
