"""System instruction, response schema and safety settings for the model.

These are the fixed parts of every chat session.  The only per-session
variable is the target language, appended to the instruction by
:func:`build_system_instruction`.
"""

from __future__ import annotations

from google.genai import types

SYSTEM_INSTRUCTION = """You are TranslateMaster Pro, the world's most advanced AI translator.

## Core Capabilities:
1. **Instant Translation**: Translate any text across 50+ languages while preserving original intent, context, idioms, and cultural nuances.
2. **Tone & Style Control**: Adapt translations to Formal, Casual, and Simple.
3. **Smart Features**: Provide alternatives, simplify complex text, explain cultural references.

## Response Rules:
- Always detect input language automatically.
- Your output must be a pure JSON object matching the schema provided.
- Do NOT wrap the JSON in markdown code blocks (e.g. ```json ... ```). Return raw JSON only.
- Ensure 'primaryTranslation' is the most natural and context-aware version.
- If the user provides an image, describe and translate the text found within it.
- Maintain context across messages.
"""

# Keys the model must return, in schema order.
REQUIRED_FIELDS: tuple[str, ...] = (
    "original",
    "detectedLanguage",
    "primaryTranslation",
    "tones",
    "alternatives",
    "culturalNote",
    "confidence",
)

TONE_FIELDS: tuple[str, ...] = ("formal", "casual", "simple")

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "original": types.Schema(
            type=types.Type.STRING,
            description="The original text provided by the user.",
        ),
        "detectedLanguage": types.Schema(
            type=types.Type.STRING,
            description="The detected language of the input.",
        ),
        "primaryTranslation": types.Schema(
            type=types.Type.STRING,
            description="The best, most natural translation.",
        ),
        "tones": types.Schema(
            type=types.Type.OBJECT,
            properties={
                "formal": types.Schema(
                    type=types.Type.STRING,
                    description="Formal business/official version.",
                ),
                "casual": types.Schema(
                    type=types.Type.STRING,
                    description="Casual/social version.",
                ),
                "simple": types.Schema(
                    type=types.Type.STRING,
                    description="Simplified version for children or beginners.",
                ),
            },
            required=list(TONE_FIELDS),
        ),
        "alternatives": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
            description="2-3 alternative phrasings.",
        ),
        "culturalNote": types.Schema(
            type=types.Type.STRING,
            description=(
                "Explanation of idioms, culture, or context if applicable. "
                "Use 'None' if not applicable."
            ),
        ),
        "confidence": types.Schema(
            type=types.Type.STRING,
            description="Confidence percentage (e.g., '98%').",
        ),
    },
    required=list(REQUIRED_FIELDS),
)

# Permissive thresholds: translation requests routinely quote offensive or
# sensitive material and must not be refused on these categories.
PERMISSIVE_CATEGORIES: tuple[types.HarmCategory, ...] = (
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
    types.HarmCategory.HARM_CATEGORY_CIVIC_INTEGRITY,
)


def build_safety_settings() -> list[types.SafetySetting]:
    """``BLOCK_NONE`` for every category in ``PERMISSIVE_CATEGORIES``."""
    return [
        types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_NONE)
        for category in PERMISSIVE_CATEGORIES
    ]


def build_system_instruction(target_language: str) -> str:
    """Return the system instruction with the target language appended."""
    return f"{SYSTEM_INSTRUCTION}\n\nCurrent Target Language: {target_language}."
