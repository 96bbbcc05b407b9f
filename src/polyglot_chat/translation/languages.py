"""Static language catalog offered in the target-language picker.

The catalog is loaded once at import and never mutated.  The model is sent
the *display name* of the chosen language ("Spanish", not "es"), so
:func:`resolve_target_language` maps whatever the client sends (a code or a
name) to that display name.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LanguageOption:
    """One entry in the target-language catalog."""

    code: str
    name: str

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "name": self.name}


LANGUAGES: tuple[LanguageOption, ...] = (
    LanguageOption("auto", "Auto Detect"),
    LanguageOption("en", "English"),
    LanguageOption("es", "Spanish"),
    LanguageOption("fr", "French"),
    LanguageOption("de", "German"),
    LanguageOption("it", "Italian"),
    LanguageOption("pt", "Portuguese"),
    LanguageOption("nl", "Dutch"),
    LanguageOption("ru", "Russian"),
    LanguageOption("ar", "Arabic"),
    LanguageOption("zh-CN", "Chinese (Simplified)"),
    LanguageOption("zh-TW", "Chinese (Traditional)"),
    LanguageOption("ja", "Japanese"),
    LanguageOption("ko", "Korean"),
    # Indian languages
    LanguageOption("hi", "Hindi"),
    LanguageOption("bn", "Bengali"),
    LanguageOption("te", "Telugu"),
    LanguageOption("ta", "Tamil"),
    LanguageOption("mr", "Marathi"),
    LanguageOption("gu", "Gujarati"),
    LanguageOption("kn", "Kannada"),
    LanguageOption("ml", "Malayalam"),
    LanguageOption("pa", "Punjabi"),
    LanguageOption("ur", "Urdu"),
    LanguageOption("or", "Odia"),
    LanguageOption("as", "Assamese"),
    LanguageOption("sa", "Sanskrit"),
    LanguageOption("ne", "Nepali"),
    LanguageOption("sd", "Sindhi"),
    LanguageOption("ks", "Kashmiri"),
    LanguageOption("gom", "Konkani"),
    LanguageOption("mai", "Maithili"),
    LanguageOption("doi", "Dogri"),
    LanguageOption("brx", "Bodo"),
    LanguageOption("mni", "Manipuri (Meitei)"),
    LanguageOption("sat", "Santali"),
    # Other major world languages
    LanguageOption("tr", "Turkish"),
    LanguageOption("pl", "Polish"),
    LanguageOption("uk", "Ukrainian"),
    LanguageOption("sv", "Swedish"),
    LanguageOption("da", "Danish"),
    LanguageOption("no", "Norwegian"),
    LanguageOption("fi", "Finnish"),
    LanguageOption("th", "Thai"),
    LanguageOption("vi", "Vietnamese"),
    LanguageOption("id", "Indonesian"),
    LanguageOption("ms", "Malay"),
    LanguageOption("tl", "Filipino"),
    LanguageOption("el", "Greek"),
    LanguageOption("he", "Hebrew"),
    LanguageOption("cs", "Czech"),
    LanguageOption("ro", "Romanian"),
    LanguageOption("hu", "Hungarian"),
    LanguageOption("sw", "Swahili"),
    LanguageOption("fa", "Persian"),
    LanguageOption("si", "Sinhala"),
    LanguageOption("my", "Burmese"),
)

# Target language selected when the client has not chosen one yet.
DEFAULT_TARGET_LANGUAGE = "English"

# One-tap follow-up prompts shown under the input box.
QUICK_COMMANDS: tuple[str, ...] = (
    "Make it more formal",
    "Simplify for kids",
    "Explain this idiom",
    "Translate back to English",
)

_BY_CODE = {option.code.lower(): option for option in LANGUAGES}
_BY_NAME = {option.name.lower(): option for option in LANGUAGES}


def find_language(value: str) -> LanguageOption | None:
    """Look up a catalog entry by code or display name (case-insensitive)."""
    key = value.strip().lower()
    if not key:
        return None
    return _BY_CODE.get(key) or _BY_NAME.get(key)


def resolve_target_language(value: str | None) -> str:
    """Return the language name to interpolate into prompts.

    Catalog codes and names resolve to the catalog display name.  Anything
    else is passed through verbatim (the model copes with free-form
    language names such as "Pirate English").  Blank input falls back to
    ``DEFAULT_TARGET_LANGUAGE``.
    """
    if value is None or not value.strip():
        return DEFAULT_TARGET_LANGUAGE
    option = find_language(value)
    return option.name if option else value.strip()
