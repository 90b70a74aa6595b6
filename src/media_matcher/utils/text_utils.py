"""Text processing utilities."""

import re
from typing import Optional, Tuple

# Two-letter language codes as they appear in source metadata
LANGUAGE_NAMES = {
    "de": "German",
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "it": "Italian",
    "pt": "Portuguese",
    "nl": "Dutch",
    "pl": "Polish",
    "ru": "Russian",
    "tr": "Turkish",
    "ar": "Arabic",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
    "sv": "Swedish",
    "da": "Danish",
    "no": "Norwegian",
    "fi": "Finnish",
    "el": "Greek",
    "cs": "Czech",
    "hu": "Hungarian",
    "ro": "Romanian",
    "bg": "Bulgarian",
    "uk": "Ukrainian",
}

_TMDB_REFERENCE_PATTERN = re.compile(r"^(tv|movie)/(\d+)$", re.IGNORECASE)

_TITLE_PREFIX_PATTERN = re.compile(
    r"^(?:(?:the\s+)?english\s+title(?:\s+is)?\s*:?|title\s*:)\s*",
    re.IGNORECASE,
)

_QUOTE_CHARS = "\"'“”‘’"


def resolve_language_name(code: Optional[str], fallback: str) -> str:
    """Resolve a language code to a human-readable name.

    Args:
        code: Two-letter language code (case-insensitive).
        fallback: Value used when no code is given.

    Returns:
        Language name, the raw code if unmapped, or the fallback.
    """
    if not code:
        return fallback
    return LANGUAGE_NAMES.get(code.lower(), code)


def parse_tmdb_reference(value: object) -> Tuple[Optional[str], Optional[int]]:
    """Parse a model-supplied TMDb reference such as ``tv/4018``.

    Only the strict ``(tv|movie)/<digits>`` form is accepted; anything else,
    including bare numeric ids, yields ``(None, None)``.

    Args:
        value: Raw value from the model's JSON.

    Returns:
        Tuple of (tmdb_type, tmdb_id).
    """
    if not isinstance(value, str):
        return None, None

    match = _TMDB_REFERENCE_PATTERN.match(value.strip())
    if not match:
        return None, None

    return match.group(1).lower(), int(match.group(2))


def _strip_quotes(text: str) -> str:
    if text[:1] in _QUOTE_CHARS:
        text = text[1:]
    if text[-1:] in _QUOTE_CHARS:
        text = text[:-1]
    return text.strip()


def clean_title_response(text: str) -> str:
    """Clean a free-text title reply from an LLM.

    Keeps the first line only, strips surrounding quotes and removes
    boilerplate prefixes such as ``Title:`` or ``The English title is``.

    Args:
        text: Raw reply text.

    Returns:
        Cleaned title (may be empty).
    """
    text = text.strip()
    if not text:
        return ""

    title = text.splitlines()[0].strip()
    title = _strip_quotes(title)
    title = _TITLE_PREFIX_PATTERN.sub("", title)
    title = _strip_quotes(title)

    return title


def snippet_context(text: str, limit: int = 80) -> str:
    """Describe a reply for log output without dumping all of it.

    Args:
        text: Reply text.
        limit: Maximum number of leading characters to include.

    Returns:
        Short description with the reply length and its head.
    """
    head = re.sub(r"\s+", " ", text[:limit]).strip()
    suffix = "..." if len(text) > limit else ""
    return f"{len(text)} chars, starts with '{head}{suffix}'"
