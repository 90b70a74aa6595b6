"""Utility functions and classes."""

from .exceptions import (
    ConfigurationError,
    MediaMatcherError,
    ParseError,
    ProviderError,
    ValidationError,
)
from .text_utils import (
    LANGUAGE_NAMES,
    clean_title_response,
    parse_tmdb_reference,
    resolve_language_name,
    snippet_context,
)

__all__ = [
    "MediaMatcherError",
    "ConfigurationError",
    "ProviderError",
    "ParseError",
    "ValidationError",
    "LANGUAGE_NAMES",
    "resolve_language_name",
    "clean_title_response",
    "parse_tmdb_reference",
    "snippet_context",
]
