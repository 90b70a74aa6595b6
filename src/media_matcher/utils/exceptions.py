"""Custom exceptions for the application."""

from typing import Optional


class MediaMatcherError(Exception):
    """Base exception for all application errors."""

    pass


class ConfigurationError(MediaMatcherError):
    """Configuration-related errors."""

    pass


class ProviderError(MediaMatcherError):
    """LLM provider errors (network failure, non-2xx status, timeout)."""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class ParseError(MediaMatcherError):
    """Structured data could not be extracted from an LLM reply."""

    pass


class ValidationError(MediaMatcherError):
    """A parsed entry is missing a required field or is out of range."""

    pass
