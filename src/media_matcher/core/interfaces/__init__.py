"""Core interfaces for dependency injection."""

from .llm_provider import ILLMProvider
from .llm_service import ILLMService
from .settings import ISettingsProvider

__all__ = [
    "ILLMProvider",
    "ILLMService",
    "ISettingsProvider",
]
