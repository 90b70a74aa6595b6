"""LLM service interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..models import (
    ChannelMatch,
    ConnectionTestResult,
    IdentificationRequest,
    IdentificationResult,
    MediaType,
    QueryOptions,
)


class ILLMService(ABC):
    """Interface for LLM-backed identification and channel matching."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Check whether a provider is selected and has its credential."""
        pass

    @abstractmethod
    def get_provider(self) -> str:
        """Get the configured provider name, or ``"none"``."""
        pass

    @abstractmethod
    async def query(self, prompt: str, options: Optional[QueryOptions] = None) -> str:
        """Send a raw prompt to the configured provider.

        Raises:
            ConfigurationError: If no provider is configured.
            ProviderError: If the provider call fails.
        """
        pass

    @abstractmethod
    async def translate_title(self, title: str, source_language: Optional[str]) -> Optional[str]:
        """Translate a title to its official English title.

        Returns:
            English title, or None if unavailable.
        """
        pass

    @abstractmethod
    async def identify_media(
        self,
        title: str,
        year: Optional[int] = None,
        media_type: MediaType = MediaType.SERIES,
        source_language: Optional[str] = None,
    ) -> Optional[IdentificationResult]:
        """Identify a single title.

        Returns:
            Identification result, or None if not confidently identified.
        """
        pass

    @abstractmethod
    async def identify_media_batch(
        self, items: Sequence[IdentificationRequest], source_language: Optional[str] = None
    ) -> List[IdentificationResult]:
        """Identify many titles in bounded batches.

        Returns:
            Accepted results from every batch that succeeded.
        """
        pass

    @abstractmethod
    async def match_channels(
        self, epg_channels: Sequence[str], source_channels: Sequence[str]
    ) -> List[ChannelMatch]:
        """Match EPG channel ids to source channel names.

        Returns:
            Accepted matches from every batch that succeeded.
        """
        pass

    @abstractmethod
    async def test_connection(self) -> ConnectionTestResult:
        """Check that the configured provider answers."""
        pass

    @abstractmethod
    async def get_ollama_models(self) -> List[str]:
        """List model names available on the Ollama server."""
        pass
