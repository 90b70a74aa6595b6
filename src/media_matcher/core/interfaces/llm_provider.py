"""LLM provider interface."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import ProviderType, QueryOptions


class ILLMProvider(ABC):
    """Interface for LLM backend transports."""

    @property
    @abstractmethod
    def provider_type(self) -> ProviderType:
        """Provider implemented by this transport."""
        pass

    @property
    @abstractmethod
    def model(self) -> str:
        """Default model used for requests."""
        pass

    @abstractmethod
    async def send(self, prompt: str, options: Optional[QueryOptions] = None) -> str:
        """Send a prompt and return the reply text.

        Args:
            prompt: Prompt text, sent as a single user message.
            options: Per-request overrides.

        Returns:
            Trimmed reply text; empty string if the reply has an unexpected shape.

        Raises:
            ProviderError: On network failure, non-2xx status or timeout.
        """
        pass
