"""LLM provider configuration models."""

from enum import Enum
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..interfaces import ISettingsProvider

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "llama3.2"

DEFAULT_OPENAI_TIMEOUT = 30.0
DEFAULT_OLLAMA_TIMEOUT = 60.0


class ProviderType(str, Enum):
    """Provider enumeration."""

    OPENAI = "openai"
    OLLAMA = "ollama"
    NONE = "none"

    @classmethod
    def parse(cls, value: object) -> "ProviderType":
        """Parse a settings value, treating unknown names as NONE."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.NONE
        return cls.NONE


class ProviderConfig(BaseModel):
    """Snapshot of the active provider settings for one call."""

    provider: ProviderType = Field(..., description="Active provider")
    api_key: Optional[str] = Field(None, description="API key (hosted provider)")
    base_url: Optional[str] = Field(None, description="API base URL")
    model: str = Field(..., description="Model identifier")
    timeout: float = Field(..., gt=0, description="Default request timeout in seconds")

    model_config = ConfigDict(frozen=True)

    @property
    def is_configured(self) -> bool:
        """Check that a provider is selected and has its minimum credential."""
        if self.provider == ProviderType.OPENAI:
            return bool(self.api_key)
        if self.provider == ProviderType.OLLAMA:
            return bool(self.base_url)
        return False

    @classmethod
    def from_settings(cls, settings: "ISettingsProvider") -> "ProviderConfig":
        """Build a provider snapshot from the settings collaborator.

        Args:
            settings: Key-value settings source.

        Returns:
            Provider configuration.
        """
        provider = ProviderType.parse(settings.get("llmProvider"))

        if provider == ProviderType.OPENAI:
            return cls(
                provider=provider,
                api_key=settings.get("openaiApiKey") or None,
                base_url=settings.get("openaiBaseUrl") or DEFAULT_OPENAI_BASE_URL,
                model=settings.get("openaiModel") or DEFAULT_OPENAI_MODEL,
                timeout=settings.get("openaiTimeout") or DEFAULT_OPENAI_TIMEOUT,
            )

        if provider == ProviderType.OLLAMA:
            return cls(
                provider=provider,
                base_url=settings.get("ollamaUrl") or None,
                model=settings.get("ollamaModel") or DEFAULT_OLLAMA_MODEL,
                timeout=settings.get("ollamaTimeout") or DEFAULT_OLLAMA_TIMEOUT,
            )

        return cls(provider=ProviderType.NONE, model="", timeout=DEFAULT_OPENAI_TIMEOUT)


class QueryOptions(BaseModel):
    """Per-request overrides for a provider call."""

    temperature: Optional[float] = Field(None, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: Optional[int] = Field(None, gt=0, description="Maximum output tokens")
    timeout: Optional[float] = Field(None, gt=0, description="Request timeout in seconds")
    model: Optional[str] = Field(None, description="Model override")
