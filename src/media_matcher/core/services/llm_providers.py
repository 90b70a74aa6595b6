"""LLM provider transports."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx
import openai

from ...infrastructure.logging import LoggerMixin
from ...utils import ConfigurationError, ProviderError
from ..interfaces import ILLMProvider
from ..models import ProviderConfig, ProviderType, QueryOptions

DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 500
MODEL_LIST_TIMEOUT = 10.0


class BaseLLMProvider(ILLMProvider, LoggerMixin, ABC):
    """Base provider with common HTTP handling."""

    display_name = "LLM"

    def __init__(
        self, config: ProviderConfig, http_client: Optional[httpx.AsyncClient] = None
    ) -> None:
        """Initialize provider.

        Args:
            config: Provider configuration snapshot.
            http_client: Shared HTTP client. If None, a client is opened per request.
        """
        self._config = config
        self._http_client = http_client

    @property
    def model(self) -> str:
        """Default model used for requests."""
        return self._config.model

    async def send(self, prompt: str, options: Optional[QueryOptions] = None) -> str:
        """Send a prompt and return the trimmed reply text.

        Args:
            prompt: Prompt text.
            options: Per-request overrides.

        Returns:
            Reply text, or empty string if the reply has an unexpected shape.

        Raises:
            ProviderError: On network failure, non-2xx status or timeout.
        """
        options = options or QueryOptions()
        try:
            return await self._send(prompt, options)
        except ProviderError as e:
            self.logger.error(
                f"{self.display_name} query failed: {e} "
                f"(status={e.status_code}, url={self._config.base_url})"
            )
            raise

    @abstractmethod
    async def _send(self, prompt: str, options: QueryOptions) -> str:
        """Issue the provider-specific request."""
        pass

    def _timeout(self, options: QueryOptions) -> float:
        return options.timeout or self._config.timeout

    async def _request_json(
        self,
        method: str,
        url: str,
        timeout: float,
        payload: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make an HTTP request and decode the JSON body.

        Raises:
            ProviderError: If the request fails, times out or returns non-2xx.
        """
        try:
            if self._http_client is not None:
                response = await self._http_client.request(
                    method, url, json=payload, headers=headers, timeout=timeout
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.request(
                        method, url, json=payload, headers=headers, timeout=timeout
                    )
        except httpx.TimeoutException as e:
            raise ProviderError(
                f"{self.display_name} request timed out after {timeout:g}s",
                provider=self.provider_type.value,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ProviderError(
                f"{self.display_name} request failed: {e}",
                provider=self.provider_type.value,
            ) from e

        if not response.is_success:
            raise ProviderError(
                f"{self.display_name} returned HTTP {response.status_code}: "
                f"{self._error_message(response)}",
                provider=self.provider_type.value,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                f"{self.display_name} returned a non-JSON body",
                provider=self.provider_type.value,
                status_code=response.status_code,
            ) from e

    def _error_message(self, response: httpx.Response) -> str:
        """Extract the upstream error message from an error response."""
        try:
            body = response.json()
        except ValueError:
            return response.text[:200] or response.reason_phrase

        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, str) and error:
            return error
        return response.reason_phrase


class OpenAIProvider(BaseLLMProvider):
    """Hosted chat-completion API provider."""

    display_name = "OpenAI"

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.OPENAI

    def _create_client(self) -> openai.AsyncOpenAI:
        # No retries; a failed call fails its chunk
        return openai.AsyncOpenAI(
            api_key=self._config.api_key,
            base_url=self._config.base_url or None,
            http_client=self._http_client,
            max_retries=0,
        )

    async def _send(self, prompt: str, options: QueryOptions) -> str:
        timeout = self._timeout(options)
        client = self._create_client()

        try:
            response = await client.chat.completions.create(
                model=options.model or self._config.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=(
                    options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE
                ),
                max_tokens=options.max_tokens or DEFAULT_MAX_TOKENS,
                timeout=timeout,
            )
        except openai.APITimeoutError as e:
            raise ProviderError(
                f"{self.display_name} request timed out after {timeout:g}s",
                provider=self.provider_type.value,
            ) from e
        except openai.APIStatusError as e:
            raise ProviderError(
                f"{self.display_name} returned HTTP {e.status_code}: {self._status_message(e)}",
                provider=self.provider_type.value,
                status_code=e.status_code,
            ) from e
        except openai.APIError as e:
            raise ProviderError(
                f"{self.display_name} request failed: {e}",
                provider=self.provider_type.value,
            ) from e
        finally:
            if self._http_client is None:
                await client.close()

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError):
            return ""
        return content.strip() if isinstance(content, str) else ""

    @staticmethod
    def _status_message(error: openai.APIStatusError) -> str:
        """Extract the upstream message from an error response."""
        body = error.body
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return error.message


class OllamaProvider(BaseLLMProvider):
    """Self-hosted generation API provider."""

    display_name = "Ollama"

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.OLLAMA

    @property
    def base_url(self) -> str:
        """Server URL without trailing slash."""
        return (self._config.base_url or "").rstrip("/")

    async def _send(self, prompt: str, options: QueryOptions) -> str:
        payload = {
            "model": options.model or self._config.model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": (
                    options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE
                ),
            },
        }

        data = await self._request_json(
            "POST",
            f"{self.base_url}/api/generate",
            timeout=self._timeout(options),
            payload=payload,
        )

        content = data.get("response") if isinstance(data, dict) else None
        return content.strip() if isinstance(content, str) else ""

    async def list_models(self) -> List[str]:
        """List model names installed on the server.

        Raises:
            ProviderError: If the request fails.
        """
        data = await self._request_json(
            "GET", f"{self.base_url}/api/tags", timeout=MODEL_LIST_TIMEOUT
        )

        models = data.get("models") if isinstance(data, dict) else None
        if not isinstance(models, list):
            return []
        return [
            m["name"] for m in models if isinstance(m, dict) and isinstance(m.get("name"), str)
        ]


def create_provider(
    config: ProviderConfig, http_client: Optional[httpx.AsyncClient] = None
) -> BaseLLMProvider:
    """Create the provider transport for a configuration snapshot.

    Args:
        config: Provider configuration.
        http_client: Optional shared HTTP client.

    Returns:
        Provider instance.

    Raises:
        ConfigurationError: If no provider is selected or its credential is missing.
    """
    if config.provider == ProviderType.OPENAI:
        if not config.api_key:
            raise ConfigurationError("OpenAI API key not configured")
        return OpenAIProvider(config, http_client)

    if config.provider == ProviderType.OLLAMA:
        if not config.base_url:
            raise ConfigurationError("Ollama URL not configured")
        return OllamaProvider(config, http_client)

    raise ConfigurationError("LLM not configured")
