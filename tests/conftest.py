"""Pytest configuration and fixtures."""

from typing import Callable, List, Optional, Union

import pytest

from media_matcher.config import Config, ConfigManager, DictSettings
from media_matcher.core.interfaces import ILLMProvider
from media_matcher.core.models import ProviderConfig, ProviderType, QueryOptions
from media_matcher.core.services import LLMService
from media_matcher.infrastructure import Container
from media_matcher.utils import ProviderError

Reply = Union[str, Exception, Callable[[str], str]]


class FakeProvider(ILLMProvider):
    """Provider returning scripted replies and recording prompts."""

    def __init__(self, replies: List[Reply], provider_type: ProviderType = ProviderType.OPENAI):
        self.replies = list(replies)
        self.prompts: List[str] = []
        self.options: List[Optional[QueryOptions]] = []
        self._provider_type = provider_type

    @property
    def provider_type(self) -> ProviderType:
        return self._provider_type

    @property
    def model(self) -> str:
        return "fake-model"

    async def send(self, prompt: str, options: Optional[QueryOptions] = None) -> str:
        self.prompts.append(prompt)
        self.options.append(options)

        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply


@pytest.fixture
def temp_config_file(tmp_path):
    """Create a temporary configuration file."""
    config_content = """
llm:
  provider: "openai"
  openai:
    api_key: "test-key"
    model: "gpt-4o-mini"
  ollama:
    url: "http://ollama.local:11434/"
    model: "llama3.2"

matching:
  identification_batch_size: 10
  channel_batch_size: 30
"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(config_content)
    return config_file


@pytest.fixture
def config_manager(temp_config_file):
    """Create a configuration manager with test config."""
    return ConfigManager(temp_config_file)


@pytest.fixture
def config(config_manager) -> Config:
    """Load test configuration."""
    return config_manager.load_config()


@pytest.fixture
def container(config_manager):
    """Create a test container."""
    return Container(config_manager)


@pytest.fixture
def openai_settings():
    """Settings selecting the hosted provider."""
    return DictSettings({"llmProvider": "openai", "openaiApiKey": "sk-test"})


@pytest.fixture
def make_service(openai_settings):
    """Build an LLMService wired to a FakeProvider with scripted replies."""

    def _make(replies: List[Reply], settings=None):
        provider = FakeProvider(replies)

        def factory(config: ProviderConfig) -> ILLMProvider:
            return provider

        if settings is None:
            settings = openai_settings
        service = LLMService(settings, provider_factory=factory)
        return service, provider

    return _make


@pytest.fixture
def network_error():
    """Simulated provider failure."""
    return ProviderError("connection refused", provider="openai")
