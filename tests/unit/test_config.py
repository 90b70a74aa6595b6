"""Test configuration management."""

from pathlib import Path

import pytest

from media_matcher.config import Config, ConfigManager, ConfigSettings, DictSettings
from media_matcher.core.models import ProviderConfig, ProviderType


def test_config_manager_loads_config(config_manager, temp_config_file):
    """Test that config manager loads configuration correctly."""
    config = config_manager.load_config()

    assert isinstance(config, Config)
    assert config.llm.provider == "openai"
    assert config.llm.openai.api_key == "test-key"
    assert config.llm.openai.model == "gpt-4o-mini"
    assert config.matching.channel_batch_size == 30
    assert config.matching.max_source_channels == 100


def test_config_manager_caches_config(config_manager):
    """Test that config manager caches loaded configuration."""
    config1 = config_manager.load_config()
    config2 = config_manager.get_config()

    assert config1 is config2


def test_config_manager_reload_config(config_manager):
    """Test that config manager can reload configuration."""
    config1 = config_manager.load_config()
    config2 = config_manager.reload_config()

    assert config1 is not config2
    assert config1.llm.provider == config2.llm.provider


def test_config_manager_missing_file():
    """Test that config manager raises error for missing file."""
    config_manager = ConfigManager(Path("nonexistent.yaml"))

    with pytest.raises(FileNotFoundError):
        config_manager.load_config()


def test_config_validation_invalid_provider(tmp_path):
    """Test config validation with invalid LLM provider."""
    config_file = tmp_path / "invalid.yaml"
    config_file.write_text('llm:\n  provider: "anthropic"\n')

    config_manager = ConfigManager(config_file)

    with pytest.raises(ValueError):
        config_manager.load_config()


def test_unset_api_key_placeholder_is_treated_as_missing(tmp_path, monkeypatch):
    """Test that an unexpanded ${VAR} placeholder does not count as a key."""
    monkeypatch.delenv("MEDIA_MATCHER_TEST_KEY", raising=False)
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        'llm:\n  provider: "openai"\n  openai:\n    api_key: "${MEDIA_MATCHER_TEST_KEY}"\n'
    )

    config = ConfigManager(config_file).load_config()

    assert config.llm.openai.api_key is None


def test_api_key_environment_expansion(tmp_path, monkeypatch):
    """Test that API keys are expanded from the environment."""
    monkeypatch.setenv("MEDIA_MATCHER_TEST_KEY", "sk-from-env")
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        'llm:\n  provider: "OpenAI"\n  openai:\n    api_key: "${MEDIA_MATCHER_TEST_KEY}"\n'
    )

    config = ConfigManager(config_file).load_config()

    assert config.llm.provider == "openai"
    assert config.llm.openai.api_key == "sk-from-env"


def test_empty_config_file_uses_defaults(tmp_path):
    """Test that an empty file yields a disabled provider."""
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")

    config = ConfigManager(config_file).load_config()

    assert config.llm.provider == "none"
    assert config.matching.identification_batch_size == 10


def test_create_default_config(tmp_path):
    """Test creating default configuration file."""
    output_path = tmp_path / "default_config.yaml"

    ConfigManager.create_default_config(output_path)

    assert output_path.exists()

    config = ConfigManager(output_path).load_config()
    assert isinstance(config, Config)
    assert config.llm.ollama.model == "llama3.2"


def test_config_settings_exposes_provider_keys(config_manager):
    """Test that config-backed settings expose the provider keys."""
    settings = ConfigSettings(config_manager)

    assert settings.get("llmProvider") == "openai"
    assert settings.get("openaiApiKey") == "test-key"
    assert settings.get("openaiModel") == "gpt-4o-mini"
    assert settings.get("ollamaUrl") == "http://ollama.local:11434/"
    assert settings.get("ollamaModel") == "llama3.2"
    assert settings.get("unknownKey") is None


def test_config_settings_sees_reloaded_config(temp_config_file, config_manager):
    """Test that a reload is visible through existing settings."""
    settings = ConfigSettings(config_manager)
    assert settings.get("llmProvider") == "openai"

    temp_config_file.write_text('llm:\n  provider: "ollama"\n')
    config_manager.reload_config()

    assert settings.get("llmProvider") == "ollama"


@pytest.mark.parametrize(
    "values, expected",
    [
        ({}, False),
        ({"llmProvider": "none", "openaiApiKey": "sk-test"}, False),
        ({"llmProvider": "openai"}, False),
        ({"llmProvider": "openai", "openaiApiKey": ""}, False),
        ({"llmProvider": "openai", "openaiApiKey": "sk-test"}, True),
        ({"llmProvider": "openai", "openaiApiKey": "sk-test", "ollamaUrl": ""}, True),
        ({"llmProvider": "ollama", "ollamaUrl": "http://localhost:11434"}, True),
        ({"llmProvider": "ollama"}, False),
        ({"llmProvider": "something-else", "openaiApiKey": "sk-test"}, False),
    ],
)
def test_provider_config_is_configured(values, expected):
    """Test the minimum-credential rule for each provider."""
    config = ProviderConfig.from_settings(DictSettings(values))

    assert config.is_configured is expected


def test_provider_config_defaults():
    """Test default models and timeouts per provider."""
    openai = ProviderConfig.from_settings(
        DictSettings({"llmProvider": "openai", "openaiApiKey": "sk-test"})
    )
    ollama = ProviderConfig.from_settings(
        DictSettings({"llmProvider": "ollama", "ollamaUrl": "http://localhost:11434"})
    )

    assert openai.provider == ProviderType.OPENAI
    assert openai.model == "gpt-4o-mini"
    assert openai.timeout == 30
    assert ollama.provider == ProviderType.OLLAMA
    assert ollama.model == "llama3.2"
    assert ollama.timeout == 60
