"""Configuration management module."""

from .config_manager import ConfigManager
from .models import (
    Config,
    LLMConfig,
    LoggingConfig,
    MatchingConfig,
    OllamaConfig,
    OpenAIConfig,
)
from .settings import ConfigSettings, DictSettings

__all__ = [
    "ConfigManager",
    "Config",
    "LLMConfig",
    "OpenAIConfig",
    "OllamaConfig",
    "MatchingConfig",
    "LoggingConfig",
    "ConfigSettings",
    "DictSettings",
]
