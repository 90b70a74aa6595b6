"""Key-value settings adapters."""

from typing import Any, Callable, Dict, Mapping, Optional

from ..core.interfaces import ISettingsProvider
from .config_manager import ConfigManager
from .models import Config

_CONFIG_KEYS: Dict[str, Callable[[Config], Any]] = {
    "llmProvider": lambda c: c.llm.provider,
    "openaiApiKey": lambda c: c.llm.openai.api_key,
    "openaiModel": lambda c: c.llm.openai.model,
    "openaiBaseUrl": lambda c: c.llm.openai.base_url,
    "openaiTimeout": lambda c: c.llm.openai.timeout,
    "ollamaUrl": lambda c: c.llm.ollama.url,
    "ollamaModel": lambda c: c.llm.ollama.model,
    "ollamaTimeout": lambda c: c.llm.ollama.timeout,
}


class ConfigSettings(ISettingsProvider):
    """Settings backed by the YAML configuration.

    Every lookup goes through the config manager, so a reload is visible
    to the next call without rebuilding the services that hold this object.
    """

    def __init__(self, config_manager: ConfigManager) -> None:
        """Initialize settings adapter.

        Args:
            config_manager: Configuration manager to read from.
        """
        self._config_manager = config_manager

    def get(self, key: str) -> Optional[Any]:
        """Get a setting value.

        Args:
            key: Setting key (e.g. ``llmProvider``).

        Returns:
            Setting value or None if unknown or unset.
        """
        getter = _CONFIG_KEYS.get(key)
        if getter is None:
            return None
        return getter(self._config_manager.get_config())


class DictSettings(ISettingsProvider):
    """In-memory settings."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(values or {})

    def get(self, key: str) -> Optional[Any]:
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value
