"""Dependency injection container."""

import logging
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from ..config import Config, ConfigManager, ConfigSettings
from ..core.interfaces import ILLMService, ISettingsProvider

T = TypeVar("T")


class Container:
    """Dependency injection container using registry pattern."""

    def __init__(self, config_manager: Optional[ConfigManager] = None) -> None:
        """Initialize container.

        Args:
            config_manager: Configuration manager instance. If None, creates default.
        """
        self._factories: Dict[Type, Callable[[], Any]] = {}
        self._instances: Dict[Type, Any] = {}
        self._config_manager = config_manager or ConfigManager()
        self._logger = logging.getLogger(__name__)

    def register_factory(self, interface: Type[T], factory: Callable[[], T]) -> None:
        """Register a factory function.

        Args:
            interface: Interface type.
            factory: Factory function that creates instances.
        """
        self._factories[interface] = factory
        self._logger.debug(f"Registered factory: {interface.__name__}")

    def register_instance(self, interface: Type[T], instance: T) -> None:
        """Register a specific instance.

        Args:
            interface: Interface type.
            instance: Pre-created instance.
        """
        self._instances[interface] = instance
        self._logger.debug(f"Registered instance: {interface.__name__}")

    def get(self, interface: Type[T]) -> T:
        """Get service instance.

        Args:
            interface: Interface type to resolve.

        Returns:
            Service instance.

        Raises:
            ValueError: If service is not registered.
        """
        if interface in self._instances:
            return self._instances[interface]  # type: ignore

        if interface in self._factories:
            return self._factories[interface]()  # type: ignore

        raise ValueError(f"Service not registered: {interface.__name__}")

    @lru_cache(maxsize=1)
    def get_config(self) -> Config:
        """Get configuration instance."""
        return self._config_manager.get_config()

    def configure_default_services(self) -> None:
        """Configure default service registrations."""
        from ..core.services import LLMService

        settings = ConfigSettings(self._config_manager)
        self.register_instance(ISettingsProvider, settings)  # type: ignore

        # Stateless, so each lookup builds a fresh service
        self.register_factory(
            ILLMService,  # type: ignore
            lambda: LLMService(
                settings=self.get(ISettingsProvider),  # type: ignore
                matching=self._config_manager.get_config().matching,
            ),
        )

        self._logger.info("Default services configured")

    def reset(self) -> None:
        """Reset container state."""
        self._factories.clear()
        self._instances.clear()
        self.get_config.cache_clear()
        self._logger.debug("Container reset")

    def __enter__(self) -> "Container":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.reset()
