"""Settings provider interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class ISettingsProvider(ABC):
    """Interface for key-value settings sources."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Get a setting value.

        Args:
            key: Setting key.

        Returns:
            Setting value or None if unset.
        """
        pass
