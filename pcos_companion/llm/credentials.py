"""
Secret providers - supply the inference API key at call time.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class SecretProvider(ABC):
    """Source of the inference API credential."""

    @abstractmethod
    def get_api_key(self) -> Optional[str]:
        """Return the API key, or None/empty when none is configured."""
        pass


class StaticSecretProvider(SecretProvider):
    """A fixed credential."""

    def __init__(self, api_key: Optional[str]):
        self._api_key = api_key

    def get_api_key(self) -> Optional[str]:
        return self._api_key


class SettingsSecretProvider(SecretProvider):
    """Reads llm_api_key from a Settings object on every call."""

    def __init__(self, config: Any):
        self._config = config

    def get_api_key(self) -> Optional[str]:
        return self._config.llm_api_key
