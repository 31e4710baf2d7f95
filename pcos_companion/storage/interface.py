"""
Storage Interface - Abstract base class for all key-value storage implementations.
Stores own one record per key; values are JSON-serializable.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class StorageInterface(ABC):
    """
    Abstract key-value storage contract.

    Implementations never raise for I/O or decoding problems: reads report
    "no value" and writes report failure through their return value, so that
    the in-memory state of the callers stays authoritative.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Load the value stored under key.

        Args:
            key: Record key (e.g. "pcosProfile")

        Returns:
            Optional[Any]: Decoded JSON value, or None if the key is missing
            or its stored content cannot be read or parsed
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any) -> bool:
        """
        Replace the value stored under key.

        Args:
            key: Record key
            value: JSON-serializable value

        Returns:
            bool: True if the write was successful
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Remove the value stored under key.

        Returns:
            bool: True if a value was removed
        """
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a value is stored under key."""
        pass

    @abstractmethod
    async def keys(self) -> List[str]:
        """List all stored keys, sorted."""
        pass
