"""
In-memory Storage Implementation.
Used for ephemeral sessions and tests; values still round-trip through JSON.
"""

import json
import logging
from typing import Any, Dict, List, Optional
from .interface import StorageInterface

logger = logging.getLogger(__name__)


class MemoryStorage(StorageInterface):
    """Dict-backed storage with the same serialization rules as LocalStorage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        """
        Args:
            initial: Optional raw JSON strings keyed by record key, used to
                seed the store (including deliberately malformed content)
        """
        self._data: Dict[str, str] = dict(initial or {})
        self.fail_writes = False
        self.write_count = 0

    async def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Stored record {key} is unreadable, treating as empty: {e}")
            return None

    async def set(self, key: str, value: Any) -> bool:
        if self.fail_writes:
            logger.error(f"Error saving record {key}: writes disabled")
            return False
        try:
            self._data[key] = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Value for {key} is not JSON-serializable: {e}")
            return False
        self.write_count += 1
        return True

    async def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        return key in self._data

    async def keys(self) -> List[str]:
        return sorted(self._data)

    def raw(self, key: str) -> Optional[str]:
        """Return the serialized form stored under key."""
        return self._data.get(key)
