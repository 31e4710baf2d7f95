"""
History Log - Append-and-evict collection of food analysis results, newest first.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import TypeAdapter, ValidationError

from ..models import FoodAnalysisItem
from ..models.food import new_item_id
from ..storage import StorageInterface

logger = logging.getLogger(__name__)

_items_adapter = TypeAdapter(List[FoodAnalysisItem])


class HistoryLog:
    """Owns the ordered list of FoodAnalysisItem records."""

    def __init__(self, storage: StorageInterface, key: str = "foodAnalysisHistory",
                 max_items: int = 100):
        self.storage = storage
        self.key = key
        self.max_items = max_items
        self._items: List[FoodAnalysisItem] = []

    async def load(self) -> List[FoodAnalysisItem]:
        data = await self.storage.get(self.key)
        if data is None:
            self._items = []
            return self.list()

        try:
            items = _items_adapter.validate_python(data)
        except ValidationError as e:
            logger.warning(
                f"Stored history is invalid, starting empty: {e.error_count()} errors",
                extra={"extra_fields": {"storage_key": self.key}}
            )
            items = []

        self._items = items[:self.max_items]
        return self.list()

    def list(self) -> List[FoodAnalysisItem]:
        """Most recent first. Returns a copy; reading never mutates the log."""
        return list(self._items)

    def get(self, item_id: str) -> Optional[FoodAnalysisItem]:
        return next((item for item in self._items if item.id == item_id), None)

    def __len__(self) -> int:
        return len(self._items)

    async def append(self, item: Union[FoodAnalysisItem, Mapping[str, Any]]) -> FoodAnalysisItem:
        """
        Insert an analysis at the head of the log, evicting the oldest beyond max_items.

        The item is re-validated on the way in, which clears its alternatives
        when the compatibility score makes them unnecessary.

        Returns:
            FoodAnalysisItem: The stored item
        """
        data = item.model_dump() if isinstance(item, FoodAnalysisItem) else dict(item)
        stored = FoodAnalysisItem.model_validate(data)

        if self.get(stored.id) is not None:
            stored = stored.model_copy(update={"id": new_item_id()})

        self._items.insert(0, stored)
        evicted = len(self._items) - self.max_items
        if evicted > 0:
            del self._items[self.max_items:]
            logger.debug(f"History log evicted {evicted} oldest item(s)")

        await self._persist()
        return stored

    async def clear(self) -> None:
        self._items = []
        await self.storage.delete(self.key)

    async def _persist(self) -> None:
        ok = await self.storage.set(self.key, [item.to_storage() for item in self._items])
        if not ok:
            logger.error(
                "Failed to persist food analysis history, keeping in-memory value",
                extra={"extra_fields": {"storage_key": self.key, "items": len(self._items)}}
            )
