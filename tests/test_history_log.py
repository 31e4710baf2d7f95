"""
Unit tests for the History Log.
"""

from datetime import datetime, timedelta, timezone

import pytest

from pcos_companion.core import HistoryLog
from pcos_companion.storage import MemoryStorage

from tests.helpers import make_item


class TestHistoryLog:

    @pytest.mark.asyncio
    async def test_newest_first(self, storage):
        log = HistoryLog(storage)
        await log.load()
        first = await log.append(make_item(food_name="Oats"))
        second = await log.append(make_item(food_name="Salmon"))
        assert [item.id for item in log.list()] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_evicts_oldest_beyond_capacity(self, storage):
        log = HistoryLog(storage)
        await log.load()
        appended = []
        for i in range(101):
            appended.append(await log.append(make_item(food_name=f"Food {i}")))

        items = log.list()
        assert len(items) == 100
        assert appended[0].id not in {item.id for item in items}
        assert [item.food_name for item in items] == [f"Food {i}" for i in range(100, 0, -1)]
        assert len(await storage.get("foodAnalysisHistory")) == 100

    @pytest.mark.asyncio
    async def test_custom_capacity(self, storage):
        log = HistoryLog(storage, max_items=2)
        await log.load()
        for name in ("a", "b", "c"):
            await log.append(make_item(food_name=name))
        assert [item.food_name for item in log.list()] == ["c", "b"]

    @pytest.mark.asyncio
    async def test_high_compatibility_clears_alternatives(self, storage):
        log = HistoryLog(storage)
        await log.load()
        item = make_item(pcos_compatibility=70, alternatives=["Lentils"])
        item.pcos_compatibility = 85  # no validate_assignment

        stored = await log.append(item)
        assert stored.alternatives == []
        assert log.list()[0].alternatives == []

    @pytest.mark.asyncio
    async def test_append_accepts_mapping(self, storage):
        log = HistoryLog(storage)
        await log.load()
        stored = await log.append({
            "foodName": "Berries",
            "pcosCompatibility": 90,
            "alternatives": ["Apple"],
            "imageUrl": "https://example.com/b.jpg",
        })
        assert stored.food_name == "Berries"
        assert stored.alternatives == []

    @pytest.mark.asyncio
    async def test_reload_preserves_items(self, storage):
        log = HistoryLog(storage)
        await log.load()
        await log.append(make_item(food_name="Oats"))
        await log.append(make_item(food_name="Salmon", pcos_compatibility=92, alternatives=[]))

        reloaded = HistoryLog(storage)
        items = await reloaded.load()
        assert [i.model_dump() for i in items] == [i.model_dump() for i in log.list()]

    @pytest.mark.asyncio
    async def test_stored_format_uses_camel_case(self, storage):
        log = HistoryLog(storage)
        await log.load()
        await log.append(make_item())
        record = (await storage.get("foodAnalysisHistory"))[0]
        assert set(record) == {
            "id", "date", "imageUrl", "foodName", "pcosCompatibility",
            "nutritionalInfo", "recommendation", "alternatives",
        }
        assert set(record["nutritionalInfo"]) == {
            "carbs", "protein", "fats", "glycemicLoad", "inflammatoryScore",
        }
        assert datetime.fromisoformat(record["date"]).tzinfo is not None

    @pytest.mark.asyncio
    async def test_malformed_storage_is_empty_history(self):
        log = HistoryLog(MemoryStorage({"foodAnalysisHistory": "not json at all"}))
        assert await log.load() == []

    @pytest.mark.asyncio
    async def test_wrong_shape_is_empty_history(self):
        log = HistoryLog(MemoryStorage({"foodAnalysisHistory": '{"foodName": "x"}'}))
        assert await log.load() == []

    @pytest.mark.asyncio
    async def test_duplicate_id_gets_fresh_id(self, storage):
        log = HistoryLog(storage)
        await log.load()
        first = await log.append(make_item(id="abc"))
        second = await log.append(make_item(id="abc"))
        assert first.id == "abc"
        assert second.id != "abc"
        assert len(log) == 2

    @pytest.mark.asyncio
    async def test_list_is_a_copy(self, storage):
        log = HistoryLog(storage)
        await log.load()
        await log.append(make_item())
        items = log.list()
        items.clear()
        assert len(log.list()) == 1

    @pytest.mark.asyncio
    async def test_get_and_clear(self, storage):
        log = HistoryLog(storage)
        await log.load()
        item = await log.append(make_item(date=datetime.now(timezone.utc) - timedelta(days=1)))
        assert log.get(item.id) == item
        assert log.get("missing") is None

        await log.clear()
        assert log.list() == []
        assert await storage.exists("foodAnalysisHistory") is False
