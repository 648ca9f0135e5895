"""Tests for HistoryStore.

Tests cover:
- Append and retrieve in insertion order
- Ring-buffer bound (oldest evicted first)
- Per-key isolation and concurrent appends
- Clear, stats, export/import and JSON persistence
- Unwritable persistence path logged, records kept in memory
- Explicit bound honored, including zero
"""

import asyncio

import pytest

from shadowban_system.config.settings import settings
from shadowban_system.data_management.history_store import HistoryStore
from shadowban_system.data_management.schemas import HistoryRecord


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture
def store() -> HistoryStore:
    return HistoryStore(max_items=5)


def record(key: str, score: float, flags=None) -> HistoryRecord:
    return HistoryRecord(key=key, score=score, confidence=50, flags=flags or [])


# ── Append and Bound Tests ────────────────────────────────────────────────


class TestAppend:
    @pytest.mark.asyncio
    async def test_add_and_get(self, store: HistoryStore) -> None:
        size = await store.add(record("account:twitter:jack", 10))
        assert size == 1
        history = await store.get("account:twitter:jack")
        assert [r.score for r in history] == [10]

    @pytest.mark.asyncio
    async def test_unknown_key_empty(self, store: HistoryStore) -> None:
        assert await store.get("account:twitter:nobody") == []

    @pytest.mark.asyncio
    async def test_bound_keeps_latest_in_order(self, store: HistoryStore) -> None:
        """After N > max inserts exactly the latest max remain, oldest first."""
        for score in range(12):
            await store.add(record("k", score))
        history = await store.get("k")
        assert [r.score for r in history] == [7, 8, 9, 10, 11]

    @pytest.mark.asyncio
    async def test_keys_isolated(self, store: HistoryStore) -> None:
        await store.add(record("a", 1))
        await store.add(record("b", 2))
        assert [r.score for r in await store.get("a")] == [1]
        assert sorted(store.keys()) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_concurrent_appends_never_exceed_bound(self, store: HistoryStore) -> None:
        await asyncio.gather(*(store.add(record("k", i)) for i in range(50)))
        history = await store.get("k")
        assert len(history) == 5

    @pytest.mark.asyncio
    async def test_snapshot_is_a_copy(self, store: HistoryStore) -> None:
        await store.add(record("k", 1))
        snapshot = await store.get("k")
        await store.add(record("k", 2))
        assert len(snapshot) == 1


# ── Maintenance Tests ─────────────────────────────────────────────────────


class TestMaintenance:
    @pytest.mark.asyncio
    async def test_clear_one_key(self, store: HistoryStore) -> None:
        await store.add(record("a", 1))
        await store.add(record("a", 2))
        await store.add(record("b", 3))
        assert await store.clear("a") == 2
        assert await store.get("a") == []
        assert len(await store.get("b")) == 1

    @pytest.mark.asyncio
    async def test_clear_all(self, store: HistoryStore) -> None:
        await store.add(record("a", 1))
        await store.add(record("b", 3))
        assert await store.clear() == 2
        assert store.get_stats()["total_records"] == 0

    @pytest.mark.asyncio
    async def test_stats(self, store: HistoryStore) -> None:
        await store.add(record("account:twitter:jack", 1))
        await store.add(record("text:twitter:0000abcd", 1))
        await store.add(record("text:twitter:0000abcd", 2))
        stats = store.get_stats()
        assert stats["total_keys"] == 2
        assert stats["total_records"] == 3
        assert stats["keys_by_kind"] == {"account": 1, "text": 1}
        assert stats["max_items_per_key"] == 5

    @pytest.mark.asyncio
    async def test_export_import(self, store: HistoryStore) -> None:
        await store.add(record("k", 40, flags=["worsening"]))
        exported = store.export()
        assert exported["k"][0]["score"] == 40

        other = HistoryStore(max_items=5)
        assert await other.import_records(exported) == 1
        restored = await other.get("k")
        assert restored[0].flags == ["worsening"]

    @pytest.mark.asyncio
    async def test_persistence_roundtrip(self, tmp_path) -> None:
        path = tmp_path / "history.json"
        first = HistoryStore(max_items=3, persistence_path=str(path))
        await first.add(record("k", 12))
        assert path.exists()

        second = HistoryStore(max_items=3, persistence_path=str(path))
        assert [r.score for r in await second.get("k")] == [12]

    def test_corrupt_file_ignored(self, tmp_path) -> None:
        path = tmp_path / "history.json"
        path.write_text("{not json")
        store = HistoryStore(persistence_path=str(path))
        assert store.get_stats()["total_records"] == 0

    @pytest.mark.asyncio
    async def test_unwritable_path_keeps_records(self, tmp_path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = HistoryStore(max_items=3, persistence_path=str(blocker / "history.json"))
        assert await store.add(record("k", 12)) == 1
        assert [r.score for r in await store.get("k")] == [12]


# ── Bound Configuration Tests ─────────────────────────────────────────────


class TestBoundConfiguration:
    def test_default_from_settings(self) -> None:
        assert HistoryStore().max_items == settings.max_history_items

    @pytest.mark.asyncio
    async def test_explicit_zero_keeps_nothing(self) -> None:
        store = HistoryStore(max_items=0)
        assert store.max_items == 0
        assert await store.add(record("k", 10)) == 0
        assert await store.get("k") == []
