"""Bounded in-memory history of past check outcomes.

Follows the store pattern used across data_management:
- Fingerprint key as primary key (``kind:platform:identifier``)
- Ring-buffer buckets: at most ``max_items`` records per key, oldest evicted
- One asyncio lock per key so concurrent checks on the same entity serialize
  their read and append, while different entities never contend
- Optional JSON mirror for local runs; no durability guarantee

Usage:
    from shadowban_system.data_management.history_store import HistoryStore

    store = HistoryStore(max_items=100)
    await store.add(HistoryRecord(key="account:twitter:jack", score=42))
    records = await store.get("account:twitter:jack")
"""

import asyncio
import json
from collections import Counter, deque
from pathlib import Path
from typing import Any, Deque, Dict, List, Optional

from shadowban_system.config.settings import settings
from shadowban_system.data_management.schemas import HistoryRecord
from shadowban_system.utils.logging import get_structured_logger


class HistoryStore:
    """Storage for history records with per-fingerprint ring buffers.

    Data structure:
    {
        "account:twitter:jack": deque([HistoryRecord, ...], maxlen=max_items),
        ...
    }
    """

    def __init__(
        self,
        max_items: Optional[int] = None,
        persistence_path: Optional[str] = None,
    ) -> None:
        """Initialize HistoryStore.

        Args:
            max_items: Records kept per key. Defaults to settings.max_history_items.
            persistence_path: Optional JSON file mirrored after each write.
                            If None, storage is memory-only.
        """
        self.max_items = settings.max_history_items if max_items is None else max_items
        self._buckets: Dict[str, Deque[HistoryRecord]] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._persistence_path = Path(persistence_path) if persistence_path else None
        self._logger = get_structured_logger("HistoryStore")

        if self._persistence_path and self._persistence_path.exists():
            self._load_from_file()

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def _bucket_for(self, key: str) -> Deque[HistoryRecord]:
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = self._buckets[key] = deque(maxlen=self.max_items)
        return bucket

    async def add(self, record: HistoryRecord) -> int:
        """Append a record, evicting the oldest if the bucket is full.

        Args:
            record: HistoryRecord to store under record.key.

        Returns:
            Number of records now held for the key.
        """
        async with self._lock_for(record.key):
            bucket = self._bucket_for(record.key)
            evicted = len(bucket) == bucket.maxlen
            bucket.append(record)

            self._logger.debug(
                "record_added",
                key=record.key,
                score=record.score,
                size=len(bucket),
                evicted=evicted,
            )

            if self._persistence_path:
                self._save_to_file()

            return len(bucket)

    async def get(self, key: str) -> List[HistoryRecord]:
        """Get a snapshot of a key's records, oldest first.

        Args:
            key: Fingerprint key.

        Returns:
            List of HistoryRecord objects (empty if the key is unknown).
        """
        async with self._lock_for(key):
            return list(self._buckets.get(key, ()))

    async def clear(self, key: Optional[str] = None) -> int:
        """Remove history for one key, or for every key when key is None.

        Returns:
            Number of records removed.
        """
        if key is not None:
            async with self._lock_for(key):
                removed = len(self._buckets.pop(key, ()))
        else:
            removed = sum(len(b) for b in self._buckets.values())
            self._buckets.clear()

        self._logger.info("history_cleared", key=key, removed=removed)
        if self._persistence_path:
            self._save_to_file()
        return removed

    def keys(self) -> List[str]:
        return list(self._buckets)

    def get_stats(self) -> Dict[str, Any]:
        """Get storage statistics.

        Returns:
            Dict with key count, record count, per-kind key counts and the bound.
        """
        by_kind = Counter(key.split(":", 1)[0] for key in self._buckets)
        return {
            "total_keys": len(self._buckets),
            "total_records": sum(len(b) for b in self._buckets.values()),
            "keys_by_kind": dict(by_kind),
            "max_items_per_key": self.max_items,
        }

    def export(self) -> Dict[str, List[Dict[str, Any]]]:
        """Export every bucket as JSON-compatible dicts."""
        return {
            key: [record.model_dump(mode="json") for record in bucket]
            for key, bucket in self._buckets.items()
        }

    async def import_records(self, data: Dict[str, List[Dict[str, Any]]]) -> int:
        """Append exported records, respecting the per-key bound.

        Args:
            data: Output of export().

        Returns:
            Number of records imported.
        """
        imported = 0
        for key, records in data.items():
            async with self._lock_for(key):
                bucket = self._bucket_for(key)
                for raw in records:
                    bucket.append(HistoryRecord.model_validate({**raw, "key": key}))
                    imported += 1

        self._logger.info("history_imported", keys=len(data), records=imported)
        if self._persistence_path:
            self._save_to_file()
        return imported

    def _save_to_file(self) -> None:
        # A failed mirror write never fails the append
        try:
            self._persistence_path.parent.mkdir(parents=True, exist_ok=True)
            with self._persistence_path.open("w", encoding="utf-8") as fh:
                json.dump(self.export(), fh)
        except OSError as e:
            self._logger.error(
                "history_save_failed", path=str(self._persistence_path), error=str(e)
            )

    def _load_from_file(self) -> None:
        try:
            with self._persistence_path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            self._logger.warning("history_load_failed", path=str(self._persistence_path), error=str(e))
            return

        for key, records in data.items():
            bucket = self._bucket_for(key)
            for raw in records:
                bucket.append(HistoryRecord.model_validate({**raw, "key": key}))
        self._logger.info("history_loaded", keys=len(data))
