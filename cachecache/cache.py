"""In-memory cache with optional expiry, keyed by any hashable value."""

from __future__ import annotations

import time
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Hashable, Iterable

from pydantic import BaseModel

from cachecache.entries import EntriesRequest, Entry

if TYPE_CHECKING:
    from cachecache.config import CacheSettings


class CacheEntry(BaseModel):
    value: Any
    inserted_at: float  # time.monotonic() reading


class Cache:
    """Cache with a focus on expiry duration and reducing IO calls.

    Stale entries are skipped by reads but stay in the store until they are
    overwritten, removed or cleared.
    """

    def __init__(self, expiry: float | timedelta | None = None) -> None:
        self._store: dict[Hashable, CacheEntry] = {}
        self.expiry = _to_seconds(expiry)

    @classmethod
    def keep_last(cls) -> Cache:
        """Cache where the last inserted value never expires."""
        return cls()

    @classmethod
    def with_expiry_duration(cls, duration: float | timedelta) -> Cache:
        """Cache whose entries go stale once they are `duration` old."""
        return cls(expiry=duration)

    @classmethod
    def from_settings(cls, settings: CacheSettings) -> Cache:
        return cls(expiry=settings.expiry)

    def _is_live(self, entry: CacheEntry) -> bool:
        if self.expiry is None:
            return True
        return time.monotonic() - entry.inserted_at < self.expiry

    def get(self, key: Hashable, default: Any = None) -> Any:
        entry = self._store.get(key)
        if entry is None or not self._is_live(entry):
            return default
        return entry.value

    def insert(self, key: Hashable, value: Any) -> Any:
        """Store `value` under `key` and return the previous value, expired or not."""
        previous = self._store.get(key)
        self._store[key] = CacheEntry(value=value, inserted_at=time.monotonic())
        return previous.value if previous is not None else None

    def remove(self, key: Hashable) -> Any:
        entry = self._store.pop(key, None)
        return entry.value if entry is not None else None

    def clear(self) -> None:
        self._store.clear()

    def entries(self, keys: Iterable[Hashable]) -> EntriesRequest:
        """Batched view over `keys`, see EntriesRequest."""
        return EntriesRequest(self, keys)

    def entry(self, key: Hashable) -> Entry:
        return Entry(self, key)

    def __contains__(self, key: Hashable) -> bool:
        entry = self._store.get(key)
        return entry is not None and self._is_live(entry)

    def __getitem__(self, key: Hashable) -> Any:
        entry = self._store.get(key)
        if entry is None or not self._is_live(entry):
            raise KeyError(f"no entry found for key {key!r}")
        return entry.value

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"Cache(expiry={self.expiry!r}, size={len(self._store)})"


def _to_seconds(duration: float | timedelta | None) -> float | None:
    if duration is None:
        return None
    if isinstance(duration, timedelta):
        seconds = duration.total_seconds()
    else:
        seconds = float(duration)
    if seconds < 0:
        raise ValueError(f"Expiry duration must not be negative, got {duration!r}")
    return seconds
