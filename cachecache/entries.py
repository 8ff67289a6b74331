"""Get-or-fetch views over one key (Entry) or many keys (EntriesRequest)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Hashable, Iterable, Sequence

from cachecache.errors import FetchContractError

if TYPE_CHECKING:
    from cachecache.cache import Cache

log = logging.getLogger(__name__)

_ABSENT = object()


class EntriesRequest:
    """Batched read over a list of keys.

    Live values are served from the cache; the missing or stale keys are
    fetched together with a single call to the fetch function. Duplicate
    keys are fetched once and repeated in the result.
    """

    def __init__(self, cache: Cache, keys: Iterable[Hashable]) -> None:
        self._cache = cache
        self._keys = list(keys)

    @property
    def keys(self) -> list[Hashable]:
        return list(self._keys)

    @property
    def missing(self) -> list[Hashable]:
        """Distinct keys that are not live, in first-occurrence order."""
        return self._partition()[1]

    def _partition(self) -> tuple[dict[Hashable, Any], list[Hashable]]:
        values: dict[Hashable, Any] = {}
        missing: list[Hashable] = []
        for key in self._keys:
            if key in values:
                continue
            value = self._cache.get(key, _ABSENT)
            if value is _ABSENT:
                if key not in missing:
                    missing.append(key)
            else:
                values[key] = value
        return values, missing

    def or_insert(self, default: Any) -> list[Any]:
        """Insert `default` for every missing key and return all values."""
        return self.or_try_insert_with(lambda missing: [default] * len(missing))

    def or_insert_with(self, fetch: Callable[[list[Hashable]], Sequence[Any]]) -> list[Any]:
        """Fill missing keys with `fetch(missing)` and return all values in request order."""
        return self.or_try_insert_with(fetch)

    def or_try_insert_with(self, fetch: Callable[[list[Hashable]], Sequence[Any]]) -> list[Any]:
        """Like or_insert_with, for a fetch that may raise.

        Nothing is inserted unless `fetch` returns exactly one value per
        missing key. Exceptions raised by `fetch` propagate unchanged; a
        length mismatch raises FetchContractError.
        """
        values, missing = self._partition()

        if missing:
            log.debug("Fetching %d missing of %d requested keys", len(missing), len(self._keys))
            fetched = list(fetch(list(missing)))
            if len(fetched) != len(missing):
                log.warning(
                    "Fetch returned %d values for %d missing keys", len(fetched), len(missing)
                )
                raise FetchContractError(missing, len(fetched))

            for key, value in zip(missing, fetched):
                self._cache.insert(key, value)
                values[key] = value

        return [values[key] for key in self._keys]


class Entry:
    """Single-key view, the one-key counterpart of EntriesRequest."""

    def __init__(self, cache: Cache, key: Hashable) -> None:
        self._cache = cache
        self.key = key

    @property
    def is_live(self) -> bool:
        return self.key in self._cache

    def or_insert(self, default: Any) -> Any:
        return self.or_try_insert_with(lambda _key: default)

    def or_insert_with(self, fetch: Callable[[Hashable], Any]) -> Any:
        """Return the live value, or insert and return `fetch(key)`.

        Unlike dict.setdefault, the fetch function receives the key.
        """
        return self.or_try_insert_with(fetch)

    def or_try_insert_with(self, fetch: Callable[[Hashable], Any]) -> Any:
        value = self._cache.get(self.key, _ABSENT)
        if value is not _ABSENT:
            return value
        value = fetch(self.key)
        self._cache.insert(self.key, value)
        return value

    def __repr__(self) -> str:
        return f"Entry(key={self.key!r}, live={self.is_live})"
