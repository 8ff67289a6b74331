"""Exceptions raised by the cache itself (never by caller fetch functions)."""

from __future__ import annotations

from typing import Any, Sequence


class CacheError(Exception):
    """Base exception for cachecache."""


class FetchContractError(CacheError):
    """A fetch function returned the wrong number of values."""

    def __init__(self, missing: Sequence[Any], received: int) -> None:
        super().__init__(
            f"Fetch returned {received} values for {len(missing)} missing keys: {list(missing)}"
        )
        self.missing = list(missing)
        self.received = received
