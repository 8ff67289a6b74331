"""Cache for values that are slow or unreliable to fetch, and cheaper to fetch in batches."""

from cachecache.cache import Cache, CacheEntry
from cachecache.config import CacheSettings, load_settings
from cachecache.entries import EntriesRequest, Entry
from cachecache.errors import CacheError, FetchContractError

__all__ = [
    "Cache",
    "CacheEntry",
    "CacheError",
    "CacheSettings",
    "EntriesRequest",
    "Entry",
    "FetchContractError",
    "load_settings",
]
