# firewatch/services/result_cache.py
import asyncio
import logging
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional

from ..models import CacheEntry

log = logging.getLogger(__name__)


def _now_millis() -> int:
    return int(time.time() * 1000)


class ResultCache:
    """
    In-process key -> CacheEntry store with a TTL.

    An entry is served only while now - stored_at < ttl. Writes overwrite,
    and once max_entries is reached the oldest entry is dropped.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        max_entries: int = 32,
        clock: Callable[[], int] = _now_millis,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries < 1:
            raise ValueError("max_entries must be >= 1")
        self.ttl_ms = int(ttl_seconds * 1000)
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._locks: Dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            log.debug("cache miss %s", key)
            return None
        if self._clock() - entry.stored_at >= self.ttl_ms:
            log.debug("cache expired %s", key)
            self._entries.pop(key, None)
            return None
        log.debug("cache hit %s", key)
        return entry.payload

    def set(self, key: str, payload: Any) -> CacheEntry:
        entry = CacheEntry(key=key, stored_at=self._clock(), payload=payload)
        self._entries.pop(key, None)
        self._entries[key] = entry
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            self._locks.pop(evicted, None)
        return entry

    def lock_for(self, key: str) -> asyncio.Lock:
        """Per-key lock so concurrent misses on one key share a single fetch."""
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def clear(self) -> None:
        self._entries.clear()
        self._locks.clear()
