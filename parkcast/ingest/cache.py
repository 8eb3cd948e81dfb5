"""In-memory TTL cache shared by the grid, forecast and alerts services."""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    expires_at: float


class CacheStore:
    """Key/value store where every write carries its own time-to-live.

    Hits return the stored object itself, never a copy, so callers can rely
    on identity to tell a cached result from a fresh fetch. Cached values
    must not be None; ``get`` uses None to signal a miss.
    """

    def __init__(
        self,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._inflight: dict[str, asyncio.Task] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() > entry.expires_at:
            del self._entries[key]
            logger.debug("Cache entry expired: %s", key)
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store value under key for ttl seconds, replacing any previous entry."""
        self._entries.pop(key, None)
        self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)
        if self.max_entries is not None and len(self._entries) > self.max_entries:
            self._evict()

    def clear(self) -> None:
        self._entries.clear()
        self._inflight.clear()

    async def get_or_fetch(
        self,
        key: str,
        ttl: float,
        fetch: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Return the cached value for key, fetching and storing it on a miss.

        Concurrent callers for the same missing key share one fetch: the
        first caller registers the running task and later callers await it
        instead of issuing their own request. Failed fetches are not cached.
        """
        value = self.get(key)
        if value is not None:
            logger.debug("Cache hit: %s", key)
            return value

        task = self._inflight.get(key)
        if task is None:
            logger.debug("Cache miss: %s", key)
            task = asyncio.ensure_future(self._populate(key, ttl, fetch))
            self._inflight[key] = task
        else:
            logger.debug("Joining in-flight fetch: %s", key)
        return await asyncio.shield(task)

    async def _populate(
        self,
        key: str,
        ttl: float,
        fetch: Callable[[], Awaitable[Any]],
    ) -> Any:
        this_task = asyncio.current_task()
        try:
            value = await fetch()
            self.set(key, value, ttl)
            return value
        finally:
            # clear() may have dropped us and a newer fetch taken the slot
            if self._inflight.get(key) is this_task:
                del self._inflight[key]

    def _evict(self) -> None:
        now = self._clock()
        for key in [k for k, e in self._entries.items() if now > e.expires_at]:
            del self._entries[key]
        while len(self._entries) > self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            logger.debug("Evicted cache entry: %s", oldest)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for e in self._entries.values() if now <= e.expires_at)
