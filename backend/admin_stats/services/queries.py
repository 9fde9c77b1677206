"""
Per-endpoint query state.

A `StatsQuery` wraps one upstream call for one set of parameters and tracks
what a dashboard needs to know about it: the last good payload, the last
error, whether a fetch is in flight. Fetches are numbered; a fetch that
finishes after a newer one was started is discarded so stale data never
overwrites fresh data.
"""

from typing import Any, Awaitable, Callable, Hashable, Optional
import asyncio
import logging
import time

from cachetools import LRUCache

from admin_stats.clients.statistics_api import StatsAPIError

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Any]]


class StatsQuery:
    def __init__(self, name: str, fetcher: Fetcher, clock: Callable[[], float] = time.monotonic):
        self.name = name
        self._fetcher = fetcher
        self._clock = clock
        self.data: Any = None
        self.has_data = False
        self.error: Optional[StatsAPIError] = None
        self.updated_at: Optional[float] = None
        self._task: Optional[asyncio.Future] = None
        self._generation = 0

    @property
    def is_fetching(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def is_loading(self) -> bool:
        return self.is_fetching and not self.has_data

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def is_stale(self, stale_seconds: float) -> bool:
        if self.updated_at is None:
            return True
        return self._clock() - self.updated_at >= stale_seconds

    def start(self) -> asyncio.Future:
        """Start a new fetch, superseding any fetch already in flight."""
        self._generation += 1
        self._task = asyncio.ensure_future(self._run(self._generation))
        return self._task

    async def _run(self, generation: int) -> None:
        try:
            data = await self._fetcher()
        except StatsAPIError as e:
            if generation != self._generation:
                logger.debug("Dropping superseded %s failure: %s", self.name, e)
                return
            # previous data stays visible next to the error
            self.error = e
            self.updated_at = self._clock()
            return

        if generation != self._generation:
            logger.debug("Dropping superseded %s result", self.name)
            return
        self.data = data
        self.has_data = True
        self.error = None
        self.updated_at = self._clock()

    async def settle(self) -> None:
        # A fetch may be superseded while we wait; keep waiting for the newest one.
        # Shielded: cancelling one waiter leaves the shared fetch running.
        while self._task is not None and not self._task.done():
            await asyncio.shield(self._task)

    async def refetch(self) -> None:
        self.start()
        await self.settle()

    async def ensure(self, stale_seconds: float) -> None:
        if not self.is_fetching and self.is_stale(stale_seconds):
            self.start()
        await self.settle()


class _QueryLRU(LRUCache):
    def popitem(self):
        key, query = super().popitem()
        logger.debug("Evicted query %s", key)
        return key, query


class QueryCache:
    """Bounded registry of queries, least recently used evicted first."""

    def __init__(self, max_size: int):
        self.max_size = max_size
        self._entries: LRUCache = _QueryLRU(maxsize=max_size)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get_or_create(self, key: Hashable, factory: Callable[[], StatsQuery]) -> StatsQuery:
        # LRUCache.get() marks the key as recently used
        query = self._entries.get(key)
        if query is None:
            query = factory()
            self._entries[key] = query
        return query

    def clear(self) -> None:
        self._entries.clear()
