# backend/admin_stats/services/stats_service.py
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Sequence
import asyncio

from admin_stats.clients.statistics_api import StatisticsAPIClient
from admin_stats.core import config
from admin_stats.schemas.stats import StatsParams
from admin_stats.services.queries import QueryCache, StatsQuery
from admin_stats.stats.aggregate import build_admin_stats, build_team_stats
from admin_stats.stats.series import now_iso


def combine_status(queries: Sequence[StatsQuery]) -> Dict[str, Any]:
    """OR the flags together; the first error in query order is reported."""
    error = next((q.error for q in queries if q.error is not None), None)
    return {
        "isLoading": any(q.is_loading for q in queries),
        "isFetching": any(q.is_fetching for q in queries),
        "isError": any(q.is_error for q in queries),
        "error": None if error is None else {"message": error.message, "status": error.status_code},
    }


class StatsBundle:
    """Several independent queries read and refetched as one unit."""

    def __init__(self, params: StatsParams, queries: Sequence[StatsQuery]):
        self.params = params
        self.queries = tuple(queries)

    async def ensure(self, stale_seconds: float) -> None:
        await asyncio.gather(*(q.ensure(stale_seconds) for q in self.queries))

    async def refetch(self) -> None:
        await asyncio.gather(*(q.refetch() for q in self.queries))

    def status(self) -> Dict[str, Any]:
        return combine_status(self.queries)


class AdminStats(StatsBundle):
    """Overall, team and daily statistics for one date range (in that order)."""

    def result(self, now: Callable[[], str] = now_iso) -> Dict[str, Any]:
        overall, team, daily = self.queries
        return {
            "params": self.params,
            **build_admin_stats(overall.data, team.data, daily.data, now),
            **self.status(),
        }


class TeamStats(StatsBundle):
    """A team's own statistics and its shipment summary."""

    def result(self, now: Callable[[], str] = now_iso) -> Dict[str, Any]:
        stats, shipments = self.queries
        return {
            "params": self.params,
            **build_team_stats(stats.data, shipments.data, now),
            **self.status(),
        }


class StatsService:
    def __init__(
        self,
        client: Optional[StatisticsAPIClient] = None,
        stale_seconds: float = config.STATS_STALE_SECONDS,
        cache_size: int = config.STATS_CACHE_SIZE,
    ):
        self.client = client or StatisticsAPIClient()
        self.stale_seconds = stale_seconds
        self.cache = QueryCache(cache_size)

    def _query(self, name: str, fetch, params: StatsParams, authorization: Optional[str]) -> StatsQuery:
        query_params = params.query()

        async def fetcher():
            return await fetch(query_params, authorization=authorization)

        key = (name, params.from_, params.to, authorization)
        return self.cache.get_or_create(key, lambda: StatsQuery(name, fetcher))

    # ---------- admin ----------
    def admin_stats(self, params: StatsParams, authorization: Optional[str] = None) -> AdminStats:
        return AdminStats(params, [
            self._query("overall", self.client.get_overall_stats, params, authorization),
            self._query("team", self.client.get_team_stats, params, authorization),
            self._query("daily", self.client.get_daily_stats, params, authorization),
        ])

    async def get_admin_stats(self, params: StatsParams, authorization: Optional[str] = None) -> Dict[str, Any]:
        stats = self.admin_stats(params, authorization)
        await stats.ensure(self.stale_seconds)
        return stats.result()

    async def refetch_admin_stats(self, params: StatsParams, authorization: Optional[str] = None) -> Dict[str, Any]:
        stats = self.admin_stats(params, authorization)
        await stats.refetch()
        return stats.result()

    # ---------- my team ----------
    def team_stats(self, params: StatsParams, authorization: Optional[str] = None) -> TeamStats:
        return TeamStats(params, [
            self._query("team-stats", self.client.get_my_team_stats, params, authorization),
            self._query("team-shipments", self.client.get_my_team_shipment_stats, params, authorization),
        ])

    async def get_team_stats(self, params: StatsParams, authorization: Optional[str] = None) -> Dict[str, Any]:
        stats = self.team_stats(params, authorization)
        await stats.ensure(self.stale_seconds)
        return stats.result()


@lru_cache()
def get_stats_service() -> StatsService:
    return StatsService()
