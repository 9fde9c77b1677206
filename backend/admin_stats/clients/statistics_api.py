# backend/admin_stats/clients/statistics_api.py
from typing import Any, Dict, Optional
import logging

import httpx

from admin_stats.core import config

logger = logging.getLogger(__name__)


class StatsAPIError(RuntimeError):
    """Transport-level failure talking to the upstream statistics API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StatisticsAPIClient:
    """
    Thin async client for the upstream statistics endpoints.
    Returns the decoded JSON body untouched; normalization happens elsewhere.
    """

    def __init__(
        self,
        base_url: str = config.STATS_API_BASE_URL,
        token: Optional[str] = config.STATS_API_TOKEN,
        timeout: float = config.STATS_API_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport

    def _headers(self, authorization: Optional[str]) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        # Caller's own credentials win over the service token
        if authorization:
            headers["Authorization"] = authorization
        elif self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def get_json(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        *,
        authorization: Optional[str] = None,
    ) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                r = await client.get(url, params=params, headers=self._headers(authorization))
            except httpx.TimeoutException as e:
                logger.warning("Statistics API timeout: %s", url)
                raise StatsAPIError(f"Request timed out: {url}") from e
            except httpx.HTTPError as e:
                logger.warning("Statistics API request failed: %s (%s)", url, e)
                raise StatsAPIError(f"Request failed: {e}") from e

        if r.status_code >= 400:
            logger.warning("Statistics API %s answered HTTP %s", url, r.status_code)
            raise StatsAPIError(f"HTTP {r.status_code}: {r.text[:200]}", status_code=r.status_code)

        try:
            return r.json()
        except ValueError as e:
            raise StatsAPIError("Response is not JSON", status_code=r.status_code) from e

    # ---------- admin statistics ----------
    async def get_overall_stats(self, params: Dict[str, Any], authorization: Optional[str] = None) -> Any:
        return await self.get_json(config.STATS_OVERALL_PATH, params, authorization=authorization)

    async def get_team_stats(self, params: Dict[str, Any], authorization: Optional[str] = None) -> Any:
        return await self.get_json(config.STATS_TEAMS_PATH, params, authorization=authorization)

    async def get_daily_stats(self, params: Dict[str, Any], authorization: Optional[str] = None) -> Any:
        return await self.get_json(config.STATS_DAILY_PATH, params, authorization=authorization)

    # ---------- team (my team) statistics ----------
    async def get_my_team_stats(self, params: Dict[str, Any], authorization: Optional[str] = None) -> Any:
        return await self.get_json(config.TEAM_STATS_PATH, params, authorization=authorization)

    async def get_my_team_shipment_stats(self, params: Dict[str, Any], authorization: Optional[str] = None) -> Any:
        return await self.get_json(config.TEAM_SHIPMENTS_PATH, params, authorization=authorization)
