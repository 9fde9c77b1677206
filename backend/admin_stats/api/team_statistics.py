# backend/admin_stats/api/team_statistics.py
from fastapi import APIRouter, Depends, Header
from typing import Optional

from admin_stats.api.admin_statistics import stats_params
from admin_stats.schemas.stats import StatsParams, TeamStatsResponse
from admin_stats.services.stats_service import StatsService, get_stats_service

router = APIRouter(prefix="/api/team/statistics", tags=["team-statistics"])

@router.get("", response_model=TeamStatsResponse)
async def my_team_statistics(
    params: StatsParams = Depends(stats_params),
    authorization: Optional[str] = Header(None),
    service: StatsService = Depends(get_stats_service),
):
    """Statistics for the caller's own team; the team is identified upstream by the token."""
    return await service.get_team_stats(params, authorization)
