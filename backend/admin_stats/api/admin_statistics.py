# backend/admin_stats/api/admin_statistics.py
from fastapi import APIRouter, Depends, Header, HTTPException, Query
from typing import Literal, Optional

from admin_stats.core.config import STATS_TEAM_LIMIT
from admin_stats.schemas.stats import StatsParams, StatsResponse
from admin_stats.services.stats_service import StatsService, get_stats_service
from admin_stats.utils.formatters import kpi_cards
from admin_stats.utils.stats_range import get_stats_range_dates, resolve_range

router = APIRouter(prefix="/api/admin/statistics", tags=["admin-statistics"])

# ---------- helpers ----------
def stats_params(
    range: Literal["7d", "30d"] = Query("7d"),
    from_: Optional[str] = Query(None, alias="from", description="Custom start day, YYYY-MM-DD"),
    to: Optional[str] = Query(None, description="Custom end day, YYYY-MM-DD"),
) -> StatsParams:
    try:
        resolved = resolve_range(range, from_, to)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid date range: {e}")
    return StatsParams(**resolved)

def _respond(result: dict, team_limit: int) -> dict:
    # The engine returns every team; the dashboard shows the top N
    return {
        **result,
        "teamBreakdown": result["teamBreakdown"][:team_limit],
        "kpis": kpi_cards(result["overview"]),
    }

# ---------- routes ----------
@router.get("", response_model=StatsResponse)
async def admin_statistics(
    params: StatsParams = Depends(stats_params),
    team_limit: int = Query(STATS_TEAM_LIMIT, alias="teamLimit", ge=1, le=100),
    authorization: Optional[str] = Header(None),
    service: StatsService = Depends(get_stats_service),
):
    result = await service.get_admin_stats(params, authorization)
    return _respond(result, team_limit)

@router.post("/refetch", response_model=StatsResponse)
async def refetch_admin_statistics(
    params: StatsParams = Depends(stats_params),
    team_limit: int = Query(STATS_TEAM_LIMIT, alias="teamLimit", ge=1, le=100),
    authorization: Optional[str] = Header(None),
    service: StatsService = Depends(get_stats_service),
):
    result = await service.refetch_admin_stats(params, authorization)
    return _respond(result, team_limit)

@router.get("/range")
def statistics_range(range: Literal["7d", "30d"] = Query("7d")):
    return get_stats_range_dates(range)
