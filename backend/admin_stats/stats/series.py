# backend/admin_stats/stats/series.py
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from admin_stats.core.config import OTHER_METHOD_LABEL, UNKNOWN_TEAM_LABEL
from admin_stats.stats.pickers import pick_number, pick_string, values_at

# ---------- fallback chains (declared order is priority order) ----------
DATE_FIELDS = ("date", "day", "label", "period", "timestamp", "time", "bucket", "key")

REVENUE_FIELDS = (
    "revenue", "revenue_vnd", "total_revenue_vnd", "amount", "amount_vnd",
    "total_amount", "total_amount_vnd", "value",
)
POINT_ORDER_FIELDS = (
    "orders", "total_orders", "count", "order_count", "orders_count", "totalOrders",
)
SERIES_ORDER_FIELDS = (
    "orders", "total_orders", "totalOrders", "totalOrdersCount", "total_orders_count",
    "count", "order_count", "orders_count", "quantity", "total_quantity", "value",
)
# Team timelines check `count` before the camelCase totals and carry no quantities
TEAM_SERIES_ORDER_FIELDS = (
    "orders", "total_orders", "count", "order_count", "orders_count",
    "totalOrders", "totalOrdersCount", "total_orders_count", "value",
)

PAYMENT_METHOD_FIELDS = ("method", "payment_method", "label", "name")
PAYMENT_ORDER_FIELDS = ("orders", "total_orders", "count", "order_count", "orders_count")

TEAM_LABEL_FIELDS = (
    "team", "team_name", "teamName", "code", "name", "label", "title",
    "team_code", "teamCode", "team_label",
    "team.name", "team.code", "team.label",
    "teamInfo.name", "teamInfo.label", "teamInfo.code",
    "metadata.team", "metadata.team_name",
)
TEAM_ORDER_FIELDS = (
    "orders", "total_orders", "totalOrders", "totalOrdersCount", "total_orders_count",
    "count", "order_count", "orders_count",
)
TEAM_REVENUE_FIELDS = REVENUE_FIELDS + (
    "totalRevenue", "totalRevenueVnd", "total_revenue", "total_amounts",
    "sumRevenue", "sum_revenue", "revenueVnd", "revenue_vnd_total",
)


def now_iso() -> str:
    """Current UTC instant as `2024-03-01T08:15:00.000Z`."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def _records(raw: Any) -> List[Dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    return [item if isinstance(item, dict) else {} for item in raw]


def _resolve_date(item: Dict[str, Any], now: Callable[[], str]) -> str:
    # A point without any date lands on "now" rather than being dropped
    date = pick_string(*values_at(item, DATE_FIELDS))
    return date if date is not None else now()


# ---------- mappers ----------
def map_revenue_points(raw: Any, now: Callable[[], str] = now_iso) -> List[Dict[str, Any]]:
    points = [
        {
            "date": _resolve_date(item, now),
            "revenue": pick_number(*values_at(item, REVENUE_FIELDS)),
            "orders": pick_number(*values_at(item, POINT_ORDER_FIELDS)),
        }
        for item in _records(raw)
    ]
    return sorted(points, key=lambda p: p["date"])


def map_order_points(
    raw: Any,
    now: Callable[[], str] = now_iso,
    fields: Tuple[str, ...] = SERIES_ORDER_FIELDS,
) -> List[Dict[str, Any]]:
    points = [
        {
            "date": _resolve_date(item, now),
            "orders": pick_number(*values_at(item, fields)),
        }
        for item in _records(raw)
    ]
    return sorted(points, key=lambda p: p["date"])


def map_payment_breakdown(raw: Any) -> List[Dict[str, Any]]:
    return [
        {
            "method": pick_string(*values_at(item, PAYMENT_METHOD_FIELDS)) or OTHER_METHOD_LABEL,
            "orders": pick_number(*values_at(item, PAYMENT_ORDER_FIELDS)),
            "revenue": pick_number(*values_at(item, REVENUE_FIELDS)),
        }
        for item in _records(raw)
    ]


def map_team_breakdown(raw: Any) -> List[Dict[str, Any]]:
    rows = [
        {
            "team": pick_string(*values_at(item, TEAM_LABEL_FIELDS)) or UNKNOWN_TEAM_LABEL,
            "orders": pick_number(*values_at(item, TEAM_ORDER_FIELDS)),
            "revenue": pick_number(*values_at(item, TEAM_REVENUE_FIELDS)),
        }
        for item in _records(raw)
    ]
    # sorted() is stable, so equal revenues keep their input order
    return sorted(rows, key=lambda r: r["revenue"], reverse=True)


# ---------- merge ----------
def merge_revenue_and_orders(
    revenue_points: List[Dict[str, Any]],
    order_points: Optional[List[Dict[str, Any]]] = None,
) -> List[Dict[str, Any]]:
    """
    Align revenue and order series by date.
    Revenue points set revenue and a provisional order count; order points are
    applied second and win on `orders`.
    """
    by_date: Dict[str, Dict[str, Any]] = {}

    def entry(date: str) -> Dict[str, Any]:
        return by_date.setdefault(date, {"date": date, "revenue": 0, "orders": 0})

    for point in revenue_points:
        e = entry(point["date"])
        e["revenue"] = point.get("revenue", 0)
        e["orders"] = point.get("orders", 0)

    for point in order_points or []:
        entry(point["date"])["orders"] = point.get("orders", 0)

    return sorted(by_date.values(), key=lambda p: p["date"])
