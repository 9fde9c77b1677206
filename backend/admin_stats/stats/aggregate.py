"""
Normalization of raw upstream statistics into the dashboard reporting model.

`build_admin_stats` turns the three admin endpoint payloads (overall, team,
daily) into overview KPIs, a merged revenue/orders series and the team and
payment breakdowns. `build_team_stats` does the same for a team's own
statistics and shipment summary. Both are pure: malformed or missing fields
degrade to zeros, empty lists and fallback labels, never to exceptions.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

from admin_stats.stats.envelope import unwrap_object
from admin_stats.stats.pickers import (
    pick_array,
    pick_number,
    pick_record,
    prefer_array,
    values_at,
)
from admin_stats.stats.series import (
    map_order_points,
    map_payment_breakdown,
    map_revenue_points,
    map_team_breakdown,
    merge_revenue_and_orders,
    TEAM_SERIES_ORDER_FIELDS,
    now_iso,
)

# ---------- sub-object names ----------
SUMMARY_KEYS = ("overview", "summary", "metrics", "stats", "statistics", "totals", "meta")
CHART_KEYS = ("charts", "chart", "trends", "trend", "timeline", "series", "history", "graph")
BREAKDOWN_KEYS = ("breakdowns", "breakdown", "distribution", "analytics", "segments", "partition")

# ---------- overview chains: (summary fields, root fields) ----------
TOTAL_ORDERS_FIELDS = (
    ("totalOrders", "total_orders", "orders", "orderCount", "totalOrdersCount", "total_orders_count"),
    ("totalOrders", "total_orders", "orders", "orderCount"),
)
TOTAL_REVENUE_FIELDS = (
    ("totalRevenue", "totalRevenueVnd", "total_revenue", "total_revenue_vnd", "totalAmount",
     "total_amount", "revenue", "revenue_vnd", "total_amount_vnd"),
    ("totalRevenue", "totalRevenueVnd", "total_revenue", "total_revenue_vnd"),
)
AVERAGE_ORDER_VALUE_FIELDS = (
    ("averageOrderValue", "averageOrderValueVnd", "average_order_value", "average_order_value_vnd",
     "avgOrderValue", "avg_order_value", "avg_order_value_vnd", "averageTicketSize",
     "average_ticket_size", "average_ticket_size_vnd"),
    ("averageOrderValue", "averageOrderValueVnd", "average_order_value", "average_order_value_vnd"),
)
SUCCESS_RATE_FIELDS = (
    ("successRate", "success_rate", "success_ratio", "successRatePct", "success_rate_pct",
     "success_rate_percent", "successPercent", "success_percent", "conversionRate",
     "conversion_rate", "fulfillmentRate", "fulfillment_rate"),
    ("successRate", "success_rate", "success_ratio"),
)

# ---------- series chains ----------
TEAM_ENDPOINT_KEYS = ("data", "result", "payload", "items", "values", "teams", "teamStats", "team_stats")

DAILY_COMBINED_KEYS = (
    "daily", "stats", "statistics", "timeline", "history", "series", "data", "points", "items", "rows",
)
DAILY_REVENUE_KEYS = (
    "revenueByDay", "revenue_by_day", "dailyRevenue", "daily_revenue", "revenueTrend", "revenue_trend",
    "revenueSeries", "revenue_series", "revenues", "revenue", "amounts", "amount_series",
    "chart.revenue", "charts.revenue", "charts.revenues", "series.revenue", "series.revenues",
)
DAILY_ORDER_KEYS = (
    "ordersByDay", "orders_by_day", "dailyOrders", "daily_orders", "orderTrend", "order_trend",
    "ordersTrend", "orders_trend", "orderSeries", "order_series", "ordersSeries", "orders_series",
    "orders", "order", "quantities", "counts", "chart.orders", "charts.orders", "series.orders",
)
OVERALL_REVENUE_KEYS = (
    "revenueByDay", "revenue_by_day", "dailyRevenue", "daily_revenue", "ordersByDay", "orders_by_day",
    "revenueTrend", "revenue_trend", "revenueSeries", "revenue_series", "revenuePoints", "revenue_points",
)
CHART_REVENUE_KEYS = (
    "revenue", "revenues", "revenueByDay", "revenue_by_day", "dailyRevenue", "daily_revenue",
    "series", "data", "points",
)
OVERALL_ORDER_KEYS = (
    "ordersByDay", "orders_by_day", "dailyOrders", "daily_orders", "orderTrend", "order_trend",
    "ordersTrend", "orders_trend", "orderSeries", "order_series", "ordersSeries", "orders_series",
    "ordersPoints", "orders_points", "orderHistory", "order_history",
)
CHART_ORDER_KEYS = (
    "orders", "order", "ordersByDay", "orders_by_day", "dailyOrders", "daily_orders",
    "orderTrend", "order_trend", "series", "data", "points",
)
PAYMENT_KEYS = (
    "paymentBreakdown", "payment_breakdown", "paymentMethodBreakdown", "payment_method_breakdown",
    "paymentMethods", "payment_methods", "paymentSummary", "payment_summary",
)
BREAKDOWN_PAYMENT_KEYS = (
    "paymentBreakdown", "payment_breakdown", "paymentMethods", "payment_methods", "payments", "payment",
)
TEAM_BREAKDOWN_KEYS = (
    "teamBreakdown", "team_breakdown", "teams", "teamStats", "team_stats",
    "topTeams", "top_teams", "leaderboard",
)
BREAKDOWN_TEAM_KEYS = ("teams", "teamBreakdown", "team_breakdown")


def _overview_number(summary: Dict[str, Any], root: Dict[str, Any], chains) -> Any:
    summary_fields, root_fields = chains
    return pick_number(*values_at(summary, summary_fields), *values_at(root, root_fields))


def _section(record: Dict[str, Any], keys: Iterable[str]) -> Optional[Dict[str, Any]]:
    return pick_record(*values_at(record, keys))


def build_overview(overall_data: Dict[str, Any]) -> Dict[str, Any]:
    summary = _section(overall_data, SUMMARY_KEYS)
    if summary is None:
        summary = overall_data
    return {
        "totalOrders": _overview_number(summary, overall_data, TOTAL_ORDERS_FIELDS),
        "totalRevenue": _overview_number(summary, overall_data, TOTAL_REVENUE_FIELDS),
        "averageOrderValue": _overview_number(summary, overall_data, AVERAGE_ORDER_VALUE_FIELDS),
        "successRate": _overview_number(summary, overall_data, SUCCESS_RATE_FIELDS),
    }


def build_admin_stats(
    overall_raw: Any,
    team_raw: Any,
    daily_raw: Any,
    now: Callable[[], str] = now_iso,
) -> Dict[str, Any]:
    overall = unwrap_object(overall_raw)
    charts = _section(overall, CHART_KEYS) or {}
    breakdowns = _section(overall, BREAKDOWN_KEYS) or {}

    team_rows = pick_array(team_raw, *values_at(team_raw, TEAM_ENDPOINT_KEYS)) or []
    daily = daily_raw if isinstance(daily_raw, list) else unwrap_object(daily_raw)

    # ---- revenue / orders series: dedicated daily series first, overall charts last ----
    daily_combined = pick_array(daily_raw, daily, *values_at(daily, DAILY_COMBINED_KEYS)) or []
    daily_revenue = pick_array(*values_at(daily, DAILY_REVENUE_KEYS)) or []
    daily_orders = pick_array(*values_at(daily, DAILY_ORDER_KEYS)) or []
    overall_revenue = pick_array(
        *values_at(overall, OVERALL_REVENUE_KEYS), *values_at(charts, CHART_REVENUE_KEYS)
    ) or []
    overall_orders = pick_array(
        *values_at(overall, OVERALL_ORDER_KEYS), *values_at(charts, CHART_ORDER_KEYS)
    ) or []

    revenue_source = prefer_array(daily_revenue, daily_combined, overall_revenue) or []
    order_source = prefer_array(daily_orders, daily_combined, overall_orders) or []
    revenue_by_day = merge_revenue_and_orders(
        map_revenue_points(revenue_source, now),
        map_order_points(order_source, now),
    )

    # ---- breakdowns ----
    payment_breakdown = map_payment_breakdown(
        pick_array(*values_at(overall, PAYMENT_KEYS), *values_at(breakdowns, BREAKDOWN_PAYMENT_KEYS))
    )
    team_source = pick_array(
        *values_at(overall, TEAM_BREAKDOWN_KEYS), *values_at(breakdowns, BREAKDOWN_TEAM_KEYS)
    ) or []
    team_breakdown = map_team_breakdown(team_source if team_source else team_rows)

    return {
        "overview": build_overview(overall),
        "revenueByDay": revenue_by_day,
        "teamBreakdown": team_breakdown,
        "paymentBreakdown": payment_breakdown,
    }


# =====================================================================
# Team (my-team) statistics
# =====================================================================
TEAM_SUMMARY_FIELDS = {
    "totalOrders": ("totalOrders", "total_orders", "orders", "orderCount"),
    "totalRevenue": ("totalRevenue", "total_revenue", "totalRevenueVnd", "total_revenue_vnd",
                     "revenue", "revenue_vnd"),
    "averageOrderValue": ("averageOrderValue", "average_order_value", "averageOrderValueVnd",
                          "average_order_value_vnd", "avgOrderValue", "avg_order_value"),
    "completedOrders": ("completedOrders", "completed", "successfulOrders", "deliveredOrders",
                        "fulfilledOrders", "success_orders"),
    "pendingOrders": ("pendingOrders", "pending", "processingOrders", "openOrders", "inProgressOrders"),
    "successRate": ("successRate", "success_rate", "completionRate", "completion_rate",
                    "conversionRate", "conversion_rate"),
}
TEAM_REVENUE_SERIES_KEYS = (
    "revenueByDay", "revenue_by_day", "dailyRevenue", "daily_revenue", "revenueTrend", "revenue_trend",
    "revenueSeries", "revenue_series", "timeline", "revenuePoints", "revenue_points",
    "series.revenue", "series.revenues",
)
TEAM_ORDER_SERIES_KEYS = (
    "ordersByDay", "orders_by_day", "dailyOrders", "daily_orders", "orderTrend", "order_trend",
    "ordersTrend", "orders_trend", "orderSeries", "order_series", "ordersSeries", "orders_series",
    "timeline", "ordersPoints", "orders_points", "series.orders",
)
SHIPMENT_SUMMARY_KEYS = ("overview", "summary", "metrics", "stats", "statuses", "state")
SHIPMENT_FIELDS = {
    "total": ("totalShipments", "total", "shipments", "count"),
    "assigned": ("assigned", "assignedShipments", "assigned_count", "assigned_shipments"),
    "inProgress": ("inProgress", "in_progress", "inTransit", "in_transit", "active"),
    "delivered": ("delivered", "completed", "successful", "deliveredShipments", "delivered_count"),
    "failed": ("failed", "failedShipments", "unsuccessful", "failed_count"),
    "pending": ("pending", "waiting", "queued", "pendingShipments"),
}


def _numbers(source: Dict[str, Any], chains: Dict[str, tuple]) -> Dict[str, Any]:
    return {name: pick_number(*values_at(source, fields)) for name, fields in chains.items()}


def build_team_stats(stats_raw: Any, shipments_raw: Any, now: Callable[[], str] = now_iso) -> Dict[str, Any]:
    stats = unwrap_object(stats_raw)
    summary = _section(stats, SUMMARY_KEYS)
    if summary is None:
        summary = stats

    revenue_series = pick_array(*values_at(stats, TEAM_REVENUE_SERIES_KEYS)) or []
    order_series = pick_array(*values_at(stats, TEAM_ORDER_SERIES_KEYS)) or []
    timeline: List[Dict[str, Any]] = merge_revenue_and_orders(
        map_revenue_points(revenue_series, now),
        map_order_points(order_series, now, TEAM_SERIES_ORDER_FIELDS),
    )

    shipments = unwrap_object(shipments_raw)
    shipment_summary = _section(shipments, SHIPMENT_SUMMARY_KEYS)
    if shipment_summary is None:
        shipment_summary = shipments

    return {
        "overview": _numbers(summary, TEAM_SUMMARY_FIELDS),
        "timeline": timeline,
        "shipments": _numbers(shipment_summary, SHIPMENT_FIELDS),
    }
