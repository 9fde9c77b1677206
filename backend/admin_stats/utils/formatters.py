"""
Display helpers for dashboard KPI cards (Vietnamese number conventions).
"""
import math
from typing import Any, Dict, List


def half_up(number) -> int:
    # 2.5 -> 3, unlike round()
    return int(math.floor(number + 0.5))


def format_number(number) -> str:
    """12345 -> '12.345' (dot as thousand separator)."""
    if number is None:
        return "0"
    return f"{half_up(number):,}".replace(",", ".")


def format_currency(number, currency_symbol="đ") -> str:
    """
    Formats a VND amount: 1234567 -> '1.234.567 đ'.
    Zero and missing values render as '0 đ'.
    """
    if not number:
        return f"0 {currency_symbol}"
    return f"{format_number(number)} {currency_symbol}"


def format_percent(value) -> str:
    return f"{float(value or 0):.1f}%"


def kpi_cards(overview: Dict[str, Any]) -> List[Dict[str, Any]]:
    total_revenue = overview.get("totalRevenue", 0)
    total_orders = overview.get("totalOrders", 0)
    average = half_up(overview.get("averageOrderValue", 0))
    success_rate = overview.get("successRate", 0)
    return [
        {"key": "total_revenue", "label": "Tổng doanh thu", "value": total_revenue, "unit": "đ",
         "display": format_currency(total_revenue)},
        {"key": "total_orders", "label": "Tổng số đơn", "value": total_orders,
         "display": format_number(total_orders)},
        {"key": "average_order_value", "label": "Giá trị trung bình", "value": average, "unit": "đ",
         "display": format_currency(average)},
        {"key": "success_rate", "label": "Tỉ lệ đơn thành công", "value": success_rate, "unit": "%",
         "display": format_percent(success_rate)},
    ]
