# backend/admin_stats/utils/stats_range.py
import datetime as dt
from typing import Dict, Optional

from admin_stats.core.config import VIETNAM_UTC_OFFSET_HOURS

VIETNAM_TZ = dt.timezone(dt.timedelta(hours=VIETNAM_UTC_OFFSET_HOURS))

# "7d" is today plus the 6 days before it
RANGE_DAYS = {"7d": 6, "30d": 29}


def to_utc_iso(moment: dt.datetime) -> str:
    """UTC ISO string with millisecond precision: 2024-03-01T17:00:00.000Z"""
    utc = moment.astimezone(dt.timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def vietnam_start_of_day(moment: dt.datetime) -> dt.datetime:
    local = moment.astimezone(VIETNAM_TZ)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def vietnam_end_of_day(moment: dt.datetime) -> dt.datetime:
    return vietnam_start_of_day(moment) + dt.timedelta(days=1, milliseconds=-1)


def get_stats_range_dates(range_: str, now: Optional[dt.datetime] = None) -> Dict[str, str]:
    """
    Quick range ending at the close of the current Vietnam day.
    Unknown ranges fall back to 7 days.
    """
    now = now or dt.datetime.now(dt.timezone.utc)
    end = vietnam_end_of_day(now)
    days = RANGE_DAYS.get(range_, RANGE_DAYS["7d"])
    start = vietnam_start_of_day(end - dt.timedelta(days=days))
    return {"from": to_utc_iso(start), "to": to_utc_iso(end)}


def resolve_range(
    range_: str = "7d",
    custom_from: Optional[str] = None,
    custom_to: Optional[str] = None,
    now: Optional[dt.datetime] = None,
) -> Dict[str, str]:
    """
    Custom YYYY-MM-DD bounds override the quick range independently of each
    other; a custom `from` means start of that day, a custom `to` end of day.
    Raises ValueError for malformed dates or from > to.
    """
    quick = get_stats_range_dates(range_, now)
    resolved = dict(quick)

    if custom_from:
        day = dt.date.fromisoformat(custom_from)
        start = dt.datetime(day.year, day.month, day.day, tzinfo=VIETNAM_TZ)
        resolved["from"] = start.isoformat()
    if custom_to:
        day = dt.date.fromisoformat(custom_to)
        # whole seconds, as upstream receives custom bounds: 2024-03-02T23:59:59+07:00
        end = dt.datetime(day.year, day.month, day.day, 23, 59, 59, tzinfo=VIETNAM_TZ)
        resolved["to"] = end.isoformat()

    if dt.datetime.fromisoformat(_py_iso(resolved["from"])) > dt.datetime.fromisoformat(_py_iso(resolved["to"])):
        raise ValueError("`from` must not be after `to`")
    return resolved


def _py_iso(value: str) -> str:
    # fromisoformat() only understands the trailing "Z" from Python 3.11 on
    return value[:-1] + "+00:00" if value.endswith("Z") else value
