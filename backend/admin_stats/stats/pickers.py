"""
First-match-wins pickers.

Each picker walks its candidates in declared order and returns the first usable
one. Different upstream versions name the same figure differently
(`revenue`, `revenue_vnd`, `total_revenue_vnd`, ...), so callers list every
known spelling and let the picker choose.
"""

import math
import re
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from admin_stats.stats.envelope import is_record, unwrap_array

Number = Union[int, float]


# Unsigned hex, octal and binary literals, as JavaScript Number() reads them
RADIX_LITERAL = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")


def _coerce_number(text: str) -> Optional[Number]:
    raw = text.strip()
    # int/float accept "1_000" and non-ASCII digits such as "\u0664\u0662"; JavaScript rejects both
    if not raw or "_" in raw or not raw.isascii():
        return None
    if RADIX_LITERAL.fullmatch(raw):
        return int(raw, 0)
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        parsed = float(raw)
    except ValueError:
        return None
    return parsed if math.isfinite(parsed) else None


def pick_number(*candidates: Any) -> Number:
    for value in candidates:
        if isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            if math.isfinite(value):
                return value
            continue
        if isinstance(value, str):
            parsed = _coerce_number(value)
            if parsed is not None:
                return parsed
    return 0


def pick_string(*candidates: Any) -> Optional[str]:
    for value in candidates:
        if isinstance(value, str) and value.strip():
            return value
    return None


def pick_record(*candidates: Any) -> Optional[Dict[str, Any]]:
    for value in candidates:
        if is_record(value):
            return value
    return None


def pick_array(*candidates: Any) -> Optional[List[Any]]:
    for value in candidates:
        found = unwrap_array(value)
        if found is not None:
            return found
    return None


def prefer_array(*arrays: Optional[List[Any]]) -> Optional[List[Any]]:
    """First non-empty list; otherwise the first list given, even if empty."""
    for arr in arrays:
        if isinstance(arr, list) and arr:
            return arr
    for arr in arrays:
        if isinstance(arr, list):
            return arr
    return None


def value_at(record: Any, path: str) -> Any:
    """Resolve a dotted path (`team.name`) against nested dicts, None when missing."""
    current = record
    for part in path.split("."):
        if not is_record(current):
            return None
        current = current.get(part)
    return current


def values_at(record: Any, paths: Iterable[str]) -> Iterator[Any]:
    for path in paths:
        yield value_at(record, path)
