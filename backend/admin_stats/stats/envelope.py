"""
Envelope unwrapping for upstream statistics payloads.

Upstream endpoints wrap their payload under conventional keys (`data`,
`result`, ...) and sometimes nest several envelopes. These helpers dig the
actual object or array out without ever raising.
"""

from typing import Any, Dict, List, Optional

from admin_stats.core.config import MAX_UNWRAP_DEPTH

DATA_ENVELOPE_KEYS = ("data", "result", "payload", "response", "value", "content")
ARRAY_ENVELOPE_KEYS = DATA_ENVELOPE_KEYS + ("items", "rows", "values", "list")


def is_record(value: Any) -> bool:
    return isinstance(value, dict)


def unwrap_object(value: Any, _depth: int = 0) -> Dict[str, Any]:
    """Return the innermost enveloped dict, `{}` when `value` is not a dict."""
    if not is_record(value):
        return {}
    if _depth >= MAX_UNWRAP_DEPTH:
        return value

    for key in DATA_ENVELOPE_KEYS:
        inner = value.get(key)
        if is_record(inner):
            return unwrap_object(inner, _depth + 1)

    return value


def unwrap_array(value: Any, _depth: int = 0) -> Optional[List[Any]]:
    """
    Return the first list found through the array envelope keys.
    None means no list exists anywhere in the chain, which is not the same as [].
    """
    if isinstance(value, list):
        return value
    if not is_record(value) or _depth >= MAX_UNWRAP_DEPTH:
        return None

    for key in ARRAY_ENVELOPE_KEYS:
        found = unwrap_array(value.get(key), _depth + 1)
        if found is not None:
            return found

    return None
