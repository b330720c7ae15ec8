"""
Query string encoding for parameter maps.

Keys are sorted at every level so the same map always yields the same string.
Nested values flatten with brackets: ``{"a": {"b": 1}}`` -> ``a[b]=1`` and
``{"a": [1, 2]}`` -> ``a[0]=1&a[1]=2`` (brackets end up percent-encoded).
"""

from typing import Any, List, Mapping, Tuple
from urllib.parse import urlencode


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]):
    if isinstance(value, Mapping):
        for key in sorted(value, key=str):
            _flatten(f"{prefix}[{key}]", value[key], pairs)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
    else:
        pairs.append((prefix, _stringify(value)))


def flatten_params(params: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """Flatten a parameter map into sorted (key, value) string pairs."""
    pairs: List[Tuple[str, str]] = []
    for key in sorted(params, key=str):
        _flatten(str(key), params[key], pairs)
    return pairs


def build_query(params: Mapping[str, Any]) -> str:
    """Encode a parameter map as an application/x-www-form-urlencoded string."""
    if not params:
        return ""
    return urlencode(flatten_params(params))


def append_query(url: str, query: str) -> str:
    """Append an encoded query to a URL, using '&' if it already has one."""
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"
