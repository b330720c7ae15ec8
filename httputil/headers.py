"""
Header specs: either a mapping {"Token": "123"} or a list of lines ["Token: 123"].
"""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

import httpx


def _split_line(line: str) -> Optional[Tuple[str, str]]:
    """Split "Key: Value" on the first colon; None when there is no colon."""
    key, sep, value = line.partition(":")
    if not sep:
        return None
    return key, value.strip(" ")


def string_list_to_map(lines: Iterable[str]) -> Dict[str, str]:
    """Convert "Key: Value" lines to a dict, skipping lines without a colon."""
    result = {}
    for line in lines:
        pair = _split_line(line)
        if pair is not None:
            result[pair[0]] = pair[1]
    return result


class HeaderSpec:
    """Normalized list of header entries, built from one of two forms."""

    def __init__(self, items: List[Tuple[str, str]]):
        self.items = items

    @classmethod
    def from_mapping(cls, headers: Mapping[str, str]) -> "HeaderSpec":
        items = []
        for key, value in headers.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError(
                    f"header mapping must be str -> str, got {key!r}: {value!r}"
                )
            items.append((key, value))
        return cls(items)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "HeaderSpec":
        items = []
        for line in lines:
            if not isinstance(line, str):
                raise TypeError(f"header line must be a str, got {line!r}")
            pair = _split_line(line)
            # lines without a separator are skipped
            if pair is not None:
                items.append(pair)
        return cls(items)

    @classmethod
    def coerce(cls, headers: Union["HeaderSpec", Mapping[str, str], Iterable[str], None]) -> "HeaderSpec":
        """Accept any supported header form and return a HeaderSpec."""
        if headers is None:
            return cls([])
        if isinstance(headers, HeaderSpec):
            return headers
        if isinstance(headers, Mapping):
            return cls.from_mapping(headers)
        if isinstance(headers, (str, bytes)):
            raise TypeError("headers must be a mapping or a sequence of 'Key: Value' strings, not a single string")
        if isinstance(headers, (list, tuple)):
            return cls.from_lines(headers)
        raise TypeError(f"unsupported headers type: {type(headers).__name__}")

    def apply(self, target: httpx.Headers):
        """Set every entry on target, replacing existing values for the same key."""
        for key, value in self.items:
            target[key] = value

    def __len__(self):
        return len(self.items)

    def __repr__(self):
        return f"HeaderSpec({self.items!r})"


def set_headers(request: httpx.Request, headers) -> httpx.Request:
    """Apply a header spec (in any supported form) to a built request."""
    HeaderSpec.coerce(headers).apply(request.headers)
    return request
