"""Query string serialization compatible with ``qs.stringify``.

Existing API consumers parse bracket notation, so the output must match
``qs.stringify(params, {encodeValuesOnly: true})`` byte for byte:

* sequences are bracket-indexed: ``include[0]=a&include[1]=b``
* nested mappings use bracketed keys: ``filter[name]=x``
* only values are percent-encoded (RFC 3986); keys are emitted as-is
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import date, datetime
from typing import Any
from urllib.parse import quote

# RFC 3986 unreserved characters (alphanumerics are always safe for quote()).
_SAFE = "-._~"


def encode_value(value: Any) -> str:
    """Render a scalar and percent-encode it."""
    return quote(to_string(value), safe=_SAFE)


def to_string(value: Any) -> str:
    """String form used for both path substitution and query values."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _pairs(prefix: str, value: Any) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, child in value.items():
            yield from _pairs(f"{prefix}[{key}]", child)
    elif _is_sequence(value):
        for index, child in enumerate(value):
            yield from _pairs(f"{prefix}[{index}]", child)
    else:
        yield prefix, encode_value(value)


def stringify(params: Mapping[str, Any]) -> str:
    """Serialize *params* into a query string (without the leading ``?``).

    ``None`` values and empty sequences produce no output.
    """
    parts = []
    for key, value in params.items():
        parts.extend(f"{k}={v}" for k, v in _pairs(str(key), value))
    return "&".join(parts)
