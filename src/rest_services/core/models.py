"""Request and response records exchanged with the transport."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Request:
    """Fully resolved request descriptor, built fresh for every call."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = None


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
