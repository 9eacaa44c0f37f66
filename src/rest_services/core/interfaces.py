"""Protocol interfaces for the collaborators of the service core.

The transport and the event bus are injected into every generated service
function.  Implementations can be swapped (real HTTP, mocks, another bus)
without changing callers.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from .models import Request

EventHandler = Callable[[Any], Any]


# ---------------------------------------------------------------------------
# Event Bus
# ---------------------------------------------------------------------------

@runtime_checkable
class ISubscription(Protocol):
    type: str
    handler: EventHandler


@runtime_checkable
class IEventBus(Protocol):
    """Publish/subscribe event bus keyed by full event name."""

    def emit(self, name: str, payload: Any = None) -> None: ...

    def on(self, name: str, handler: EventHandler) -> None: ...

    def once(self, name: str, handler: EventHandler) -> None: ...

    def off(self, name: str, handler: EventHandler) -> None: ...

    @property
    def subscriptions(self) -> Sequence[ISubscription]: ...


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------

@runtime_checkable
class ITransport(Protocol):
    """Performs one HTTP request per ``submit`` call.

    Returns a value exposing the decoded body as ``data``.  Failures raise;
    the raised error may carry the server response as ``response`` (with its
    own ``data``).
    """

    async def submit(self, request: Request) -> Any: ...
