"""In-memory event bus keyed by full event name.

No external dependencies. Handlers are called synchronously in
registration order.

- Single-use (``once``) subscriptions are removed before their handler runs
- Dispatch iterates a snapshot, so handlers may subscribe/unsubscribe freely
- Handler failures are logged, counted and kept as dead letters

History and dead letters are bounded, so a long-lived bus only retains
the most recent payloads.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict, deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from rest_services.core.interfaces import EventHandler

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Subscription:
    """A handler registered for one event name."""

    type: str
    handler: EventHandler
    once: bool = False


@dataclass
class MemoryDeadLetter:
    """Record of a handler failure in the memory bus."""

    event: str
    handler: str
    error: str
    timestamp: float = field(default_factory=time.monotonic)


class EventBus:
    """In-memory event bus. Safe to share within a single asyncio event loop.

    Parameters
    ----------
    on_handler_error:
        Optional callback ``(event_name, exc)`` invoked when a handler
        raises.  Useful for external metrics/alerting.
    max_history:
        Number of most recent emissions kept for ``get_history``.  ``0``
        disables recording.
    max_dead_letters:
        Number of most recent handler failures kept.
    """

    def __init__(
        self,
        on_handler_error: Callable[[str, Exception], None] | None = None,
        *,
        max_history: int = 500,
        max_dead_letters: int = 500,
    ) -> None:
        self._subscriptions: list[Subscription] = []
        self._history: deque[tuple[str, Any]] = deque(maxlen=max_history)
        self._on_handler_error = on_handler_error

        # Observability
        self._error_counts: dict[str, int] = defaultdict(int)
        self._dead_letters: deque[MemoryDeadLetter] = deque(maxlen=max_dead_letters)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def on(self, name: str, handler: EventHandler) -> None:
        """Register a persistent handler for *name*."""
        self._subscriptions.append(Subscription(name, handler))

    def once(self, name: str, handler: EventHandler) -> None:
        """Register a handler removed after its first invocation."""
        self._subscriptions.append(Subscription(name, handler, once=True))

    def off(self, name: str, handler: EventHandler) -> None:
        """Remove the first registration of *handler* for *name*.

        Handlers match by equality, so a bound method matches a fresh
        reference to the same method.  Unknown handlers are ignored.
        """
        for sub in self._subscriptions:
            if sub.type == name and sub.handler == handler:
                self._subscriptions.remove(sub)
                return

    @property
    def subscriptions(self) -> tuple[Subscription, ...]:
        """Snapshot of all registered subscriptions in registration order."""
        return tuple(self._subscriptions)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def emit(self, name: str, payload: Any = None) -> None:
        """Invoke every handler registered for *name* with *payload*."""
        self._history.append((name, payload))

        for sub in [s for s in self._subscriptions if s.type == name]:
            if sub.once:
                if sub not in self._subscriptions:
                    # Already consumed by a re-entrant emit.
                    continue
                self._subscriptions.remove(sub)
            try:
                sub.handler(payload)
            except Exception as exc:
                self._error_counts[name] += 1
                self._dead_letters.append(
                    MemoryDeadLetter(
                        event=name,
                        handler=getattr(sub.handler, "__qualname__", repr(sub.handler)),
                        error=str(exc),
                    )
                )
                logger.exception("Handler error on event=%s", name)

                if self._on_handler_error is not None:
                    try:
                        self._on_handler_error(name, exc)
                    except Exception:
                        logger.warning(
                            "on_handler_error callback failed",
                            exc_info=True,
                        )

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def get_error_counts(self) -> dict[str, int]:
        """Return per-event handler error counts."""
        return dict(self._error_counts)

    @property
    def dead_letters(self) -> list[MemoryDeadLetter]:
        """Access the dead-letter list (read-only snapshot)."""
        return list(self._dead_letters)

    def clear_dead_letters(self) -> list[MemoryDeadLetter]:
        """Drain the dead-letter list and return all entries."""
        drained = list(self._dead_letters)
        self._dead_letters.clear()
        return drained

    # ------------------------------------------------------------------
    # Testing helpers
    # ------------------------------------------------------------------

    def get_history(self, name: str | None = None) -> list[tuple[str, Any]]:
        """Get recent emitted events, optionally filtered by name. For testing."""
        if name is None:
            return list(self._history)
        return [(n, p) for n, p in self._history if n == name]

    def clear_history(self) -> None:
        """Clear event history. For testing."""
        self._history.clear()
