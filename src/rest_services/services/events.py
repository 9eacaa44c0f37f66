"""Per-service view over the shared event bus.

Every event is namespaced as ``<service>.<type>``, so a client for the
``font`` service emitting ``index.success`` publishes ``font.index.success``.
"""

from __future__ import annotations

from typing import Any

from rest_services.core.interfaces import EventHandler, IEventBus, ISubscription


class ServiceEvents:
    """Scoped emit/on/once/off/subscriptions for one service."""

    def __init__(self, name: str, bus: IEventBus) -> None:
        self._name = name
        self._bus = bus
        self._prefix = f"{name}."

    @property
    def name(self) -> str:
        return self._name

    def event_name(self, type: str) -> str:
        return f"{self._prefix}{type}"

    def emit(self, type: str, data: Any = None) -> None:
        self._bus.emit(self.event_name(type), data)

    def on(self, type: str, handler: EventHandler) -> None:
        self._bus.on(self.event_name(type), handler)

    def once(self, type: str, handler: EventHandler) -> None:
        self._bus.once(self.event_name(type), handler)

    def off(self, type: str, handler: EventHandler) -> None:
        self._bus.off(self.event_name(type), handler)

    def subscriptions(self) -> tuple[ISubscription, ...]:
        """Subscriptions currently registered under this service's namespace."""
        return tuple(
            s for s in self._bus.subscriptions if s.type.startswith(self._prefix)
        )
