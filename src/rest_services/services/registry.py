"""Service registry: one client per configured service.

Composes the shared event bus, the HTTP transport and the configured
service definitions into a read-only name -> ``ServiceClient`` mapping.

Usage::

    settings = load_settings("configs/api.toml")

    async with build_registry(settings) as api:
        fonts = api.service("font")
        fonts.on("index.success", render)
        await fonts.index(query={"include": ["templates"]})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from rest_services.bus.memory_bus import EventBus
from rest_services.core.config import ServiceDefinition, Settings
from rest_services.core.enums import Action
from rest_services.core.errors import UnknownServiceError, UnsupportedActionError
from rest_services.core.interfaces import EventHandler, IEventBus, ISubscription, ITransport
from rest_services.services.service import ServiceContext, ServiceFunction, generate
from rest_services.transport.http import HttpTransport

logger = logging.getLogger(__name__)


class ServiceClient:
    """Request functions and scoped events for one service."""

    def __init__(self, context: ServiceContext) -> None:
        self._context = context
        self._events = context.events
        self._functions: dict[Action, ServiceFunction] = {
            action: generate(action, context) for action in context.service.actions
        }

    @property
    def name(self) -> str:
        return self._context.name

    @property
    def definition(self) -> ServiceDefinition:
        return self._context.service

    def action(self, action: Action | str) -> ServiceFunction:
        """Request function for *action*."""
        try:
            return self._functions[Action(action)]
        except (KeyError, ValueError):
            name = action.value if isinstance(action, Action) else action
            raise UnsupportedActionError(self.name, name) from None

    @property
    def index(self) -> ServiceFunction:
        return self.action(Action.INDEX)

    @property
    def show(self) -> ServiceFunction:
        return self.action(Action.SHOW)

    @property
    def store(self) -> ServiceFunction:
        return self.action(Action.STORE)

    @property
    def update(self) -> ServiceFunction:
        return self.action(Action.UPDATE)

    @property
    def destroy(self) -> ServiceFunction:
        return self.action(Action.DESTROY)

    # -- Events --------------------------------------------------------------

    def emit(self, type: str, data: Any = None) -> None:
        self._events.emit(type, data)

    def on(self, type: str, handler: EventHandler) -> None:
        self._events.on(type, handler)

    def once(self, type: str, handler: EventHandler) -> None:
        self._events.once(type, handler)

    def off(self, type: str, handler: EventHandler) -> None:
        self._events.off(type, handler)

    def subscriptions(self) -> tuple[ISubscription, ...]:
        return self._events.subscriptions()


class ServiceRegistry:
    """Read-only collection of service clients sharing one bus and transport.

    Parameters
    ----------
    services:
        Service name -> definition, usually ``Settings.services``.
    bus:
        Event bus shared by every client.
    transport:
        Transport shared by every client.
    """

    def __init__(
        self,
        services: Mapping[str, ServiceDefinition],
        bus: IEventBus,
        transport: ITransport,
    ) -> None:
        self.bus = bus
        self.transport = transport
        self._services = MappingProxyType({
            name: ServiceClient(
                ServiceContext(bus=bus, transport=transport, name=name, service=definition)
            )
            for name, definition in services.items()
        })
        logger.debug("Registered services: %s", ", ".join(self._services))

    @property
    def services(self) -> Mapping[str, ServiceClient]:
        return self._services

    def service(self, name: str) -> ServiceClient:
        try:
            return self._services[name]
        except KeyError:
            raise UnknownServiceError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._services

    # -- Lifecycle -----------------------------------------------------------

    async def close(self) -> None:
        """Close the transport if it holds resources."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> ServiceRegistry:
        open_ = getattr(self.transport, "open", None)
        if open_ is not None:
            await open_()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()


def build_registry(
    settings: Settings,
    *,
    bus: IEventBus | None = None,
    transport: ITransport | None = None,
) -> ServiceRegistry:
    """Wire the default bus and HTTP transport for *settings*."""
    return ServiceRegistry(
        settings.services,
        bus=bus if bus is not None else EventBus(),
        transport=(
            transport if transport is not None
            else HttpTransport.from_config(settings.http)
        ),
    )
