"""Generate request functions for the CRUD actions of a service.

Each generated function builds a request from the service definition,
submits it through the injected transport and reports the outcome twice:

* as a ``<service>.<action>.success`` / ``.error`` event on the bus, and
* as the return value (or raised ``ServiceRequestError``) of the call.

Both carry the same payload.

Usage::

    context = ServiceContext(bus=bus, transport=transport, name="font",
                             service=definition)
    show = generate(Action.SHOW, context)
    font = await show(query={"font": "roboto", "include": ["templates"]})
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import Any

from rest_services.core.config import ServiceDefinition
from rest_services.core.enums import Action, Outcome
from rest_services.core.errors import ServiceRequestError
from rest_services.core.interfaces import IEventBus, ITransport
from rest_services.core.models import Request
from rest_services.observability.logger import request_context
from rest_services.services.events import ServiceEvents
from rest_services.services.route import build_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceContext:
    """Capabilities bound to every function generated for one service."""

    bus: IEventBus
    transport: ITransport
    name: str
    service: ServiceDefinition

    @property
    def events(self) -> ServiceEvents:
        return ServiceEvents(self.name, self.bus)


# ---------------------------------------------------------------------------
# Result handlers
# ---------------------------------------------------------------------------

def on_success(events: ServiceEvents, action: Action, response: Any) -> Any:
    """Emit the success event and return the unwrapped payload."""
    data = getattr(response, "data", None)
    events.emit(f"{action.value}.{Outcome.SUCCESS.value}", data)
    return data


def error_payload(error: BaseException) -> Any:
    """Response body embedded in *error*, or *error* itself when absent."""
    response = getattr(error, "response", None)
    data = getattr(response, "data", None) if response is not None else None
    if data is None or data == "":
        return error
    return data


def on_error(events: ServiceEvents, action: Action, error: Exception) -> ServiceRequestError:
    """Emit the error event and build the exception to raise."""
    payload = error_payload(error)
    events.emit(f"{action.value}.{Outcome.ERROR.value}", payload)
    return ServiceRequestError(events.name, action.value, payload)


# ---------------------------------------------------------------------------
# Generated functions
# ---------------------------------------------------------------------------

class ServiceFunction:
    """Callable that submits *action* requests for one service.

    Calling it builds the request immediately, so routing errors such as
    ``MissingParameterError`` raise at the call site, before anything is
    awaited or sent.  The returned awaitable performs the transport call.
    """

    def __init__(self, action: Action, context: ServiceContext) -> None:
        self.action = Action(action)
        self.context = context
        self._events = context.events

    def __repr__(self) -> str:
        return f"<ServiceFunction {self.context.name}.{self.action.value}>"

    def build_request(
        self,
        *,
        data: Any = None,
        headers: Mapping[str, str] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> Request:
        return Request(
            method=self.action.method.value,
            url=build_url(self.context.service, self.action, query),
            headers=dict(headers or {}),
            data=data,
        )

    def __call__(
        self,
        *,
        data: Any = None,
        headers: Mapping[str, str] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> Awaitable[Any]:
        request = self.build_request(data=data, headers=headers, query=query)
        return self._submit(request)

    async def _submit(self, request: Request) -> Any:
        with request_context(self.context.name, self.action.value):
            logger.debug(
                "Submitting %s.%s: %s %s",
                self.context.name, self.action.value, request.method, request.url,
            )
            try:
                response = await self.context.transport.submit(request)
            except Exception as exc:
                logger.warning(
                    "%s.%s failed: %s", self.context.name, self.action.value, exc,
                )
                raise on_error(self._events, self.action, exc) from exc

            return on_success(self._events, self.action, response)


def generate(action: Action | str, context: ServiceContext) -> ServiceFunction:
    """Generate the request function for *action* on ``context.service``."""
    return ServiceFunction(Action(action), context)


index = partial(generate, Action.INDEX)
show = partial(generate, Action.SHOW)
store = partial(generate, Action.STORE)
update = partial(generate, Action.UPDATE)
destroy = partial(generate, Action.DESTROY)
