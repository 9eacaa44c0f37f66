"""Shared fixtures for the rest-services test suite."""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx
import pytest
import structlog

from rest_services.bus.memory_bus import EventBus
from rest_services.core.config import ServiceDefinition
from rest_services.services.service import ServiceContext
from rest_services.transport.http import HttpTransport

FONT_SERVICE = {
    "destroy": {
        "methods": ["DELETE"],
        "parameters": ["font"],
        "uri": "v2/fonts/{font}",
    },
    "index": {
        "methods": ["GET"],
        "parameters": [],
        "uri": "v2/fonts",
    },
    "show": {
        "methods": ["GET"],
        "parameters": ["font"],
        "uri": "v2/fonts/{font}",
    },
    "store": {
        "methods": ["POST"],
        "parameters": [],
        "uri": "v2/fonts",
    },
    "update": {
        "methods": ["PUT", "PATCH"],
        "parameters": ["font"],
        "uri": "v2/fonts/{font}",
    },
}


# ---------------------------------------------------------------------------
# Service definitions
# ---------------------------------------------------------------------------

@pytest.fixture
def font_service() -> ServiceDefinition:
    """Return the ``font`` service definition used across tests."""
    return ServiceDefinition.model_validate(FONT_SERVICE)


# ---------------------------------------------------------------------------
# Bus & transport
# ---------------------------------------------------------------------------

@pytest.fixture
def bus() -> EventBus:
    """Return a fresh EventBus instance."""
    return EventBus()


def make_transport(
    handler: Callable[[httpx.Request], httpx.Response],
    **kwargs,
) -> HttpTransport:
    """Build an HttpTransport whose requests are answered by *handler*."""
    return HttpTransport(
        "http://api.test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def _reply(status_code: int, json=None, headers: dict[str, str] | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=json, headers=headers)

    return handler


@pytest.fixture
def reply():
    """Return a factory for handlers answering every request alike."""
    return _reply


@pytest.fixture
async def transport_factory():
    """Create transports and close them after the test."""
    created: list[HttpTransport] = []

    def factory(handler, **kwargs) -> HttpTransport:
        transport = make_transport(handler, **kwargs)
        created.append(transport)
        return transport

    yield factory

    for transport in created:
        await transport.close()


@pytest.fixture
def font_context(bus, font_service, transport_factory) -> Callable[..., ServiceContext]:
    """Build a ``font`` ServiceContext around a mocked HTTP handler."""

    def factory(handler) -> ServiceContext:
        return ServiceContext(
            bus=bus,
            transport=transport_factory(handler),
            name="font",
            service=font_service,
        )

    return factory


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo ``setup_logging`` side effects (CLI and logger tests)."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
