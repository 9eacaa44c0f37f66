"""Service function generation, routing and per-service events."""

from rest_services.services.events import ServiceEvents
from rest_services.services.registry import ServiceClient, ServiceRegistry, build_registry
from rest_services.services.route import build_url
from rest_services.services.service import ServiceContext, ServiceFunction, generate

__all__ = [
    "ServiceClient",
    "ServiceContext",
    "ServiceEvents",
    "ServiceFunction",
    "ServiceRegistry",
    "build_registry",
    "build_url",
    "generate",
]
