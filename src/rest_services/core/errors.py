"""Custom exception hierarchy for the service client."""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Base exception for all service client errors."""


# --- Configuration ---
class ConfigError(ServiceError):
    """Invalid or missing configuration."""


class UnknownServiceError(ConfigError):
    """No service is registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown service: {name!r}")


class UnsupportedActionError(ConfigError):
    """The service definition does not declare the requested action."""

    def __init__(self, service: str, action: str):
        self.service = service
        self.action = action
        super().__init__(f"Service {service!r} does not support action {action!r}")


# --- Routing ---
class RouteError(ServiceError):
    """A request URL could not be generated."""


class MissingParameterError(RouteError):
    """A required path parameter was not provided."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(
            f'Could not generate route. Required parameter "{parameter}" '
            f"was not provided."
        )


# --- Transport ---
class TransportError(ServiceError):
    """The HTTP transport failed to complete a request.

    ``response`` holds the server response when one was received
    (non-2xx status), ``None`` for network and timeout failures.
    """

    def __init__(self, message: str, response: Any = None):
        self.response = response
        super().__init__(message)


class ServiceRequestError(ServiceError):
    """A generated service function failed.

    ``payload`` is the exact value emitted on the ``<service>.<action>.error``
    event: the response body when the transport error carried one, the
    transport error itself otherwise.
    """

    def __init__(self, service: str, action: str, payload: Any):
        self.service = service
        self.action = action
        self.payload = payload
        super().__init__(f"{service}.{action} request failed: {payload!r}")
