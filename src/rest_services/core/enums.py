"""Enumerations used across the service client."""

from enum import Enum


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class Action(str, Enum):
    """Canonical CRUD actions a service definition may declare."""

    INDEX = "index"
    SHOW = "show"
    STORE = "store"
    UPDATE = "update"
    DESTROY = "destroy"

    @property
    def method(self) -> HttpMethod:
        """HTTP method used to dispatch this action."""
        return _ACTION_METHODS[self]


class Outcome(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


_ACTION_METHODS: dict[Action, HttpMethod] = {
    Action.INDEX: HttpMethod.GET,
    Action.SHOW: HttpMethod.GET,
    Action.STORE: HttpMethod.POST,
    Action.UPDATE: HttpMethod.PATCH,
    Action.DESTROY: HttpMethod.DELETE,
}
