"""Generate service API endpoints from URI templates.

A template such as ``v2/fonts/{font}`` declares ``font`` as a path
parameter.  Query keys matching a declared parameter are substituted into
the path; every other key is serialized into the query string.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from typing import Any, NamedTuple

from rest_services.core.config import ServiceDefinition
from rest_services.core.enums import Action
from rest_services.core.errors import MissingParameterError
from rest_services.services.querystring import stringify, to_string


class Partition(NamedTuple):
    path_names: list[str]
    query_names: list[str]


def partition(
    required_names: Collection[str],
    query: Mapping[str, Any],
) -> Partition:
    """Split the keys of *query* into path and query parameter names.

    Key order of *query* is preserved within each group.
    """
    groups = Partition(path_names=[], query_names=[])
    for name in query:
        if name in required_names:
            groups.path_names.append(name)
        else:
            groups.query_names.append(name)
    return groups


def substitute(
    uri: str,
    path_names: Sequence[str],
    query: Mapping[str, Any],
) -> str:
    """Populate *uri* with the values of *path_names* taken from *query*.

    Raises ``MissingParameterError`` for the first name without a value.
    """
    for name in path_names:
        value = query.get(name)
        if value is None:
            raise MissingParameterError(name)
        uri = uri.replace(f"{{{name}}}", to_string(value), 1)
    return uri


def build_url(
    service: ServiceDefinition,
    action: Action | str,
    query: Mapping[str, Any] | None = None,
) -> str:
    """Generate the endpoint for *action* on *service*.

    Usage::

        build_url(fonts, Action.UPDATE, {"font": "some-font", "foo": "bar"})
        # -> "/v2/fonts/some-font?foo=bar"
    """
    query = query or {}
    options = service[action]
    query_names = partition(options.parameters, query).query_names

    # Substitute every declared parameter, not only those found in the query,
    # so a missing one raises instead of leaving a raw placeholder.
    uri = "/" + substitute(options.uri, options.parameters, query)
    query_string = stringify({name: query[name] for name in query_names})

    return f"{uri}?{query_string}" if query_string else uri
