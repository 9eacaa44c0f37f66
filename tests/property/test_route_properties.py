"""Property tests for route generation.

Uses hypothesis to verify partitioning is total and that URL generation
raises exactly when a declared path parameter is missing.
"""

import pytest
from hypothesis import assume, given, settings, strategies as st

from rest_services.core.config import ActionDescriptor, ServiceDefinition
from rest_services.core.errors import MissingParameterError
from rest_services.services.route import build_url, partition

names = st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=8)
values = st.one_of(
    st.integers(),
    st.text(min_size=1, max_size=10),
    st.lists(st.text(max_size=5), max_size=3),
)


def _definition(parameters: list[str]) -> ServiceDefinition:
    uri = "v1/" + "/".join(f"{{{p}}}" for p in parameters) if parameters else "v1"
    return ServiceDefinition(show=ActionDescriptor(parameters=parameters, uri=uri))


@given(
    required=st.sets(names, max_size=5),
    query=st.dictionaries(names, values, max_size=8),
)
@settings(max_examples=200)
def test_partition_is_total(required, query):
    groups = partition(required, query)

    assert sorted(groups.path_names + groups.query_names) == sorted(query)
    assert set(groups.path_names).isdisjoint(groups.query_names)
    assert all(name in required for name in groups.path_names)
    assert all(name not in required for name in groups.query_names)


@given(
    parameters=st.lists(names, unique=True, max_size=4),
    extra=st.dictionaries(names, values, max_size=4),
    data=st.data(),
)
@settings(max_examples=200)
def test_complete_query_never_raises(parameters, extra, data):
    query = {k: v for k, v in extra.items() if k not in parameters}
    for name in parameters:
        query[name] = data.draw(st.text(alphabet="abc123-", min_size=1, max_size=6))

    url = build_url(_definition(parameters), "show", query)

    assert url.startswith("/v1")
    assert "{" not in url.split("?")[0]
    assert not url.endswith("?")


@given(
    parameters=st.lists(names, unique=True, min_size=1, max_size=4),
    data=st.data(),
)
@settings(max_examples=200)
def test_missing_parameter_is_named(parameters, data):
    missing = data.draw(st.sampled_from(parameters))
    query = {name: "x" for name in parameters if name != missing}

    with pytest.raises(MissingParameterError) as exc_info:
        build_url(_definition(parameters), "show", query)

    # Declared order: the first missing name is reported.
    assert exc_info.value.parameter == missing
