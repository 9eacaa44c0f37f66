"""CLI entry point for the service client."""

from __future__ import annotations

import json
from typing import Any

import click

from .core.errors import ServiceError, ServiceRequestError


def parse_query(pairs: tuple[str, ...]) -> dict[str, Any]:
    """Turn ``key=value`` pairs into a query mapping.

    ``key[]=v`` and repeated keys collect into lists.
    """
    query: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise click.BadParameter(f"expected key=value, got {pair!r}")
        if key.endswith("[]"):
            query.setdefault(key[:-2], []).append(value)
        elif key in query:
            existing = query[key]
            query[key] = (existing if isinstance(existing, list) else [existing]) + [value]
        else:
            query[key] = value
    return query


def parse_headers(values: tuple[str, ...]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for value in values:
        name, sep, content = value.partition(":")
        if not sep:
            raise click.BadParameter(f"expected Name:Value, got {value!r}")
        headers[name.strip()] = content.strip()
    return headers


def _load(config: str):
    from .core.config import load_settings
    from .observability.logger import new_trace_id, setup_logging

    try:
        settings = load_settings(config_path=config)
    except ServiceError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(
        settings.observability.log_level,
        settings.observability.log_format,
    )
    new_trace_id()
    return settings


@click.group()
def main() -> None:
    """Declarative REST service client."""


@main.command()
@click.argument("service")
@click.argument("action")
@click.option("--config", default="configs/api.toml", help="Config file path")
@click.option("-q", "--query", "query", multiple=True, help="Query parameter key=value")
def url(service: str, action: str, config: str, query: tuple[str, ...]) -> None:
    """Print the URL generated for SERVICE ACTION."""
    from .services.route import build_url

    settings = _load(config)
    definition = settings.services.get(service)
    if definition is None:
        raise click.ClickException(f"Unknown service: {service!r}")
    try:
        definition.require(service, action)
        click.echo(build_url(definition, action, parse_query(query)))
    except ServiceError as exc:
        raise click.ClickException(str(exc)) from exc


@main.command()
@click.argument("service")
@click.argument("action")
@click.option("--config", default="configs/api.toml", help="Config file path")
@click.option("-q", "--query", "query", multiple=True, help="Query parameter key=value")
@click.option("--data", default=None, help="JSON request body")
@click.option("-H", "--header", "header", multiple=True, help="Header Name:Value")
def call(
    service: str,
    action: str,
    config: str,
    query: tuple[str, ...],
    data: str | None,
    header: tuple[str, ...],
) -> None:
    """Submit a SERVICE ACTION request and print the response payload."""
    import asyncio

    from .services.registry import build_registry

    settings = _load(config)
    body = json.loads(data) if data is not None else None

    async def _run() -> Any:
        async with build_registry(settings) as registry:
            fn = registry.service(service).action(action)
            return await fn(
                data=body,
                headers=parse_headers(header),
                query=parse_query(query),
            )

    try:
        payload = asyncio.run(_run())
    except ServiceRequestError as exc:
        click.echo(_dump(exc.payload), err=True)
        raise SystemExit(1) from exc
    except ServiceError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(_dump(payload))


def _dump(payload: Any) -> str:
    if isinstance(payload, BaseException):
        return str(payload)
    return json.dumps(payload, indent=2, default=str)


if __name__ == "__main__":
    main()
