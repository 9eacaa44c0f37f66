"""HTTP transport backed by ``httpx.AsyncClient``.

Applies the configured base URL and default headers, attaches the current
bearer token to every request and picks up refreshed tokens from the
``x-access-token`` response header.

Usage::

    async with HttpTransport("https://api.example.com") as transport:
        response = await transport.submit(
            Request(method="GET", url="/v2/fonts?include[0]=templates")
        )
        fonts = response.data
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from rest_services.core.config import HttpConfig
from rest_services.core.errors import TransportError
from rest_services.core.models import Request, TransportResponse

logger = logging.getLogger(__name__)

ACCESS_TOKEN_HEADER = "x-access-token"


def _decode_body(response: httpx.Response) -> Any:
    """JSON when the body parses as JSON, text otherwise, ``None`` if empty."""
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            logger.debug("Response declared JSON but did not parse")
    return response.text


class HttpTransport:
    """Submit request descriptors over HTTP.

    Parameters
    ----------
    base_url:
        Prefix for every request URL.
    headers:
        Default headers sent with every request.
    timeout:
        HTTP request timeout in seconds.
    access_token:
        Initial bearer token, if any.
    transport:
        Optional ``httpx`` transport (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        base_url: str = "",
        *,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        access_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url
        self._headers = dict(headers or {})
        self._timeout = timeout
        self._transport = transport
        self.access_token = access_token
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls,
        config: HttpConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> HttpTransport:
        return cls(
            config.base_url,
            headers=config.headers,
            timeout=config.timeout,
            transport=transport,
        )

    # -- Lifecycle -----------------------------------------------------------

    async def open(self) -> httpx.AsyncClient:
        """Create the HTTP client, or return the one already open."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._headers,
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
                event_hooks={
                    "request": [self._attach_token],
                    "response": [self._refresh_token],
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpTransport:
        await self.open()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # -- Auth hooks ----------------------------------------------------------

    async def _attach_token(self, request: httpx.Request) -> None:
        if self.access_token and "Authorization" not in request.headers:
            request.headers["Authorization"] = f"Bearer {self.access_token}"

    async def _refresh_token(self, response: httpx.Response) -> None:
        token = response.headers.get(ACCESS_TOKEN_HEADER)
        if token:
            self.access_token = token

    # -- Submit --------------------------------------------------------------

    async def submit(self, request: Request) -> TransportResponse:
        """Send *request* and return the decoded response.

        Raises ``TransportError`` on network failures (no ``response``) and
        on non-2xx statuses (``response`` carries the decoded body).
        """
        client = await self.open()

        kwargs: dict[str, Any] = {"headers": request.headers}
        if isinstance(request.data, (str, bytes)):
            kwargs["content"] = request.data
        elif request.data is not None:
            kwargs["json"] = request.data

        logger.debug("HTTP %s %s", request.method, request.url)
        try:
            resp = await client.request(request.method, request.url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning(
                "HTTP %s %s failed: %s", request.method, request.url, exc,
            )
            raise TransportError(
                f"{request.method} {request.url} failed: {exc}"
            ) from exc

        response = TransportResponse(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            data=_decode_body(resp),
        )

        if not response.ok:
            logger.warning(
                "HTTP %s %s returned %d",
                request.method, request.url, resp.status_code,
            )
            raise TransportError(
                f"{request.method} {request.url} returned {resp.status_code}",
                response=response,
            )
        return response
