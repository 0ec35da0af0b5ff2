"""GitHub REST connector built on an httpx async client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import TracebackType

import httpx

from ghgateway.contracts.exceptions import GatewayError, TransportError
from ghgateway.requests.base import Request

_LOG = logging.getLogger(__name__)

BASE_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
DEFAULT_HEADERS: Mapping[str, str] = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": API_VERSION,
}
DEFAULT_TIMEOUT = 10.0


class BorrowedTransport(httpx.AsyncBaseTransport):
    """Delegates to a transport owned by the caller; closing it leaves the inner transport open."""

    def __init__(self, transport: httpx.AsyncBaseTransport) -> None:
        self._transport = transport

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self._transport.handle_async_request(request)

    async def aclose(self) -> None:
        return None


class GitHubConnector:
    """Owns base URL, default headers and bearer auth for upstream calls.

    A *transport* passed in stays owned by the caller and is never closed
    here, so one transport can back many connectors.

    One connector serves one inbound request. Use it as an async context
    manager so the underlying client is opened and closed around the call::

        async with GitHubConnector() as connector:
            connector.authenticate(token)
            response = await connector.send(GetUser(username="octocat"))
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = "ghgateway",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token or None
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def authenticate(self, token: str) -> None:
        """Use *token* as the bearer token for subsequent calls."""
        self._token = token or None

    async def __aenter__(self) -> GitHubConnector:
        self._client = httpx.AsyncClient(
            base_url=BASE_URL,
            timeout=httpx.Timeout(self._timeout),
            transport=BorrowedTransport(self._transport) if self._transport is not None else None,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def headers_for(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        """Default headers merged with *extra*, plus ``Authorization`` when authenticated."""
        headers = {**DEFAULT_HEADERS, "User-Agent": self._user_agent, **(extra or {})}
        if self._token is not None:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def send(self, request: Request, *, headers: Mapping[str, str] | None = None) -> httpx.Response:
        """Perform the call described by *request* and return the raw response.

        Non-2xx responses are returned as-is.

        Raises:
            TransportError: On DNS, connection, protocol or timeout failures.
        """
        if self._client is None:
            raise GatewayError("Connector is not initialized. Use 'async with'.")

        body = request.default_body()
        http_request = self._client.build_request(
            request.method.value,
            request.resolve_endpoint(),
            params=request.default_query() or None,
            json=body,
            headers=self.headers_for(headers),
        )
        _LOG.debug(
            "Sending %s %s (authenticated=%s)",
            http_request.method,
            http_request.url,
            self.is_authenticated,
        )
        try:
            return await self._client.send(http_request)
        except httpx.TransportError as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc
