"""Gateway: dispatch one operation upstream and normalize the response."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from ghgateway.auth import create_token_resolver
from ghgateway.catalog import OperationId, build_request, get_operation
from ghgateway.connector import GitHubConnector
from ghgateway.contracts.config import GatewayConfig
from ghgateway.contracts.envelope import Envelope
from ghgateway.contracts.exceptions import ConfigError, TransportError

_LOG = logging.getLogger(__name__)

ConnectorFactory = Callable[[], GitHubConnector]


def load_config(path: str | Path) -> GatewayConfig:
    """Load and validate gateway config from a JSON file."""
    config_path = Path(path).expanduser().resolve()

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        return GatewayConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc


def parse_response_data(response: httpx.Response) -> Any:
    """Parsed JSON body, ``None`` for an empty body, raw text when it is not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class Gateway:
    """Forwards catalog operations to GitHub, one upstream call per dispatch.

    A new :class:`GitHubConnector` is created for every dispatch, so a
    per-call token is never visible to another, possibly concurrent, call.
    A *transport* given here is shared by those connectors and left open;
    closing it is up to the caller.
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        *,
        default_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        connector_factory: ConnectorFactory | None = None,
    ) -> None:
        self._config = config or GatewayConfig()
        self._default_token = default_token
        self._transport = transport
        self._connector_factory = connector_factory or self._new_connector

    @classmethod
    async def from_config(
        cls,
        config: GatewayConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Gateway:
        resolver = create_token_resolver(config)
        default_token = await resolver.resolve() if resolver is not None else None
        return cls(config, default_token=default_token, transport=transport)

    @property
    def config(self) -> GatewayConfig:
        return self._config

    def _new_connector(self) -> GitHubConnector:
        return GitHubConnector(
            self._default_token,
            timeout=self._config.timeout,
            user_agent=self._config.user_agent,
            transport=self._transport,
        )

    async def dispatch(
        self,
        operation: OperationId | str,
        params: Mapping[str, Any] | None = None,
        token: str | None = None,
    ) -> Envelope:
        """Run *operation* with *params*, authenticating with *token* when given.

        Upstream non-2xx responses and transport failures are reported in the
        envelope, never raised.

        Raises:
            UnknownOperationError: If *operation* is not in the catalog.
            InvalidOperationError: If required parameters are missing or invalid.
        """
        entry = get_operation(operation)

        async with self._connector_factory() as connector:
            if token:
                connector.authenticate(token)
            request = build_request(entry.id, params)
            try:
                response = await connector.send(request)
            except TransportError as exc:
                _LOG.warning("%s failed: %s", entry.name, exc)
                return Envelope.transport_failure(str(exc))

        _LOG.info("%s -> %d", entry.name, response.status_code)
        return Envelope.from_status(response.status_code, parse_response_data(response))
