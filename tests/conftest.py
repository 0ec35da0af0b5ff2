"""Shared test fixtures for ghgateway tests."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from ghgateway.contracts.config import GatewayConfig
from ghgateway.gateway import Gateway


class FakeGitHub:
    """Records outgoing requests and answers each with the configured response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body: Any = {}
        self.content: bytes | None = None
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no upstream request was made"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def gateway(fake_github: FakeGitHub) -> Gateway:
    return Gateway(GatewayConfig(), transport=fake_github.transport)
