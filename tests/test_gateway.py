import asyncio
import json
import logging
from pathlib import Path

import httpx
import pytest

from ghgateway.catalog import OperationId
from ghgateway.connector import GitHubConnector
from ghgateway.contracts.config import GatewayConfig
from ghgateway.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    InvalidOperationError,
    UnknownOperationError,
)
from ghgateway.gateway import Gateway, load_config, parse_response_data
from ghgateway.requests import Request


@pytest.mark.asyncio
async def test_dispatch_success_envelope(gateway, fake_github) -> None:
    fake_github.json_body = {"login": "octocat", "id": 1}

    envelope = await gateway.dispatch(OperationId.GET_USER, {"username": "octocat"})

    assert envelope.model_dump() == {"success": True, "status": 200, "data": {"login": "octocat", "id": 1}}
    assert fake_github.last.url.path == "/users/octocat"


@pytest.mark.asyncio
async def test_dispatch_relays_not_found(gateway, fake_github) -> None:
    fake_github.status_code = 404
    fake_github.json_body = {"message": "Not Found"}

    envelope = await gateway.dispatch("get_user", {"username": "ghost"})

    assert envelope.model_dump() == {"success": False, "status": 404, "data": {"message": "Not Found"}}


@pytest.mark.asyncio
async def test_dispatch_relays_rate_limit(gateway, fake_github) -> None:
    fake_github.status_code = 403
    fake_github.json_body = {"message": "API rate limit exceeded"}

    envelope = await gateway.dispatch("get_authenticated_user")

    assert envelope.success is False
    assert envelope.status == 403
    assert len(fake_github.requests) == 1


@pytest.mark.asyncio
async def test_followers_defaults_reach_upstream(gateway, fake_github) -> None:
    await gateway.dispatch(OperationId.GET_USER_FOLLOWERS, {"username": "octocat"})

    assert dict(fake_github.last.url.params) == {"page": "1", "per_page": "30"}


@pytest.mark.asyncio
async def test_create_repository_sends_only_name_by_default(gateway, fake_github) -> None:
    fake_github.status_code = 201

    envelope = await gateway.dispatch(
        OperationId.CREATE_REPOSITORY,
        {"name": "demo", "private": False, "auto_init": False, "description": None},
        token="tok_123",
    )

    assert envelope.success is True
    assert envelope.status == 201
    assert fake_github.last_json() == {"name": "demo"}


@pytest.mark.asyncio
async def test_token_is_sent_as_bearer(gateway, fake_github) -> None:
    await gateway.dispatch(OperationId.GET_AUTHENTICATED_USER, token="tok_123")

    assert fake_github.last.headers["Authorization"] == "Bearer tok_123"


@pytest.mark.asyncio
async def test_authenticate_happens_before_send(fake_github) -> None:
    calls: list[str] = []

    class SpyConnector(GitHubConnector):
        def authenticate(self, token: str) -> None:
            calls.append("authenticate")
            super().authenticate(token)

        async def send(self, request: Request, **kwargs) -> httpx.Response:  # type: ignore[override]
            calls.append("send")
            return await super().send(request, **kwargs)

    gateway = Gateway(connector_factory=lambda: SpyConnector(transport=fake_github.transport))

    await gateway.dispatch(OperationId.GET_AUTHENTICATED_USER, token="tok_123")

    assert calls == ["authenticate", "send"]
    assert fake_github.last.headers["Authorization"] == "Bearer tok_123"


@pytest.mark.asyncio
async def test_token_does_not_leak_to_next_dispatch(gateway, fake_github) -> None:
    await gateway.dispatch(OperationId.GET_AUTHENTICATED_USER, token="tok_123")
    await gateway.dispatch(OperationId.GET_USER, {"username": "octocat"})

    assert fake_github.requests[0].headers["Authorization"] == "Bearer tok_123"
    assert "Authorization" not in fake_github.requests[1].headers


@pytest.mark.asyncio
async def test_default_token_is_used_and_overridden_per_call(fake_github) -> None:
    gateway = Gateway(default_token="tok_server", transport=fake_github.transport)

    await gateway.dispatch(OperationId.GET_AUTHENTICATED_USER)
    await gateway.dispatch(OperationId.GET_AUTHENTICATED_USER, token="tok_user")

    assert fake_github.requests[0].headers["Authorization"] == "Bearer tok_server"
    assert fake_github.requests[1].headers["Authorization"] == "Bearer tok_user"


@pytest.mark.asyncio
async def test_unknown_operation_makes_no_upstream_call(gateway, fake_github) -> None:
    with pytest.raises(UnknownOperationError):
        await gateway.dispatch("delete_everything", {}, token="tok_123")

    assert fake_github.requests == []


@pytest.mark.asyncio
async def test_invalid_operation_makes_no_upstream_call(gateway, fake_github) -> None:
    with pytest.raises(InvalidOperationError):
        await gateway.dispatch(OperationId.SEARCH_REPOSITORIES, {"sort": "stars"})

    assert fake_github.requests == []


@pytest.mark.asyncio
async def test_transport_failure_returns_failure_envelope(gateway, fake_github, caplog) -> None:
    fake_github.error = httpx.ConnectTimeout("timed out")

    with caplog.at_level(logging.WARNING, logger="ghgateway.gateway"):
        envelope = await gateway.dispatch(OperationId.GET_USER, {"username": "octocat"})

    assert envelope.model_dump() == {"success": False, "status": 0, "data": None}
    assert envelope.error is not None
    assert "ConnectTimeout" in envelope.error
    assert "GetUser failed" in caplog.text
    assert len(fake_github.requests) == 1


@pytest.mark.asyncio
async def test_non_json_body_falls_back_to_text(gateway, fake_github) -> None:
    fake_github.status_code = 502
    fake_github.content = b"<html>Bad gateway</html>"

    envelope = await gateway.dispatch(OperationId.GET_USER, {"username": "octocat"})

    assert envelope.model_dump() == {"success": False, "status": 502, "data": "<html>Bad gateway</html>"}


def test_parse_response_data_empty_body_is_none() -> None:
    assert parse_response_data(httpx.Response(204)) is None


@pytest.mark.asyncio
async def test_from_config_resolves_env_token(monkeypatch: pytest.MonkeyPatch, fake_github) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "tok_env")

    gateway = await Gateway.from_config(GatewayConfig(auth="env"), transport=fake_github.transport)
    await gateway.dispatch(OperationId.GET_AUTHENTICATED_USER)

    assert fake_github.last.headers["Authorization"] == "Bearer tok_env"


@pytest.mark.asyncio
async def test_from_config_env_without_token_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)

    with pytest.raises(AuthenticationError):
        await Gateway.from_config(GatewayConfig(auth="env"))


@pytest.mark.asyncio
async def test_from_config_anonymous(fake_github) -> None:
    gateway = await Gateway.from_config(GatewayConfig(), transport=fake_github.transport)
    await gateway.dispatch(OperationId.GET_USER, {"username": "octocat"})

    assert "Authorization" not in fake_github.last.headers


def test_load_config_reads_json(tmp_path: Path) -> None:
    path = tmp_path / "gateway.json"
    path.write_text(json.dumps({"timeout": 5, "auth": "token", "token": "tok"}), encoding="utf-8")

    config = load_config(path)

    assert config.timeout == 5.0
    assert config.auth == "token"
    assert config.token == "tok"


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="failed reading"):
        load_config(tmp_path / "missing.json")


def test_load_config_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "gateway.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid JSON"):
        load_config(path)


def test_load_config_invalid_values(tmp_path: Path) -> None:
    path = tmp_path / "gateway.json"
    path.write_text(json.dumps({"timeout": -1}), encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid config"):
        load_config(path)


@pytest.mark.asyncio
async def test_gateway_leaves_shared_transport_open(fake_github) -> None:
    class CountingTransport(httpx.MockTransport):
        close_count = 0

        async def aclose(self) -> None:
            type(self).close_count += 1

    gateway = Gateway(transport=CountingTransport(fake_github.handler))

    await gateway.dispatch(OperationId.GET_USER, {"username": "octocat"})
    await gateway.dispatch(OperationId.GET_USER, {"username": "hubot"})

    assert CountingTransport.close_count == 0
    assert len(fake_github.requests) == 2


@pytest.mark.asyncio
async def test_concurrent_dispatches_keep_their_own_tokens() -> None:
    seen: dict[str, str | None] = {}
    both_in_flight = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        seen[request.url.path] = request.headers.get("Authorization")
        if len(seen) == 2:
            both_in_flight.set()
        await asyncio.wait_for(both_in_flight.wait(), timeout=5)
        return httpx.Response(200, json={})

    gateway = Gateway(transport=httpx.MockTransport(handler))

    first, second = await asyncio.gather(
        gateway.dispatch(OperationId.GET_USER, {"username": "alice"}, token="tok_alice"),
        gateway.dispatch(OperationId.GET_USER, {"username": "bob"}, token="tok_bob"),
    )

    assert first.success and second.success
    assert seen == {"/users/alice": "Bearer tok_alice", "/users/bob": "Bearer tok_bob"}
