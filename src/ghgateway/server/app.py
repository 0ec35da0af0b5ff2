"""FastAPI application exposing one POST route per catalog operation."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, FastAPI, Request

from ghgateway.catalog import OPERATIONS, Operation, OperationId
from ghgateway.contracts.config import GatewayConfig
from ghgateway.contracts.exceptions import InvalidOperationError, UnknownOperationError
from ghgateway.gateway import Gateway
from ghgateway.server.errors import invalid_operation_handler, unknown_operation_handler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
API_PREFIX = "/github-api"

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler(sys.stdout)])
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def read_params(request: Request) -> dict[str, Any]:
    """Inbound parameters from a JSON object or form body; empty body yields ``{}``."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise InvalidOperationError("request", [f"body: invalid JSON ({exc})"]) from exc
    if not isinstance(payload, dict):
        raise InvalidOperationError("request", ["body: expected a JSON object"])
    return payload


async def _dispatch(request: Request, operation: OperationId | str) -> dict[str, Any]:
    params = await read_params(request)
    token = params.pop("token", None)
    gateway: Gateway = request.app.state.gateway
    envelope = await gateway.dispatch(operation, params, token=token if isinstance(token, str) else None)
    return envelope.model_dump()


def _add_operation_route(router: APIRouter, operation: Operation) -> None:
    async def endpoint(request: Request) -> dict[str, Any]:
        return await _dispatch(request, operation.id)

    endpoint.__name__ = operation.id.value
    router.add_api_route(
        operation.route,
        endpoint,
        methods=["POST"],
        name=f"github-api.{operation.id.value}",
        summary=operation.name,
    )


def build_router() -> APIRouter:
    router = APIRouter(prefix=API_PREFIX)

    @router.get("/", name="github-api.index")
    async def index() -> dict[str, Any]:
        return {
            "operations": [
                {
                    "id": op.id.value,
                    "name": op.name,
                    "method": op.request_cls.method.value,
                    "route": f"{API_PREFIX}{op.route}",
                }
                for op in OPERATIONS.values()
            ]
        }

    for operation in OPERATIONS.values():
        _add_operation_route(router, operation)

    @router.post("/dispatch/{operation}", name="github-api.dispatch")
    async def dispatch(operation: str, request: Request) -> dict[str, Any]:
        return await _dispatch(request, operation)

    return router


def create_app(config: GatewayConfig | None = None, *, gateway: Gateway | None = None) -> FastAPI:
    """Application factory.

    When *gateway* is not given, one is built from *config* at startup so the
    server-side default token is resolved once.
    """
    settings = config or (gateway.config if gateway is not None else GatewayConfig())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "gateway", None) is None:
            app.state.gateway = await Gateway.from_config(settings)
        logger.info("ghgateway ready (auth=%s, timeout=%.1fs)", settings.auth, settings.timeout)
        yield

    app = FastAPI(title="ghgateway", lifespan=lifespan)
    app.state.gateway = gateway
    app.include_router(build_router())
    app.add_exception_handler(InvalidOperationError, invalid_operation_handler)
    app.add_exception_handler(UnknownOperationError, unknown_operation_handler)
    return app
