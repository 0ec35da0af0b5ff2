"""Command-line interface for ghgateway."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import Any

from rich.console import Console
from rich.table import Table

from ghgateway import (
    AuthenticationError,
    ConfigError,
    Envelope,
    Gateway,
    GatewayConfig,
    OperationError,
    load_config,
)
from ghgateway.catalog import OPERATIONS


def _package_version() -> str:
    try:
        return version("ghgateway")
    except PackageNotFoundError:
        return "0.0.0"


def _parse_param(raw: str) -> tuple[str, str]:
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    return key.strip(), value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ghgateway")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("operations", help="List supported operations")

    dispatch_parser = subparsers.add_parser("dispatch", help="Forward one operation to GitHub")
    dispatch_parser.add_argument("operation", help="Operation id (e.g. get_user) or name (e.g. GetUser)")
    dispatch_parser.add_argument(
        "--param",
        "-p",
        action="append",
        default=[],
        type=_parse_param,
        metavar="KEY=VALUE",
        help="Operation parameter (repeatable)",
    )
    dispatch_parser.add_argument("--token", help="Bearer token for this call")
    dispatch_parser.add_argument("--config", help="Path to gateway JSON config")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP gateway")
    serve_parser.add_argument("--config", help="Path to gateway JSON config")
    serve_parser.add_argument("--host", help="Bind host (overrides config)")
    serve_parser.add_argument("--port", type=int, help="Bind port (overrides config)")

    return parser


def _load(args: argparse.Namespace) -> GatewayConfig:
    return load_config(args.config) if args.config else GatewayConfig()


def _print_operations(console: Console) -> None:
    table = Table("Operation", "Name", "Method", "Route")
    for op in OPERATIONS.values():
        table.add_row(op.id.value, op.name, op.request_cls.method.value, op.route)
    console.print(table)


async def _run_dispatch(args: argparse.Namespace) -> Envelope:
    config = _load(args)
    gateway = await Gateway.from_config(config)
    params: dict[str, Any] = dict(args.param)
    return await gateway.dispatch(args.operation, params, token=args.token)


def _run_serve(args: argparse.Namespace) -> None:
    import uvicorn

    from ghgateway.server import create_app, setup_logging

    config = _load(args)
    overrides = {key: value for key, value in (("host", args.host), ("port", args.port)) if value is not None}
    if overrides:
        config = GatewayConfig.model_validate({**config.model_dump(), **overrides})
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_config=None)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console()

    if args.verbose and args.command != "serve":
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        if args.command == "operations":
            _print_operations(console)
            return 0
        if args.command == "serve":
            _run_serve(args)
            return 0
        envelope = asyncio.run(_run_dispatch(args))
    except (ConfigError, AuthenticationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except OperationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4

    console.print_json(data=envelope.model_dump())
    if envelope.error:
        print(f"error: {envelope.error}", file=sys.stderr)
    return 0 if envelope.success else 1
