"""Public API surface for ghgateway."""

from ghgateway.auth import TokenResolver, create_token_resolver
from ghgateway.catalog import OPERATIONS, Operation, OperationId, build_request, get_operation
from ghgateway.connector import API_VERSION, BASE_URL, DEFAULT_HEADERS, GitHubConnector
from ghgateway.contracts.config import GatewayConfig
from ghgateway.contracts.envelope import Envelope
from ghgateway.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    GatewayError,
    InvalidOperationError,
    OperationError,
    TransportError,
    UnknownOperationError,
)
from ghgateway.gateway import Gateway, load_config

__all__ = [
    "API_VERSION",
    "BASE_URL",
    "DEFAULT_HEADERS",
    "OPERATIONS",
    "AuthenticationError",
    "ConfigError",
    "Envelope",
    "Gateway",
    "GatewayConfig",
    "GatewayError",
    "GitHubConnector",
    "InvalidOperationError",
    "Operation",
    "OperationError",
    "OperationId",
    "TokenResolver",
    "TransportError",
    "UnknownOperationError",
    "build_request",
    "create_token_resolver",
    "get_operation",
    "load_config",
]
