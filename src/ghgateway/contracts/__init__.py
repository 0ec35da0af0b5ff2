"""Shared contracts: exceptions, configuration and the response envelope."""

from ghgateway.contracts.config import GatewayConfig
from ghgateway.contracts.envelope import TRANSPORT_FAILURE_STATUS, Envelope
from ghgateway.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    GatewayError,
    InvalidOperationError,
    OperationError,
    TransportError,
    UnknownOperationError,
)

__all__ = [
    "TRANSPORT_FAILURE_STATUS",
    "AuthenticationError",
    "ConfigError",
    "Envelope",
    "GatewayConfig",
    "GatewayError",
    "InvalidOperationError",
    "OperationError",
    "TransportError",
    "UnknownOperationError",
]
