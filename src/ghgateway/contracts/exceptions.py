"""Exception hierarchy for ghgateway."""

from __future__ import annotations


class GatewayError(Exception):
    """Base exception for all ghgateway errors."""


class ConfigError(GatewayError):
    """Configuration loading or validation failure."""


class AuthenticationError(GatewayError):
    """Server-side default token could not be resolved."""


class OperationError(GatewayError):
    """Base failure for operation lookup and request building."""


class UnknownOperationError(OperationError):
    """Operation id is not part of the catalog."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Unknown operation: {operation!r}")
        self.operation = operation


class InvalidOperationError(OperationError):
    """Required parameter missing/empty, or a parameter has the wrong type.

    Attributes:
        operation: Operation id the parameters were meant for.
        errors: Individual parameter error messages.
    """

    def __init__(self, operation: str, errors: list[str]) -> None:
        self.operation = operation
        self.errors = errors
        joined = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Invalid parameters for {operation}:\n{joined}")


class TransportError(GatewayError):
    """Upstream call failed at the network level (DNS, connect, timeout, reset)."""
