"""Token resolver factory."""

from __future__ import annotations

from ghgateway.auth.base import TokenResolver
from ghgateway.auth.resolvers.env import EnvTokenResolver
from ghgateway.auth.resolvers.static import StaticTokenResolver
from ghgateway.contracts.config import GatewayConfig
from ghgateway.contracts.exceptions import ConfigError


def create_token_resolver(config: GatewayConfig) -> TokenResolver | None:
    """Return the resolver for ``config.auth``, or ``None`` for anonymous access."""
    if config.auth == "none":
        return None
    if config.auth == "env":
        return EnvTokenResolver(variable=config.token_env)
    if config.auth == "token":
        return StaticTokenResolver(token=config.token or "")
    raise ConfigError(f"Unknown auth mode: {config.auth}")
