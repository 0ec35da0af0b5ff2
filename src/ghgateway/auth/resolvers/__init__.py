"""Concrete token resolvers."""

from ghgateway.auth.resolvers.env import EnvTokenResolver
from ghgateway.auth.resolvers.static import StaticTokenResolver

__all__ = ["EnvTokenResolver", "StaticTokenResolver"]
