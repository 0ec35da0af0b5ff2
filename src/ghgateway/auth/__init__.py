"""Auth module public exports."""

from ghgateway.auth.base import TokenResolver
from ghgateway.auth.factory import create_token_resolver

__all__ = ["TokenResolver", "create_token_resolver"]
