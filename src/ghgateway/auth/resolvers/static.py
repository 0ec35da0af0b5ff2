"""Static token resolver."""

from __future__ import annotations

from dataclasses import dataclass

from ghgateway.auth.base import TokenResolver
from ghgateway.contracts.exceptions import AuthenticationError


@dataclass(frozen=True)
class StaticTokenResolver(TokenResolver):
    token: str

    async def resolve(self) -> str:
        token = self.token.strip()
        if not token:
            raise AuthenticationError("Static token is empty")
        return token
