"""Environment token resolver."""

from __future__ import annotations

import os
from dataclasses import dataclass

from ghgateway.auth.base import TokenResolver
from ghgateway.contracts.exceptions import AuthenticationError


@dataclass(frozen=True)
class EnvTokenResolver(TokenResolver):
    variable: str = "GITHUB_TOKEN"

    async def resolve(self) -> str:
        token = os.environ.get(self.variable, "").strip()
        if not token:
            raise AuthenticationError(f"default token variable {self.variable} is unset or empty")
        return token
