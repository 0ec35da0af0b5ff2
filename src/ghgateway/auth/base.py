"""Server-side default token resolution."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TokenResolver(ABC):
    """Produces the token the gateway uses when a call carries none of its own."""

    @abstractmethod
    async def resolve(self) -> str: ...  # pragma: no cover
