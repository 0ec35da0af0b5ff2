"""User descriptors."""

from __future__ import annotations

from typing import Any

from ghgateway.requests.base import Request, RequiredStr


class GetAuthenticatedUser(Request):
    def resolve_endpoint(self) -> str:
        return "/user"


class GetUser(Request):
    username: RequiredStr

    def resolve_endpoint(self) -> str:
        return f"/users/{self.username}"


class GetUserFollowers(Request):
    username: RequiredStr
    page: int = 1
    per_page: int = 30

    def resolve_endpoint(self) -> str:
        return f"/users/{self.username}/followers"

    def default_query(self) -> dict[str, Any]:
        return {"per_page": self.per_page, "page": self.page}


class GetUserFollowing(GetUserFollowers):
    def resolve_endpoint(self) -> str:
        return f"/users/{self.username}/following"
