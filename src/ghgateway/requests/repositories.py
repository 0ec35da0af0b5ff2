"""Repository descriptors."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import StrictBool, field_validator

from ghgateway.requests.base import Method, Request, RequiredStr, drop_none, drop_none_or_false


class GetAuthenticatedUserRepositories(Request):
    type: str | None = "owner"
    sort: str | None = "created"
    direction: str | None = "desc"
    per_page: int = 30
    page: int = 1

    def resolve_endpoint(self) -> str:
        return "/user/repos"

    def default_query(self) -> dict[str, Any]:
        return drop_none(
            {
                "type": self.type,
                "sort": self.sort,
                "direction": self.direction,
                "per_page": self.per_page,
                "page": self.page,
            }
        )


class GetUserRepositories(GetAuthenticatedUserRepositories):
    username: RequiredStr

    def resolve_endpoint(self) -> str:
        return f"/users/{self.username}/repos"


class GetRepository(Request):
    owner: RequiredStr
    repo: RequiredStr

    def resolve_endpoint(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"


class SearchRepositories(Request):
    query: RequiredStr
    sort: str | None = None
    order: str | None = "desc"
    per_page: int = 30
    page: int = 1

    def resolve_endpoint(self) -> str:
        return "/search/repositories"

    def default_query(self) -> dict[str, Any]:
        return drop_none(
            {
                "q": self.query,
                "sort": self.sort,
                "order": self.order,
                "per_page": self.per_page,
                "page": self.page,
            }
        )


_TRUTHY = frozenset({"1", "true", "on", "yes"})


class CreateRepository(Request):
    method: ClassVar[Method] = Method.POST

    name: RequiredStr
    description: str | None = None
    private: StrictBool = False
    auto_init: StrictBool = False

    @field_validator("private", "auto_init", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        # Form-style input: anything outside the truthy set (null included) is False.
        if isinstance(value, bool):
            return value
        if isinstance(value, int | float):
            return value == 1
        if isinstance(value, str):
            return value.strip().lower() in _TRUTHY
        return False

    def resolve_endpoint(self) -> str:
        return "/user/repos"

    def default_body(self) -> dict[str, Any]:
        return drop_none_or_false(
            {
                "name": self.name,
                "description": self.description,
                "private": self.private,
                "auto_init": self.auto_init,
            }
        )
