"""Operation catalog: the fixed set of upstream calls the gateway forwards."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import ValidationError

from ghgateway.contracts.exceptions import InvalidOperationError, UnknownOperationError
from ghgateway.requests import (
    CreateRepository,
    GetAuthenticatedUser,
    GetAuthenticatedUserRepositories,
    GetRepository,
    GetUser,
    GetUserFollowers,
    GetUserFollowing,
    GetUserRepositories,
    Request,
    SearchRepositories,
)


class OperationId(StrEnum):
    GET_AUTHENTICATED_USER = "get_authenticated_user"
    GET_USER = "get_user"
    GET_USER_FOLLOWERS = "get_user_followers"
    GET_USER_FOLLOWING = "get_user_following"
    GET_AUTHENTICATED_USER_REPOSITORIES = "get_authenticated_user_repositories"
    GET_USER_REPOSITORIES = "get_user_repositories"
    GET_REPOSITORY = "get_repository"
    SEARCH_REPOSITORIES = "search_repositories"
    CREATE_REPOSITORY = "create_repository"


@dataclass(frozen=True)
class Operation:
    """Catalog entry binding an operation id to its descriptor and inbound route."""

    id: OperationId
    request_cls: type[Request]
    route: str

    @property
    def name(self) -> str:
        return self.request_cls.__name__


OPERATIONS: dict[OperationId, Operation] = {
    op.id: op
    for op in (
        Operation(OperationId.GET_AUTHENTICATED_USER, GetAuthenticatedUser, "/users/authenticated"),
        Operation(OperationId.GET_USER, GetUser, "/users/get"),
        Operation(OperationId.GET_USER_FOLLOWERS, GetUserFollowers, "/users/followers"),
        Operation(OperationId.GET_USER_FOLLOWING, GetUserFollowing, "/users/following"),
        Operation(
            OperationId.GET_AUTHENTICATED_USER_REPOSITORIES,
            GetAuthenticatedUserRepositories,
            "/repositories/authenticated",
        ),
        Operation(OperationId.GET_USER_REPOSITORIES, GetUserRepositories, "/repositories/user"),
        Operation(OperationId.GET_REPOSITORY, GetRepository, "/repositories/get"),
        Operation(OperationId.SEARCH_REPOSITORIES, SearchRepositories, "/repositories/search"),
        Operation(OperationId.CREATE_REPOSITORY, CreateRepository, "/repositories/create"),
    )
}

_BY_NAME: dict[str, Operation] = {op.name: op for op in OPERATIONS.values()}


def get_operation(operation: OperationId | str) -> Operation:
    """Look up a catalog entry by id value (``get_user``) or descriptor name (``GetUser``).

    Raises:
        UnknownOperationError: If *operation* is not in the catalog.
    """
    try:
        return OPERATIONS[OperationId(operation)]
    except ValueError:
        pass
    found = _BY_NAME.get(str(operation))
    if found is None:
        raise UnknownOperationError(str(operation))
    return found


def build_request(operation: OperationId | str, params: Mapping[str, Any] | None = None) -> Request:
    """Build the request descriptor for *operation* from raw inbound parameters.

    Parameters the operation does not know are ignored.

    Raises:
        UnknownOperationError: If *operation* is not in the catalog.
        InvalidOperationError: If a required parameter is missing/empty or a
            parameter cannot be coerced to its type.
    """
    entry = get_operation(operation)
    try:
        return entry.request_cls.model_validate(dict(params or {}))
    except ValidationError as exc:
        errors = [_format_error(error) for error in exc.errors()]
        raise InvalidOperationError(entry.id.value, errors) from exc


def _format_error(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "params"
    return f"{location}: {error.get('msg', 'invalid value')}"
