"""Request descriptors for the GitHub REST API."""

from ghgateway.requests.base import Method, Request, drop_none, drop_none_or_false
from ghgateway.requests.repositories import (
    CreateRepository,
    GetAuthenticatedUserRepositories,
    GetRepository,
    GetUserRepositories,
    SearchRepositories,
)
from ghgateway.requests.users import GetAuthenticatedUser, GetUser, GetUserFollowers, GetUserFollowing

__all__ = [
    "CreateRepository",
    "GetAuthenticatedUser",
    "GetAuthenticatedUserRepositories",
    "GetRepository",
    "GetUser",
    "GetUserFollowers",
    "GetUserFollowing",
    "GetUserRepositories",
    "Method",
    "Request",
    "SearchRepositories",
    "drop_none",
    "drop_none_or_false",
]
