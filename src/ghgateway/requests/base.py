"""Request descriptor base and payload filtering helpers.

A descriptor is a frozen pydantic model: every outgoing detail (method,
endpoint, query, body) is derived from its validated fields, so two
descriptors built from the same inputs always produce the same call.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from enum import StrEnum
from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, field_validator


def _require_non_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


RequiredStr = Annotated[str, AfterValidator(_require_non_blank)]
"""Path/required parameter: must be present and non-blank; sent exactly as given."""


class Method(StrEnum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def drop_none(values: Mapping[str, Any]) -> dict[str, Any]:
    """Return *values* without entries whose value is ``None``."""
    return {key: value for key, value in values.items() if value is not None}


def drop_none_or_false(values: Mapping[str, Any]) -> dict[str, Any]:
    """Return *values* without entries whose value is ``None`` or exactly ``False``.

    ``0`` and empty strings are kept; only the boolean ``False`` is dropped.
    """
    return {key: value for key, value in values.items() if value is not None and value is not False}


class Request(BaseModel):
    """One upstream call: method, endpoint, query parameters and JSON body."""

    method: ClassVar[Method] = Method.GET

    model_config = {"frozen": True, "coerce_numbers_to_str": True}

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @abstractmethod
    def resolve_endpoint(self) -> str:
        """Endpoint path relative to the connector base URL."""

    def default_query(self) -> dict[str, Any]:
        return {}

    def default_body(self) -> dict[str, Any] | None:
        return None
