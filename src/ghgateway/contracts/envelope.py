"""Normalized response envelope relayed back to the front end."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

TRANSPORT_FAILURE_STATUS = 0


class Envelope(BaseModel):
    """``{success, status, data}`` shape returned for every dispatch.

    ``error`` holds the transport failure message for logging and is never
    part of the serialized payload.
    """

    success: bool
    status: int
    data: Any = None
    error: str | None = Field(default=None, exclude=True)

    model_config = {"frozen": True}

    @classmethod
    def from_status(cls, status: int, data: Any) -> Envelope:
        return cls(success=200 <= status < 300, status=status, data=data)

    @classmethod
    def transport_failure(cls, message: str) -> Envelope:
        return cls(success=False, status=TRANSPORT_FAILURE_STATUS, data=None, error=message)
