"""Exception handlers for the inbound API."""

from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ghgateway.contracts.exceptions import InvalidOperationError, UnknownOperationError

logger = logging.getLogger(__name__)


async def invalid_operation_handler(request: Request, exc: InvalidOperationError) -> JSONResponse:
    """Report missing or malformed parameters; nothing was sent upstream."""
    logger.warning("Invalid parameters on %s %s: %s", request.method, request.url.path, exc.errors)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "code": 422,
                "message": f"Invalid parameters for {exc.operation}",
                "details": exc.errors,
                "path": str(request.url.path),
            }
        },
    )


async def unknown_operation_handler(request: Request, exc: UnknownOperationError) -> JSONResponse:
    logger.warning("Unknown operation on %s %s: %s", request.method, request.url.path, exc.operation)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": {
                "code": 404,
                "message": str(exc),
                "path": str(request.url.path),
            }
        },
    )
