"""JSON envelope helpers for API routes."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE: str = "Internal server error"


def envelope(data: Any = None, *, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Return ``{"success": true, "data": ...}`` with camelCase keys."""
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = jsonable_encoder(data, by_alias=True)
    return JSONResponse(status_code=status_code, content=body)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def internal_error(label: str) -> JSONResponse:
    """Log the active exception server-side and hide it from the client.

    Must be called from inside an ``except`` block.
    """
    logger.exception("[API] %s", label)
    return error_response(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)
