"""
Inventra Backend — Response Envelope
======================================

What:  Builds the JSON envelope every endpoint answers with.
How:   Thin helpers around Starlette's JSONResponse.

Envelope:
    {"success": true,  "message": "...", "data": <any | null>}   (success)
    {"success": false, "message": "...", "data": [...]}          (error with details)
    {"success": false, "message": "..."}                         (error, no details)

The HTTP status is always chosen by the caller.
"""

from typing import Any, Optional

from starlette.responses import JSONResponse

from app.exceptions import InventraError


def success_response(data: Any, message: str, status_code: int = 200) -> JSONResponse:
    """Wraps `data` in a successful envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "message": message, "data": data},
    )


def error_response(
    message: str,
    status_code: int,
    data: Optional[Any] = None,
) -> JSONResponse:
    """
    Builds an error envelope.

    `data` is only included when given: field violations carry one entry per
    problem, configuration and parse failures carry the message alone.
    """
    content = {"success": False, "message": message}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content)


def response_for_error(exc: InventraError) -> JSONResponse:
    """Maps an application exception to its error envelope."""
    return error_response(exc.message, exc.status_code, exc.data)
