"""
Inventra Backend — Request Logging Middleware
===============================================

What:  One access-log line per HTTP request.
How:   Times the request, then logs method, path, status, duration and request
       ID at a level chosen from the status code. For bound operations the line
       also names the entity and what the field validation decided, e.g.

           POST /api/estados 400 1.2ms [3f9a0c1d] estado:invalid(1)
           PUT /api/elementos/4 200 3.8ms [77b2e910] elemento:accepted

Who:   Registered between RequestIDMiddleware (outer) and
       FieldValidationMiddleware (inner); the inner middleware leaves its
       ValidationOutcome on request.state.

Privacy:
    Request bodies and violation texts are never logged here: user payloads
    carry passwords (usuario.contrasena) and personal data (documento,
    telefono, correo). The validation logger has the details.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.field_validation import OUTCOME_STATE_KEY, ValidationOutcome
from app.middleware.request_id import request_id_var

logger = logging.getLogger("inventra.access")

# Polled by orchestrators every few seconds
QUIET_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def describe_outcome(outcome: Optional[ValidationOutcome]) -> str:
    """'-' for unbound requests, else '<entity>:<result>' with a violation count."""
    if outcome is None:
        return "-"
    text = f"{outcome.entity_key}:{outcome.result}"
    if outcome.violations:
        text += f"({outcome.violations})"
    return text


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request's status, duration and validation outcome."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        outcome = getattr(request.state, OUTCOME_STATE_KEY, None)
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms [%s] %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
            describe_outcome(outcome),
            extra={
                "request_id": request_id_var.get(""),
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "operation": outcome.operation if outcome else None,
                "validation": outcome.result if outcome else None,
            },
        )
        return response
