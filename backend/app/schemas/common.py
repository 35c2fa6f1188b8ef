"""
Inventra Backend — Shared Response Schemas
============================================

What:  Models describing the response envelope and the health payload.
Who:   Referenced by routes for OpenAPI documentation; the envelope itself is
       built by app/responses.py.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class Envelope(BaseModel):
    """
    Standard response envelope.

    Example (validation failure):
        {
            "success": false,
            "message": "Error de validación",
            "data": ["El campo 'nombre' debe tener al menos 3 caracteres."]
        }
    """
    success: bool = Field(description="Whether the operation succeeded")
    message: str = Field(description="Human-readable outcome (Spanish)")
    data: Optional[Any] = Field(default=None, description="Payload, or violation list on 400")


class ErrorEnvelope(BaseModel):
    """Error envelope; `data` only appears for field violations."""
    success: bool = Field(default=False)
    message: str = Field(description="Error description")
    data: Optional[List[str]] = Field(default=None, description="One entry per violation")


class HealthResponse(BaseModel):
    """Returned by GET /health for liveness probes."""
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    rule_sets: int = Field(description="Number of entities with a validation rule table")
    bound_operations: int = Field(description="Number of operations whose body is validated")
    uptime_seconds: float = Field(description="Seconds since service started")
