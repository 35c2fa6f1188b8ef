"""
Inventra Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the request pipeline and the
       entity resources.
How:   Each exception carries a client-safe message, an HTTP status code and an
       optional context dict (logged, never returned to the client).
Who:   Raised by the validation pipeline, the repository and the services.
When:  During request processing when a request cannot proceed.

Exception Hierarchy:
    InventraError (base)
    ├── ConfigurationError       → 400 (entity key with no rule table)
    ├── MalformedPayloadError    → 400 (body is not a JSON object)
    ├── FieldValidationError     → 400 (one or more field violations)
    └── NotFoundError            → 404

Where they are handled:
    The first three are raised and resolved inside FieldValidationMiddleware,
    which runs before FastAPI's exception middleware, so they are converted to
    responses there. NotFoundError (and any InventraError raised by a route)
    goes through the global handlers registered in main.py.
"""

from typing import Any, Dict, List, Optional


class InventraError(Exception):
    """
    Base exception for all Inventra application errors.

    Attributes:
        message:      User-facing error description (safe to return)
        status_code:  HTTP status the error maps to
        context:      Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "Error interno en el servidor",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def data(self) -> Optional[Any]:
        """Payload for the envelope's `data` field; None means omit it."""
        return None


class ConfigurationError(InventraError):
    """
    Raised when a bound operation names an entity key with no rule table.

    This is a deployment/code defect rather than a client mistake, but the
    request still cannot proceed, so the client sees a 400.
    Not retryable.
    """

    status_code = 400

    def __init__(self, entity_key: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["entity_key"] = entity_key
        super().__init__(message="Entidad no reconocida", context=ctx)
        self.entity_key = entity_key


class MalformedPayloadError(InventraError):
    """
    Raised when the request body cannot be decoded as a JSON object.

    The `reason` is kept in the context for the server log; the client only
    ever sees the fixed message.
    """

    status_code = 400

    def __init__(self, reason: str = "", context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(message="JSON mal formado", context=ctx)
        self.reason = reason


class FieldValidationError(InventraError):
    """
    Raised when the validation engine reports at least one violation.

    Violations are always aggregated: every failed check of every field is
    reported in a single response, in rule order.

    Example response:
        {
            "success": false,
            "message": "Error de validación",
            "data": ["El campo 'nombre' es obligatorio."]
        }
    """

    status_code = 400

    def __init__(self, violations: List[str], context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["violation_count"] = len(violations)
        super().__init__(message="Error de validación", context=ctx)
        self.violations = list(violations)

    @property
    def data(self) -> List[str]:
        return self.violations


class NotFoundError(InventraError):
    """
    Raised when a requested entity does not exist.

    The message is built by the caller so that it carries the right
    grammatical gender ("Estado no encontrado", "Ciudad no encontrada").
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Recurso no encontrado",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id
