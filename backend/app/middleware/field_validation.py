"""
Inventra Backend — Field Validation Middleware
================================================

What:  Validates request bodies of bound operations before the route runs.
How:   Matches the request to a route, looks the route name up in the
       operation bindings, resolves the entity's rules, captures the body,
       decodes it, runs the validation engine, and either answers 400 or hands
       the request on with the captured body replayed.
Who:   Registered in main.py as the innermost application middleware.
When:  Once per HTTP request, after RequestIDMiddleware and
       RequestLoggingMiddleware.

Pipeline:
    ┌─────────┐  no binding   ┌──────────────────────────────┐
    │ Request │──────────────▶│ route (body untouched)       │
    └────┬────┘               └──────────────────────────────┘
         │ bound
         ▼
    resolve rules ── unknown key ──▶ 400 "Entidad no reconocida"
         │
    capture body (exactly once)
         │
    decode JSON ─── malformed ─────▶ 400 "JSON mal formado"
         │
    validate ────── violations ────▶ 400 "Error de validación" + data[]
         │
    replay body ───────────────────▶ route

Body ownership:
    The body arrives as a one-shot stream of `http.request` messages. This is a
    plain ASGI middleware so it owns that stream: it drains it into a buffer
    and passes the route an explicit `receive` that yields the same bytes
    again. Downstream never reads the live stream of a bound request.

Pipeline errors are turned into responses here; they are raised before
FastAPI's exception middleware, so the global handlers never see them.
"""

import logging
from typing import Iterable, List, NamedTuple, Optional

from starlette.requests import ClientDisconnect
from starlette.routing import BaseRoute, Match
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.exceptions import (
    ConfigurationError,
    FieldValidationError,
    InventraError,
    MalformedPayloadError,
)
from app.middleware.request_id import request_id_var
from app.responses import response_for_error
from app.validation.bindings import OperationBindings
from app.validation.engine import validate
from app.validation.payload import decode_payload
from app.validation.registry import RuleRegistry, rule_registry

logger = logging.getLogger("inventra.validation")


async def capture_body(receive: Receive) -> bytes:
    """
    Drains the request body from the ASGI receive channel.

    Raises:
        ClientDisconnect: the client went away before the body was complete.
    """
    chunks: List[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            raise ClientDisconnect()
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def replay_receive(body: bytes, receive: Receive) -> Receive:
    """
    Builds a receive channel whose first message is the captured body.

    Later calls fall through to the original channel, so the route still
    observes a client disconnect.
    """
    delivered = False

    async def receive_replayed() -> Message:
        nonlocal delivered
        if not delivered:
            delivered = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return receive_replayed


class ValidationOutcome(NamedTuple):
    """What the filter decided for one bound request."""

    operation: str
    entity_key: str
    result: str
    violations: int = 0


# Outcomes are left on scope["state"], which outer middleware read as request.state
OUTCOME_STATE_KEY = "field_validation"

ACCEPTED = "accepted"
DISCONNECTED = "disconnected"

_REJECTION_RESULTS = {
    ConfigurationError: "unknown_entity",
    MalformedPayloadError: "malformed",
    FieldValidationError: "invalid",
}


def record_outcome(scope: Scope, outcome: ValidationOutcome) -> None:
    scope.setdefault("state", {})[OUTCOME_STATE_KEY] = outcome


def match_route_name(routes: Iterable[BaseRoute], scope: Scope) -> Optional[str]:
    """
    Returns the name of the route that fully matches the request.

    Matched containers (a Mount, an included router) are searched with the
    child scope until a leaf route answers. A partial match (right path, wrong
    method) is not an operation: the router answers it with 405.
    """
    for route in routes:
        match, child_scope = route.matches(scope)
        if match != Match.FULL:
            continue
        nested = getattr(route, "routes", None)
        if nested:
            return match_route_name(nested, {**scope, **child_scope})
        return getattr(route, "name", None)
    return None


class FieldValidationMiddleware:
    """
    Blocks bound requests whose JSON body breaks the entity's field rules.

    Args:
        app:       The next ASGI application.
        routes:    Routes used to identify the target operation. create_app()
                   passes the entity routes themselves, with the API prefix
                   already in their paths.
        registry:  Entity key → rule set lookup.
        bindings:  Operation identifier → entity key table.
    """

    def __init__(
        self,
        app: ASGIApp,
        routes: List[BaseRoute],
        registry: RuleRegistry = rule_registry,
        bindings: Optional[OperationBindings] = None,
    ):
        self.app = app
        self.routes = routes
        self.registry = registry
        self.bindings = bindings if bindings is not None else OperationBindings()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        operation_id = self.match_operation(scope)
        entity_key = self.bindings.entity_for(operation_id)
        if entity_key is None:
            await self.app(scope, receive, send)
            return

        rid = request_id_var.get("")

        try:
            rules = self.registry.resolve(entity_key)
            if rules is None:
                raise ConfigurationError(entity_key, context={"operation": operation_id})

            body = await capture_body(receive)
            payload = decode_payload(body)

            violations = validate(payload, rules)
            if violations:
                raise FieldValidationError(
                    violations,
                    context={"operation": operation_id, "entity_key": entity_key},
                )

        except ClientDisconnect:
            record_outcome(scope, ValidationOutcome(operation_id, entity_key, DISCONNECTED))
            logger.info("[%s] Client disconnected before body was received (%s)", rid, operation_id)
            return

        except InventraError as exc:
            self._log_rejection(rid, operation_id, exc)
            record_outcome(scope, ValidationOutcome(
                operation_id,
                entity_key,
                _REJECTION_RESULTS.get(type(exc), "rejected"),
                len(exc.data) if isinstance(exc, FieldValidationError) else 0,
            ))
            response = response_for_error(exc)
            await response(scope, receive, send)
            return

        logger.debug(
            "[%s] Body accepted for %s (%s, %d bytes)",
            rid, operation_id, entity_key, len(body),
        )
        record_outcome(scope, ValidationOutcome(operation_id, entity_key, ACCEPTED))
        await self.app(scope, replay_receive(body, receive), send)

    def match_operation(self, scope: Scope) -> Optional[str]:
        return match_route_name(self.routes, scope)

    @staticmethod
    def _log_rejection(rid: str, operation_id: Optional[str], exc: InventraError) -> None:
        if isinstance(exc, ConfigurationError):
            # Unregistered key in the bindings table: a code defect
            logger.error(
                "[%s] No rule table for entity '%s' bound to %s",
                rid, exc.entity_key, operation_id,
            )
        elif isinstance(exc, MalformedPayloadError):
            logger.warning("[%s] Malformed JSON for %s: %s", rid, operation_id, exc.reason)
        elif isinstance(exc, FieldValidationError):
            logger.warning(
                "[%s] %d field violation(s) for %s: %s",
                rid, len(exc.violations), operation_id, "; ".join(exc.violations),
            )
        else:
            logger.warning("[%s] Request rejected for %s: %s", rid, operation_id, exc.message)
