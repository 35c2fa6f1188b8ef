"""
Inventra Backend — Request Validation Package
===============================================

What:  Declarative field validation for request bodies.

Pieces (leaf first):
    rules.py      RuleDefinition, FieldKind, JSON value classification
    tables.py     hand-authored rule tables per entity
    registry.py   entity key → rule set lookup
    engine.py     validate(payload, rules) -> violations
    payload.py    raw body → JSON object
    bindings.py   route name → entity key

The interception stage that ties them together lives in
app/middleware/field_validation.py.
"""

from app.validation.bindings import OPERATION_BINDINGS, OperationBindings
from app.validation.engine import validate
from app.validation.payload import decode_payload
from app.validation.registry import RuleRegistry, build_default_registry, rule_registry
from app.validation.rules import FieldKind, JsonType, RuleDefinition, RuleSet, json_type

__all__ = [
    "OPERATION_BINDINGS",
    "OperationBindings",
    "validate",
    "decode_payload",
    "RuleRegistry",
    "build_default_registry",
    "rule_registry",
    "FieldKind",
    "JsonType",
    "RuleDefinition",
    "RuleSet",
    "json_type",
]
