"""
Inventra Backend — Validation Engine
======================================

What:  Checks a decoded JSON object against an entity's rule set.
How:   Walks the rules in order and dispatches on each rule's kind; every rule
       is evaluated so a client can fix every problem in one round trip.
Who:   Called by FieldValidationMiddleware after the body has been decoded.

Contract:
    validate(payload, rules) -> list of violation messages (empty == valid)
    Pure: no I/O, no logging, no mutation of its inputs.

Per-kind checks:
    texto     string; length >= minimum; length <= maximum (independent checks)
    numero    integer or decimal literal (booleans excluded); bounds NOT checked
    booleano  true / false
    fecha     string of exactly `minimum` characters that is a real calendar
              date in yyyy-MM-dd form (2024-02-30 is rejected, not rolled over)
"""

import re
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from app.validation.rules import FieldKind, JsonType, RuleDefinition, json_type

# yyyy-MM-dd with ASCII digits only
_DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})", re.ASCII)


# ══════════════════════════════════════════════════════════════════════════
# Messages
# ══════════════════════════════════════════════════════════════════════════

def required_message(name: str) -> str:
    return f"El campo '{name}' es obligatorio."


def text_type_message(name: str) -> str:
    return f"El campo '{name}' debe ser de tipo texto."


def min_length_message(name: str, minimum: int) -> str:
    return f"El campo '{name}' debe tener al menos {minimum} caracteres."


def max_length_message(name: str, maximum: int) -> str:
    return f"El campo '{name}' debe tener como máximo {maximum} caracteres."


def number_type_message(name: str) -> str:
    return f"El campo '{name}' debe ser de tipo numérico."


def boolean_type_message(name: str) -> str:
    return f"El campo '{name}' debe ser de tipo booleano."


def date_type_message(name: str) -> str:
    return f"El campo '{name}' debe ser una cadena en formato fecha."


def date_length_message(name: str, length: int) -> str:
    return (
        f"El campo '{name}' debe tener exactamente {length} caracteres "
        f"(formato yyyy-MM-dd)."
    )


def date_format_message(name: str) -> str:
    return f"El campo '{name}' no tiene un formato de fecha válido (yyyy-MM-dd)."


def unknown_kind_message(name: str) -> str:
    return f"Tipo no reconocido para el campo '{name}'."


# ══════════════════════════════════════════════════════════════════════════
# Per-kind checks: each returns the violations for one present field
# ══════════════════════════════════════════════════════════════════════════

def _check_text(rule: RuleDefinition, value: Any) -> List[str]:
    if json_type(value) is not JsonType.TEXT:
        return [text_type_message(rule.name)]

    errors = []
    length = len(value)
    # Independent checks: a table with minimum > maximum fails both
    if length < rule.minimum:
        errors.append(min_length_message(rule.name, rule.minimum))
    if length > rule.maximum:
        errors.append(max_length_message(rule.name, rule.maximum))
    return errors


def _check_number(rule: RuleDefinition, value: Any) -> List[str]:
    if json_type(value) is not JsonType.NUMBER:
        return [number_type_message(rule.name)]
    return []


def _check_boolean(rule: RuleDefinition, value: Any) -> List[str]:
    if json_type(value) is not JsonType.BOOLEAN:
        return [boolean_type_message(rule.name)]
    return []


def _check_date(rule: RuleDefinition, value: Any) -> List[str]:
    if json_type(value) is not JsonType.TEXT:
        return [date_type_message(rule.name)]
    if len(value) != rule.minimum:
        return [date_length_message(rule.name, rule.minimum)]
    if parse_calendar_date(value) is None:
        return [date_format_message(rule.name)]
    return []


_CHECKS: Dict[str, Callable[[RuleDefinition, Any], List[str]]] = {
    FieldKind.TEXT.value: _check_text,
    FieldKind.NUMBER.value: _check_number,
    FieldKind.BOOLEAN.value: _check_boolean,
    FieldKind.DATE.value: _check_date,
}


def parse_calendar_date(value: str) -> Optional[date]:
    """
    Parses `value` strictly as yyyy-MM-dd.

    Returns None when the text does not match the pattern exactly or names a
    day that does not exist (month 13, February 30, 2023-02-29, year 0000).
    """
    match = _DATE_PATTERN.fullmatch(value)
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


# ══════════════════════════════════════════════════════════════════════════
# Public API
# ══════════════════════════════════════════════════════════════════════════

def validate(payload: Mapping[str, Any], rules: Sequence[RuleDefinition]) -> List[str]:
    """
    Validates `payload` against `rules`.

    Args:
        payload: Decoded JSON object (field name → value).
        rules:   Ordered rule set for the entity.

    Returns:
        Violation messages in rule order. Empty when the payload is valid.

    Notes:
        - A field present with value null counts as present, so it fails the
          type check of whatever kind it declares.
        - Fields in the payload that no rule mentions are ignored.
    """
    errors: List[str] = []

    for rule in rules:
        if rule.name not in payload:
            if rule.required:
                errors.append(required_message(rule.name))
            continue

        check = _CHECKS.get(rule.kind)
        if check is None:
            errors.append(unknown_kind_message(rule.name))
            continue

        errors.extend(check(rule, payload[rule.name]))

    return errors
