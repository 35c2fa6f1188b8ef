"""
Field rule definitions and the JSON value classification the engine matches on.
"""

from enum import Enum
from typing import Any, NamedTuple, Tuple


class FieldKind(str, Enum):
    """Closed set of field kinds a rule can declare."""

    TEXT = "texto"
    NUMBER = "numero"
    BOOLEAN = "booleano"
    DATE = "fecha"


class RuleDefinition(NamedTuple):
    """
    One field's validation contract.

    minimum/maximum:
        TEXT     inclusive character-count bounds
        DATE     `minimum` is the exact string length; `maximum` is ignored
        NUMBER   carried from the tables but not evaluated
        BOOLEAN  unused

    `kind` is typed as str so a mistyped table entry still loads and is
    reported by the engine as an unrecognized kind.
    """

    name: str
    required: bool
    minimum: int
    maximum: int
    kind: str


# Ordered, immutable list of rules for one entity
RuleSet = Tuple[RuleDefinition, ...]


class JsonType(Enum):
    """Tagged view over the values produced by the JSON decoder."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


def json_type(value: Any) -> JsonType:
    """
    Classifies a decoded JSON value.

    bool is tested before int: in Python True/False are ints, in JSON they
    are not numbers.
    """
    if value is None:
        return JsonType.NULL
    if isinstance(value, bool):
        return JsonType.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonType.NUMBER
    if isinstance(value, str):
        return JsonType.TEXT
    if isinstance(value, list):
        return JsonType.ARRAY
    if isinstance(value, dict):
        return JsonType.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")
