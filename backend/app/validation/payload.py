"""
Decoding of captured request bodies into validation payloads.
"""

import json
import math
from typing import Any, Dict, List, Tuple

from app.exceptions import MalformedPayloadError


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are accepted by the json module but are not JSON
    raise ValueError(f"Invalid JSON constant {name}")


def _finite_float(text: str) -> float:
    # 1e400 overflows to inf, which cannot be written back out as JSON
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range {text}")
    return value


def _unique_object(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    obj: Dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise ValueError(f"Duplicate key '{key}'")
        obj[key] = value
    return obj


def decode_payload(body: bytes) -> Dict[str, Any]:
    """
    Decodes a raw body into a JSON object.

    The encoding (UTF-8/16/32) is detected by the json module.

    Raises:
        MalformedPayloadError: empty body, undecodable bytes, syntax error,
            NaN/Infinity or a number literal that overflows to
            infinity, a key repeated within one object, or a top-level
            value that is not an object.
    """
    if not body.strip():
        raise MalformedPayloadError(reason="empty body")

    try:
        document = json.loads(
            body,
            object_pairs_hook=_unique_object,
            parse_constant=_reject_constant,
            parse_float=_finite_float,
        )
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise MalformedPayloadError(reason=str(e)) from e

    if not isinstance(document, dict):
        raise MalformedPayloadError(
            reason=f"expected a JSON object, got {type(document).__name__}"
        )
    return document
