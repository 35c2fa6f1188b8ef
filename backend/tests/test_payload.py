"""
Inventra Backend — Payload Decoding Tests
===========================================

What we test:
    ✅ JSON objects decode, in any JSON encoding
    ✅ Anything that is not a single well-formed JSON object is malformed
"""

import pytest

from app.exceptions import MalformedPayloadError
from app.validation.payload import decode_payload
from app.validation.rules import JsonType, json_type


class TestDecodePayload:

    def test_object(self):
        assert decode_payload(b'{"nombre": "Activo", "id": 3}') == {"nombre": "Activo", "id": 3}

    def test_utf8_text(self):
        body = '{"nombre": "Señal Ñ"}'.encode("utf-8")
        assert decode_payload(body) == {"nombre": "Señal Ñ"}

    def test_utf16_text(self):
        body = '{"nombre": "Activo"}'.encode("utf-16")
        assert decode_payload(body) == {"nombre": "Activo"}

    def test_empty_object(self):
        assert decode_payload(b"{}") == {}

    @pytest.mark.parametrize("body", [b"", b"   ", b"\n"])
    def test_empty_body(self, body):
        with pytest.raises(MalformedPayloadError) as exc_info:
            decode_payload(body)
        assert exc_info.value.message == "JSON mal formado"

    @pytest.mark.parametrize("body", [
        b'{"nombre": "Activo"',
        b"{'nombre': 'Activo'}",
        b'{"nombre": "Activo",}',
        b"nombre=Activo",
        b'{"nombre": "Activo"} {}',
    ])
    def test_syntax_errors(self, body):
        with pytest.raises(MalformedPayloadError):
            decode_payload(body)

    @pytest.mark.parametrize("body", [b'[{"nombre": "Activo"}]', b'"Activo"', b"5", b"null", b"true"])
    def test_top_level_must_be_object(self, body):
        with pytest.raises(MalformedPayloadError, match="JSON mal formado") as exc_info:
            decode_payload(body)
        assert "expected a JSON object" in exc_info.value.reason

    @pytest.mark.parametrize("body", [b'{"valor": NaN}', b'{"valor": Infinity}', b'{"valor": -Infinity}'])
    def test_non_standard_constants_rejected(self, body):
        with pytest.raises(MalformedPayloadError):
            decode_payload(body)

    def test_duplicate_keys_rejected(self):
        with pytest.raises(MalformedPayloadError) as exc_info:
            decode_payload(b'{"nombre": "Activo", "nombre": "Ok"}')
        assert "Duplicate key" in exc_info.value.reason

    def test_invalid_utf8(self):
        with pytest.raises(MalformedPayloadError):
            decode_payload(b'{"nombre": "\xff\xfe\xfa"}')


class TestJsonType:

    @pytest.mark.parametrize("value,expected", [
        ("texto", JsonType.TEXT),
        (1, JsonType.NUMBER),
        (1.5, JsonType.NUMBER),
        (True, JsonType.BOOLEAN),
        (False, JsonType.BOOLEAN),
        (None, JsonType.NULL),
        ([1], JsonType.ARRAY),
        ({"a": 1}, JsonType.OBJECT),
    ])
    def test_classification(self, value, expected):
        assert json_type(value) is expected

    def test_rejects_non_json_values(self):
        with pytest.raises(TypeError):
            json_type(object())


class TestNumberRange:

    @pytest.mark.parametrize("body", [b'{"valor": 1e400}', b'{"valor": -1e400}', b'{"a": {"b": [2E999]}}'])
    def test_overflowing_literal_rejected(self, body):
        with pytest.raises(MalformedPayloadError) as exc_info:
            decode_payload(body)
        assert "out of range" in exc_info.value.reason

    def test_large_finite_values_kept(self):
        assert decode_payload(b'{"valor": 1.5e300, "placa": 123456789012345678901234567890}') == {
            "valor": 1.5e300,
            "placa": 123456789012345678901234567890,
        }
