"""
Inventra Backend — Settings and Envelope Tests
================================================
"""

import json

import pytest
from pydantic import ValidationError

from app.config import Settings
from app.exceptions import (
    ConfigurationError,
    FieldValidationError,
    MalformedPayloadError,
    NotFoundError,
)
from app.responses import error_response, response_for_error, success_response


class TestSettings:

    @pytest.mark.parametrize("raw,expected", [
        ("/api", "/api"),
        ("api", "/api"),
        ("/api/", "/api"),
        (" /v1/inventario/ ", "/v1/inventario"),
        ("", ""),
    ])
    def test_api_prefix_normalized(self, raw, expected):
        assert Settings(api_prefix=raw).api_prefix == expected

    def test_log_level_upper_cased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    @pytest.mark.parametrize("port", [80, 70000])
    def test_port_out_of_range(self, port):
        with pytest.raises(ValidationError):
            Settings(backend_port=port)


def _content(response) -> dict:
    return json.loads(response.body)


class TestEnvelope:

    def test_success(self):
        response = success_response({"id": 1}, "Estado creado correctamente", status_code=201)

        assert response.status_code == 201
        assert _content(response) == {
            "success": True,
            "message": "Estado creado correctamente",
            "data": {"id": 1},
        }

    def test_success_with_no_data_keeps_the_key(self):
        assert _content(success_response(None, "Estado eliminado correctamente"))["data"] is None

    def test_error_without_data_omits_the_key(self):
        response = error_response("JSON mal formado", 400)

        assert _content(response) == {"success": False, "message": "JSON mal formado"}

    def test_error_with_data(self):
        response = error_response("Error de validación", 400, ["uno", "dos"])

        assert _content(response)["data"] == ["uno", "dos"]

    @pytest.mark.parametrize("exc,status,body", [
        (ConfigurationError("inexistente"), 400, {"success": False, "message": "Entidad no reconocida"}),
        (MalformedPayloadError("empty body"), 400, {"success": False, "message": "JSON mal formado"}),
        (
            FieldValidationError(["El campo 'nombre' es obligatorio."]),
            400,
            {
                "success": False,
                "message": "Error de validación",
                "data": ["El campo 'nombre' es obligatorio."],
            },
        ),
        (NotFoundError("Ciudad no encontrada", resource_id=3), 404, {"success": False, "message": "Ciudad no encontrada"}),
    ])
    def test_response_for_error(self, exc, status, body):
        response = response_for_error(exc)

        assert response.status_code == status
        assert _content(response) == body

    def test_context_is_not_returned(self):
        exc = MalformedPayloadError("Expecting value: line 1 column 1")
        assert exc.context == {"reason": "Expecting value: line 1 column 1"}
        assert "Expecting" not in response_for_error(exc).body.decode()
