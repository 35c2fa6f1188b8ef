"""
Inventra Backend — Validation Engine Unit Tests
=================================================

What:  Tests for validate(payload, rules), one kind at a time.
How:   Plain dict payloads and hand-built rule lists; no HTTP involved.

What we test:
    ✅ The `estado` scenario end to end at engine level
    ✅ Text bounds are inclusive; one violation per side
    ✅ Type mismatches skip the length checks
    ✅ Number accepts int and float, never booleans; bounds are not enforced
    ✅ Dates: exact length, real calendar days, leap years
    ✅ Unknown kinds become violations, not crashes
    ✅ Every rule is evaluated; violations keep rule order
"""

import pytest

from app.validation.engine import parse_calendar_date, validate
from app.validation.rules import FieldKind, RuleDefinition
from app.validation.tables import ESTADO

TEXT = FieldKind.TEXT.value
NUMBER = FieldKind.NUMBER.value
BOOLEAN = FieldKind.BOOLEAN.value
DATE = FieldKind.DATE.value


class TestEstadoScenario:
    """entity "estado": nombre, required, 3..20, texto."""

    def test_valid_name(self):
        assert validate({"nombre": "Activo"}, ESTADO) == []

    def test_missing_name(self):
        assert validate({}, ESTADO) == ["El campo 'nombre' es obligatorio."]

    def test_name_too_short(self):
        assert validate({"nombre": "Ok"}, ESTADO) == [
            "El campo 'nombre' debe tener al menos 3 caracteres."
        ]

    def test_name_is_a_number(self):
        assert validate({"nombre": 5}, ESTADO) == [
            "El campo 'nombre' debe ser de tipo texto."
        ]


class TestTextRules:
    """Inclusive length bounds and type checks for texto."""

    RULES = [RuleDefinition("nombre", True, 3, 20, TEXT)]

    @pytest.mark.parametrize("length", [3, 20])
    def test_length_at_bounds_is_valid(self, length):
        assert validate({"nombre": "x" * length}, self.RULES) == []

    def test_one_below_minimum(self):
        errors = validate({"nombre": "xx"}, self.RULES)
        assert errors == ["El campo 'nombre' debe tener al menos 3 caracteres."]

    def test_one_above_maximum(self):
        errors = validate({"nombre": "x" * 21}, self.RULES)
        assert errors == ["El campo 'nombre' debe tener como máximo 20 caracteres."]

    @pytest.mark.parametrize("value", [5, 4.5, True, None, ["Activo"], {"v": "Activo"}])
    def test_non_string_gives_one_type_violation(self, value):
        errors = validate({"nombre": value}, self.RULES)
        assert errors == ["El campo 'nombre' debe ser de tipo texto."]

    def test_length_counts_characters_not_bytes(self):
        # 3 characters, 6 bytes in UTF-8
        assert validate({"nombre": "ñáé"}, self.RULES) == []

    def test_misconfigured_bounds_fire_both_checks(self):
        rules = [RuleDefinition("nombre", True, 10, 5, TEXT)]
        errors = validate({"nombre": "abcdefg"}, rules)
        assert errors == [
            "El campo 'nombre' debe tener al menos 10 caracteres.",
            "El campo 'nombre' debe tener como máximo 5 caracteres.",
        ]

    def test_optional_field_absent_is_skipped(self):
        rules = [RuleDefinition("descripcion", False, 5, 250, TEXT)]
        assert validate({}, rules) == []

    def test_optional_field_present_is_checked(self):
        rules = [RuleDefinition("descripcion", False, 5, 250, TEXT)]
        errors = validate({"descripcion": "abc"}, rules)
        assert errors == ["El campo 'descripcion' debe tener al menos 5 caracteres."]

    def test_empty_string_with_zero_minimum(self):
        rules = [RuleDefinition("serial", False, 0, 50, TEXT)]
        assert validate({"serial": ""}, rules) == []


class TestNumberRules:
    RULES = [RuleDefinition("estadoId", True, 1, 2, NUMBER)]

    @pytest.mark.parametrize("value", [0, 7, -3, 1000000, 12.75, 1e3])
    def test_numbers_accepted(self, value):
        assert validate({"estadoId": value}, self.RULES) == []

    def test_bounds_are_not_enforced(self):
        # minimum/maximum on numero rules are documentation only
        assert validate({"estadoId": 999}, self.RULES) == []

    @pytest.mark.parametrize("value", ["7", True, False, None, [7], {"id": 7}])
    def test_non_numbers_rejected(self, value):
        errors = validate({"estadoId": value}, self.RULES)
        assert errors == ["El campo 'estadoId' debe ser de tipo numérico."]


class TestBooleanRules:
    RULES = [RuleDefinition("estadoActivo", True, 0, 0, BOOLEAN)]

    @pytest.mark.parametrize("value", [True, False])
    def test_booleans_accepted(self, value):
        assert validate({"estadoActivo": value}, self.RULES) == []

    @pytest.mark.parametrize("value", [0, 1, "true", None])
    def test_non_booleans_rejected(self, value):
        errors = validate({"estadoActivo": value}, self.RULES)
        assert errors == ["El campo 'estadoActivo' debe ser de tipo booleano."]


class TestDateRules:
    RULES = [RuleDefinition("fecha_creacion", True, 10, 10, DATE)]

    def test_leap_day_in_leap_year(self):
        assert validate({"fecha_creacion": "2024-02-29"}, self.RULES) == []

    @pytest.mark.parametrize("value", ["2023-02-29", "2024-02-30", "2024-13-01", "2024-00-10", "0000-01-01"])
    def test_impossible_dates_give_format_violation(self, value):
        errors = validate({"fecha_creacion": value}, self.RULES)
        assert errors == [
            "El campo 'fecha_creacion' no tiene un formato de fecha válido (yyyy-MM-dd)."
        ]

    @pytest.mark.parametrize("value", ["15/03/2024", "2024/03/15", "2024-3-150", "２０２４-03-15", " 024-03-15"])
    def test_wrong_pattern_with_right_length(self, value):
        assert len(value) == 10
        errors = validate({"fecha_creacion": value}, self.RULES)
        assert errors == [
            "El campo 'fecha_creacion' no tiene un formato de fecha válido (yyyy-MM-dd)."
        ]

    @pytest.mark.parametrize("value", ["2024-3-15", "2024-03-15T00:00", ""])
    def test_wrong_length(self, value):
        errors = validate({"fecha_creacion": value}, self.RULES)
        assert errors == [
            "El campo 'fecha_creacion' debe tener exactamente 10 caracteres (formato yyyy-MM-dd)."
        ]

    def test_non_string_date(self):
        errors = validate({"fecha_creacion": 20240315}, self.RULES)
        assert errors == ["El campo 'fecha_creacion' debe ser una cadena en formato fecha."]

    def test_parse_calendar_date(self):
        parsed = parse_calendar_date("2024-02-29")
        assert (parsed.year, parsed.month, parsed.day) == (2024, 2, 29)
        assert parse_calendar_date("2024-02-30") is None


class TestUnknownKind:

    def test_unknown_kind_is_reported(self):
        rules = [RuleDefinition("centro_id", True, 1, 2, "int")]
        assert validate({"centro_id": 3}, rules) == [
            "Tipo no reconocido para el campo 'centro_id'."
        ]

    def test_unknown_kind_absent_optional_field_is_skipped(self):
        rules = [RuleDefinition("centro_id", False, 1, 2, "int")]
        assert validate({}, rules) == []


class TestAggregation:
    """All rules run; violations come back in rule order."""

    RULES = [
        RuleDefinition("nombre", True, 3, 50, TEXT),
        RuleDefinition("fecha_creacion", True, 10, 10, DATE),
        RuleDefinition("usuario_admin_id", True, 1, 2, NUMBER),
        RuleDefinition("activo", False, 0, 0, BOOLEAN),
    ]

    def test_every_field_reported(self):
        errors = validate(
            {"nombre": "AB", "usuario_admin_id": "uno", "activo": "si"},
            self.RULES,
        )
        assert errors == [
            "El campo 'nombre' debe tener al menos 3 caracteres.",
            "El campo 'fecha_creacion' es obligatorio.",
            "El campo 'usuario_admin_id' debe ser de tipo numérico.",
            "El campo 'activo' debe ser de tipo booleano.",
        ]

    def test_unknown_payload_fields_are_ignored(self):
        payload = {
            "nombre": "Inventario Sistemas",
            "fecha_creacion": "2024-03-15",
            "usuario_admin_id": 1,
            "id": "no-importa",
        }
        assert validate(payload, self.RULES) == []

    def test_inputs_are_not_mutated(self):
        payload = {"nombre": "AB"}
        rules = list(self.RULES)
        validate(payload, rules)
        assert payload == {"nombre": "AB"}
        assert rules == self.RULES
