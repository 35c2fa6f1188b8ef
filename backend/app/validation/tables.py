"""
Inventra Backend — Per-Entity Rule Tables
===========================================

What:  The hand-authored list of field rules for every validated entity.
How:   One tuple of RuleDefinition per entity key, in the order fields are
       checked (and therefore the order violations are reported in).
Who:   Read once by registry.build_default_registry().

Reading a row:
    RuleDefinition(name, required, minimum, maximum, kind)

    Number rows keep the bounds the tables were authored with (usually 1..2);
    they document intent only and are never enforced.
"""

from typing import Dict

from app.validation.rules import FieldKind, RuleDefinition, RuleSet

TEXT = FieldKind.TEXT.value
NUMBER = FieldKind.NUMBER.value
BOOLEAN = FieldKind.BOOLEAN.value
DATE = FieldKind.DATE.value


# ── People & access ───────────────────────────────────────────────────────

USUARIO: RuleSet = (
    RuleDefinition("nombres", True, 3, 100, TEXT),
    RuleDefinition("apellidos", True, 3, 100, TEXT),
    RuleDefinition("tipo_documento_id", True, 1, 2, NUMBER),
    RuleDefinition("documento", True, 10, 11, TEXT),
    RuleDefinition("genero_id", True, 1, 2, NUMBER),
    RuleDefinition("telefono", True, 8, 15, TEXT),
    RuleDefinition("correo", True, 6, 100, TEXT),
    RuleDefinition("ficha_id", False, 1, 2, NUMBER),
    RuleDefinition("contrasena", True, 8, 50, TEXT),
    RuleDefinition("rol_id", False, 1, 2, NUMBER),
)

ROL: RuleSet = (
    RuleDefinition("nombre", True, 3, 30, TEXT),
    RuleDefinition("descripcion", False, 0, 250, TEXT),
)

TIPO_DOCUMENTO: RuleSet = (
    RuleDefinition("nombre", True, 3, 50, TEXT),
)

GENERO: RuleSet = (
    RuleDefinition("nombre", True, 3, 50, TEXT),
)

# ── Training structure ────────────────────────────────────────────────────

PROGRAMA_FORMACION: RuleSet = (
    RuleDefinition("nombre", True, 3, 100, TEXT),
)

FICHA: RuleSet = (
    RuleDefinition("ficha", True, 7, 20, TEXT),
)

# ── Locations ─────────────────────────────────────────────────────────────

CIUDAD: RuleSet = (
    RuleDefinition("nombre", True, 3, 50, TEXT),
)

CENTRO: RuleSet = (
    RuleDefinition("nombre", True, 3, 50, TEXT),
    RuleDefinition("direccion", True, 5, 50, TEXT),
    RuleDefinition("ciudad_id", True, 1, 2, NUMBER),
)

AMBIENTE: RuleSet = (
    RuleDefinition("nombre", True, 3, 50, TEXT),
    RuleDefinition("centro_id", True, 1, 2, NUMBER),
)

# ── Inventory ─────────────────────────────────────────────────────────────

INVENTARIO: RuleSet = (
    RuleDefinition("nombre", True, 3, 50, TEXT),
    RuleDefinition("fecha_creacion", True, 10, 10, DATE),
    RuleDefinition("usuario_admin_id", True, 1, 2, NUMBER),
)

TIPO_ELEMENTO: RuleSet = (
    RuleDefinition("nombre", True, 3, 50, TEXT),
    RuleDefinition("consecutivo", True, 1, 10, NUMBER),
    RuleDefinition("descripcion", False, 0, 250, TEXT),
    RuleDefinition("marca", False, 0, 50, TEXT),
    RuleDefinition("modelo", False, 0, 50, TEXT),
    RuleDefinition("atributos", True, 3, 250, TEXT),
)

ESTADO: RuleSet = (
    RuleDefinition("nombre", True, 3, 20, TEXT),
)

ELEMENTO: RuleSet = (
    RuleDefinition("placa", True, 1, 50, NUMBER),
    RuleDefinition("serial", False, 0, 50, TEXT),
    RuleDefinition("tipoElementoId", True, 1, 2, NUMBER),
    RuleDefinition("fechaAdquisicion", True, 10, 10, DATE),
    RuleDefinition("valorMonetario", True, 1, 20, NUMBER),
    RuleDefinition("estadoId", True, 1, 2, NUMBER),
    RuleDefinition("estadoActivo", True, 0, 0, BOOLEAN),
    RuleDefinition("ambienteId", True, 1, 2, NUMBER),
    RuleDefinition("inventarioId", True, 1, 2, NUMBER),
)

REPORTE: RuleSet = (
    RuleDefinition("asunto", True, 1, 100, TEXT),
    RuleDefinition("mensaje", True, 1, 1000, TEXT),
    RuleDefinition("usuario_id", True, 1, 2, NUMBER),
    RuleDefinition("elemento_id", True, 1, 2, NUMBER),
)


# Entity key → rule set. Keys are lowercase.
RULE_TABLES: Dict[str, RuleSet] = {
    "usuario": USUARIO,
    "rol": ROL,
    "tipo_documento": TIPO_DOCUMENTO,
    "programa_formacion": PROGRAMA_FORMACION,
    "ficha": FICHA,
    "genero": GENERO,
    "inventario": INVENTARIO,
    "centro": CENTRO,
    "ambiente": AMBIENTE,
    "ciudad": CIUDAD,
    "tipo_elemento": TIPO_ELEMENTO,
    "estado": ESTADO,
    "elemento": ELEMENTO,
    "reporte": REPORTE,
}
