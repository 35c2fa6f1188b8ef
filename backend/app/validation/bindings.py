"""
Inventra Backend — Operation Bindings
=======================================

What:  Declares which API operations have their body validated, and against
       which entity's rules.
How:   An explicit table from operation identifier (the FastAPI route name)
       to entity key. The validation middleware matches the incoming request to
       a route, then looks the route name up here before the route runs.
Who:   Read by FieldValidationMiddleware; route names are set in
       app/routes/entities.py.

An operation missing from this table is never validated: its body reaches the
route untouched.
"""

from types import MappingProxyType
from typing import Mapping, Optional


OPERATION_BINDINGS: Mapping[str, str] = MappingProxyType({
    # People & access
    "create_usuario": "usuario",
    "update_usuario": "usuario",
    "create_rol": "rol",
    "update_rol": "rol",
    "create_tipo_documento": "tipo_documento",
    "update_tipo_documento": "tipo_documento",
    "create_genero": "genero",
    "update_genero": "genero",
    # Training structure
    "create_programa_formacion": "programa_formacion",
    "update_programa_formacion": "programa_formacion",
    "create_ficha": "ficha",
    "update_ficha": "ficha",
    # Locations
    "create_ciudad": "ciudad",
    "update_ciudad": "ciudad",
    "create_centro": "centro",
    "update_centro": "centro",
    "create_ambiente": "ambiente",
    "update_ambiente": "ambiente",
    # Inventory
    "create_inventario": "inventario",
    "update_inventario": "inventario",
    "create_tipo_elemento": "tipo_elemento",
    "update_tipo_elemento": "tipo_elemento",
    "create_estado": "estado",
    "update_estado": "estado",
    "create_elemento": "elemento",
    "update_elemento": "elemento",
    "create_reporte": "reporte",
    "update_reporte": "reporte",
})


class OperationBindings:
    """Read-only view over an operation → entity key table."""

    def __init__(self, table: Mapping[str, str] = OPERATION_BINDINGS):
        self._table = MappingProxyType(dict(table))

    def entity_for(self, operation_id: Optional[str]) -> Optional[str]:
        """Returns the bound entity key, or None for an unbound operation."""
        if not operation_id:
            return None
        return self._table.get(operation_id)

    def operations(self) -> Mapping[str, str]:
        return self._table

    def __len__(self) -> int:
        return len(self._table)
