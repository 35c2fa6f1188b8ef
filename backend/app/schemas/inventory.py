"""
Inventra Backend — Entity Request Schemas
===========================================

What:  Pydantic models the bound create/update routes decode their body into.
How:   FastAPI reads the (replayed) request body and validates it into these
       models after FieldValidationMiddleware has accepted it.
Who:   Used by app/routes/entities.py.

Relationship to the rule tables:
    Field names match app/validation/tables.py exactly, including the
    camelCase names of `elemento`. The rule tables decide whether a request is
    accepted; these models only give the route a typed object. Optional here
    means optional in the table.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# People & access
# ══════════════════════════════════════════════════════════════════════════


class UsuarioIn(BaseModel):
    nombres: str
    apellidos: str
    tipo_documento_id: int
    documento: str
    genero_id: int
    telefono: str
    correo: str
    ficha_id: Optional[int] = None
    contrasena: str = Field(description="Plain text on input; hashing is done by the user service")
    rol_id: Optional[int] = None


class RolIn(BaseModel):
    nombre: str
    descripcion: Optional[str] = None


class TipoDocumentoIn(BaseModel):
    nombre: str


class GeneroIn(BaseModel):
    nombre: str


# ══════════════════════════════════════════════════════════════════════════
# Training structure
# ══════════════════════════════════════════════════════════════════════════


class ProgramaFormacionIn(BaseModel):
    nombre: str


class FichaIn(BaseModel):
    ficha: str


# ══════════════════════════════════════════════════════════════════════════
# Locations
# ══════════════════════════════════════════════════════════════════════════


class CiudadIn(BaseModel):
    nombre: str


class CentroIn(BaseModel):
    nombre: str
    direccion: str
    ciudad_id: int


class AmbienteIn(BaseModel):
    nombre: str
    centro_id: int


# ══════════════════════════════════════════════════════════════════════════
# Inventory
# ══════════════════════════════════════════════════════════════════════════


class InventarioIn(BaseModel):
    nombre: str
    fecha_creacion: date
    usuario_admin_id: int


class TipoElementoIn(BaseModel):
    nombre: str
    consecutivo: int
    descripcion: Optional[str] = None
    marca: Optional[str] = None
    modelo: Optional[str] = None
    atributos: str


class EstadoIn(BaseModel):
    nombre: str


class ElementoIn(BaseModel):
    placa: int
    serial: Optional[str] = None
    tipoElementoId: int
    fechaAdquisicion: date
    valorMonetario: float
    estadoId: int
    estadoActivo: bool
    ambienteId: int
    inventarioId: int


class ReporteIn(BaseModel):
    asunto: str
    mensaje: str
    usuario_id: int
    elemento_id: int
