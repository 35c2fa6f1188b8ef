"""
Inventra Backend — Entity Route Handlers
==========================================

What:  CRUD endpoints for every inventory resource.
How:   One APIRouter per Resource, built by build_entity_router(). Each
       router exposes:

           GET    /{path}         list_<key>
           GET    /{path}/{id}    get_<key>
           POST   /{path}         create_<key>   (body validated, 201)
           PUT    /{path}/{id}    update_<key>   (body validated)
           DELETE /{path}/{id}    delete_<key>

Validation:
    The route names are the operation identifiers of app/validation/bindings.py.
    FieldValidationMiddleware checks create/update bodies against the entity's
    rules before these handlers run and replays the accepted body, which
    FastAPI then decodes into the resource schema.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.routing import BaseRoute

from app.schemas.common import Envelope, ErrorEnvelope
from app.schemas.inventory import (
    AmbienteIn,
    CentroIn,
    CiudadIn,
    ElementoIn,
    EstadoIn,
    FichaIn,
    GeneroIn,
    InventarioIn,
    ProgramaFormacionIn,
    ReporteIn,
    RolIn,
    TipoDocumentoIn,
    TipoElementoIn,
    UsuarioIn,
)
from app.responses import success_response
from app.services.entity_service import EntityService, Resource
from app.services.repository import EntityRepository

logger = logging.getLogger(__name__)


RESOURCES: List[Resource] = [
    Resource("usuario", "/usuarios", "Usuario", "usuarios", False, UsuarioIn),
    Resource("rol", "/roles", "Rol", "roles", False, RolIn),
    Resource("tipo_documento", "/tipos-documento", "Tipo de documento", "tipos de documento", False, TipoDocumentoIn),
    Resource("genero", "/generos", "Género", "géneros", False, GeneroIn),
    Resource("programa_formacion", "/programas-formacion", "Programa de formación", "programas de formación", False, ProgramaFormacionIn),
    Resource("ficha", "/fichas", "Ficha", "fichas", True, FichaIn),
    Resource("ciudad", "/ciudades", "Ciudad", "ciudades", True, CiudadIn),
    Resource("centro", "/centros", "Centro", "centros", False, CentroIn),
    Resource("ambiente", "/ambientes", "Ambiente", "ambientes", False, AmbienteIn),
    Resource("inventario", "/inventarios", "Inventario", "inventarios", False, InventarioIn),
    Resource("tipo_elemento", "/tipos-elementos", "Tipo de elemento", "tipos de elementos", False, TipoElementoIn),
    Resource("estado", "/estados", "Estado", "estados", False, EstadoIn),
    Resource("elemento", "/elementos", "Elemento", "elementos", False, ElementoIn),
    Resource("reporte", "/reportes", "Reporte", "reportes", False, ReporteIn),
]


def get_repository(request: Request) -> EntityRepository:
    """Repository installed by the app factory."""
    return request.app.state.repository


def build_entity_router(resource: Resource, prefix: str = "") -> APIRouter:
    """
    Builds the CRUD router for one resource.

    The body parameter is annotated with the resource's schema at definition
    time, so FastAPI documents and decodes a different model per resource.

    `prefix` (the API prefix) is baked into the route paths here rather than
    passed to include_router(), so `router.routes` holds the full request
    paths the validation middleware matches against.
    """
    router = APIRouter(prefix=prefix + resource.path, tags=[resource.label])
    schema = resource.schema
    key = resource.entity_key

    def service_for(repository: EntityRepository = Depends(get_repository)) -> EntityService:
        return EntityService(resource, repository)

    errors = {
        400: {"description": "Invalid body", "model": ErrorEnvelope},
        404: {"description": f"{resource.label} not found", "model": ErrorEnvelope},
    }

    async def list_records(service: EntityService = Depends(service_for)) -> JSONResponse:
        records = await service.list_all()
        return success_response(records, service.messages.listed())

    async def get_record(record_id: int, service: EntityService = Depends(service_for)) -> JSONResponse:
        record = await service.get(record_id)
        return success_response(record, service.messages.fetched())

    async def create_record(payload: schema, service: EntityService = Depends(service_for)) -> JSONResponse:
        record = await service.create(payload)
        return success_response(record, service.messages.created(), status_code=201)

    async def update_record(
        record_id: int, payload: schema, service: EntityService = Depends(service_for)
    ) -> JSONResponse:
        record = await service.update(record_id, payload)
        return success_response(record, service.messages.updated())

    async def delete_record(record_id: int, service: EntityService = Depends(service_for)) -> JSONResponse:
        await service.delete(record_id)
        return success_response(None, service.messages.deleted())

    router.add_api_route(
        "", list_records, methods=["GET"], name=f"list_{key}",
        response_model=Envelope, responses={404: errors[404]},
        summary=f"List {resource.plural}",
    )
    router.add_api_route(
        "/{record_id}", get_record, methods=["GET"], name=f"get_{key}",
        response_model=Envelope, responses={404: errors[404]},
        summary=f"Get one {resource.label.lower()}",
    )
    router.add_api_route(
        "", create_record, methods=["POST"], name=f"create_{key}", status_code=201,
        response_model=Envelope, responses={400: errors[400]},
        summary=f"Create {resource.label.lower()}",
    )
    router.add_api_route(
        "/{record_id}", update_record, methods=["PUT"], name=f"update_{key}",
        response_model=Envelope, responses=errors,
        summary=f"Update {resource.label.lower()}",
    )
    router.add_api_route(
        "/{record_id}", delete_record, methods=["DELETE"], name=f"delete_{key}",
        response_model=Envelope, responses={404: errors[404]},
        summary=f"Delete {resource.label.lower()}",
    )
    return router


def build_entity_routers(prefix: str = "") -> List[APIRouter]:
    return [build_entity_router(resource, prefix) for resource in RESOURCES]


def operation_routes(routers: List[APIRouter]) -> List[BaseRoute]:
    """Flattens routers into the named routes the validation middleware matches."""
    return [route for router in routers for route in router.routes]
