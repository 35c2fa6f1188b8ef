"""
Inventra Backend — Entity Service
===================================

What:  CRUD orchestration shared by every inventory resource.
How:   Wraps an EntityRepository for one Resource and turns missing records
       into NotFoundError with Spanish messages in the resource's grammatical
       gender ("Estado no encontrado", "Ciudad no encontrada").
Who:   Called by the routes in app/routes/entities.py.

Request bodies reaching create/update have already been accepted by
FieldValidationMiddleware and decoded into the resource's schema by FastAPI.
Per-entity business rules (uniqueness, cascade guards, password hashing) are
owned by the dedicated domain services and are not part of this layer.
"""

import logging
from typing import List, NamedTuple, Type

from pydantic import BaseModel

from app.exceptions import NotFoundError
from app.services.repository import EntityRepository, Record

logger = logging.getLogger(__name__)


class Resource(NamedTuple):
    """
    One REST resource.

    entity_key:  validation entity key; also names the routes (create_<key>)
    path:        URL segment under the API prefix
    label:       singular display name ("Tipo de documento")
    plural:      lowercase plural ("tipos de documento")
    feminine:    picks the -a / -o participle endings in messages
    schema:      request body model for create/update
    """

    entity_key: str
    path: str
    label: str
    plural: str
    feminine: bool
    schema: Type[BaseModel]

    def participle(self, stem: str, plural: bool = False) -> str:
        """participle("cread") -> "creado" / "creada" (+s when plural)."""
        word = stem + ("a" if self.feminine else "o")
        return word + "s" if plural else word


class Messages:
    """Outcome messages for one resource."""

    def __init__(self, resource: Resource):
        self.r = resource

    def listed(self) -> str:
        plural = self.r.plural[0].upper() + self.r.plural[1:]
        return f"{plural} {self.r.participle('obtenid', plural=True)} correctamente"

    def none_found(self) -> str:
        return f"No se encontraron {self.r.plural}"

    def fetched(self) -> str:
        return f"{self.r.label} {self.r.participle('obtenid')} correctamente"

    def not_found(self) -> str:
        return f"{self.r.label} no {self.r.participle('encontrad')}"

    def created(self) -> str:
        return f"{self.r.label} {self.r.participle('cread')} correctamente"

    def updated(self) -> str:
        return f"{self.r.label} {self.r.participle('actualizad')} correctamente"

    def deleted(self) -> str:
        return f"{self.r.label} {self.r.participle('eliminad')} correctamente"


class EntityService:
    """Stateless CRUD operations for one resource over a repository."""

    def __init__(self, resource: Resource, repository: EntityRepository):
        self.resource = resource
        self.repository = repository
        self.messages = Messages(resource)

    async def list_all(self) -> List[Record]:
        """
        Raises:
            NotFoundError: when there are no records ("No se encontraron ...").
        """
        records = await self.repository.list(self.resource.entity_key)
        if not records:
            raise NotFoundError(message=self.messages.none_found())
        return records

    async def get(self, record_id: int) -> Record:
        record = await self.repository.get(self.resource.entity_key, record_id)
        if record is None:
            raise NotFoundError(message=self.messages.not_found(), resource_id=record_id)
        return record

    async def create(self, payload: BaseModel) -> Record:
        record = await self.repository.create(
            self.resource.entity_key, payload.model_dump(mode="json")
        )
        logger.info("%s created: id=%s", self.resource.entity_key, record["id"])
        return record

    async def update(self, record_id: int, payload: BaseModel) -> Record:
        record = await self.repository.update(
            self.resource.entity_key, record_id, payload.model_dump(mode="json")
        )
        if record is None:
            raise NotFoundError(message=self.messages.not_found(), resource_id=record_id)
        logger.info("%s updated: id=%s", self.resource.entity_key, record_id)
        return record

    async def delete(self, record_id: int) -> None:
        deleted = await self.repository.delete(self.resource.entity_key, record_id)
        if not deleted:
            raise NotFoundError(message=self.messages.not_found(), resource_id=record_id)
        logger.info("%s deleted: id=%s", self.resource.entity_key, record_id)
