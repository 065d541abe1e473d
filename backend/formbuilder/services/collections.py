from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from formbuilder.database import CollectionKind, PersistenceGateway, new_id
from formbuilder.errors import InvalidField, NotFound
from formbuilder.services.shaping import build_field

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CollectionService:
    """Create/read/update/delete for one kind of field collection.

    Forms and custom field templates share this service; the kind decides the
    model and the storage partition.
    """

    def __init__(self, gateway: PersistenceGateway, kind: CollectionKind):
        self.gateway = gateway
        self.kind = kind

    def _not_found(self, collection_id: str) -> NotFound:
        return NotFound(f"{self.kind.label} not found: {collection_id}")

    def _index_of(self, entities: List[BaseModel], collection_id: str) -> int:
        for index, entity in enumerate(entities):
            if entity.id == collection_id:
                return index
        raise self._not_found(collection_id)

    async def list(self) -> List[BaseModel]:
        return await self.gateway.load(self.kind)

    async def get(self, collection_id: str) -> BaseModel:
        entities = await self.gateway.load(self.kind)
        return entities[self._index_of(entities, collection_id)]

    async def create(self, data: Dict[str, Any]) -> BaseModel:
        data = dict(data)
        fields = [build_field(spec) for spec in data.pop("fields", None) or []]
        now = utcnow()
        try:
            entity = self.kind.model.model_validate(
                {**data, "id": new_id(), "fields": fields, "createdAt": now, "updatedAt": now}
            )
        except ValidationError as e:
            raise InvalidField(str(e)) from e

        entities = await self.gateway.load(self.kind)
        entities.append(entity)
        await self.gateway.save_all(self.kind, entities)
        logger.info("Created %s %s with %d fields", self.kind.value, entity.id, len(fields))
        return entity

    async def update(self, collection_id: str, patch: Dict[str, Any]) -> BaseModel:
        """Shallow-merge collection metadata; fields go through the field operations."""
        protected = {"id", "fields", "createdAt", "updatedAt"}
        changes = {key: value for key, value in patch.items() if key not in protected}

        def apply(entity):
            model = type(entity)
            known = {key: value for key, value in changes.items() if key in model.model_fields}
            try:
                # the merged entity must still load, e.g. a null name is refused
                validated = model.model_validate({**entity.model_dump(), **known})
            except ValidationError as e:
                raise InvalidField(str(e)) from e
            for key in known:
                setattr(entity, key, getattr(validated, key))
            return True

        return await self.apply(collection_id, apply)

    async def delete(self, collection_id: str) -> bool:
        entities = await self.gateway.load(self.kind)
        remaining = [entity for entity in entities if entity.id != collection_id]
        if len(remaining) == len(entities):
            return False
        await self.gateway.save_all(self.kind, remaining)
        logger.info("Deleted %s %s", self.kind.value, collection_id)
        return True

    async def apply(
        self,
        collection_id: str,
        change: Callable[[BaseModel], bool],
    ) -> BaseModel:
        """Run one read-modify-write cycle against a single collection.

        ``change`` edits the loaded entity in place and returns whether anything
        should be written. Nothing is saved if it raises or returns False.
        """
        entities = await self.gateway.load(self.kind)
        index = self._index_of(entities, collection_id)
        entity = entities[index]
        if not change(entity):
            return entity
        entity.updatedAt = utcnow()
        await self.gateway.save_all(self.kind, entities)
        return entity

    async def apply_to_field(
        self,
        field_id: str,
        change: Callable[[BaseModel, int], bool],
        collection_id: Optional[str] = None,
    ) -> BaseModel:
        """Like ``apply`` but locates the collection by one of its field ids.

        Field ids are unique across the whole kind, so ``collection_id`` only
        narrows the search.
        """
        entities = await self.gateway.load(self.kind)
        if collection_id is not None:
            candidates = [entities[self._index_of(entities, collection_id)]]
        else:
            candidates = entities

        for entity in candidates:
            for position, field in enumerate(entity.fields):
                if field.id != field_id:
                    continue
                if not change(entity, position):
                    return entity
                entity.updatedAt = utcnow()
                await self.gateway.save_all(self.kind, entities)
                return entity
        raise NotFound(f"Field not found: {field_id}")
