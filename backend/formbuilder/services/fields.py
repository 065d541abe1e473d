from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ValidationError

from formbuilder import catalog
from formbuilder.errors import InvalidField, NotFound
from formbuilder.schemas import FieldOption
from formbuilder.services.collections import CollectionService
from formbuilder.services.shaping import build_field, parse_field

logger = logging.getLogger(__name__)

OptionInput = Union[FieldOption, Dict[str, Any]]


def _field_position(entity: BaseModel, field_id: str) -> int:
    for position, field in enumerate(entity.fields):
        if field.id == field_id:
            return position
    raise NotFound(f"Field not found: {field_id}")


def _as_option(option: OptionInput) -> Optional[FieldOption]:
    """The option to add, or None when the input cannot be read as one."""
    if isinstance(option, FieldOption):
        return option.model_copy()
    try:
        return FieldOption.model_validate(option)
    except ValidationError:
        return None


def _as_group(group_key: str) -> catalog.SubFieldGroup:
    try:
        return catalog.SubFieldGroup(group_key)
    except ValueError:
        raise InvalidField(f"Unknown sub-field option group: {group_key!r}")


class FieldService(CollectionService):
    """Field and option edits on a form or custom field template.

    Each call is one load-modify-save cycle of the whole kind and refreshes the
    collection's ``updatedAt``. Edits that are declined (blank options,
    out-of-range indexes, option edits on a field of the wrong type) write
    nothing and return the collection unchanged.
    """

    async def add_field(self, collection_id: str, field_spec: Any) -> BaseModel:
        field = build_field(field_spec)

        def change(entity):
            entity.fields.append(field)
            return True

        entity = await self.apply(collection_id, change)
        logger.info("Added %s field %s to %s %s", field.type, field.id, self.kind.value, collection_id)
        return entity

    async def update_field(self, collection_id: str, field_id: str, patch: Dict[str, Any]) -> BaseModel:
        def change(entity):
            position = _field_position(entity, field_id)
            current = entity.fields[position]
            merged = current.model_dump(exclude_none=True)
            merged.update({key: value for key, value in patch.items() if key != "id"})
            groups = patch.get("subFieldOptions")
            if catalog.has_sub_field_options(current.type) and isinstance(groups, dict):
                # groups left out of the patch keep their stored options
                merged["subFieldOptions"] = {**current.subFieldOptions.model_dump(), **groups}
            if catalog.has_options(current.type) and not catalog.has_options(merged.get("type")):
                merged.pop("options", None)
            entity.fields[position] = parse_field(merged)
            return True

        return await self.apply(collection_id, change)

    async def delete_field(self, collection_id: str, field_id: str) -> BaseModel:
        # a missing field id still counts as an edit and advances updatedAt
        def change(entity):
            entity.fields = [field for field in entity.fields if field.id != field_id]
            return True

        return await self.apply(collection_id, change)

    async def reorder_fields(self, collection_id: str, ordered_field_ids: List[str]) -> BaseModel:
        """Replace the field sequence with the named fields, in the given order.

        Fields left out of ``ordered_field_ids`` are dropped and unknown ids are
        ignored, so callers must always send the complete list.
        """
        def change(entity):
            by_id = {field.id: field for field in entity.fields}
            reordered = []
            for field_id in ordered_field_ids:
                # pop so a repeated id places its field only once
                field = by_id.pop(field_id, None)
                if field is not None:
                    reordered.append(field)
            entity.fields = reordered
            return True

        return await self.apply(collection_id, change)

    async def add_option(
        self,
        field_id: str,
        option: OptionInput,
        collection_id: Optional[str] = None,
    ) -> BaseModel:
        def change(entity, position):
            field = entity.fields[position]
            if not catalog.has_options(field.type):
                logger.info("Skipped option for %s field %s", field.type, field_id)
                return False
            new_option = _as_option(option)
            if new_option is None or new_option.is_blank():
                logger.info("Skipped blank option for field %s", field_id)
                return False
            field.options.append(new_option)
            return True

        return await self.apply_to_field(field_id, change, collection_id)

    async def remove_option(
        self,
        field_id: str,
        index: int,
        collection_id: Optional[str] = None,
    ) -> BaseModel:
        def change(entity, position):
            field = entity.fields[position]
            if not catalog.has_options(field.type) or not 0 <= index < len(field.options):
                return False
            del field.options[index]
            return True

        return await self.apply_to_field(field_id, change, collection_id)

    async def add_sub_field_option(
        self,
        field_id: str,
        group_key: str,
        option: OptionInput,
        collection_id: Optional[str] = None,
    ) -> BaseModel:
        group = _as_group(group_key)

        def change(entity, position):
            field = entity.fields[position]
            if not catalog.has_sub_field_options(field.type):
                logger.info("Skipped %s option for %s field %s", group.value, field.type, field_id)
                return False
            new_option = _as_option(option)
            if new_option is None or new_option.is_blank():
                logger.info("Skipped blank %s option for field %s", group.value, field_id)
                return False
            getattr(field.subFieldOptions, group.value).append(new_option)
            return True

        return await self.apply_to_field(field_id, change, collection_id)

    async def remove_sub_field_option(
        self,
        field_id: str,
        group_key: str,
        index: int,
        collection_id: Optional[str] = None,
    ) -> BaseModel:
        group = _as_group(group_key)

        def change(entity, position):
            field = entity.fields[position]
            if not catalog.has_sub_field_options(field.type):
                return False
            options = getattr(field.subFieldOptions, group.value)
            if not 0 <= index < len(options):
                return False
            del options[index]
            return True

        return await self.apply_to_field(field_id, change, collection_id)
