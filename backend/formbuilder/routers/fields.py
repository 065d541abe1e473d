from typing import Any, Callable, Dict, Type

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel

from formbuilder.catalog import SubFieldGroup
from formbuilder.schemas import FieldOption, FieldOrderIn, FieldSpecIn
from formbuilder.services.fields import FieldService


def build_field_router(
    prefix: str,
    tag: str,
    get_service: Callable[..., FieldService],
    response_model: Type[BaseModel],
) -> APIRouter:
    """Field editing endpoints shared by forms and custom field templates.

    Every endpoint returns the whole updated collection so the editor can
    re-render from it.
    """
    router = APIRouter(prefix=prefix, tags=[tag])
    route = dict(response_model=response_model, response_model_exclude_none=True)

    @router.post("/{collection_id}/fields", **route)
    async def add_field(collection_id: str, field: FieldSpecIn, service: FieldService = Depends(get_service)):
        return await service.add_field(collection_id, field)

    # registered before /fields/{field_id} routes
    @router.put("/{collection_id}/fields/order", **route)
    async def reorder_fields(collection_id: str, order: FieldOrderIn, service: FieldService = Depends(get_service)):
        return await service.reorder_fields(collection_id, order.fieldIds)

    @router.patch("/{collection_id}/fields/{field_id}", **route)
    async def update_field(
        collection_id: str,
        field_id: str,
        patch: Dict[str, Any] = Body(...),
        service: FieldService = Depends(get_service),
    ):
        return await service.update_field(collection_id, field_id, patch)

    @router.delete("/{collection_id}/fields/{field_id}", **route)
    async def delete_field(collection_id: str, field_id: str, service: FieldService = Depends(get_service)):
        return await service.delete_field(collection_id, field_id)

    @router.post("/{collection_id}/fields/{field_id}/options", **route)
    async def add_option(
        collection_id: str,
        field_id: str,
        option: FieldOption,
        service: FieldService = Depends(get_service),
    ):
        return await service.add_option(field_id, option, collection_id=collection_id)

    @router.delete("/{collection_id}/fields/{field_id}/options/{index}", **route)
    async def remove_option(collection_id: str, field_id: str, index: int, service: FieldService = Depends(get_service)):
        return await service.remove_option(field_id, index, collection_id=collection_id)

    @router.post("/{collection_id}/fields/{field_id}/sub-options/{group}", **route)
    async def add_sub_field_option(
        collection_id: str,
        field_id: str,
        group: SubFieldGroup,
        option: FieldOption,
        service: FieldService = Depends(get_service),
    ):
        return await service.add_sub_field_option(field_id, group.value, option, collection_id=collection_id)

    @router.delete("/{collection_id}/fields/{field_id}/sub-options/{group}/{index}", **route)
    async def remove_sub_field_option(
        collection_id: str,
        field_id: str,
        group: SubFieldGroup,
        index: int,
        service: FieldService = Depends(get_service),
    ):
        return await service.remove_sub_field_option(field_id, group.value, index, collection_id=collection_id)

    return router
