from typing import List

from fastapi import APIRouter, Depends, HTTPException

from formbuilder.deps import get_custom_field_service
from formbuilder.schemas import CustomFieldTemplate, CustomFieldTemplateIn, CustomFieldTemplatePatch
from formbuilder.services.fields import FieldService

router = APIRouter(prefix="/api/custom-fields", tags=["custom-fields"])


@router.get("", response_model=List[CustomFieldTemplate], response_model_exclude_none=True)
async def list_custom_fields(service: FieldService = Depends(get_custom_field_service)):
    return await service.list()


@router.post("", response_model=CustomFieldTemplate, response_model_exclude_none=True, status_code=201)
async def create_custom_field(template: CustomFieldTemplateIn, service: FieldService = Depends(get_custom_field_service)):
    return await service.create(template.model_dump(exclude_none=True))


@router.get("/{template_id}", response_model=CustomFieldTemplate, response_model_exclude_none=True)
async def get_custom_field(template_id: str, service: FieldService = Depends(get_custom_field_service)):
    return await service.get(template_id)


@router.patch("/{template_id}", response_model=CustomFieldTemplate, response_model_exclude_none=True)
async def update_custom_field(
    template_id: str,
    patch: CustomFieldTemplatePatch,
    service: FieldService = Depends(get_custom_field_service),
):
    return await service.update(template_id, patch.model_dump(exclude_unset=True))


@router.delete("/{template_id}")
async def delete_custom_field(template_id: str, service: FieldService = Depends(get_custom_field_service)):
    if not await service.delete(template_id):
        raise HTTPException(status_code=404, detail="Custom field not found")
    return {"status": "ok", "templateId": template_id}
