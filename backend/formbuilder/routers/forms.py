from typing import List

from fastapi import APIRouter, Depends, HTTPException

from formbuilder.deps import get_form_service
from formbuilder.schemas import Form, FormIn, FormPatch
from formbuilder.services.fields import FieldService

router = APIRouter(prefix="/api/forms", tags=["forms"])


@router.get("", response_model=List[Form], response_model_exclude_none=True)
async def list_forms(service: FieldService = Depends(get_form_service)):
    """Get all forms with their fields."""
    return await service.list()


@router.post("", response_model=Form, response_model_exclude_none=True, status_code=201)
async def create_form(form: FormIn, service: FieldService = Depends(get_form_service)):
    return await service.create(form.model_dump(exclude_none=True))


@router.get("/{form_id}", response_model=Form, response_model_exclude_none=True)
async def get_form(form_id: str, service: FieldService = Depends(get_form_service)):
    return await service.get(form_id)


@router.patch("/{form_id}", response_model=Form, response_model_exclude_none=True)
async def update_form(form_id: str, patch: FormPatch, service: FieldService = Depends(get_form_service)):
    return await service.update(form_id, patch.model_dump(exclude_unset=True))


@router.delete("/{form_id}")
async def delete_form(form_id: str, service: FieldService = Depends(get_form_service)):
    """Delete a form. Its submissions are kept."""
    if not await service.delete(form_id):
        raise HTTPException(status_code=404, detail="Form not found")
    return {"status": "ok", "formId": form_id}
