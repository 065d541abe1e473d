from fastapi import APIRouter

from formbuilder import catalog

router = APIRouter(prefix="/api/field-types", tags=["field-types"])


@router.get("")
async def list_field_types():
    return catalog.describe()
