from typing import Any, Dict

from pydantic import BaseModel, ValidationError

from formbuilder import catalog
from formbuilder.database import new_id
from formbuilder.errors import InvalidField
from formbuilder.schemas import form_field_adapter


def parse_field(data: Dict[str, Any]) -> BaseModel:
    """Shape raw attributes into the field variant selected by ``type``.

    Attributes the variant does not carry are dropped, so re-shaping a choice
    field as a text field loses its options.
    """
    if not catalog.is_known_type(data.get("type")):
        raise InvalidField(f"Unknown field type: {data.get('type')!r}")
    try:
        return form_field_adapter.validate_python(data)
    except ValidationError as e:
        raise InvalidField(str(e)) from e


def build_field(spec: Any) -> BaseModel:
    """New field with a fresh id and the catalog defaults for its type."""
    if isinstance(spec, BaseModel):
        spec = spec.model_dump(exclude_none=True)
    if not isinstance(spec, dict):
        raise InvalidField("Field definition must be an object")

    field_type = spec.get("type")
    if not catalog.is_known_type(field_type):
        raise InvalidField(f"Unknown field type: {field_type!r}")

    data = catalog.blank_field(field_type)
    data.update({key: value for key, value in spec.items() if value is not None and key != "id"})
    data["id"] = new_id()
    return parse_field(data)
