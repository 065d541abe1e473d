"""Field type catalog.

Static lookup of the field types the builder supports, which structural
extras each one carries and which validation keys make sense for it.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Literal, Optional


FieldType = Literal[
    "text",
    "number",
    "select",
    "multiSelect",
    "checkbox",
    "textArray",
    "numberArray",
    "email",
    "password",
    "date",
    "textarea",
    "naturalGasInput",
]


class FieldFamily(str, Enum):
    SCALAR = "scalar"
    CHOICE = "choice"
    ARRAY = "array"
    COMPOSITE = "composite"


class SubFieldGroup(str, Enum):
    """Option groups of a natural gas input field."""

    UNITS = "units"
    TYPES = "types"
    STAGES = "stages"
    USES = "uses"


LENGTH_KEYS = frozenset({"minLength", "maxLength", "pattern"})
NUMERIC_KEYS = frozenset({"min", "max"})
ITEM_KEYS = frozenset({"minItems", "maxItems"})


@dataclass(frozen=True)
class FieldTypeSpec:
    tag: str
    title: str
    family: FieldFamily
    validation_keys: FrozenSet[str] = frozenset()


_SPECS = [
    FieldTypeSpec("text", "Text", FieldFamily.SCALAR, LENGTH_KEYS),
    FieldTypeSpec("number", "Number", FieldFamily.SCALAR, NUMERIC_KEYS),
    FieldTypeSpec("textarea", "Text Area", FieldFamily.SCALAR, LENGTH_KEYS),
    FieldTypeSpec("select", "Select", FieldFamily.CHOICE),
    FieldTypeSpec("multiSelect", "Multi Select", FieldFamily.CHOICE),
    FieldTypeSpec("checkbox", "Checkbox", FieldFamily.SCALAR),
    FieldTypeSpec("textArray", "Text Array", FieldFamily.ARRAY, ITEM_KEYS | LENGTH_KEYS),
    FieldTypeSpec("numberArray", "Number Array", FieldFamily.ARRAY, ITEM_KEYS | NUMERIC_KEYS),
    FieldTypeSpec("naturalGasInput", "Natural Gas Input", FieldFamily.COMPOSITE, NUMERIC_KEYS),
    FieldTypeSpec("email", "Email", FieldFamily.SCALAR, LENGTH_KEYS),
    FieldTypeSpec("password", "Password", FieldFamily.SCALAR, LENGTH_KEYS),
    FieldTypeSpec("date", "Date", FieldFamily.SCALAR),
]

CATALOG: Dict[str, FieldTypeSpec] = {spec.tag: spec for spec in _SPECS}

DEFAULT_LABEL_TEMPLATE = "New {type} field"

# Seed options for a freshly observed natural gas input field.
DEFAULT_SUB_FIELD_OPTIONS: Dict[str, List[Dict[str, str]]] = {
    SubFieldGroup.UNITS.value: [
        {"label": "kWh", "value": "kwh"},
        {"label": "MJ/kg product", "value": "mj_kg_product"},
        {"label": "m³", "value": "m3"},
    ],
    SubFieldGroup.TYPES.value: [
        {"label": "Conventional", "value": "conventional"},
        {"label": "Standard grid", "value": "standard_grid"},
        {"label": "PV", "value": "pv"},
    ],
    SubFieldGroup.STAGES.value: [
        {"label": "Mixing", "value": "mixing"},
        {"label": "Processing", "value": "processing"},
        {"label": "Packaging", "value": "packaging"},
    ],
    SubFieldGroup.USES.value: [
        {"label": "Cooling", "value": "cooling"},
        {"label": "Heat", "value": "heat"},
        {"label": "Power", "value": "power"},
    ],
}


def is_known_type(tag: Any) -> bool:
    return isinstance(tag, str) and tag in CATALOG


def family_of(tag: str) -> FieldFamily:
    return CATALOG[tag].family


def tags_of(family: FieldFamily) -> List[str]:
    return [spec.tag for spec in _SPECS if spec.family is family]


def has_options(tag: Optional[str]) -> bool:
    return tag in CATALOG and CATALOG[tag].family is FieldFamily.CHOICE


def has_sub_field_options(tag: Optional[str]) -> bool:
    return tag in CATALOG and CATALOG[tag].family is FieldFamily.COMPOSITE


def validation_keys(tag: str) -> FrozenSet[str]:
    return CATALOG[tag].validation_keys


def default_label(tag: str) -> str:
    return DEFAULT_LABEL_TEMPLATE.format(type=tag)


def default_group_options(group: str) -> List[Dict[str, str]]:
    # callers own the returned lists
    return copy.deepcopy(DEFAULT_SUB_FIELD_OPTIONS[SubFieldGroup(group).value])


def default_sub_field_options() -> Dict[str, List[Dict[str, str]]]:
    return copy.deepcopy(DEFAULT_SUB_FIELD_OPTIONS)


def blank_field(tag: str) -> Dict[str, Any]:
    """Attributes of a new, not yet identified field of the given type."""
    field: Dict[str, Any] = {
        "type": tag,
        "label": default_label(tag),
        "required": False,
    }
    if has_options(tag):
        field["options"] = []
    return field


def describe() -> List[Dict[str, Any]]:
    """Catalog listing for the editor's field palette."""
    return [
        {
            "type": spec.tag,
            "title": spec.title,
            "family": spec.family.value,
            "hasOptions": spec.family is FieldFamily.CHOICE,
            "hasSubFieldOptions": spec.family is FieldFamily.COMPOSITE,
            "validationKeys": sorted(spec.validation_keys),
        }
        for spec in _SPECS
    ]
