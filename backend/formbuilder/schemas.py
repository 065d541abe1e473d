import re
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from formbuilder import catalog


def slugify_option(label: str) -> str:
    """Option value derived from its label: "Standard grid" -> "standard_grid"."""
    return re.sub(r"\s+", "_", label.lower())


class FieldOption(BaseModel):
    label: str = ""
    value: str = ""

    @model_validator(mode="before")
    @classmethod
    def _derive_value(cls, data: Any) -> Any:
        # a missing label reads as blank so the option is declined, not rejected
        if isinstance(data, dict):
            data = dict(data)
            if data.get("label") is None:
                data["label"] = ""
            if data.get("value") is None:
                data["value"] = slugify_option(str(data["label"]))
        return data

    def is_blank(self) -> bool:
        return not self.label.strip() or not self.value.strip()


class FieldValidations(BaseModel):
    minLength: Optional[int] = None
    maxLength: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None
    minItems: Optional[int] = None
    maxItems: Optional[int] = None
    pattern: Optional[str] = None


class _FieldBase(BaseModel):
    # attributes that belong to another variant are dropped on re-shape
    model_config = ConfigDict(extra="ignore")

    id: str
    type: str
    label: str
    required: bool = False
    placeholder: Optional[str] = None
    description: Optional[str] = None
    defaultValue: Optional[Any] = None
    validations: Optional[FieldValidations] = None

    @model_validator(mode="after")
    def _keep_type_validations(self):
        if self.validations is not None:
            allowed = catalog.validation_keys(self.type)
            kept = {
                key: value
                for key, value in self.validations.model_dump(exclude_none=True).items()
                if key in allowed
            }
            self.validations = FieldValidations(**kept)
        return self


class ScalarField(_FieldBase):
    type: Literal["text", "number", "email", "password", "date", "textarea", "checkbox"]


class ChoiceField(_FieldBase):
    type: Literal["select", "multiSelect"]
    options: List[FieldOption] = Field(default_factory=list)


class ArrayField(_FieldBase):
    type: Literal["textArray", "numberArray"]


class SubFieldOptions(BaseModel):
    units: List[FieldOption] = Field(default_factory=lambda: catalog.default_group_options("units"))
    types: List[FieldOption] = Field(default_factory=lambda: catalog.default_group_options("types"))
    stages: List[FieldOption] = Field(default_factory=lambda: catalog.default_group_options("stages"))
    uses: List[FieldOption] = Field(default_factory=lambda: catalog.default_group_options("uses"))


class CompositeField(_FieldBase):
    type: Literal["naturalGasInput"]
    # populated with the catalog defaults the first time the field is observed
    subFieldOptions: SubFieldOptions = Field(default_factory=SubFieldOptions)


FormField = Annotated[
    Union[ScalarField, ChoiceField, ArrayField, CompositeField],
    Field(discriminator="type"),
]

FIELD_VARIANTS = {
    catalog.FieldFamily.SCALAR: ScalarField,
    catalog.FieldFamily.CHOICE: ChoiceField,
    catalog.FieldFamily.ARRAY: ArrayField,
    catalog.FieldFamily.COMPOSITE: CompositeField,
}

form_field_adapter = TypeAdapter(FormField)


class FormIn(BaseModel):
    name: str
    description: Optional[str] = None
    fields: List[Dict[str, Any]] = Field(default_factory=list)
    isPublished: bool = False
    submitMessage: Optional[str] = None


class FormPatch(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    isPublished: Optional[bool] = None
    submitMessage: Optional[str] = None


class Form(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    fields: List[FormField] = Field(default_factory=list)
    createdAt: datetime
    updatedAt: datetime
    isPublished: bool = False
    submitMessage: Optional[str] = None


class CustomFieldTemplateIn(BaseModel):
    name: str
    description: Optional[str] = None
    fields: List[Dict[str, Any]] = Field(default_factory=list)


class CustomFieldTemplatePatch(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class CustomFieldTemplate(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    fields: List[FormField] = Field(default_factory=list)
    createdAt: datetime
    updatedAt: datetime


class FieldSpecIn(BaseModel):
    type: str
    label: Optional[str] = None
    required: bool = False
    placeholder: Optional[str] = None
    description: Optional[str] = None
    defaultValue: Optional[Any] = None
    options: Optional[List[FieldOption]] = None
    validations: Optional[FieldValidations] = None


class FieldOrderIn(BaseModel):
    fieldIds: List[str]


class SubmissionIn(BaseModel):
    data: Dict[str, Any] = Field(default_factory=dict)


class FormSubmission(BaseModel):
    id: str
    formId: str
    data: Dict[str, Any] = Field(default_factory=dict)
    submittedAt: datetime
