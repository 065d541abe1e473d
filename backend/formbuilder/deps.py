from fastapi import Depends

from formbuilder.database import CollectionKind, PersistenceGateway, get_gateway
from formbuilder.services.fields import FieldService
from formbuilder.services.submissions import SubmissionService


def get_form_service(gateway: PersistenceGateway = Depends(get_gateway)) -> FieldService:
    return FieldService(gateway, CollectionKind.FORMS)


def get_custom_field_service(gateway: PersistenceGateway = Depends(get_gateway)) -> FieldService:
    return FieldService(gateway, CollectionKind.CUSTOM_FIELDS)


def get_submission_service(gateway: PersistenceGateway = Depends(get_gateway)) -> SubmissionService:
    return SubmissionService(gateway)
