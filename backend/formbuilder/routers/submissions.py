from typing import List

from fastapi import APIRouter, Depends

from formbuilder.deps import get_submission_service
from formbuilder.schemas import FormSubmission, SubmissionIn
from formbuilder.services.submissions import SubmissionService

router = APIRouter(prefix="/api/forms", tags=["submissions"])


@router.post("/{form_id}/submit", response_model=FormSubmission, status_code=201)
async def submit_form(form_id: str, submission: SubmissionIn, service: SubmissionService = Depends(get_submission_service)):
    # declared constraints are stored on the fields but not enforced here
    return await service.submit(form_id, submission.data)


@router.get("/{form_id}/submissions", response_model=List[FormSubmission])
async def list_submissions(form_id: str, service: SubmissionService = Depends(get_submission_service)):
    """Return submissions for a form (most recent first)."""
    return await service.list_for_form(form_id)
