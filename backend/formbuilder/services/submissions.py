import logging
from typing import Any, Dict, List

from formbuilder.database import CollectionKind, PersistenceGateway, new_id
from formbuilder.errors import NotFound
from formbuilder.schemas import FormSubmission
from formbuilder.services.collections import utcnow

logger = logging.getLogger(__name__)


class SubmissionService:
    """Write-once submissions, stored apart from the forms they reference.

    Deleting a form leaves its submissions in place.
    """

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    async def submit(self, form_id: str, data: Dict[str, Any]) -> FormSubmission:
        forms = await self.gateway.load(CollectionKind.FORMS)
        if not any(form.id == form_id for form in forms):
            raise NotFound(f"Form not found: {form_id}")

        submission = FormSubmission(id=new_id(), formId=form_id, data=dict(data), submittedAt=utcnow())
        submissions = await self.gateway.load(CollectionKind.SUBMISSIONS)
        submissions.append(submission)
        await self.gateway.save_all(CollectionKind.SUBMISSIONS, submissions)
        logger.info("Stored submission %s for form %s", submission.id, form_id)
        return submission

    async def list_for_form(self, form_id: str) -> List[FormSubmission]:
        """Submissions for a form, most recent first."""
        submissions = await self.gateway.load(CollectionKind.SUBMISSIONS)
        matching = [submission for submission in submissions if submission.formId == form_id]
        matching.sort(key=lambda submission: submission.submittedAt, reverse=True)
        return matching
