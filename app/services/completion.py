"""
Completion Form Service
Token-authenticated job completion reports submitted by field techs.

Jobs are resolved only through their opaque ``completion_token``; an unknown
token answers "not found" and nothing else.
"""

import logging
from typing import Any, Dict, Optional

from app.errors import FormAlreadySubmittedError, NotFoundError
from app.models.job import CompletionFormSubmission, CompletionJobView
from app.util.ids import relation_id
from app.workflows import apply_completion_automation, commit_progress
from .jobs import JobService
from .store import Document

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or expired token"


class CompletionFormService:
    def __init__(self, jobs: JobService):
        self.jobs = jobs
        self.store = jobs.store

    def _job_by_token(self, token: str) -> Document:
        if not token:
            raise NotFoundError(INVALID_TOKEN_MESSAGE)
        matches = self.store.find("jobs", {"completion_token": token}, depth=1)
        if not matches:
            raise NotFoundError(INVALID_TOKEN_MESSAGE)
        return matches[0]

    def _tech_email(self, tech: Any) -> Optional[str]:
        if isinstance(tech, dict):
            return tech.get("email")
        tech_id = relation_id(tech)
        if tech_id is None:
            return None
        user = self.store.find_by_id("users", tech_id)
        return user.get("email") if user else None

    def get_job(self, token: str) -> CompletionJobView:
        job = self._job_by_token(token)
        return CompletionJobView(**{field: job.get(field) for field in CompletionJobView.model_fields})

    def submit(self, token: str, form: CompletionFormSubmission) -> Document:
        """
        Record a completion report.

        Completion fields, the status change and the automated checklist
        updates are written in one store update: all of them persist or none.
        """
        job = self._job_by_token(token)
        if job.get("completion_form_submitted"):
            raise FormAlreadySubmittedError()

        completion_status = form.completion_status.value
        data: Dict[str, Any] = {
            "completion_status": completion_status,
            "incompletion_reason": form.incompletion_reason.value if form.incompletion_reason else None,
            "incompletion_notes": form.incompletion_notes or None,
            "tech_feedback": form.tech_feedback or None,
            "scanned_date": form.scanned_date,
            "completion_form_submitted": True,
            "status": "scanned" if completion_status == "completed" else job.get("status"),
        }

        if job.get("workflow_steps"):
            steps = apply_completion_automation(
                job["workflow_steps"], completion_status, self._tech_email(job.get("tech"))
            )
            data.update(commit_progress(job.get("workflow_type"), steps))

        previous = {**job, "tech": relation_id(job.get("tech")), "client": relation_id(job.get("client"))}
        updated = self.jobs.write(previous, data)

        label = job.get("job_number") or job["id"]
        logger.info("[Completion Form] Job %s completion form submitted via token", label)
        if "workflow_steps" in data:
            logger.info("[Completion Form] Auto-updated workflow steps for job %s", label)
        return updated
