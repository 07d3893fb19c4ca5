"""
Job Service
Job writes, lifecycle hooks and the workflow checklist operations.

All job updates go through ``JobService.write`` so that the before-change
hooks (invoice status) run and observers see every transition.
"""

import logging
import secrets
from typing import Any, Dict, List, Mapping, Optional

from app.config import Settings, settings as default_settings
from app.errors import InvalidWorkflowTypeError, NotFoundError, StepIndexError
from app.models.job import JobCreate, JobDetail, JobListItem
from app.models.workflow import WorkflowProgressView, WorkflowStepView
from app.util.ids import relation_id
from app.workflows import workflow_catalog as default_catalog
from app.workflows import progress
from app.workflows.catalog import WorkflowCatalog
from .notifications import JobSubject
from .store import Document, DocumentStore

logger = logging.getLogger(__name__)


class JobService:
    def __init__(
        self,
        store: DocumentStore,
        subject: Optional[JobSubject] = None,
        catalog: WorkflowCatalog = default_catalog,
        settings: Settings = default_settings,
    ):
        self.store = store
        self.subject = subject or JobSubject()
        self.catalog = catalog
        self.settings = settings

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_job(self, job_id: str, depth: int = 0) -> Document:
        job = self.store.find_by_id("jobs", job_id, depth=depth)
        if job is None:
            raise NotFoundError("Job not found")
        return job

    def list_jobs(self, status: Optional[str] = None, limit: int = 50) -> List[JobListItem]:
        where = {"status": status} if status else None
        jobs = self.store.find("jobs", where, order_by="created_at", descending=True, limit=limit)
        return [
            JobListItem(
                **{field: job.get(field) for field in JobListItem.model_fields if field in job},
                workflow_progress=progress.progress_percentage(progress.materialize(job, self.catalog)),
            )
            for job in jobs
        ]

    def job_detail(self, job_id: str) -> JobDetail:
        job = self.get_job(job_id)
        if self.settings.workflow_backfill_policy == "on-read" and progress.needs_materialization(job, self.catalog):
            job = self._commit_materialized(job)
        return self._detail(job)

    def progress_view(self, job: Mapping[str, Any]) -> WorkflowProgressView:
        workflow_type = job.get("workflow_type")
        template = self.catalog.get_template(workflow_type)
        template_steps = template.steps if template else ()
        steps = progress.materialize(job, self.catalog)

        views = []
        for index, step in enumerate(steps):
            # Snapshot steps are matched to the template by position, like the checklist UI
            template_step = template_steps[index] if index < len(template_steps) else None
            views.append(WorkflowStepView(
                **step.model_dump(),
                description=template_step.description if template_step else None,
                assigned_role=template_step.assigned_role if template_step else None,
            ))

        return WorkflowProgressView(
            workflow_type=workflow_type,
            template_name=template.name if template else None,
            template_description=template.description if template else None,
            steps=views,
            completed_count=progress.completed_count(steps),
            total_count=len(steps),
            percentage=progress.progress_percentage(steps),
            persisted=bool(job.get("workflow_steps")),
        )

    def _detail(self, job: Mapping[str, Any]) -> JobDetail:
        fields = {field: job.get(field) for field in JobDetail.model_fields if field in job}
        return JobDetail(**fields, workflow=self.progress_view(job))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _validate_workflow_type(self, workflow_type: Optional[str]) -> None:
        if workflow_type and workflow_type not in self.catalog:
            raise InvalidWorkflowTypeError(workflow_type)

    def _require(self, collection: str, record_id: Optional[str], label: str) -> Optional[Document]:
        if record_id is None:
            return None
        record = self.store.find_by_id(collection, record_id)
        if record is None:
            raise NotFoundError(f"{label} not found")
        return record

    def create_job(self, data: JobCreate) -> Document:
        payload = data.model_dump(mode="python")
        for field in ("status", "priority"):
            payload[field] = payload[field].value

        client = self._require("clients", payload.get("client"), "Client")
        self._require("users", payload.get("tech"), "Technician")

        if not payload.get("workflow_type") and client and client.get("default_workflow"):
            payload["workflow_type"] = client["default_workflow"]
        self._validate_workflow_type(payload.get("workflow_type"))

        # Picking a workflow on creation persists its checklist right away
        payload.update(progress.commit_progress(
            payload.get("workflow_type"),
            progress.steps_from_template(payload.get("workflow_type"), self.catalog),
        ))
        payload["completion_token"] = secrets.token_hex(self.settings.completion_token_bytes)

        job = self.store.create("jobs", payload)
        logger.info("Created job %s (workflow=%s)", job["id"], job.get("workflow_type"))
        self.subject.notify_created(job)
        return job

    def write(self, previous: Mapping[str, Any], data: Mapping[str, Any]) -> Document:
        """Persist a partial update of ``previous`` as a single store update."""
        changes = dict(data)
        if previous.get("status") != "done" and changes.get("status") == "done":
            changes["invoice_status"] = "ready"
            logger.info("[Invoice Workflow] Job %s marked as ready to invoice", previous["id"])

        current = self.store.update("jobs", previous["id"], changes)
        self.subject.notify_updated(dict(previous), current)
        return current

    def update_job(self, job_id: str, data: Mapping[str, Any]) -> Document:
        job = self.get_job(job_id)
        changes = {key: getattr(value, "value", value) for key, value in data.items()}
        return self.write(job, changes)

    def assign_tech(self, job_id: str, tech_id: Optional[str]) -> Document:
        job = self.get_job(job_id)
        tech = self._require("users", tech_id, "Technician")
        logger.info("[Tech Assignment] Job %s -> tech %s", job_id, tech["email"] if tech else None)
        return self.write(job, {"tech": relation_id(tech)})

    def change_workflow_type(self, job_id: str, workflow_type: Optional[str]) -> JobDetail:
        """Switch the job's workflow; the new checklist replaces all previous progress."""
        self._validate_workflow_type(workflow_type)
        job = self.get_job(job_id)

        discarded = progress.completed_count(job.get("workflow_steps"))
        draft = progress.set_workflow_type(job, workflow_type, self.catalog)
        if discarded:
            logger.warning(
                "Workflow type of job %s changed %s -> %s; %d completed step(s) discarded",
                job_id, job.get("workflow_type"), workflow_type, discarded,
            )

        current = self.write(job, progress.commit_progress(draft["workflow_type"], draft["workflow_steps"]))
        return self._detail(current)

    def toggle_step(self, job_id: str, index: int, actor: Optional[str]) -> JobDetail:
        job = self.get_job(job_id)
        steps = progress.materialize(job, self.catalog)
        if not 0 <= index < len(steps):
            raise StepIndexError(index, len(steps))

        steps = progress.toggle_step(steps, index, actor)
        current = self.write(job, progress.commit_progress(job.get("workflow_type"), steps))
        return self._detail(current)

    # ------------------------------------------------------------------
    # Legacy backfill
    # ------------------------------------------------------------------

    def _commit_materialized(self, job: Mapping[str, Any]) -> Document:
        steps = progress.materialize(job, self.catalog)
        return self.store.update("jobs", job["id"], progress.commit_progress(job.get("workflow_type"), steps))

    def backfill_workflow_steps(self) -> int:
        """Persist checklists for jobs that have a workflow type but no stored steps."""
        count = 0
        for job in self.store.find("jobs"):
            if progress.needs_materialization(job, self.catalog):
                self._commit_materialized(job)
                count += 1
        logger.info("Backfilled workflow steps for %d job(s)", count)
        return count
