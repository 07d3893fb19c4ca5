from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.config import settings
from app.deps import auth_bearer, get_job_service
from app.models.job import (
    AssignTechRequest, JobCreate, JobDetail, JobListItem, JobStatus, JobUpdate,
)
from app.models.workflow import WorkflowTypeUpdate
from app.services.jobs import JobService
from app.util.pagination import clamp_limit

router = APIRouter()


@router.post("/jobs", response_model=JobDetail, status_code=status.HTTP_201_CREATED)
def create_job(body: JobCreate, jobs: JobService = Depends(get_job_service), user=Depends(auth_bearer)):
    """
    Create a job.
    Inherits the client's default workflow when none is given and persists
    the workflow checklist right away.
    """
    job = jobs.create_job(body)
    return jobs.job_detail(job["id"])


@router.get("/jobs", response_model=List[JobListItem])
def list_jobs(
    status: Optional[JobStatus] = None,
    limit: Optional[int] = None,
    jobs: JobService = Depends(get_job_service),
    user=Depends(auth_bearer),
):
    """Job list with workflow progress percentage"""
    return jobs.list_jobs(status.value if status else None, clamp_limit(limit))


@router.post("/jobs:backfill-workflow-steps")
def backfill_workflow_steps(jobs: JobService = Depends(get_job_service), user=Depends(auth_bearer)):
    """Persist checklists for legacy jobs that only carry a workflow type"""
    return {"backfilled": jobs.backfill_workflow_steps(), "policy": settings.workflow_backfill_policy}


@router.get("/jobs/{job_id}", response_model=JobDetail)
def get_job(job_id: str, jobs: JobService = Depends(get_job_service), user=Depends(auth_bearer)):
    return jobs.job_detail(job_id)


@router.patch("/jobs/{job_id}", response_model=JobDetail)
def update_job(
    job_id: str,
    body: JobUpdate,
    jobs: JobService = Depends(get_job_service),
    user=Depends(auth_bearer),
):
    job = jobs.update_job(job_id, body.model_dump(exclude_unset=True))
    return jobs.job_detail(job["id"])


@router.put("/jobs/{job_id}/workflow-type", response_model=JobDetail)
def set_workflow_type(
    job_id: str,
    body: WorkflowTypeUpdate,
    jobs: JobService = Depends(get_job_service),
    user=Depends(auth_bearer),
):
    """Switch workflow type. Replaces the checklist; previous progress is discarded."""
    return jobs.change_workflow_type(job_id, body.workflow_type)


@router.post("/jobs/{job_id}/workflow-steps/{index}:toggle", response_model=JobDetail)
def toggle_workflow_step(
    job_id: str,
    index: int,
    jobs: JobService = Depends(get_job_service),
    user=Depends(auth_bearer),
):
    return jobs.toggle_step(job_id, index, user["email"])


@router.patch("/jobs/{job_id}/assign-tech", response_model=JobDetail)
def assign_tech(
    job_id: str,
    body: AssignTechRequest,
    jobs: JobService = Depends(get_job_service),
    user=Depends(auth_bearer),
):
    job = jobs.assign_tech(job_id, body.tech_id)
    return jobs.job_detail(job["id"])
