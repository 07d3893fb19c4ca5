from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class AssignedRole(str, Enum):
    tech = "tech"
    ops_manager = "ops-manager"
    post_producer = "post-producer"
    sales_admin = "sales-admin"


class StepKind(str, Enum):
    """Machine-readable step tag used by completion automation."""
    scan_completed = "scan-completed"
    upload = "upload"
    other = "other"


# ============================================================================
# CATALOG (immutable, compiled into the process)
# ============================================================================

class WorkflowStepTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    assigned_role: Optional[AssignedRole] = None
    kind: StepKind = StepKind.other


class WorkflowTemplate(BaseModel):
    """Catalog entry. ``id`` is the workflow type stored on jobs."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    steps: Tuple[WorkflowStepTemplate, ...]


# ============================================================================
# PER-JOB PROGRESS
# ============================================================================

class WorkflowStepProgress(BaseModel):
    """
    One step of a job's checklist.

    ``step_name`` and ``kind`` are copied from the template when the checklist
    is materialized; later catalog edits never reach existing jobs. Steps
    persisted before kinds existed carry ``kind=None``.
    """
    step_name: str
    completed: bool = False
    completed_at: Optional[datetime] = None
    completed_by: Optional[str] = None
    notes: str = ""
    kind: Optional[StepKind] = None


# --- API DTOs ---

class WorkflowTypeUpdate(BaseModel):
    """Request to switch (or clear) a job's workflow type"""
    workflow_type: Optional[str] = None


class WorkflowStepView(WorkflowStepProgress):
    """Progress step enriched with its template metadata for display"""
    description: Optional[str] = None
    assigned_role: Optional[AssignedRole] = None


class WorkflowProgressView(BaseModel):
    workflow_type: Optional[str] = None
    template_name: Optional[str] = None
    template_description: Optional[str] = None
    steps: List[WorkflowStepView]
    completed_count: int
    total_count: int
    percentage: int
    persisted: bool
