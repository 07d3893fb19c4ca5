from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator
from sqlalchemy import JSON, Column
from sqlmodel import Field

from .base import Timestamped
from .workflow import WorkflowProgressView


class JobStatus(str, Enum):
    request = "request"
    scheduled = "scheduled"
    scanned = "scanned"
    qc = "qc"
    done = "done"
    archived = "archived"


class CompletionStatus(str, Enum):
    completed = "completed"
    partially_completed = "partially-completed"
    not_completed = "not-completed"


class IncompletionReason(str, Enum):
    no_access = "no-access"
    poc_no_show = "poc-no-show"
    poc_reschedule = "poc-reschedule"
    other = "other"


class Priority(str, Enum):
    low = "low"
    normal = "normal"
    high = "high"
    rush = "rush"


class QCStatus(str, Enum):
    pending = "pending"
    passed = "passed"
    rejected = "rejected"


class InvoiceStatus(str, Enum):
    not_invoiced = "not-invoiced"
    ready = "ready"
    pending_approval = "pending-approval"
    draft = "draft"
    sent = "sent"
    partial = "partial"
    paid = "paid"
    overdue = "overdue"


# ============================================================================
# DATABASE MODEL
# ============================================================================

class Job(Timestamped, table=True):
    """
    Job document.

    Categorical columns are stored as plain strings; the API layer validates
    them against the enums above. ``client`` and ``tech`` hold related ids and
    are expanded into documents by the store when read with ``depth=1``.
    """
    __tablename__ = "jobs"

    id: str = Field(primary_key=True)
    job_number: Optional[str] = Field(default=None, index=True)
    model_name: str
    status: str = Field(default=JobStatus.request.value, index=True)
    priority: str = Field(default=Priority.normal.value)

    client: Optional[str] = Field(default=None, foreign_key="clients.id", index=True)
    tech: Optional[str] = Field(default=None, foreign_key="users.id", index=True)

    capture_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    sq_ft: Optional[int] = None
    scheduling_notes: Optional[str] = None
    tech_instructions: Optional[str] = None

    target_date: Optional[date] = None
    scanned_date: Optional[date] = None

    # Formulario de cierre (auth por token, lo llena el técnico)
    completion_token: Optional[str] = Field(default=None, unique=True, index=True)
    completion_form_submitted: bool = False
    completion_status: Optional[str] = None
    incompletion_reason: Optional[str] = None
    incompletion_notes: Optional[str] = None
    tech_feedback: Optional[str] = None

    workflow_type: Optional[str] = Field(default=None, index=True)
    workflow_steps: List[Dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False, default=list)
    )

    qc_status: str = Field(default=QCStatus.pending.value)
    invoice_status: str = Field(default=InvoiceStatus.not_invoiced.value)
    total_price: Optional[float] = None
    vendor_cost: Optional[float] = None


# ============================================================================
# PYDANTIC MODELS (API DTOs)
# ============================================================================

class JobCreate(BaseModel):
    """Request to create a job"""
    model_name: str
    job_number: Optional[str] = None
    status: JobStatus = JobStatus.request
    priority: Priority = Priority.normal
    client: Optional[str] = None
    tech: Optional[str] = None
    capture_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    sq_ft: Optional[int] = None
    scheduling_notes: Optional[str] = None
    tech_instructions: Optional[str] = None
    target_date: Optional[date] = None
    workflow_type: Optional[str] = None
    total_price: Optional[float] = None
    vendor_cost: Optional[float] = None


class JobUpdate(BaseModel):
    """Partial job update. Workflow fields have their own endpoints."""
    model_name: Optional[str] = None
    job_number: Optional[str] = None
    status: Optional[JobStatus] = None
    priority: Optional[Priority] = None
    capture_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    sq_ft: Optional[int] = None
    scheduling_notes: Optional[str] = None
    tech_instructions: Optional[str] = None
    target_date: Optional[date] = None
    qc_status: Optional[QCStatus] = None
    invoice_status: Optional[InvoiceStatus] = None
    total_price: Optional[float] = None
    vendor_cost: Optional[float] = None

    # Se pueden omitir pero no mandar null: las columnas son NOT NULL
    @field_validator("model_name", "status", "priority", "qc_status", "invoice_status")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class AssignTechRequest(BaseModel):
    tech_id: Optional[str] = None


class JobListItem(BaseModel):
    """Job summary for list view"""
    id: str
    job_number: Optional[str] = None
    model_name: str
    status: str
    priority: str
    client: Optional[str] = None
    tech: Optional[str] = None
    target_date: Optional[date] = None
    workflow_type: Optional[str] = None
    workflow_progress: int
    invoice_status: str


class JobDetail(BaseModel):
    """Job with its workflow checklist"""
    id: str
    job_number: Optional[str] = None
    model_name: str
    status: str
    priority: str
    client: Optional[str] = None
    tech: Optional[str] = None
    capture_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    sq_ft: Optional[int] = None
    scheduling_notes: Optional[str] = None
    tech_instructions: Optional[str] = None
    target_date: Optional[date] = None
    scanned_date: Optional[date] = None
    completion_form_submitted: bool
    completion_status: Optional[str] = None
    incompletion_reason: Optional[str] = None
    incompletion_notes: Optional[str] = None
    tech_feedback: Optional[str] = None
    qc_status: str
    invoice_status: str
    total_price: Optional[float] = None
    vendor_cost: Optional[float] = None
    completion_token: Optional[str] = None
    workflow: WorkflowProgressView


# --- Completion form ---

class CompletionFormSubmission(BaseModel):
    completion_status: CompletionStatus
    incompletion_reason: Optional[IncompletionReason] = None
    incompletion_notes: Optional[str] = None
    tech_feedback: Optional[str] = None
    scanned_date: Optional[date] = None


class CompletionJobView(BaseModel):
    """What a token holder may see about a job; nothing financial or internal"""
    id: str
    job_number: Optional[str] = None
    model_name: str
    target_date: Optional[date] = None
    capture_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    scheduling_notes: Optional[str] = None
    tech_instructions: Optional[str] = None
    completion_form_submitted: bool


class CompletionFormResult(BaseModel):
    success: bool
    message: str
