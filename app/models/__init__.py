from .base import Timestamped, utcnow
from .workflow import (
    AssignedRole, StepKind, WorkflowStepTemplate, WorkflowTemplate, WorkflowStepProgress,
)
from .job import Job, JobStatus, CompletionStatus, IncompletionReason, InvoiceStatus
from .client import Client
from .user import User, UserRole
from .notification import Notification, NotificationType

__all__ = [
    "Timestamped", "utcnow",
    "AssignedRole", "StepKind", "WorkflowStepTemplate", "WorkflowTemplate", "WorkflowStepProgress",
    "Job", "JobStatus", "CompletionStatus", "IncompletionReason", "InvoiceStatus",
    "Client",
    "User", "UserRole",
    "Notification", "NotificationType",
]
