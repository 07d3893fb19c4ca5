"""
Application errors.

Every error leaving the API is rendered with the same envelope:

    {"error": {"code": "NOT_FOUND", "message": "Job not found", "details": []}}
"""
from typing import Any, Dict, List, Optional

from fastapi import status


class AppError(Exception):
    """Base error carrying an HTTP status and a stable error code."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "BAD_REQUEST"

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class InvalidWorkflowTypeError(AppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_WORKFLOW_TYPE"

    def __init__(self, workflow_type: str):
        super().__init__(
            f"Unknown workflow type: {workflow_type}",
            details=[{"path": "workflow_type", "msg": "not in workflow catalog"}],
        )
        self.workflow_type = workflow_type


class StepIndexError(AppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "STEP_INDEX_OUT_OF_RANGE"

    def __init__(self, index: int, length: int):
        super().__init__(
            f"Workflow step index {index} out of range",
            details=[{"path": "index", "msg": f"must be between 0 and {length - 1}"}],
        )


class FormAlreadySubmittedError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "FORM_ALREADY_SUBMITTED"

    def __init__(self):
        super().__init__("Form already submitted")
