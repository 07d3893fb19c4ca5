from typing import List

from fastapi import APIRouter, Depends, status

from app.deps import auth_bearer
from app.errors import NotFoundError
from app.models.workflow import WorkflowTemplate
from app.workflows import workflow_catalog

router = APIRouter()


@router.get("/workflow-templates", response_model=List[WorkflowTemplate], status_code=status.HTTP_200_OK)
def list_workflow_templates(user=Depends(auth_bearer)):
    """Workflow templates in display order (workflow type picker)"""
    return workflow_catalog.list_templates()


@router.get("/workflow-templates/{workflow_type}", response_model=WorkflowTemplate)
def get_workflow_template(workflow_type: str, user=Depends(auth_bearer)):
    template = workflow_catalog.get_template(workflow_type)
    if template is None:
        raise NotFoundError("Workflow template not found")
    return template
