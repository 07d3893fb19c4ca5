from fastapi import APIRouter, Depends, status

from app.db import get_store
from app.deps import auth_bearer
from app.errors import InvalidWorkflowTypeError, NotFoundError
from app.models.client import ClientCreate, ClientRead, ClientUpdate
from app.services.store import DocumentStore
from app.workflows import workflow_catalog

router = APIRouter()


def _check_default_workflow(workflow_type):
    if workflow_type and workflow_type not in workflow_catalog:
        raise InvalidWorkflowTypeError(workflow_type)


@router.post("/clients", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
def create_client(body: ClientCreate, store: DocumentStore = Depends(get_store), user=Depends(auth_bearer)):
    _check_default_workflow(body.default_workflow)
    return store.create("clients", body.model_dump())


@router.get("/clients/{client_id}", response_model=ClientRead)
def get_client(client_id: str, store: DocumentStore = Depends(get_store), user=Depends(auth_bearer)):
    client = store.find_by_id("clients", client_id)
    if client is None:
        raise NotFoundError("Client not found")
    return client


@router.patch("/clients/{client_id}", response_model=ClientRead)
def update_client(
    client_id: str,
    body: ClientUpdate,
    store: DocumentStore = Depends(get_store),
    user=Depends(auth_bearer),
):
    """Partial update. ``integrations`` is opaque sync bookkeeping and replaced as given."""
    changes = body.model_dump(exclude_unset=True)
    _check_default_workflow(changes.get("default_workflow"))
    return store.update("clients", client_id, changes)
