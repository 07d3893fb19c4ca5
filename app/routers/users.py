from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.db import get_store
from app.deps import auth_bearer
from app.models.user import UserCreate, UserRead, UserRole
from app.services.store import DocumentStore

router = APIRouter()


@router.post("/users", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(body: UserCreate, store: DocumentStore = Depends(get_store), user=Depends(auth_bearer)):
    return store.create("users", {**body.model_dump(), "role": body.role.value})


@router.get("/users", response_model=List[UserRead])
def list_users(
    role: Optional[UserRole] = None,
    store: DocumentStore = Depends(get_store),
    user=Depends(auth_bearer),
):
    return store.find("users", {"role": role.value} if role else None, order_by="email")
