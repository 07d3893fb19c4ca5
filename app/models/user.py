from enum import Enum
from typing import Optional

from pydantic import BaseModel
from sqlmodel import Field

from .base import Timestamped


class UserRole(str, Enum):
    super_admin = "super-admin"
    sales_admin = "sales-admin"
    ops_manager = "ops-manager"
    post_producer = "post-producer"
    tech = "tech"


class User(Timestamped, table=True):
    """Staff member or field technician."""
    __tablename__ = "users"

    id: str = Field(primary_key=True)
    email: str = Field(unique=True, index=True)
    name: Optional[str] = None
    role: str = Field(default=UserRole.tech.value, index=True)


class UserCreate(BaseModel):
    email: str
    name: Optional[str] = None
    role: UserRole = UserRole.tech


class UserRead(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    role: str
