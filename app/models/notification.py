from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel
from sqlmodel import Field

from .base import Timestamped


class NotificationType(str, Enum):
    info = "info"
    success = "success"
    warning = "warning"
    error = "error"


class Notification(Timestamped, table=True):
    __tablename__ = "notifications"

    id: str = Field(primary_key=True)
    user: str = Field(foreign_key="users.id", index=True)
    title: str
    message: str
    type: str = Field(default=NotificationType.info.value)
    read: bool = Field(default=False, index=True)
    related_job: Optional[str] = Field(default=None, foreign_key="jobs.id")
    action_url: Optional[str] = None


class NotificationRead(BaseModel):
    id: str
    title: str
    message: str
    type: str
    read: bool
    related_job: Optional[str] = None
    action_url: Optional[str] = None
    created_at: datetime
