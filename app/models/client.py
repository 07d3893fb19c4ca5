from typing import Any, Dict, Optional

from pydantic import BaseModel
from sqlalchemy import JSON, Column
from sqlmodel import Field

from .base import Timestamped


class Client(Timestamped, table=True):
    __tablename__ = "clients"

    id: str = Field(primary_key=True)
    name: str = Field(index=True)
    email: Optional[str] = None
    # Workflow por defecto para los jobs nuevos del cliente si el job no trae uno
    default_workflow: Optional[str] = None
    # Datos de sync de las integraciones (p.ej. integrations.quickbooks.*),
    # se guardan y devuelven tal cual
    integrations: Dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False, default=dict)
    )


class ClientCreate(BaseModel):
    name: str
    email: Optional[str] = None
    default_workflow: Optional[str] = None
    integrations: Dict[str, Any] = {}


class ClientUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    default_workflow: Optional[str] = None
    integrations: Optional[Dict[str, Any]] = None


class ClientRead(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    default_workflow: Optional[str] = None
    integrations: Dict[str, Any]
