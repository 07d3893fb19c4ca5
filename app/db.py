from sqlmodel import create_engine
from sqlalchemy import Engine

from app.config import settings
from app.services.store import DocumentStore


def make_engine(database_url: str) -> Engine:
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, echo=False, connect_args=connect_args)


engine = make_engine(settings.database_url)
store = DocumentStore(engine)


def get_store() -> DocumentStore:
    return store
