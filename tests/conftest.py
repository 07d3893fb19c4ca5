# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from app.db import get_store
from app.main import app
from app.services.jobs import JobService
from app.services.notifications import JobSubject, NotificationObserver
from app.services.store import DocumentStore


@pytest.fixture()
def engine():
    # DB en memoria compartida entre conexiones:
    # - "sqlite://" con StaticPool mantiene UNA conexión viva
    # - check_same_thread=False permite el acceso desde los hilos del TestClient
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )


@pytest.fixture()
def store(engine):
    """Store limpio por test, con el esquema creado."""
    s = DocumentStore(engine)
    s.create_schema()
    return s


@pytest.fixture()
def jobs(store):
    subject = JobSubject()
    subject.attach(NotificationObserver(store))
    return JobService(store, subject)


@pytest.fixture()
def client(store):
    """Cliente de pruebas con el store de la app reemplazado por el de memoria."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    return {"Authorization": "Bearer mock-test", "X-User-Email": "ops@example.com"}


@pytest.fixture()
def make_user(store):
    def _make(email: str, role: str = "tech", name: str | None = None):
        return store.create("users", {"email": email, "role": role, "name": name})
    return _make
