from fastapi import Depends, Header, HTTPException

from app.config import settings
from app.db import get_store
from app.services.completion import CompletionFormService
from app.services.jobs import JobService
from app.services.notifications import JobSubject, LogObserver, NotificationObserver
from app.services.store import DocumentStore


async def auth_bearer(
    authorization: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
):
    # Stub: acepta cualquier token de operador con el prefijo configurado
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing Bearer token")
    token = authorization.split(" ", 1)[1].strip()
    if not token.startswith(settings.operator_token_prefix):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return {"sub": token, "email": x_user_email or settings.default_actor_email}


def get_job_subject(store: DocumentStore = Depends(get_store)) -> JobSubject:
    subject = JobSubject()
    subject.attach(LogObserver())
    subject.attach(NotificationObserver(store))
    return subject


def get_job_service(
    store: DocumentStore = Depends(get_store),
    subject: JobSubject = Depends(get_job_subject),
) -> JobService:
    return JobService(store, subject)


def get_completion_service(jobs: JobService = Depends(get_job_service)) -> CompletionFormService:
    return CompletionFormService(jobs)
