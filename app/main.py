from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager
from datetime import datetime, UTC

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.config import settings
from app.db import store
from app.errors import AppError
from app.routers import catalog, clients, forms, jobs, notifications, users
from app.services.jobs import JobService
from app.util.ids import new_uuid

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store.create_schema()
    logger.info("[Backend] Using database %s (%s)", settings.database_url, settings.app_env)
    if settings.workflow_backfill_policy == "startup":
        JobService(store).backfill_workflow_steps()
    yield


app = FastAPI(
    title="Scan Operations API",
    version="1.0.0",
    description="Job intake, technician completion forms and workflow checklists",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog.router, prefix=settings.api_prefix, tags=["workflow-templates"])
app.include_router(jobs.router, prefix=settings.api_prefix, tags=["jobs"])
app.include_router(forms.router, prefix=settings.api_prefix, tags=["forms"])
app.include_router(clients.router, prefix=settings.api_prefix, tags=["clients"])
app.include_router(users.router, prefix=settings.api_prefix, tags=["users"])
app.include_router(notifications.router, prefix=settings.api_prefix, tags=["notifications"])


@app.get(f"{settings.api_prefix}/healthz", tags=["health"])
def healthz():
    return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}


@app.middleware("http")
async def add_request_id_header(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or new_uuid()
    resp: Response = await call_next(request)
    resp.headers.setdefault("X-Request-Id", request_id)
    return resp


def _error(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message, "details": details or []}},
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    code = {401: "UNAUTHORIZED", 404: "NOT_FOUND", 405: "METHOD_NOT_ALLOWED"}.get(exc.status_code, "HTTP_ERROR")
    return _error(exc.status_code, code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = [
        {"path": ".".join(str(part) for part in err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return _error(422, "VALIDATION_ERROR", "Invalid request", details)


@app.exception_handler(Exception)
async def default_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    # El formulario es público (token): sin detalles internos en el error
    if request.url.path.startswith(f"{settings.api_prefix}/forms/"):
        return _error(500, "INTERNAL", "Failed to submit form")
    return _error(500, "INTERNAL", "Unhandled error", [{"path": "", "msg": str(exc)}])
