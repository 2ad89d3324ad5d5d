"""
src/jobquest/api/main.py
========================
FastAPI backend for JobQuest.
  - GET    /              -> plain-text liveness string
  - GET    /health        -> store reachability + record count (dashboard sidebar)
  - GET    /api/jobs      -> every application, newest first
  - POST   /api/jobs      -> create (company + role required)
  - DELETE /api/jobs/{id} -> idempotent delete
Only local-host origins (or requests without an Origin header) are admitted.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List, Optional
from urllib.parse import urlsplit

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobquest.api.request_models import (
    ErrorResponse,
    HealthResponse,
    JobCreateRequest,
    MessageResponse,
)
from jobquest.config import Settings, get_settings
from jobquest.core.models import DEFAULT_STATUS, STATUSES, JobApplication, JobCreate
from jobquest.core.store import JobStore, StoreError

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
log = logging.getLogger("api")

# ── Admission control ────────────────────────────────────────────────────────
LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}
# same host rule as is_local_origin: any scheme, case-insensitive
LOCAL_ORIGIN_REGEX = r"(?i)^[a-z][a-z0-9+.-]*://(localhost|127\.0\.0\.1|\[::1\]|[a-z0-9.-]+\.localhost)(:\d+)?$"
ALLOWED_METHODS = ["GET", "POST", "DELETE"]
ALLOWED_HEADERS = ["Content-Type"]

REQUIRED_FIELDS_MSG = "Company and Role are required"


def is_local_origin(origin: Optional[str]) -> bool:
    """True for a missing Origin header or an Origin whose host is local."""
    if not origin:
        return True
    try:
        host = urlsplit(origin).hostname
    except ValueError:
        return False
    if not host:
        return False
    host = host.lower()
    return host in LOCAL_HOSTS or host.endswith(".localhost")


def get_store(request: Request) -> JobStore:
    return request.app.state.store


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Description: Build the JobQuest API around a JobStore.
    Input: Settings (defaults to the cached process settings)
    Output: FastAPI app; the store is opened in the lifespan
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log.info("JobQuest API starting up…")
        store = JobStore(settings.DATABASE_URL)
        # A store we cannot reach aborts startup before any connection is accepted.
        store.connect()
        app.state.store = store
        yield
        log.info("JobQuest API shutting down…")

    app = FastAPI(
        title="JobQuest API",
        version="1.0.0",
        description="Job application tracker",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=LOCAL_ORIGIN_REGEX,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
    )

    # Registered after CORS so it runs first and rejects foreign origins outright.
    @app.middleware("http")
    async def reject_foreign_origins(request: Request, call_next):
        origin = request.headers.get("origin")
        if not is_local_origin(origin):
            log.warning("Rejected request from origin %s", origin)
            return JSONResponse({"error": "Not allowed by CORS"}, status_code=403)
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error(_request: Request, exc: RequestValidationError):
        log.info("Rejected malformed request body: %s", exc.errors())
        return JSONResponse({"error": "Invalid request body"}, status_code=400)

    # ── Endpoints ─────────────────────────────────────────────────────────────

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "JobQuest backend is running"

    @app.get("/health", response_model=HealthResponse, responses={503: {"model": ErrorResponse}})
    def health(store: JobStore = Depends(get_store)):
        try:
            return HealthResponse(status="ok", jobs=store.count_jobs())
        except StoreError:
            log.exception("Health check failed")
            return JSONResponse({"error": "Store unreachable"}, status_code=503)

    @app.get("/api/jobs", response_model=List[JobApplication], responses={500: {"model": ErrorResponse}})
    def list_jobs(store: JobStore = Depends(get_store)):
        try:
            return store.list_jobs()
        except StoreError:
            log.exception("Failed to list jobs")
            return JSONResponse({"error": "Server error"}, status_code=500)

    @app.post(
        "/api/jobs",
        status_code=201,
        response_model=JobApplication,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def create_job(body: JobCreateRequest, store: JobStore = Depends(get_store)):
        company = (body.company or "").strip()
        role = (body.role or "").strip()
        if not company or not role:
            raise HTTPException(400, REQUIRED_FIELDS_MSG)

        status = body.status or DEFAULT_STATUS
        if status not in STATUSES:
            raise HTTPException(400, f"Invalid status '{status}'; expected one of {', '.join(STATUSES)}")

        location = (body.location or "").strip() or None
        try:
            saved = store.create_job(JobCreate(company=company, role=role, location=location, status=status))
        except StoreError:
            log.exception("Failed to add job")
            return JSONResponse({"error": "Failed to add job"}, status_code=500)
        log.info("Created job %s (%s / %s)", saved.id, saved.company, saved.role)
        return saved

    @app.delete("/api/jobs/{job_id}", response_model=MessageResponse, responses={500: {"model": ErrorResponse}})
    def delete_job(job_id: str, store: JobStore = Depends(get_store)):
        try:
            removed = store.delete_job(job_id)
        except StoreError:
            log.exception("Failed to delete job %s", job_id)
            return JSONResponse({"error": "Failed to delete job"}, status_code=500)
        log.info("Delete job %s (matched=%s)", job_id, removed)
        return MessageResponse(message="Deleted")

    return app


app = create_app()
