"""FastAPI application entrypoint and HTTP controllers.

Controllers are intentionally thin: they validate requests with the
schemas in `schemas.py`, delegate to `TeacherService`, and return JSON.
Service errors carry their own status code and are mapped in one
exception handler; request validation failures map to 400.

Endpoints implemented:
- POST   /api/v1/teachers
- GET    /api/v1/teachers
- GET    /api/v1/teachers/{id}
- PUT    /api/v1/teachers/{id}
- DELETE /api/v1/teachers/{id}
- PUT    /api/v1/teachers/{id}/password
- POST   /api/v1/teachers/authenticate
- GET    /health
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import List

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import Session

from .config import settings
from .database import create_db_and_tables, get_session
from .errors import TeacherServiceError
from .repositories import TeacherRepository
from .schemas import CredentialsIn, PasswordChangeIn, TeacherCreate, TeacherOut, TeacherUpdate
from .security import PasswordCodec
from .services import TeacherService

logger = logging.getLogger("teacher_registry.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    create_db_and_tables()
    yield


app = FastAPI(title="Teacher Registry API", lifespan=lifespan)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception(
            "request_failed %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
        raise
    response.headers["X-Request-ID"] = req_id
    if request.url.path.startswith("/api"):
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.info(
            "request_done %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
    return response


@app.exception_handler(TeacherServiceError)
async def teacher_service_error_handler(request: Request, exc: TeacherServiceError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # malformed JSON, bad UUIDs and field errors are all client errors
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@lru_cache
def get_codec() -> PasswordCodec:
    """Process-wide codec; building one computes a hash, so it is cached."""
    return PasswordCodec()


def get_teacher_service(
    db: Session = Depends(get_session),
    codec: PasswordCodec = Depends(get_codec),
) -> TeacherService:
    return TeacherService(TeacherRepository(db), codec)


router = APIRouter(prefix="/api/v1", tags=["teachers"])


@router.post("/teachers", response_model=TeacherOut, status_code=201)
def register_teacher(payload: TeacherCreate, svc: TeacherService = Depends(get_teacher_service)):
    """Register a teacher; the password is hashed and never echoed back."""
    created = svc.register(payload.to_teacher(), payload.password)
    return TeacherOut.from_teacher(created)


@router.get("/teachers", response_model=List[TeacherOut])
def list_teachers(svc: TeacherService = Depends(get_teacher_service)):
    """List all teachers ordered by full name."""
    return [TeacherOut.from_teacher(t) for t in svc.get_all()]


@router.post("/teachers/authenticate", response_model=TeacherOut)
def authenticate_teacher(payload: CredentialsIn, svc: TeacherService = Depends(get_teacher_service)):
    """Check an email/password pair and return the matching teacher.

    No token is issued. Any mismatch is a 401 with one generic message.
    """
    teacher = svc.authenticate(payload.email, payload.password)
    return TeacherOut.from_teacher(teacher)


@router.get("/teachers/{teacher_id}", response_model=TeacherOut)
def get_teacher(teacher_id: uuid.UUID, svc: TeacherService = Depends(get_teacher_service)):
    return TeacherOut.from_teacher(svc.get(teacher_id))


@router.put("/teachers/{teacher_id}", response_model=TeacherOut)
def update_teacher(
    teacher_id: uuid.UUID,
    payload: TeacherUpdate,
    svc: TeacherService = Depends(get_teacher_service),
):
    """Replace a teacher's profile fields.

    The path id wins over any id in the body, and this route never
    touches the password.
    """
    updated = svc.update_profile(payload.to_teacher(teacher_id))
    return TeacherOut.from_teacher(updated)


@router.delete("/teachers/{teacher_id}", status_code=204)
def delete_teacher(teacher_id: uuid.UUID, svc: TeacherService = Depends(get_teacher_service)):
    svc.delete(teacher_id)
    return Response(status_code=204)


@router.put("/teachers/{teacher_id}/password", status_code=204)
def change_teacher_password(
    teacher_id: uuid.UUID,
    payload: PasswordChangeIn,
    svc: TeacherService = Depends(get_teacher_service),
):
    svc.change_password(teacher_id, payload.password)
    return Response(status_code=204)


app.include_router(router)


@app.get("/health")
def health():
    return {"status": "ok"}
