"""FastAPI application exposing the invitation renderer."""

from __future__ import annotations

import base64
import logging
from functools import lru_cache
from http import HTTPStatus
from typing import Any, cast

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.background import BackgroundTask

from app.config import get_settings
from app.exceptions import ServiceFailureError
from app.schemas import (
    BatchSettings,
    ErrorCodes,
    GenerateResponse,
    HealthStatus,
    PreviewResponse,
    RenderSettings,
    ServiceFailure,
    ServiceStatus,
    UploadResponse,
)
from app.services.invitations import ARCHIVE_NAME, InvitationService
from app.sessions import SessionStore


logger = logging.getLogger(__name__)

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

for _directory in (settings.public_dir, settings.upload_dir, settings.work_dir):
    _directory.mkdir(parents=True, exist_ok=True)

_MODEL_FILE_PARAM = File(None)
_LIST_FILE_PARAM = File(None, alias="list")

_FAILURE_STATUS = {
    ErrorCodes.SESSION_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.UPLOAD_MISSING_FILE: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.UPLOAD_TOO_LARGE: HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
    ErrorCodes.RENDER_UNSUPPORTED_MODEL: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    ErrorCodes.RENDER_INVALID_MODEL: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    ErrorCodes.ARCHIVE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


@lru_cache
def _get_session_store() -> SessionStore:
    """Provide the process-wide session store."""

    return SessionStore(ttl_seconds=settings.session_ttl_seconds)


@lru_cache
def _get_invitation_service() -> InvitationService:
    """Provide a cached invitation service backed by the session store."""

    return InvitationService(
        sessions=_get_session_store(),
        upload_dir=settings.upload_dir,
        work_dir=settings.work_dir,
        batch_limit=settings.batch_limit,
    )


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Batch invitation rendering from a model image and a name list",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


@app.get("/", response_model=ServiceStatus)
async def root() -> ServiceStatus:
    """Health check used by the hosting platform."""

    return ServiceStatus(service=settings.app_name)


@app.get("/health", response_model=HealthStatus)
async def health(
    service: InvitationService = Depends(_get_invitation_service),
) -> HealthStatus:
    """Return readiness and the number of live sessions."""

    return HealthStatus(status="ok", sessions=len(service.sessions))


@app.post("/api/upload", response_model=UploadResponse)
async def upload(
    model: UploadFile | None = _MODEL_FILE_PARAM,
    list_file: UploadFile | None = _LIST_FILE_PARAM,
    service: InvitationService = Depends(_get_invitation_service),
) -> UploadResponse:
    """Accept the model image and the name list, and start a session."""

    if model is None or list_file is None:
        raise _http_error(
            ServiceFailureError(
                component="api.upload",
                error_code=ErrorCodes.UPLOAD_MISSING_FILE,
                message="Model image and list file are required.",
            )
        )

    model_bytes = await _read_upload(model)
    list_bytes = await _read_upload(list_file)
    try:
        session = await service.upload(
            model=model_bytes,
            model_filename=model.filename or "model.png",
            list_content=list_bytes,
            list_filename=list_file.filename or "list.txt",
        )
    except ServiceFailureError as exc:
        raise _http_error(exc) from exc
    except Exception as exc:
        logger.exception("Upload failed")
        raise _internal_error("Upload failed.") from exc

    return UploadResponse(session_id=session.id, names_total=len(session.records))


@app.post("/api/test", response_model=PreviewResponse)
async def test_render(
    payload: RenderSettings,
    service: InvitationService = Depends(_get_invitation_service),
) -> PreviewResponse:
    """Render the first invitation as a base64 PNG preview."""

    try:
        png = await service.preview(payload)
    except ServiceFailureError as exc:
        raise _http_error(exc) from exc
    except Exception as exc:
        logger.exception("Test render failed")
        raise _internal_error("Test render failed.") from exc

    encoded = base64.b64encode(png).decode("ascii")
    return PreviewResponse(preview=f"data:image/png;base64,{encoded}")


@app.post("/api/generate", response_model=GenerateResponse)
async def generate(
    payload: BatchSettings,
    service: InvitationService = Depends(_get_invitation_service),
) -> GenerateResponse:
    """Render the next batch of invitations and refresh the archive."""

    try:
        result = await service.generate(payload)
    except ServiceFailureError as exc:
        raise _http_error(exc) from exc
    except Exception as exc:
        logger.exception("Generation failed")
        raise _internal_error("Generation failed.") from exc

    return GenerateResponse(
        download_url=f"/api/download/{result.session_id}",
        processed=result.processed,
        total=result.total,
    )


@app.get("/api/download/{session_id}")
async def download(
    session_id: str,
    service: InvitationService = Depends(_get_invitation_service),
) -> FileResponse:
    """Send the session archive, then remove the session and its files."""

    try:
        archive_path = service.archive_path(session_id)
    except ServiceFailureError as exc:
        raise _http_error(exc) from exc

    logger.info("Session %s: sending %s", session_id, archive_path)
    return FileResponse(
        archive_path,
        media_type="application/zip",
        filename=ARCHIVE_NAME,
        background=BackgroundTask(service.finish, session_id),
    )


async def _read_upload(file: UploadFile) -> bytes:
    """Read an upload, enforcing the configured size limit."""
    payload = await file.read(settings.max_upload_bytes + 1)
    if len(payload) > settings.max_upload_bytes:
        raise _http_error(
            ServiceFailureError(
                component="api.upload",
                error_code=ErrorCodes.UPLOAD_TOO_LARGE,
                message=f"{file.filename} exceeds {settings.max_upload_bytes} bytes.",
            )
        )
    return payload


def _http_error(exc: ServiceFailureError) -> HTTPException:
    """Map a service failure onto an HTTPException with a serialized detail."""
    status_code = _FAILURE_STATUS.get(
        exc.failure.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return HTTPException(status_code=status_code, detail=_serialize(exc.failure))


def _internal_error(message: str) -> HTTPException:
    failure = ServiceFailure(
        component="api", error_code=ErrorCodes.INTERNAL, message=message
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=_serialize(failure)
    )


def _serialize(failure: ServiceFailure) -> dict[str, Any]:
    return cast(dict[str, Any], jsonable_encoder(failure))


# Registered last so the API routes above take precedence.
app.mount(
    "/", StaticFiles(directory=settings.public_dir, check_dir=False), name="public"
)
