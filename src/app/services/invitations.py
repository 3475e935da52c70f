"""Upload, preview and batch generation of invitations.

Reference flow:
    upload -> extract records -> preview first record -> generate batches
    -> download ZIP (which ends the session)
"""

from __future__ import annotations

import asyncio
import logging
import random
import re
import time
import zipfile
from pathlib import Path
from typing import TYPE_CHECKING

from app.exceptions import ServiceFailureError
from app.rendering import (
    PLACEHOLDER_TABLE,
    build_elements,
    compose_image,
    output_filename,
)
from app.schemas import BatchResult, ErrorCodes, Record
from ingestion.extractors import ListExtractor


if TYPE_CHECKING:
    from app.schemas import BatchSettings, RenderSettings
    from app.sessions import Session, SessionStore


logger = logging.getLogger(__name__)

ARCHIVE_NAME = "invitations.zip"
PREVIEW_NAME = "test.png"
PLACEHOLDER_RECORD = Record(name="INVITE TEST", table=PLACEHOLDER_TABLE)

_WHITESPACE_RUN = re.compile(r"\s+")


class InvitationService:
    """Turn an uploaded model and list into rendered, archived invitations."""

    def __init__(
        self,
        *,
        sessions: SessionStore,
        upload_dir: Path,
        work_dir: Path,
        extractor: ListExtractor | None = None,
        batch_limit: int = 50,
    ) -> None:
        self._sessions = sessions
        self._upload_dir = Path(upload_dir)
        self._work_dir = Path(work_dir)
        self._extractor = extractor or ListExtractor()
        self._batch_limit = batch_limit

    @property
    def sessions(self) -> SessionStore:
        return self._sessions

    async def upload(
        self,
        *,
        model: bytes,
        model_filename: str,
        list_content: bytes,
        list_filename: str,
    ) -> Session:
        """Store both uploads in a new session and extract its records."""

        self._sessions.expire()
        session = self._sessions.new_session()
        session.model_path = self._store_upload(model, model_filename)
        session.list_path = self._store_upload(list_content, list_filename)
        session.track(session.model_path, session.list_path)

        parsed = await asyncio.to_thread(
            self._extractor.read, list_content, list_filename
        )
        session.records = parsed.records
        logger.info(
            "Session %s: %d name(s) from %s list %s",
            session.id,
            parsed.total,
            parsed.list_format,
            list_filename,
        )
        return session

    async def preview(self, settings: RenderSettings) -> bytes:
        """Render the first record (or a placeholder) and return the PNG bytes."""

        session = self.require_session(settings.session_id)
        record = session.records[0] if session.records else PLACEHOLDER_RECORD
        elements = build_elements(
            record, settings, table_placeholder=PLACEHOLDER_TABLE
        )

        session_dir = self._session_dir(session.id)
        session.track(session_dir)
        out_path = session_dir / PREVIEW_NAME
        await asyncio.to_thread(
            compose_image, self._model_path(session), out_path, elements
        )
        return out_path.read_bytes()

    async def generate(self, settings: BatchSettings) -> BatchResult:
        """Render one window of records and rebuild the session archive.

        Batches accumulate: the archive always holds every invitation
        rendered so far for the session.
        """

        session = self.require_session(settings.session_id)
        total = len(session.records)
        start = max(0, settings.offset)
        limit = settings.limit if settings.limit and settings.limit > 0 else None
        batch_size = min(self._batch_limit, limit or self._batch_limit)
        end = min(total, start + batch_size)

        session_dir = self._session_dir(session.id)
        session.track(session_dir)
        out_dir = session_dir / "all"
        out_dir.mkdir(parents=True, exist_ok=True)

        model_path = self._model_path(session)
        for index in range(start, end):
            record = session.records[index]
            out_path = out_dir / output_filename(index, record.name)
            await asyncio.to_thread(
                compose_image, model_path, out_path, build_elements(record, settings)
            )

        archive_path = session_dir / ARCHIVE_NAME
        await asyncio.to_thread(_write_archive, out_dir, archive_path)

        processed = max(0, end - start)
        logger.info(
            "Session %s: rendered %d of %d invitation(s) from offset %d",
            session.id,
            processed,
            total,
            start,
        )
        return BatchResult(
            session_id=session.id,
            processed=processed,
            total=total,
            archive_path=str(archive_path),
        )

    def archive_path(self, session_id: str) -> Path:
        """Path of the session's generated ZIP archive."""

        session = self.require_session(session_id)
        path = self._session_dir(session.id) / ARCHIVE_NAME
        if not path.exists():
            raise ServiceFailureError(
                component="archive",
                error_code=ErrorCodes.ARCHIVE_NOT_FOUND,
                message="ZIP not found",
                recoverable=True,
                details={"session_id": session_id},
            )
        return path

    def finish(self, session_id: str) -> None:
        """End a session, removing its uploads and rendered files."""

        self._sessions.cleanup(session_id)

    def require_session(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise ServiceFailureError(
                component="sessions",
                error_code=ErrorCodes.SESSION_INVALID,
                message="Invalid session",
                details={"session_id": session_id},
            )
        return session

    def _session_dir(self, session_id: str) -> Path:
        return self._work_dir / session_id

    def _model_path(self, session: Session) -> Path:
        if session.model_path is None:
            raise ServiceFailureError(
                component="sessions",
                error_code=ErrorCodes.UPLOAD_MISSING_FILE,
                message="Session has no model image.",
                details={"session_id": session.id},
            )
        return session.model_path

    def _store_upload(self, content: bytes, filename: str) -> Path:
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        unique = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
        safe_name = _WHITESPACE_RUN.sub("_", Path(filename).name) or "upload.bin"
        path = self._upload_dir / f"{unique}-{safe_name}"
        path.write_bytes(content)
        return path


def _write_archive(source_dir: Path, archive_path: Path) -> None:
    """Zip every file directly under ``source_dir`` into ``archive_path``."""
    with zipfile.ZipFile(
        archive_path, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9
    ) as archive:
        for path in sorted(source_dir.iterdir()):
            if path.is_file():
                archive.write(path, arcname=path.name)


__all__ = ["ARCHIVE_NAME", "InvitationService", "PLACEHOLDER_RECORD"]
