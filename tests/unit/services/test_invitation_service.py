"""InvitationService tests.

Test Class: TestInvitationService
"""

import zipfile
from pathlib import Path

import pytest

from app.exceptions import ServiceFailureError
from app.schemas import BatchSettings, ErrorCodes, RenderSettings
from app.services.invitations import InvitationService


def _names(count: int) -> bytes:
    return "\n".join(f"Guest {i} = Table {i % 5}" for i in range(count)).encode()


async def _upload(
    service: InvitationService,
    model_png_bytes: bytes,
    list_content: bytes,
    list_filename: str = "guests list.txt",
):
    return await service.upload(
        model=model_png_bytes,
        model_filename="my model.png",
        list_content=list_content,
        list_filename=list_filename,
    )


class TestInvitationService:
    """Upload, preview, generate and archive flow."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_upload_stores_files_and_records(
        self,
        invitation_service: InvitationService,
        model_png_bytes: bytes,
        mixed_list_text: str,
        tmp_path: Path,
    ) -> None:
        session = await _upload(
            invitation_service, model_png_bytes, mixed_list_text.encode()
        )

        assert len(session.records) == 6
        assert session.model_path is not None and session.model_path.exists()
        assert session.list_path is not None and session.list_path.exists()
        assert session.model_path.parent == tmp_path / "uploads"
        assert session.model_path.name.endswith("-my_model.png")
        assert session.list_path.name.endswith("-guests_list.txt")
        assert session.model_path in session.cleanup

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_preview_renders_first_record(
        self, invitation_service: InvitationService, model_png_bytes: bytes
    ) -> None:
        session = await _upload(invitation_service, model_png_bytes, _names(3))

        png = await invitation_service.preview(
            RenderSettings(session_id=session.id, x=10, y=10)
        )

        assert png.startswith(b"\x89PNG")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_preview_with_empty_list_uses_placeholder(
        self,
        invitation_service: InvitationService,
        model_png_bytes: bytes,
        tmp_path: Path,
    ) -> None:
        session = await _upload(invitation_service, model_png_bytes, b"Liste\n\n")
        assert session.records == []

        png = await invitation_service.preview(
            RenderSettings(
                session_id=session.id, x=10, y=10, use_table=True, tx=50, ty=80
            )
        )

        assert png.startswith(b"\x89PNG")
        assert (tmp_path / "work" / session.id / "test.png").exists()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_generate_batches_accumulate_in_archive(
        self,
        invitation_service: InvitationService,
        model_png_bytes: bytes,
        tmp_path: Path,
    ) -> None:
        session = await _upload(invitation_service, model_png_bytes, _names(5))

        first = await invitation_service.generate(
            BatchSettings(session_id=session.id, x=5, y=5, offset=0, limit=3)
        )
        second = await invitation_service.generate(
            BatchSettings(session_id=session.id, x=5, y=5, offset=3, limit=3)
        )

        assert (first.processed, first.total) == (3, 5)
        assert (second.processed, second.total) == (2, 5)
        archive = Path(second.archive_path)
        assert archive == tmp_path / "work" / session.id / "invitations.zip"
        with zipfile.ZipFile(archive) as zipf:
            assert zipf.namelist() == [
                "001-Guest_0.png",
                "002-Guest_1.png",
                "003-Guest_2.png",
                "004-Guest_3.png",
                "005-Guest_4.png",
            ]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_generate_caps_batch_size(
        self,
        tmp_path: Path,
        session_store,
        model_png_bytes: bytes,
    ) -> None:
        service = InvitationService(
            sessions=session_store,
            upload_dir=tmp_path / "uploads",
            work_dir=tmp_path / "work",
            batch_limit=2,
        )
        session = await _upload(service, model_png_bytes, _names(4))

        result = await service.generate(
            BatchSettings(session_id=session.id, x=0, y=0, limit=100)
        )

        assert result.processed == 2

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("offset", "limit", "processed"),
        [(-4, None, 3), (0, 0, 3), (0, -1, 3), (2, None, 1), (10, 5, 0)],
    )
    async def test_generate_window_clamping(
        self,
        invitation_service: InvitationService,
        model_png_bytes: bytes,
        offset: int,
        limit: int | None,
        processed: int,
    ) -> None:
        session = await _upload(invitation_service, model_png_bytes, _names(3))

        result = await invitation_service.generate(
            BatchSettings(
                session_id=session.id, x=0, y=0, offset=offset, limit=limit
            )
        )

        assert result.processed == processed
        assert result.total == 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_pdf_model_fails_generation(
        self, invitation_service: InvitationService
    ) -> None:
        session = await invitation_service.upload(
            model=b"%PDF-1.4",
            model_filename="model.pdf",
            list_content=b"Ana = 1",
            list_filename="guests.txt",
        )

        with pytest.raises(ServiceFailureError) as excinfo:
            await invitation_service.generate(
                BatchSettings(session_id=session.id, x=0, y=0)
            )

        assert excinfo.value.failure.error_code == ErrorCodes.RENDER_UNSUPPORTED_MODEL

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unknown_session(self, invitation_service: InvitationService) -> None:
        with pytest.raises(ServiceFailureError) as excinfo:
            await invitation_service.preview(RenderSettings(session_id="nope", x=0, y=0))

        assert excinfo.value.failure.error_code == ErrorCodes.SESSION_INVALID

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_archive_missing_before_generate(
        self, invitation_service: InvitationService, model_png_bytes: bytes
    ) -> None:
        session = await _upload(invitation_service, model_png_bytes, _names(1))

        with pytest.raises(ServiceFailureError) as excinfo:
            invitation_service.archive_path(session.id)

        assert excinfo.value.failure.error_code == ErrorCodes.ARCHIVE_NOT_FOUND

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_finish_removes_session_files(
        self,
        invitation_service: InvitationService,
        model_png_bytes: bytes,
        tmp_path: Path,
    ) -> None:
        session = await _upload(invitation_service, model_png_bytes, _names(2))
        await invitation_service.generate(BatchSettings(session_id=session.id, x=0, y=0))

        invitation_service.finish(session.id)

        assert not (tmp_path / "work" / session.id).exists()
        assert session.model_path is not None and not session.model_path.exists()
        assert invitation_service.sessions.get(session.id) is None
