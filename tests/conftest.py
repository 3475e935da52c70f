"""Pytest configuration and shared fixtures.

This module provides fixtures for:
- Isolated upload/work/public directories (set before the app is imported)
- Sample model images and name lists
- A ready-to-use InvitationService backed by a fresh SessionStore
"""

import os
import tempfile
from pathlib import Path

import pytest


# The API module creates its directories at import time, so point it at a
# throwaway location before any test imports it.
_SANDBOX = Path(tempfile.mkdtemp(prefix="namster-tests-"))
os.environ.setdefault("PUBLIC_DIR", str(_SANDBOX / "public"))
os.environ.setdefault("UPLOAD_DIR", str(_SANDBOX / "uploads"))
os.environ.setdefault("WORK_DIR", str(_SANDBOX / "work"))

from app.services.invitations import InvitationService  # noqa: E402
from app.sessions import SessionStore  # noqa: E402
from tests.mocks.data_generators import (  # noqa: E402
    MIXED_DELIMITER_LINES,
    generate_model_png_bytes,
)


# =============================================================================
# Sample Inputs
# =============================================================================


@pytest.fixture
def mixed_list_text() -> str:
    """The mixed-delimiter name list, one entry per line."""
    return "\n".join(MIXED_DELIMITER_LINES)


@pytest.fixture
def model_png_bytes() -> bytes:
    """A 400x200 white PNG model."""
    return generate_model_png_bytes()


@pytest.fixture
def model_image(tmp_path: Path, model_png_bytes: bytes) -> Path:
    """The white PNG model written to disk."""
    path = tmp_path / "model.png"
    path.write_bytes(model_png_bytes)
    return path


# =============================================================================
# Services
# =============================================================================


@pytest.fixture
def session_store() -> SessionStore:
    return SessionStore(ttl_seconds=3600)


@pytest.fixture
def invitation_service(tmp_path: Path, session_store: SessionStore) -> InvitationService:
    """An InvitationService writing under the test's tmp_path."""
    return InvitationService(
        sessions=session_store,
        upload_dir=tmp_path / "uploads",
        work_dir=tmp_path / "work",
        batch_limit=50,
    )
