"""In-process session store.

A session ties one uploaded model and list to the records extracted from it
and to the files rendered for it. Nothing survives a restart.
"""

from __future__ import annotations

import logging
import shutil
import threading
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from app.schemas import Record


logger = logging.getLogger(__name__)


@dataclass
class Session:
    """State for one upload and its generated invitations."""

    id: str
    created_at: float
    model_path: Path | None = None
    list_path: Path | None = None
    records: list[Record] = field(default_factory=list)
    cleanup: list[Path] = field(default_factory=list)

    def track(self, *paths: Path) -> None:
        """Register paths to delete when the session ends."""
        for path in paths:
            if path not in self.cleanup:
                self.cleanup.append(path)


class SessionStore:
    """Thread-safe map of session id to ``Session``."""

    def __init__(self, ttl_seconds: int = 3600) -> None:
        self._ttl_seconds = ttl_seconds
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def new_session(self) -> Session:
        session = Session(id=str(uuid.uuid4()), created_at=time.time())
        with self._lock:
            self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> Session | None:
        with self._lock:
            return self._sessions.get(session_id)

    def cleanup(self, session_id: str) -> bool:
        """Delete the session's files and forget it.

        Returns:
            False when the session was already gone.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        for path in session.cleanup:
            _remove_path(path)
        logger.info("Cleaned up session %s", session_id)
        return True

    def expire(self, now: float | None = None) -> int:
        """Clean up sessions older than the TTL.

        Returns:
            Number of sessions removed.
        """
        cutoff = (time.time() if now is None else now) - self._ttl_seconds
        with self._lock:
            stale = [sid for sid, s in self._sessions.items() if s.created_at < cutoff]
        removed = sum(1 for sid in stale if self.cleanup(sid))
        if removed:
            logger.info("Expired %d stale session(s)", removed)
        return removed


def _remove_path(path: Path) -> None:
    try:
        if path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Could not remove %s: %s", path, exc)
