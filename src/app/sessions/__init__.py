"""Session management for uploads and their rendered batches."""

from app.sessions.store import Session, SessionStore


__all__ = ["Session", "SessionStore"]
