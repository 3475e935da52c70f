"""Failures raised by the list, rendering and session layers.

The API turns each one into an HTTP error whose status is chosen from the
failure's ``error_code`` and whose body is the serialized ``ServiceFailure``.
"""

from __future__ import annotations

from typing import Any

from app.schemas import ServiceFailure


class ServiceFailureError(RuntimeError):
    """A rendering job step that failed, carrying its ``ServiceFailure`` payload."""

    def __init__(
        self,
        *,
        component: str,
        error_code: str,
        message: str,
        recoverable: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.failure = ServiceFailure(
            component=component,
            error_code=error_code,
            message=message,
            recoverable=recoverable,
            details=details,
        )

    @property
    def session_id(self) -> str | None:
        """Session the failure belongs to, when the raiser recorded one."""
        return (self.failure.details or {}).get("session_id")

    def __str__(self) -> str:
        failure = self.failure
        where = failure.component
        if self.session_id:
            where = f"{where} [session {self.session_id}]"
        return f"{failure.error_code} in {where}: {failure.message}"


__all__ = ["ServiceFailureError"]
