"""Custom exception hierarchy for planproof.

All public errors inherit from PlanProofError so callers can catch the base
class for any planproof-specific failure.  Driver and transport errors
(connection drops, timeouts, permission errors) are never wrapped; they reach
the caller unchanged.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any


class PlanProofError(Exception):
    """Base exception for all planproof errors."""


class ConfigurationError(PlanProofError):
    """Raised when a ValidationConfig is contradictory or incomplete.

    Detected before any statement is sent to the database.

    Args:
        message: Human-readable description.
        field: The offending config field, when there is exactly one.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class PreconditionError(PlanProofError):
    """Raised when the database is not in a state the validation can run in.

    Currently this means the named view has no UNIQUE CLUSTERED index.

    Args:
        message: Human-readable description.
        schema: Schema of the view.
        view: Name of the view.
    """

    def __init__(self, message: str, schema: str, view: str) -> None:
        super().__init__(message)
        self.schema = schema
        self.view = view


class CaptureError(PlanProofError):
    """Raised when no usable execution plan could be captured.

    When the plan document was persisted before it turned out to be
    unusable, the message names the plan artifact the same way
    :class:`ValidationError` does.

    Args:
        message: Human-readable description.
        raw: The raw payload that failed to parse, if any.
        plan_path: Path of the persisted plan artifact, if one was written.
    """

    def __init__(
        self,
        message: str,
        raw: str | None = None,
        plan_path: Path | None = None,
    ) -> None:
        if plan_path is not None:
            super().__init__(f"{message}. Plan: {plan_path}")
        else:
            super().__init__(message)
        self.reason = message
        self.raw = raw
        self.plan_path = plan_path


class ValidationError(PlanProofError):
    """Raised when a captured plan or session fails an assertion.

    The rendered message always names the plan artifact, and the session
    options artifact when one has been written, so the operator can open the
    exact document that produced the failure.

    Args:
        reason: Human-readable description of the failed assertion.
        code: Machine-readable error code (e.g. ``FORBIDDEN_TABLE``).
        plan_path: Path of the persisted plan artifact.
        session_options_path: Path of the persisted session options artifact.
        details: Extra context describing the failure.
    """

    def __init__(
        self,
        reason: str,
        code: str,
        plan_path: Path,
        session_options_path: Path | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        message = f"{reason}. Plan: {plan_path}"
        if session_options_path is not None:
            message += f", Session options: {session_options_path}"
        super().__init__(message)
        self.reason = reason
        self.code = code
        self.plan_path = plan_path
        self.session_options_path = session_options_path
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response suitable for reporting."""
        return {
            "error": self.code,
            "message": str(self),
            "plan_path": str(self.plan_path),
            "session_options_path": (
                str(self.session_options_path)
                if self.session_options_path is not None
                else None
            ),
            "details": self.details,
        }


class PlanAssertionError(ValidationError):
    """Raised when the plan's object references do not match expectations."""

    def __init__(
        self,
        reason: str,
        code: str,
        plan_path: Path,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(reason, code=code, plan_path=plan_path, details=details)


class SessionAssertionError(ValidationError):
    """Raised when a session option is missing, wrong, or forbidden."""

    def __init__(
        self,
        reason: str,
        code: str,
        plan_path: Path,
        session_options_path: Path,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            reason,
            code=code,
            plan_path=plan_path,
            session_options_path=session_options_path,
            details=details,
        )
