"""Exception types for gdriveclient."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional


class GDriveClientError(Exception):
    """
    Base exception for gdriveclient.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class AuthError(GDriveClientError):
    """Raised when credentials cannot be loaded or the Drive service cannot be built."""


class RemoteOperationError(GDriveClientError):
    """
    Raised when a client operation fails.

    The message is the operation context followed by the cause's message,
    e.g. ``getting file with id F1: <cause>``.
    """

    def __init__(self, context: str, cause: BaseException) -> None:
        super().__init__(
            f"{context}: {cause}",
            details=describe_cause(cause),
            cause=cause,
        )
        self.context = context


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information extracted from a googleapiclient HttpError."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None

    def as_details(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "status_code": self.status_code,
            "reason": self.reason,
        }
        if self.message:
            out["message"] = self.message
        if self.details:
            out.update(self.details)
        return out


def describe_cause(cause: BaseException) -> dict[str, Any]:
    """Return structured details for a cause; empty unless it looks like an HttpError."""
    if isinstance(cause, GDriveClientError):
        return dict(cause.details)
    if getattr(cause, "resp", None) is None:
        return {}
    return http_error_to_info(cause).as_details()


def http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        try:
            status_code = int(status_code)
        except (TypeError, ValueError):
            status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
