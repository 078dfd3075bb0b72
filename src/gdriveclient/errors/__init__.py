"""Public error exports for gdriveclient."""

from __future__ import annotations

from .exceptions import (
    AuthError,
    GDriveClientError,
    HttpErrorInfo,
    RemoteOperationError,
    describe_cause,
    http_error_to_info,
)

__all__ = [
    "GDriveClientError",
    "AuthError",
    "RemoteOperationError",
    "HttpErrorInfo",
    "describe_cause",
    "http_error_to_info",
]
