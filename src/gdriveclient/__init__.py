"""gdriveclient public API."""

from __future__ import annotations

from gdriveclient.auth import build_drive_service, load_credentials
from gdriveclient.client import GoogleDriveClient, new_client, new_client_from_config
from gdriveclient.config import DEFAULT_SCOPES, ClientConfig
from gdriveclient.errors import (
    AuthError,
    GDriveClientError,
    HttpErrorInfo,
    RemoteOperationError,
)
from gdriveclient.facade import DriveService, GoogleDriveService
from gdriveclient.models import (
    GranteeType,
    Permission,
    PermissionGrant,
    RemoteFile,
    Role,
)

__all__ = [
    # High-level
    "GoogleDriveClient",
    "new_client",
    "new_client_from_config",
    # Config / Auth
    "ClientConfig",
    "DEFAULT_SCOPES",
    "build_drive_service",
    "load_credentials",
    # Facades
    "DriveService",
    "GoogleDriveService",
    # Models
    "RemoteFile",
    "Role",
    "GranteeType",
    "PermissionGrant",
    "Permission",
    # Errors
    "GDriveClientError",
    "AuthError",
    "RemoteOperationError",
    "HttpErrorInfo",
]
