"""Public model exports for gdriveclient."""

from __future__ import annotations

from .permission import GranteeType, Permission, PermissionGrant, Role
from .remote_file import RemoteFile

__all__ = [
    "RemoteFile",
    "Role",
    "GranteeType",
    "PermissionGrant",
    "Permission",
]
