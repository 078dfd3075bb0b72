"""Capability facades over the Drive API."""

from __future__ import annotations

from .interfaces import (
    DriveService,
    FilesCreateCall,
    FilesDeleteCall,
    FilesGetCall,
    FilesUpdateCall,
    FileService,
    PermissionsCreateCall,
    PermissionsService,
)
from .wrappers import GoogleDriveService, MediaDownloadStream

__all__ = [
    "DriveService",
    "FileService",
    "PermissionsService",
    "FilesCreateCall",
    "FilesGetCall",
    "FilesDeleteCall",
    "FilesUpdateCall",
    "PermissionsCreateCall",
    "GoogleDriveService",
    "MediaDownloadStream",
]
