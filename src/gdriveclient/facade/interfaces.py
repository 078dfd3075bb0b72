"""
Narrow capability interfaces over the Drive API.

Each interface exposes only what GoogleDriveClient uses. Call objects split
construction (setting metadata, attaching media) from execution (the HTTP
round trip), so tests can substitute recorders that return canned results.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Optional

from gdriveclient.models import Permission, PermissionGrant, RemoteFile


class FilesCreateCall(ABC):
    """A pending `files.create` call."""

    @abstractmethod
    def media(self, stream: BinaryIO, mime_type: Optional[str] = None) -> "FilesCreateCall":
        """
        Attach content to upload with the new file.

        Folder creation never calls this. Returns self for chaining.
        """

    @abstractmethod
    def execute(self) -> RemoteFile:
        """Run the call and return the created file."""


class FilesGetCall(ABC):
    """A pending `files.get` call."""

    @abstractmethod
    def execute(self) -> RemoteFile:
        """Run the call and return the file metadata."""

    @abstractmethod
    def download(self) -> BinaryIO:
        """
        Fetch the file content instead of its metadata.

        Returns:
            A readable binary stream. The caller must close it.
        """


class FilesDeleteCall(ABC):
    """A pending `files.delete` call."""

    @abstractmethod
    def execute(self) -> None:
        """Run the call. Deletion is permanent (no trash)."""


class FilesUpdateCall(ABC):
    """A pending `files.update` call."""

    @abstractmethod
    def media(self, stream: BinaryIO, mime_type: Optional[str] = None) -> "FilesUpdateCall":
        """Attach replacement content. Returns self for chaining."""

    @abstractmethod
    def execute(self) -> RemoteFile:
        """Run the call and return the updated file."""


class PermissionsCreateCall(ABC):
    """A pending `permissions.create` call."""

    @abstractmethod
    def execute(self) -> Permission:
        """Run the call and return the created permission."""


class FileService(ABC):
    """File operations used by the client."""

    @abstractmethod
    def create(self, metadata: dict[str, Any]) -> FilesCreateCall:
        ...

    @abstractmethod
    def get(self, file_id: str) -> FilesGetCall:
        ...

    @abstractmethod
    def delete(self, file_id: str) -> FilesDeleteCall:
        ...

    @abstractmethod
    def update(self, file_id: str, metadata: Optional[dict[str, Any]] = None) -> FilesUpdateCall:
        """Start an update; metadata=None leaves name/MIME type untouched."""


class PermissionsService(ABC):
    """Permission operations used by the client."""

    @abstractmethod
    def create(self, file_id: str, grant: PermissionGrant) -> PermissionsCreateCall:
        ...


class DriveService(ABC):
    """Entry point to the file and permission capabilities."""

    @abstractmethod
    def files(self) -> FileService:
        ...

    @abstractmethod
    def permissions(self) -> PermissionsService:
        ...
