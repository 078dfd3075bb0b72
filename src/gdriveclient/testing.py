"""
In-memory DriveService for tests.

`InMemoryDriveService` implements the capability interfaces against plain
dicts. Every call is recorded in `calls`, and any operation can be made to
fail with `fail(op, exc)`. Operation names:
"files.create", "files.get", "files.download", "files.delete",
"files.update", "permissions.create".
"""

from __future__ import annotations

import io
import itertools
from typing import Any, BinaryIO, Optional

from gdriveclient.facade import (
    DriveService,
    FilesCreateCall,
    FilesDeleteCall,
    FilesGetCall,
    FilesUpdateCall,
    FileService,
    PermissionsCreateCall,
    PermissionsService,
)
from gdriveclient.models import Permission, PermissionGrant, RemoteFile
from gdriveclient.util.mime import guess_content_mime


class InMemoryDriveService(DriveService):
    def __init__(self) -> None:
        self.files_by_id: dict[str, RemoteFile] = {}
        self.contents: dict[str, bytes] = {}
        self.grants: dict[str, list[PermissionGrant]] = {}
        self.calls: list[tuple[Any, ...]] = []
        self.download_streams: list[BinaryIO] = []
        self.errors: dict[str, BaseException] = {}
        self._ids = itertools.count(1)
        self._files = _InMemoryFileService(self)
        self._permissions = _InMemoryPermissionsService(self)

    def files(self) -> FileService:
        return self._files

    def permissions(self) -> PermissionsService:
        return self._permissions

    # ----------------------------
    # Test helpers
    # ----------------------------
    def fail(self, op: str, exc: BaseException) -> None:
        """Make every execution of `op` raise `exc` until cleared."""
        self.errors[op] = exc

    def clear_failures(self) -> None:
        self.errors.clear()

    def add_file(
        self,
        name: str,
        content: bytes = b"",
        *,
        mime_type: str = "application/octet-stream",
        parents: tuple[str, ...] = (),
    ) -> RemoteFile:
        """Seed a file directly, without recording a call."""
        file_id = self.new_id()
        info = RemoteFile(
            file_id=file_id,
            name=name,
            mime_type=mime_type,
            parents=tuple(parents),
            size=len(content),
        )
        self.files_by_id[file_id] = info
        self.contents[file_id] = content
        return info

    def new_id(self) -> str:
        return f"fake-id-{next(self._ids)}"

    def check(self, op: str) -> None:
        exc = self.errors.get(op)
        if exc is not None:
            raise exc

    def lookup(self, file_id: str) -> RemoteFile:
        try:
            return self.files_by_id[file_id]
        except KeyError:
            raise LookupError(f"file {file_id} not found") from None


class _InMemoryFilesCreateCall(FilesCreateCall):
    def __init__(self, drive: InMemoryDriveService, metadata: dict[str, Any]) -> None:
        self._drive = drive
        self.metadata = dict(metadata)
        self.stream: Optional[BinaryIO] = None
        self.mime_type: Optional[str] = None

    def media(self, stream: BinaryIO, mime_type: Optional[str] = None) -> FilesCreateCall:
        self.stream = stream
        self.mime_type = mime_type
        return self

    def execute(self) -> RemoteFile:
        self._drive.calls.append(("files.create", self.metadata, self.stream is not None))
        self._drive.check("files.create")

        content = self.stream.read() if self.stream is not None else b""
        name = self.metadata.get("name", "")
        mime_type = self.metadata.get("mimeType") or self.mime_type or guess_content_mime(name)
        file_id = self._drive.new_id()
        info = RemoteFile(
            file_id=file_id,
            name=name,
            mime_type=mime_type,
            parents=tuple(self.metadata.get("parents") or ()),
            size=len(content) if self.stream is not None else None,
        )
        self._drive.files_by_id[file_id] = info
        self._drive.contents[file_id] = content
        return info


class _InMemoryFilesGetCall(FilesGetCall):
    def __init__(self, drive: InMemoryDriveService, file_id: str) -> None:
        self._drive = drive
        self.file_id = file_id

    def execute(self) -> RemoteFile:
        self._drive.calls.append(("files.get", self.file_id))
        self._drive.check("files.get")
        return self._drive.lookup(self.file_id)

    def download(self) -> BinaryIO:
        self._drive.calls.append(("files.download", self.file_id))
        self._drive.check("files.download")
        self._drive.lookup(self.file_id)
        stream = io.BytesIO(self._drive.contents.get(self.file_id, b""))
        self._drive.download_streams.append(stream)
        return stream


class _InMemoryFilesDeleteCall(FilesDeleteCall):
    def __init__(self, drive: InMemoryDriveService, file_id: str) -> None:
        self._drive = drive
        self.file_id = file_id

    def execute(self) -> None:
        self._drive.calls.append(("files.delete", self.file_id))
        self._drive.check("files.delete")
        self._drive.lookup(self.file_id)
        del self._drive.files_by_id[self.file_id]
        self._drive.contents.pop(self.file_id, None)
        self._drive.grants.pop(self.file_id, None)


class _InMemoryFilesUpdateCall(FilesUpdateCall):
    def __init__(
        self,
        drive: InMemoryDriveService,
        file_id: str,
        metadata: Optional[dict[str, Any]],
    ) -> None:
        self._drive = drive
        self.file_id = file_id
        self.metadata = dict(metadata) if metadata is not None else None
        self.stream: Optional[BinaryIO] = None
        self.mime_type: Optional[str] = None

    def media(self, stream: BinaryIO, mime_type: Optional[str] = None) -> FilesUpdateCall:
        self.stream = stream
        self.mime_type = mime_type
        return self

    def execute(self) -> RemoteFile:
        self._drive.calls.append(
            ("files.update", self.file_id, self.metadata, self.stream is not None)
        )
        self._drive.check("files.update")

        current = self._drive.lookup(self.file_id)
        name = current.name
        mime_type = current.mime_type
        if self.metadata:
            name = self.metadata.get("name", name)
            mime_type = self.metadata.get("mimeType", mime_type)
        size = current.size
        if self.stream is not None:
            content = self.stream.read()
            self._drive.contents[self.file_id] = content
            size = len(content)

        updated = RemoteFile(
            file_id=current.file_id,
            name=name,
            mime_type=mime_type,
            parents=current.parents,
            size=size,
        )
        self._drive.files_by_id[self.file_id] = updated
        return updated


class _InMemoryFileService(FileService):
    def __init__(self, drive: InMemoryDriveService) -> None:
        self._drive = drive

    def create(self, metadata: dict[str, Any]) -> FilesCreateCall:
        return _InMemoryFilesCreateCall(self._drive, metadata)

    def get(self, file_id: str) -> FilesGetCall:
        return _InMemoryFilesGetCall(self._drive, file_id)

    def delete(self, file_id: str) -> FilesDeleteCall:
        return _InMemoryFilesDeleteCall(self._drive, file_id)

    def update(self, file_id: str, metadata: Optional[dict[str, Any]] = None) -> FilesUpdateCall:
        return _InMemoryFilesUpdateCall(self._drive, file_id, metadata)


class _InMemoryPermissionsCreateCall(PermissionsCreateCall):
    def __init__(self, drive: InMemoryDriveService, file_id: str, grant: PermissionGrant) -> None:
        self._drive = drive
        self.file_id = file_id
        self.grant = grant

    def execute(self) -> Permission:
        self._drive.calls.append(("permissions.create", self.file_id, self.grant))
        self._drive.check("permissions.create")
        self._drive.lookup(self.file_id)
        self._drive.grants.setdefault(self.file_id, []).append(self.grant)
        return Permission(
            permission_id=self._drive.new_id(),
            grantee_type=self.grant.grantee_type.value,
            role=self.grant.role.value,
            email_address=self.grant.email_address,
            domain=self.grant.domain,
        )


class _InMemoryPermissionsService(PermissionsService):
    def __init__(self, drive: InMemoryDriveService) -> None:
        self._drive = drive

    def create(self, file_id: str, grant: PermissionGrant) -> PermissionsCreateCall:
        return _InMemoryPermissionsCreateCall(self._drive, file_id, grant)
