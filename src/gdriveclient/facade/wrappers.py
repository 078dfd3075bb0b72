"""Production capability implementations backed by a googleapiclient Drive v3 resource."""

from __future__ import annotations

import io
import logging
from typing import Any, BinaryIO, Optional

from googleapiclient.http import DEFAULT_CHUNK_SIZE, MediaIoBaseDownload, MediaIoBaseUpload

from gdriveclient.models import Permission, PermissionGrant, RemoteFile
from gdriveclient.util.mime import guess_content_mime

from .fields import FILE_FIELDS, PERMISSION_FIELDS
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

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE: int = 10 * 1024 * 1024


def _media_upload(stream: BinaryIO, mime_type: Optional[str]) -> MediaIoBaseUpload:
    mimetype = mime_type or guess_content_mime(getattr(stream, "name", None))
    return MediaIoBaseUpload(
        stream,
        mimetype=mimetype,
        chunksize=DEFAULT_CHUNK_SIZE,
        resumable=True,
    )


class _FilesCreateCallWrapper(FilesCreateCall):
    def __init__(self, files: Any, metadata: dict[str, Any], kwargs: dict[str, Any]) -> None:
        self._files = files
        self._metadata = metadata
        self._kwargs = kwargs
        self._media: Optional[MediaIoBaseUpload] = None

    def media(self, stream: BinaryIO, mime_type: Optional[str] = None) -> FilesCreateCall:
        self._media = _media_upload(stream, mime_type)
        return self

    def execute(self) -> RemoteFile:
        logger.debug("files.create name=%s with_media=%s", self._metadata.get("name"),
                     self._media is not None)
        req = self._files.create(
            body=self._metadata,
            media_body=self._media,
            fields=FILE_FIELDS,
            **self._kwargs,
        )
        return RemoteFile.from_api(req.execute())


class _FilesGetCallWrapper(FilesGetCall):
    def __init__(
        self,
        files: Any,
        file_id: str,
        kwargs: dict[str, Any],
        chunk_size: int,
    ) -> None:
        self._files = files
        self._file_id = file_id
        self._kwargs = kwargs
        self._chunk_size = chunk_size

    def execute(self) -> RemoteFile:
        logger.debug("files.get file_id=%s", self._file_id)
        req = self._files.get(fileId=self._file_id, fields=FILE_FIELDS, **self._kwargs)
        return RemoteFile.from_api(req.execute())

    def download(self) -> BinaryIO:
        logger.debug("files.get_media file_id=%s", self._file_id)
        req = self._files.get_media(fileId=self._file_id, **self._kwargs)
        stream = MediaDownloadStream(req, chunk_size=self._chunk_size)
        try:
            stream.prefetch()
        except BaseException:
            stream.close()
            raise
        return io.BufferedReader(stream)


class _FilesDeleteCallWrapper(FilesDeleteCall):
    def __init__(self, files: Any, file_id: str, kwargs: dict[str, Any]) -> None:
        self._files = files
        self._file_id = file_id
        self._kwargs = kwargs

    def execute(self) -> None:
        logger.debug("files.delete file_id=%s", self._file_id)
        self._files.delete(fileId=self._file_id, **self._kwargs).execute()


class _FilesUpdateCallWrapper(FilesUpdateCall):
    def __init__(
        self,
        files: Any,
        file_id: str,
        metadata: Optional[dict[str, Any]],
        kwargs: dict[str, Any],
    ) -> None:
        self._files = files
        self._file_id = file_id
        self._metadata = metadata
        self._kwargs = kwargs
        self._media: Optional[MediaIoBaseUpload] = None

    def media(self, stream: BinaryIO, mime_type: Optional[str] = None) -> FilesUpdateCall:
        self._media = _media_upload(stream, mime_type)
        return self

    def execute(self) -> RemoteFile:
        logger.debug("files.update file_id=%s with_media=%s", self._file_id,
                     self._media is not None)
        req = self._files.update(
            fileId=self._file_id,
            body=self._metadata,
            media_body=self._media,
            fields=FILE_FIELDS,
            **self._kwargs,
        )
        return RemoteFile.from_api(req.execute())


class _FileServiceWrapper(FileService):
    def __init__(self, files: Any, kwargs: dict[str, Any], chunk_size: int) -> None:
        self._files = files
        self._kwargs = kwargs
        self._chunk_size = chunk_size

    def create(self, metadata: dict[str, Any]) -> FilesCreateCall:
        return _FilesCreateCallWrapper(self._files, metadata, self._kwargs)

    def get(self, file_id: str) -> FilesGetCall:
        return _FilesGetCallWrapper(self._files, file_id, self._kwargs, self._chunk_size)

    def delete(self, file_id: str) -> FilesDeleteCall:
        return _FilesDeleteCallWrapper(self._files, file_id, self._kwargs)

    def update(self, file_id: str, metadata: Optional[dict[str, Any]] = None) -> FilesUpdateCall:
        return _FilesUpdateCallWrapper(self._files, file_id, metadata, self._kwargs)


class _PermissionsCreateCallWrapper(PermissionsCreateCall):
    def __init__(
        self,
        permissions: Any,
        file_id: str,
        grant: PermissionGrant,
        kwargs: dict[str, Any],
    ) -> None:
        self._permissions = permissions
        self._file_id = file_id
        self._grant = grant
        self._kwargs = kwargs

    def execute(self) -> Permission:
        logger.debug("permissions.create file_id=%s type=%s role=%s", self._file_id,
                     self._grant.grantee_type.value, self._grant.role.value)
        req = self._permissions.create(
            fileId=self._file_id,
            body=self._grant.to_api(),
            fields=PERMISSION_FIELDS,
            **self._kwargs,
        )
        return Permission.from_api(req.execute())


class _PermissionsServiceWrapper(PermissionsService):
    def __init__(self, permissions: Any, kwargs: dict[str, Any]) -> None:
        self._permissions = permissions
        self._kwargs = kwargs

    def create(self, file_id: str, grant: PermissionGrant) -> PermissionsCreateCall:
        return _PermissionsCreateCallWrapper(self._permissions, file_id, grant, self._kwargs)


class GoogleDriveService(DriveService):
    """
    DriveService over a `googleapiclient.discovery.build("drive", "v3")` resource.

    Notes:
        - The resource is not exposed.
        - `supports_all_drives` is applied to all requests consistently.
    """

    def __init__(
        self,
        resource: Any,
        *,
        supports_all_drives: bool = True,
        download_chunk_size: int = DOWNLOAD_CHUNK_SIZE,
    ) -> None:
        if download_chunk_size <= 0:
            raise ValueError("download_chunk_size must be positive")
        kwargs: dict[str, Any] = {"supportsAllDrives": True} if supports_all_drives else {}
        self._files = _FileServiceWrapper(resource.files(), kwargs, download_chunk_size)
        self._permissions = _PermissionsServiceWrapper(resource.permissions(), kwargs)

    def files(self) -> FileService:
        return self._files

    def permissions(self) -> PermissionsService:
        return self._permissions


class MediaDownloadStream(io.RawIOBase):
    """
    Readable stream over a `files.get_media` request.

    Content is pulled one chunk at a time with MediaIoBaseDownload, so at
    most one chunk is held in memory.
    """

    def __init__(self, request: Any, *, chunk_size: int = DOWNLOAD_CHUNK_SIZE) -> None:
        super().__init__()
        self._buffer = io.BytesIO()
        self._downloader = MediaIoBaseDownload(self._buffer, request, chunksize=chunk_size)
        self._remaining = 0
        self._done = False

    def readable(self) -> bool:
        return True

    def prefetch(self) -> None:
        """Fetch the first chunk if nothing is buffered yet."""
        if self._remaining == 0 and not self._done:
            self._next_chunk()

    def readinto(self, b: Any) -> int:
        while self._remaining == 0:
            if self._done:
                return 0
            self._next_chunk()
        n = self._buffer.readinto(b)
        self._remaining -= n
        return n

    def _next_chunk(self) -> None:
        self._buffer.seek(0)
        self._buffer.truncate()
        _, self._done = self._downloader.next_chunk()
        self._remaining = self._buffer.tell()
        self._buffer.seek(0)
