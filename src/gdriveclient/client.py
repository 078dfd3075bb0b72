"""GoogleDriveClient: file and permission operations on Google Drive."""

from __future__ import annotations

import logging
import os
import shutil
from contextlib import closing
from typing import IO, Any, BinaryIO, Callable, Optional, Sequence, Union

from gdriveclient.auth import build_drive_service
from gdriveclient.config import DEFAULT_SCOPES, ClientConfig, validate_scopes
from gdriveclient.errors import RemoteOperationError
from gdriveclient.facade import DriveService, GoogleDriveService
from gdriveclient.models import PermissionGrant, RemoteFile, Role
from gdriveclient.util.mime import FOLDER_MIME

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]
Content = Union[BinaryIO, PathLike]
OpenFile = Callable[..., IO[bytes]]
CopyStream = Callable[[Any, Any], Any]
ServiceFactory = Callable[..., Any]


class GoogleDriveClient:
    """
    Client for a fixed set of Drive operations.

    Every operation is one blocking round trip. Failures are raised as
    RemoteOperationError carrying a context string and the original cause;
    nothing is retried.
    """

    def __init__(
        self,
        drive_service: DriveService,
        *,
        open_file: OpenFile = open,
        copy_stream: CopyStream = shutil.copyfileobj,
    ) -> None:
        self._srv = drive_service
        self._psrv = drive_service.permissions()
        self._open_file = open_file
        self._copy_stream = copy_stream

    @classmethod
    def from_service(
        cls,
        resource: Any,
        *,
        supports_all_drives: bool = True,
        open_file: OpenFile = open,
        copy_stream: CopyStream = shutil.copyfileobj,
    ) -> "GoogleDriveClient":
        """Create a client from a pre-built googleapiclient Drive v3 resource."""
        return cls(
            GoogleDriveService(resource, supports_all_drives=supports_all_drives),
            open_file=open_file,
            copy_stream=copy_stream,
        )

    # ----------------------------
    # Files
    # ----------------------------
    def create_folder(self, folder_name: str, *parent_folders: str) -> str:
        """Create a folder, optionally under the given parents, and return its id."""
        metadata = {
            "name": folder_name,
            "mimeType": FOLDER_MIME,
            "parents": list(parent_folders),
        }
        try:
            created = self._srv.files().create(metadata).execute()
        except Exception as exc:
            raise RemoteOperationError(
                f"creating folder {folder_name} under parent folders {_format_ids(parent_folders)}",
                exc,
            ) from exc
        return created.file_id

    def upload_file(self, file: Content, *parent_folders: str) -> str:
        """
        Upload a local file and return the new file id.

        `file` is an open binary file object or a path. The remote name is
        the base name of the local file; content is streamed, not read
        into memory up front.
        """
        if _is_path(file):
            with self._open_input(file) as fh:
                return self.upload_file(fh, *parent_folders)

        source_name = _stream_name(file)
        metadata = {
            "name": os.path.basename(source_name),
            "parents": list(parent_folders),
        }
        try:
            created = self._srv.files().create(metadata).media(file).execute()
        except Exception as exc:
            raise RemoteOperationError(
                f"creating file {source_name} under parent folders {_format_ids(parent_folders)}",
                exc,
            ) from exc
        return created.file_id

    def update_file(self, file_id: str, new_content: Content) -> str:
        """
        Replace the content of an existing file and return its id.

        Only content changes; name and MIME type are left as they are.
        """
        if _is_path(new_content):
            with self._open_input(new_content) as fh:
                return self.update_file(file_id, fh)

        try:
            updated = self._srv.files().update(file_id, None).media(new_content).execute()
        except Exception as exc:
            raise RemoteOperationError(f"updating file {file_id}", exc) from exc
        return updated.file_id

    def get_file_by_id(self, file_id: str) -> RemoteFile:
        try:
            return self._srv.files().get(file_id).execute()
        except Exception as exc:
            raise RemoteOperationError(f"getting file with id {file_id}", exc) from exc

    def delete_file(self, file_id: str) -> None:
        """Permanently delete a file (it does not go to the trash)."""
        try:
            self._srv.files().delete(file_id).execute()
        except Exception as exc:
            raise RemoteOperationError(f"deleting file with id {file_id}", exc) from exc

    def download_file(self, file_id: str, output_file: PathLike) -> PathLike:
        """
        Download a file's content to `output_file`, creating or truncating it.

        Returns:
            output_file, unchanged.

        Raises:
            RemoteOperationError: with context "downloading file with id ...",
                "creating output file ..." or "writing output file ..." depending
                on which step failed.
        """
        try:
            body = self._srv.files().get(file_id).download()
        except Exception as exc:
            raise RemoteOperationError(f"downloading file with id {file_id}", exc) from exc

        with closing(body):
            try:
                out = self._open_file(output_file, "wb")
            except Exception as exc:
                raise RemoteOperationError(f"creating output file {output_file}", exc) from exc

            try:
                with out:
                    self._copy_stream(body, out)
            except Exception as exc:
                raise RemoteOperationError(f"writing output file {output_file}", exc) from exc

        logger.debug("downloaded file_id=%s to %s", file_id, output_file)
        return output_file

    # ----------------------------
    # Permissions
    # ----------------------------
    def assign_role_to_user_on_file(
        self, role: Union[Role, str], email_address: str, file_id: str
    ) -> None:
        grant = PermissionGrant.for_user(role, email_address)
        self._assign(grant, file_id, f"to email address {email_address}")

    def assign_role_to_group_on_file(
        self, role: Union[Role, str], email_address: str, file_id: str
    ) -> None:
        grant = PermissionGrant.for_group(role, email_address)
        self._assign(grant, file_id, f"to email address {email_address}")

    def assign_role_to_domain_on_file(
        self, role: Union[Role, str], domain: str, file_id: str
    ) -> None:
        grant = PermissionGrant.for_domain(role, domain)
        self._assign(grant, file_id, f"to domain {domain}")

    def assign_role_to_anyone_on_file(self, role: Union[Role, str], file_id: str) -> None:
        grant = PermissionGrant.for_anyone(role)
        self._assign(grant, file_id, "to anyone")

    # ----------------------------
    # Internals
    # ----------------------------
    def _assign(self, grant: PermissionGrant, file_id: str, target: str) -> None:
        try:
            self._psrv.create(file_id, grant).execute()
        except Exception as exc:
            raise RemoteOperationError(
                f"assigning role {grant.role.value} on file with id {file_id} {target}",
                exc,
            ) from exc

    def _open_input(self, path: PathLike) -> IO[bytes]:
        try:
            return self._open_file(os.fspath(path), "rb")
        except Exception as exc:
            raise RemoteOperationError(f"opening input file {path}", exc) from exc


def new_client(
    credentials_file: str,
    *,
    scopes: Sequence[str] = DEFAULT_SCOPES,
    timeout: Optional[float] = None,
    supports_all_drives: bool = True,
    service_factory: ServiceFactory = build_drive_service,
) -> GoogleDriveClient:
    """
    Authenticate with a credentials file and return a ready client.

    `timeout` (seconds) is applied to the HTTP transport and bounds every
    request made by the returned client.

    Raises:
        RemoteOperationError: "creating drive service: <cause>" if the
            credentials cannot be loaded or the service cannot be built.
        ValueError: if scopes is empty or holds non-string entries.
    """
    scopes = validate_scopes(scopes)
    try:
        resource = service_factory(credentials_file, scopes=scopes, timeout=timeout)
    except Exception as exc:
        raise RemoteOperationError("creating drive service", exc) from exc

    logger.info("drive client ready credentials_file=%s", credentials_file)
    return GoogleDriveClient.from_service(resource, supports_all_drives=supports_all_drives)


def new_client_from_config(
    config: ClientConfig,
    *,
    service_factory: ServiceFactory = build_drive_service,
) -> GoogleDriveClient:
    """Same as new_client, with settings taken from a ClientConfig."""
    return new_client(
        config.credentials_file,
        scopes=config.scopes,
        timeout=config.timeout,
        supports_all_drives=config.supports_all_drives,
        service_factory=service_factory,
    )


def _format_ids(ids: Sequence[str]) -> str:
    return "[" + " ".join(ids) + "]"


def _is_path(value: Any) -> bool:
    return isinstance(value, (str, os.PathLike))


def _stream_name(stream: Any) -> str:
    name = getattr(stream, "name", None)
    if isinstance(name, os.PathLike):
        name = os.fspath(name)
    if not isinstance(name, str) or not name:
        raise ValueError("file must be a path or a file object with a name")
    return name
