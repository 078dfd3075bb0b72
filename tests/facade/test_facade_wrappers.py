import io
import unittest
from unittest.mock import Mock, patch

from googleapiclient.http import MediaIoBaseUpload

from gdriveclient.facade import GoogleDriveService, MediaDownloadStream
from gdriveclient.facade.fields import FILE_FIELDS, PERMISSION_FIELDS
from gdriveclient.models import PermissionGrant, Role


class _FakeDownloader:
    """Stands in for MediaIoBaseDownload: writes one queued chunk per next_chunk()."""

    def __init__(self, fd, chunks, error=None) -> None:
        self.fd = fd
        self.chunks = list(chunks)
        self.error = error

    def next_chunk(self):
        if self.error is not None:
            raise self.error
        self.fd.write(self.chunks.pop(0))
        return None, not self.chunks


def _downloader_factory(chunks, error=None):
    return lambda fd, request, chunksize: _FakeDownloader(fd, chunks, error)


class TestGoogleDriveService(unittest.TestCase):
    def setUp(self) -> None:
        self.resource = Mock()
        self.files = Mock()
        self.permissions = Mock()
        self.request = Mock()
        self.resource.files.return_value = self.files
        self.resource.permissions.return_value = self.permissions
        self.request.execute.return_value = {
            "id": "F1",
            "name": "n",
            "mimeType": "text/plain",
            "parents": ["P1"],
        }
        self.files.create.return_value = self.request
        self.files.get.return_value = self.request
        self.files.update.return_value = self.request
        self.files.delete.return_value = self.request
        self.permissions.create.return_value = self.request

    def test_create_without_media(self) -> None:
        srv = GoogleDriveService(self.resource)
        metadata = {"name": "dir", "mimeType": "application/vnd.google-apps.folder"}

        info = srv.files().create(metadata).execute()

        self.files.create.assert_called_once_with(
            body=metadata,
            media_body=None,
            fields=FILE_FIELDS,
            supportsAllDrives=True,
        )
        self.assertEqual(info.file_id, "F1")
        self.assertEqual(info.parents, ("P1",))

    def test_create_with_media_uses_resumable_upload(self) -> None:
        srv = GoogleDriveService(self.resource)
        stream = io.BytesIO(b"hello")

        call = srv.files().create({"name": "notes.txt"})
        self.assertIs(call.media(stream, "text/plain"), call)
        call.execute()

        media = self.files.create.call_args.kwargs["media_body"]
        self.assertIsInstance(media, MediaIoBaseUpload)
        self.assertTrue(media.resumable())
        self.assertEqual(media.mimetype(), "text/plain")
        self.assertEqual(media.size(), 5)

    def test_media_mime_type_defaults_to_octet_stream_without_a_name(self) -> None:
        srv = GoogleDriveService(self.resource)
        srv.files().create({"name": "blob"}).media(io.BytesIO(b"x")).execute()

        media = self.files.create.call_args.kwargs["media_body"]
        self.assertEqual(media.mimetype(), "application/octet-stream")

    def test_supports_all_drives_can_be_disabled(self) -> None:
        srv = GoogleDriveService(self.resource, supports_all_drives=False)
        srv.files().get("F1").execute()

        self.files.get.assert_called_once_with(fileId="F1", fields=FILE_FIELDS)

    def test_update_passes_no_metadata(self) -> None:
        srv = GoogleDriveService(self.resource)
        info = srv.files().update("F1").media(io.BytesIO(b"new"), "text/plain").execute()

        kwargs = self.files.update.call_args.kwargs
        self.assertEqual(kwargs["fileId"], "F1")
        self.assertIsNone(kwargs["body"])
        self.assertIsInstance(kwargs["media_body"], MediaIoBaseUpload)
        self.assertEqual(info.file_id, "F1")

    def test_delete(self) -> None:
        self.request.execute.return_value = ""
        srv = GoogleDriveService(self.resource)

        self.assertIsNone(srv.files().delete("F1").execute())
        self.files.delete.assert_called_once_with(fileId="F1", supportsAllDrives=True)

    def test_permissions_create_sends_grant_body(self) -> None:
        self.request.execute.return_value = {
            "id": "perm1",
            "type": "domain",
            "role": "reader",
            "domain": "example.com",
        }
        srv = GoogleDriveService(self.resource)
        grant = PermissionGrant.for_domain(Role.READER, "example.com")

        perm = srv.permissions().create("F1", grant).execute()

        self.permissions.create.assert_called_once_with(
            fileId="F1",
            body={"type": "domain", "role": "reader", "domain": "example.com"},
            fields=PERMISSION_FIELDS,
            supportsAllDrives=True,
        )
        self.assertEqual(perm.permission_id, "perm1")
        self.assertEqual(perm.domain, "example.com")

    def test_execute_errors_propagate_unchanged(self) -> None:
        err = RuntimeError("boom")
        self.request.execute.side_effect = err
        srv = GoogleDriveService(self.resource)

        with self.assertRaises(RuntimeError) as ctx:
            srv.files().get("F1").execute()
        self.assertIs(ctx.exception, err)

    def test_download_streams_content(self) -> None:
        srv = GoogleDriveService(self.resource)
        with patch(
            "gdriveclient.facade.wrappers.MediaIoBaseDownload",
            side_effect=_downloader_factory([b"ab", b"cd", b"e"]),
        ):
            body = srv.files().get("F1").download()

        with body:
            self.assertEqual(body.read(), b"abcde")
        self.files.get_media.assert_called_once_with(fileId="F1", supportsAllDrives=True)

    def test_download_raises_remote_error_before_returning(self) -> None:
        srv = GoogleDriveService(self.resource)
        with patch(
            "gdriveclient.facade.wrappers.MediaIoBaseDownload",
            side_effect=_downloader_factory([], error=RuntimeError("download error")),
        ):
            with self.assertRaises(RuntimeError):
                srv.files().get("F1").download()

    def test_rejects_non_positive_chunk_size(self) -> None:
        with self.assertRaises(ValueError):
            GoogleDriveService(self.resource, download_chunk_size=0)


class TestMediaDownloadStream(unittest.TestCase):
    def test_readinto_holds_one_chunk_at_a_time(self) -> None:
        with patch(
            "gdriveclient.facade.wrappers.MediaIoBaseDownload",
            side_effect=_downloader_factory([b"1234", b"56"]),
        ):
            stream = MediaDownloadStream(Mock(), chunk_size=4)

        self.assertEqual(stream.read(3), b"123")
        self.assertEqual(stream.read(3), b"4")
        self.assertEqual(stream.read(3), b"56")
        self.assertEqual(stream.read(3), b"")

    def test_empty_content(self) -> None:
        with patch(
            "gdriveclient.facade.wrappers.MediaIoBaseDownload",
            side_effect=_downloader_factory([b""]),
        ):
            stream = MediaDownloadStream(Mock())

        self.assertEqual(stream.read(), b"")


if __name__ == "__main__":
    unittest.main()
