import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from gdriveclient.cli import main
from gdriveclient.client import GoogleDriveClient
from gdriveclient.errors import RemoteOperationError
from gdriveclient.models import GranteeType, Role
from gdriveclient.testing import InMemoryDriveService


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self.drive = InMemoryDriveService()
        self.client = GoogleDriveClient(self.drive)
        self.configs = []

    def _factory(self, config):
        self.configs.append(config)
        return self.client

    def _run(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(["-c", "creds.json", *argv], client_factory=self._factory)
        return code, out.getvalue(), err.getvalue()

    def test_create_folder_prints_id(self) -> None:
        code, out, _ = self._run("create-folder", "reports", "--parent", "P1")

        self.assertEqual(code, 0)
        folder_id = out.strip()
        self.assertEqual(self.drive.files_by_id[folder_id].parents, ("P1",))
        self.assertEqual(self.configs[0].credentials_file, "creds.json")

    def test_upload_and_download(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "notes.txt"
            src.write_bytes(b"hello")
            code, out, _ = self._run("upload", str(src))
            self.assertEqual(code, 0)
            file_id = out.strip()

            dst = Path(tmp) / "copy.txt"
            code, out, _ = self._run("download", file_id, str(dst))
            self.assertEqual(code, 0)
            self.assertEqual(dst.read_bytes(), b"hello")
            self.assertIn(str(dst), out)

    def test_update(self) -> None:
        existing = self.drive.add_file("a.txt", b"old")
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "a.txt"
            src.write_bytes(b"new")
            code, out, _ = self._run("update", existing.file_id, str(src))

        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), existing.file_id)
        self.assertEqual(self.drive.contents[existing.file_id], b"new")

    def test_get_prints_json(self) -> None:
        existing = self.drive.add_file("a.txt", b"abc", mime_type="text/plain")

        code, out, _ = self._run("get", existing.file_id)

        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["id"], existing.file_id)
        self.assertEqual(payload["mimeType"], "text/plain")
        self.assertEqual(payload["size"], 3)

    def test_delete(self) -> None:
        existing = self.drive.add_file("a.txt")

        code, _, _ = self._run("delete", existing.file_id)

        self.assertEqual(code, 0)
        self.assertNotIn(existing.file_id, self.drive.files_by_id)

    def test_assign_role_variants(self) -> None:
        file_id = self.drive.add_file("a.txt").file_id
        cases = [
            (["--user", "a@example.com"], GranteeType.USER),
            (["--group", "g@example.com"], GranteeType.GROUP),
            (["--domain", "example.com"], GranteeType.DOMAIN),
            (["--anyone"], GranteeType.ANYONE),
        ]
        for extra, kind in cases:
            with self.subTest(kind=kind):
                code, _, _ = self._run("assign-role", file_id, "--role", "reader", *extra)
                self.assertEqual(code, 0)
                grant = self.drive.grants[file_id][-1]
                self.assertIs(grant.grantee_type, kind)
                self.assertIs(grant.role, Role.READER)

    def test_assign_role_empty_grantee_exits_1_without_granting(self) -> None:
        file_id = self.drive.add_file("a.txt").file_id
        for flag in ("--user", "--group", "--domain"):
            with self.subTest(flag=flag):
                code, out, err = self._run(
                    "assign-role", file_id, "--role", "writer", flag, ""
                )
                self.assertEqual(code, 1)
                self.assertEqual(out, "")
                self.assertIn("require", err)
        self.assertNotIn(file_id, self.drive.grants)
        self.assertEqual(self.drive.calls, [])

    def test_remote_error_exits_1(self) -> None:
        self.drive.fail("files.get", RuntimeError("boom"))

        code, out, err = self._run("get", "F1")

        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("getting file with id F1: boom", err)

    def test_construction_error_exits_1(self) -> None:
        def failing_factory(config):
            raise RemoteOperationError("creating drive service", RuntimeError("bad creds"))

        err = io.StringIO()
        with redirect_stderr(err):
            code = main(["-c", "x.json", "get", "F1"], client_factory=failing_factory)

        self.assertEqual(code, 1)
        self.assertIn("creating drive service: bad creds", err.getvalue())

    def test_credentials_from_env(self) -> None:
        env = {"GDRIVECLIENT_CREDENTIALS": "env-creds.json", "GDRIVECLIENT_TIMEOUT": "4"}
        with patch.dict("os.environ", env, clear=False), redirect_stdout(io.StringIO()):
            code = main(["--timeout", "9", "create-folder", "x"], client_factory=self._factory)

        self.assertEqual(code, 0)
        self.assertEqual(self.configs[0].credentials_file, "env-creds.json")
        self.assertEqual(self.configs[0].timeout, 9)

    def test_missing_credentials_exits_1(self) -> None:
        err = io.StringIO()
        with patch.dict("os.environ", {}, clear=True), redirect_stderr(err):
            code = main(["get", "F1"], client_factory=self._factory)

        self.assertEqual(code, 1)
        self.assertIn("GDRIVECLIENT_CREDENTIALS", err.getvalue())


if __name__ == "__main__":
    unittest.main()
