"""Command-line interface for gdriveclient."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Callable, Optional, Sequence

from gdriveclient.client import GoogleDriveClient, new_client_from_config
from gdriveclient.config import ENV_CREDENTIALS, ClientConfig
from gdriveclient.errors import GDriveClientError
from gdriveclient.models import RemoteFile, Role
from gdriveclient.util.time import to_rfc3339

ClientFactory = Callable[[ClientConfig], GoogleDriveClient]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gdriveclient",
        description="Create, upload, download and share files on Google Drive.",
    )
    parser.add_argument(
        "-c",
        "--creds",
        help=f"credentials JSON file (default: ${ENV_CREDENTIALS})",
    )
    parser.add_argument("--timeout", type=float, help="request timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("create-folder", help="create a folder and print its id")
    p.add_argument("name")
    p.add_argument("--parent", action="append", default=[], help="parent folder id")

    p = sub.add_parser("upload", help="upload a local file and print its id")
    p.add_argument("path")
    p.add_argument("--parent", action="append", default=[], help="parent folder id")

    p = sub.add_parser("update", help="replace a file's content")
    p.add_argument("file_id")
    p.add_argument("path")

    p = sub.add_parser("get", help="print a file's metadata as JSON")
    p.add_argument("file_id")

    p = sub.add_parser("delete", help="permanently delete a file")
    p.add_argument("file_id")

    p = sub.add_parser("download", help="download a file's content")
    p.add_argument("file_id")
    p.add_argument("output")

    p = sub.add_parser("assign-role", help="grant a role on a file")
    p.add_argument("file_id")
    p.add_argument("--role", required=True, choices=[r.value for r in Role])
    grantee = p.add_mutually_exclusive_group(required=True)
    grantee.add_argument("--user", metavar="EMAIL")
    grantee.add_argument("--group", metavar="EMAIL")
    grantee.add_argument("--domain")
    grantee.add_argument("--anyone", action="store_true")

    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    client_factory: ClientFactory = new_client_from_config,
) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        config = _load_config(args)
        client = client_factory(config)
        _run(client, args)
    except (GDriveClientError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


def _load_config(args: argparse.Namespace) -> ClientConfig:
    if args.creds:
        return ClientConfig(credentials_file=args.creds, timeout=args.timeout)
    config = ClientConfig.from_env()
    if args.timeout is not None:
        config = ClientConfig(
            credentials_file=config.credentials_file,
            scopes=config.scopes,
            timeout=args.timeout,
            supports_all_drives=config.supports_all_drives,
        )
    return config


def _run(client: GoogleDriveClient, args: argparse.Namespace) -> None:
    cmd = args.command
    if cmd == "create-folder":
        print(client.create_folder(args.name, *args.parent))
    elif cmd == "upload":
        print(client.upload_file(args.path, *args.parent))
    elif cmd == "update":
        print(client.update_file(args.file_id, args.path))
    elif cmd == "get":
        info = client.get_file_by_id(args.file_id)
        print(json.dumps(_file_to_json(info), indent=2))
    elif cmd == "delete":
        client.delete_file(args.file_id)
        print(f"file {args.file_id} deleted")
    elif cmd == "download":
        path = client.download_file(args.file_id, args.output)
        print(f"file was downloaded to {path}")
    elif cmd == "assign-role":
        _assign_role(client, args)
    else:  # pragma: no cover
        raise ValueError(f"unknown command: {cmd}")


def _assign_role(client: GoogleDriveClient, args: argparse.Namespace) -> None:
    if args.user is not None:
        client.assign_role_to_user_on_file(args.role, args.user, args.file_id)
        target = f"user {args.user}"
    elif args.group is not None:
        client.assign_role_to_group_on_file(args.role, args.group, args.file_id)
        target = f"group {args.group}"
    elif args.domain is not None:
        client.assign_role_to_domain_on_file(args.role, args.domain, args.file_id)
        target = f"domain {args.domain}"
    elif args.anyone:
        client.assign_role_to_anyone_on_file(args.role, args.file_id)
        target = "anyone"
    else:  # pragma: no cover
        raise ValueError("a grantee is required")
    print(f"role {args.role} assigned to {target}")


def _file_to_json(info: RemoteFile) -> dict[str, Any]:
    return {
        "id": info.file_id,
        "name": info.name,
        "mimeType": info.mime_type,
        "parents": list(info.parents),
        "trashed": info.trashed,
        "size": info.size,
        "md5Checksum": info.md5_checksum,
        "createdTime": to_rfc3339(info.created_time) if info.created_time else None,
        "modifiedTime": to_rfc3339(info.modified_time) if info.modified_time else None,
        "webViewLink": info.web_view_link,
    }
