"""Data model for Drive files."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from gdriveclient.util.mime import is_folder
from gdriveclient.util.time import parse_rfc3339


@dataclass(slots=True, frozen=True)
class RemoteFile:
    """
    A Drive file as returned by one API call.

    Notes:
        - Folders are RemoteFiles whose mime_type is the Drive folder type.
        - Instances are snapshots of a single response; Drive holds the
          authoritative state.
    """

    file_id: str
    name: str
    mime_type: str
    parents: tuple[str, ...] = ()

    trashed: bool = False
    size: Optional[int] = None
    md5_checksum: Optional[str] = None
    created_time: Optional[datetime] = None
    modified_time: Optional[datetime] = None
    web_view_link: Optional[str] = None

    @property
    def is_folder(self) -> bool:
        return is_folder(self.mime_type)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RemoteFile":
        """Build a RemoteFile from a Drive v3 `files` resource dict."""
        file_id = data.get("id")
        name = data.get("name")
        mime_type = data.get("mimeType")
        parents = data.get("parents") or []

        size = None
        if isinstance(data.get("size"), str) and data["size"].isdigit():
            size = int(data["size"])
        elif isinstance(data.get("size"), int):
            size = data["size"]

        md5 = data.get("md5Checksum")
        link = data.get("webViewLink")

        return cls(
            file_id=file_id if isinstance(file_id, str) else "",
            name=name if isinstance(name, str) else "",
            mime_type=mime_type if isinstance(mime_type, str) else "",
            parents=tuple(parents) if isinstance(parents, list) else (),
            trashed=bool(data.get("trashed", False)),
            size=size,
            md5_checksum=md5 if isinstance(md5, str) else None,
            created_time=_parse_time(data.get("createdTime")),
            modified_time=_parse_time(data.get("modifiedTime")),
            web_view_link=link if isinstance(link, str) else None,
        )


def _parse_time(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        return parse_rfc3339(value)
    except ValueError:
        return None
