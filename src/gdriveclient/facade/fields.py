"""Field masks requested from the Drive API."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "parents,"
    "trashed,"
    "modifiedTime,"
    "createdTime,"
    "size,"
    "md5Checksum,"
    "webViewLink"
)

PERMISSION_FIELDS: str = "id,type,role,emailAddress,domain"
