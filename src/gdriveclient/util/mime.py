from __future__ import annotations

import mimetypes
from typing import Optional

FOLDER_MIME: str = "application/vnd.google-apps.folder"
DEFAULT_CONTENT_MIME: str = "application/octet-stream"


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def guess_content_mime(name: Optional[str]) -> str:
    """
    Guess the MIME type for uploaded content from its file name.

    Falls back to application/octet-stream when the name is missing or unknown.
    """
    if not name:
        return DEFAULT_CONTENT_MIME
    guessed, _ = mimetypes.guess_type(name)
    return guessed or DEFAULT_CONTENT_MIME
