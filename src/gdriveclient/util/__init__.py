from .mime import (
    DEFAULT_CONTENT_MIME,
    FOLDER_MIME,
    guess_content_mime,
    is_folder,
)
from .time import parse_rfc3339, to_rfc3339

__all__ = [
    "FOLDER_MIME",
    "DEFAULT_CONTENT_MIME",
    "is_folder",
    "guess_content_mime",
    "parse_rfc3339",
    "to_rfc3339",
]
