"""Credential loading and Drive service construction."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import google.auth
import google_auth_httplib2
import httplib2
from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build

from gdriveclient.config import DEFAULT_SCOPES, validate_scopes
from gdriveclient.errors import AuthError

logger = logging.getLogger(__name__)


def load_credentials(credentials_file: str, scopes: Sequence[str]):
    """
    Load credentials from a JSON key file.

    Service-account keys and authorized-user files are both accepted; the
    format is owned by google-auth.

    Returns:
        google.auth.credentials.Credentials

    Raises:
        AuthError: if the file is missing or not a valid credentials file.
    """
    scopes = validate_scopes(scopes)

    try:
        creds, _project_id = google.auth.load_credentials_from_file(
            credentials_file,
            scopes=list(scopes),
        )
    except GoogleAuthError as exc:
        raise AuthError(
            str(exc),
            details={"credentials_file": credentials_file},
            cause=exc,
        ) from exc
    return creds


def build_drive_service(
    credentials_file: str,
    *,
    scopes: Sequence[str] = DEFAULT_SCOPES,
    timeout: Optional[float] = None,
) -> Any:
    """
    Build an authenticated Drive v3 resource.

    `timeout` is set on the HTTP transport and bounds every request made
    through the returned resource.

    Returns:
        googleapiclient.discovery.Resource
    """
    creds = load_credentials(credentials_file, scopes)
    http = google_auth_httplib2.AuthorizedHttp(creds, http=httplib2.Http(timeout=timeout))
    try:
        resource = build("drive", "v3", http=http, cache_discovery=False)
    except Exception as exc:
        raise AuthError(f"failed to build Drive service: {exc}", cause=exc) from exc

    logger.debug("built drive v3 service scopes=%s timeout=%s", list(scopes), timeout)
    return resource
