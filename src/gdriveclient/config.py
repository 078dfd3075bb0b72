"""Client configuration for gdriveclient."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

ENV_CREDENTIALS = "GDRIVECLIENT_CREDENTIALS"
ENV_SCOPES = "GDRIVECLIENT_SCOPES"
ENV_TIMEOUT = "GDRIVECLIENT_TIMEOUT"
ENV_SUPPORTS_ALL_DRIVES = "GDRIVECLIENT_SUPPORTS_ALL_DRIVES"

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def validate_scopes(scopes: Sequence[str]) -> tuple[str, ...]:
    """Return scopes as a tuple; raise ValueError unless they are non-empty strings."""
    if isinstance(scopes, str):
        raise ValueError("scopes must be a sequence of strings, not a string")
    out = tuple(scopes)
    if not out or not all(isinstance(s, str) and s.strip() for s in out):
        raise ValueError("scopes must be a non-empty sequence of strings")
    return out


@dataclass(slots=True, frozen=True)
class ClientConfig:
    """
    Settings used to construct a GoogleDriveClient.

    Attributes:
        credentials_file: Path to a service-account key (or authorized-user) JSON file.
        scopes: OAuth scopes requested for the credentials.
        timeout: Socket timeout in seconds applied to every request; None means no limit.
        supports_all_drives: Send supportsAllDrives=True with every request.
    """

    credentials_file: str
    scopes: tuple[str, ...] = field(default=DEFAULT_SCOPES)
    timeout: Optional[float] = None
    supports_all_drives: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.credentials_file, str) or not self.credentials_file.strip():
            raise ValueError("credentials_file must be a non-empty string")

        object.__setattr__(self, "scopes", validate_scopes(self.scopes))

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """
        Build a config from environment variables.

        Required:
            - GDRIVECLIENT_CREDENTIALS: credentials file path

        Optional:
            - GDRIVECLIENT_SCOPES: comma-separated scopes (default: full drive)
            - GDRIVECLIENT_TIMEOUT: request timeout in seconds
            - GDRIVECLIENT_SUPPORTS_ALL_DRIVES: 0/false/no/off to disable
        """
        env = os.environ if environ is None else environ

        credentials_file = env.get(ENV_CREDENTIALS, "").strip()
        if not credentials_file:
            raise ValueError(f"Missing env var: {ENV_CREDENTIALS}")

        scopes_raw = env.get(ENV_SCOPES, "").strip()
        scopes = DEFAULT_SCOPES
        if scopes_raw:
            scopes = tuple(s.strip() for s in scopes_raw.split(",") if s.strip())

        timeout_raw = env.get(ENV_TIMEOUT, "").strip()
        timeout = None
        if timeout_raw:
            try:
                timeout = float(timeout_raw)
            except ValueError as exc:
                raise ValueError(f"{ENV_TIMEOUT} must be a number") from exc

        all_drives_raw = env.get(ENV_SUPPORTS_ALL_DRIVES, "").strip().lower()
        supports_all_drives = all_drives_raw not in _FALSE_VALUES

        return cls(
            credentials_file=credentials_file,
            scopes=scopes,
            timeout=timeout,
            supports_all_drives=supports_all_drives,
        )
