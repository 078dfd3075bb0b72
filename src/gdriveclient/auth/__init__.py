"""Public auth exports for gdriveclient."""

from __future__ import annotations

from .service import build_drive_service, load_credentials

__all__ = ["build_drive_service", "load_credentials"]
