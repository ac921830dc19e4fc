"""Backup utilities for kolors."""

from .service import MANIFEST_MEMBER, RECORDS_MEMBER, BackupResult, BackupService

__all__ = [
    "BackupService",
    "BackupResult",
    "MANIFEST_MEMBER",
    "RECORDS_MEMBER",
]
