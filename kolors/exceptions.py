"""
Custom exception classes for the kolors migration engine.
"""

from __future__ import annotations


class KolorsError(Exception):
    """Base exception for kolors errors."""


class StorageError(KolorsError):
    """Raised when a combination cannot be read from or written to the current store."""


class LegacySourceError(KolorsError):
    """Raised when the legacy source cannot be read at all."""


class BackupError(KolorsError):
    """Raised when a legacy snapshot cannot be written."""
