"""Configuration namespace for kolors."""

from __future__ import annotations

from .app import AppConfig
from .backup import BackupConfig
from .base import BaseConfig, load_config
from .migration import MigrationConfig, StorageConfig
from .utils import resolve_env_reference, resolve_path
from .web import WebAuthConfig, WebConfig

__all__ = [
    "BaseConfig",
    "AppConfig",
    "load_config",
    "BackupConfig",
    "MigrationConfig",
    "StorageConfig",
    "WebAuthConfig",
    "WebConfig",
    "resolve_env_reference",
    "resolve_path",
]
