"""Web API for the migration engine."""

from .app import create_app

__all__ = ["create_app"]
