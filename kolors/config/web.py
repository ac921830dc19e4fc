"""Admin API configuration models."""

from __future__ import annotations

from pydantic import Field, field_validator, model_validator

from kolors.config.base import BaseConfig
from kolors.config.utils import resolve_env_reference


class WebAuthConfig(BaseConfig):
    """Header token guarding the ``/admin/migration/api`` routes."""

    enabled: bool = Field(False, description="Require the token on every admin route")
    header_name: str = Field("X-Admin-Token", min_length=1, description="Request header carrying the token")
    token: str | None = Field(
        default=None,
        min_length=1,
        description="Expected token, literal or 'env:VAR_NAME'",
    )

    @field_validator("token")
    @classmethod
    def _blank_token_is_unset(cls, token: str | None) -> str | None:
        if token is None or not token.strip():
            return None
        return token.strip()

    @model_validator(mode="after")
    def _token_required_when_enabled(self) -> "WebAuthConfig":
        if self.enabled and self.token is None:
            raise ValueError("Admin API auth is enabled but no token is configured.")
        return self

    def resolved_token(self) -> str:
        """The token to compare against, with ``env:`` references expanded."""
        return resolve_env_reference(self.token) or ""


class WebConfig(BaseConfig):
    """FastAPI admin application settings, also used as ``kolors serve`` defaults."""

    title: str = Field("Kolors Migration API", min_length=1, description="OpenAPI title")
    host: str = Field("127.0.0.1", min_length=1, description="Bind address for `kolors serve`")
    port: int = Field(8000, ge=1, le=65535, description="Bind port for `kolors serve`")
    auth: WebAuthConfig | None = Field(default=None, description="Optional header-token auth")


__all__ = ["WebAuthConfig", "WebConfig"]
