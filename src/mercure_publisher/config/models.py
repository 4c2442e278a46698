"""Pydantic configuration models for the hub client."""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator


class JwtAlgorithm(StrEnum):
    """HMAC algorithms accepted for minting publisher tokens."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"


class JwtConfig(BaseModel, extra="forbid"):
    """How the publisher obtains its bearer token.

    Either a pre-issued ``token`` or a shared ``secret`` used to mint one per
    update.  ``publish=None`` scopes minted tokens to the update's own topics.
    """

    token: SecretStr | None = None
    secret: SecretStr | None = None
    algorithm: JwtAlgorithm = JwtAlgorithm.HS256
    publish: list[str] | None = Field(default_factory=lambda: ["*"])
    ttl_seconds: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def validate_token_source(self) -> Self:
        if (self.token is None) == (self.secret is None):
            msg = "Exactly one of 'token' or 'secret' must be set"
            raise ValueError(msg)
        return self


class HubConfig(BaseModel, extra="forbid"):
    """Mercure hub endpoint and publisher credentials."""

    url: str
    timeout_seconds: float = Field(default=10.0, gt=0)
    jwt: JwtConfig

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            msg = f"Hub URL '{v}' must start with http:// or https://"
            raise ValueError(msg)
        return v
