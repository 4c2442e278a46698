"""Async client publishing updates to a Mercure hub."""

from mercure_publisher.auth.providers import (
    HmacJwtProvider,
    StaticJwtProvider,
    TokenProvider,
)
from mercure_publisher.auth.validator import validate_jwt
from mercure_publisher.encoding import encode_update
from mercure_publisher.errors import InvalidToken, PublishError, TransportError
from mercure_publisher.publisher import Publisher
from mercure_publisher.update import Update

__all__ = [
    "HmacJwtProvider",
    "InvalidToken",
    "PublishError",
    "Publisher",
    "StaticJwtProvider",
    "TokenProvider",
    "TransportError",
    "Update",
    "encode_update",
    "validate_jwt",
]
