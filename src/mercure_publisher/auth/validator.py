"""Structural validation of compact JWTs."""

from __future__ import annotations

import re

from mercure_publisher.errors import InvalidToken

# header.payload.signature; the signature segment may be empty (alg "none").
# Syntax only, signatures are never verified here.
_JWT_PATTERN = re.compile(r"^[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]*$")


def is_valid_jwt(token: str) -> bool:
    return _JWT_PATTERN.fullmatch(token) is not None


def validate_jwt(token: str) -> None:
    """Raise InvalidToken unless *token* has the three-segment JWT shape."""
    if not isinstance(token, str) or not is_valid_jwt(token):
        msg = "The provided JWT is not valid"
        raise InvalidToken(msg)
