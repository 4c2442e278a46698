"""Token providers supplying the bearer JWT for each publish.

A provider is any callable taking an optional Update and returning a token
string.  The publisher calls it exactly once per publish.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import jwt

if TYPE_CHECKING:
    from mercure_publisher.config.models import JwtConfig
    from mercure_publisher.update import Update


@runtime_checkable
class TokenProvider(Protocol):
    """Protocol every token provider must satisfy."""

    def __call__(self, update: Update | None = None) -> str:
        """Return the JWT authorizing the publish of *update*."""
        ...


class StaticJwtProvider:
    """Returns the same pre-issued token for every update."""

    def __init__(self, token: str) -> None:
        self._token = token

    def __call__(self, update: Update | None = None) -> str:
        return self._token

    def __repr__(self) -> str:
        return "StaticJwtProvider(token=***)"


class HmacJwtProvider:
    """Mints an HMAC-signed publisher JWT with PyJWT.

    With ``publish=None`` the ``mercure.publish`` claim is narrowed to the
    topics of the update being published.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        publish: Sequence[str] | None = ("*",),
        ttl_seconds: int | None = None,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._publish = list(publish) if publish is not None else None
        self._ttl_seconds = ttl_seconds

    def claims(self, update: Update | None = None) -> dict[str, Any]:
        if self._publish is not None:
            targets = self._publish
        elif update is not None:
            targets = list(update.topics)
        else:
            targets = ["*"]

        payload: dict[str, Any] = {"mercure": {"publish": targets}}
        if self._ttl_seconds is not None:
            payload["exp"] = int(time.time()) + self._ttl_seconds
        return payload

    def __call__(self, update: Update | None = None) -> str:
        return jwt.encode(
            self.claims(update),
            self._secret,
            algorithm=self._algorithm,
        )

    def __repr__(self) -> str:
        return (
            f"HmacJwtProvider(algorithm={self._algorithm!r}, "
            f"publish={self._publish!r})"
        )


def provider_from_config(config: JwtConfig) -> TokenProvider:
    """Build the provider described by a JwtConfig."""
    if config.token is not None:
        return StaticJwtProvider(config.token.get_secret_value())
    if config.secret is not None:
        return HmacJwtProvider(
            config.secret.get_secret_value(),
            algorithm=config.algorithm.value,
            publish=config.publish,
            ttl_seconds=config.ttl_seconds,
        )
    msg = "JWT config needs either a token or a secret"
    raise ValueError(msg)
