"""Exceptions raised by the Mercure publisher."""

from __future__ import annotations


class PublishError(Exception):
    """Base class for every publish failure."""


class InvalidToken(PublishError, ValueError):
    """Raised when a token is not a structurally valid compact JWT."""


class TransportError(PublishError):
    """Raised when the hub could not be reached or rejected the update.

    The underlying httpx exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        hub_url: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.hub_url = hub_url
        self.status_code = status_code
