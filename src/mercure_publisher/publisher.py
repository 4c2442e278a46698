"""Async publisher posting updates to a Mercure hub."""

from __future__ import annotations

from collections.abc import Coroutine
from typing import Any

import httpx
import structlog

from mercure_publisher.auth.providers import TokenProvider, provider_from_config
from mercure_publisher.auth.validator import validate_jwt
from mercure_publisher.config.models import HubConfig
from mercure_publisher.encoding import encode_update
from mercure_publisher.errors import InvalidToken, TransportError
from mercure_publisher.update import Update

logger = structlog.get_logger()

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Publisher:
    """Publishes updates to a single hub.

    ``client`` is the HTTP transport.  When omitted the publisher creates its
    own ``httpx.AsyncClient`` and closes it in :meth:`aclose`; an injected
    client is left for the caller to close.
    """

    def __init__(
        self,
        hub_url: str,
        jwt_provider: TokenProvider,
        client: httpx.AsyncClient | None = None,
        *,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._hub_url = hub_url
        self._jwt_provider = jwt_provider
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds)
        )

    @classmethod
    def from_config(
        cls,
        config: HubConfig,
        client: httpx.AsyncClient | None = None,
    ) -> Publisher:
        return cls(
            config.url,
            provider_from_config(config.jwt),
            client,
            timeout_seconds=config.timeout_seconds,
        )

    @property
    def hub_url(self) -> str:
        return self._hub_url

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Publisher:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    # -- Publishing ------------------------------------------------------------

    def build_request(self, update: Update, token: str) -> httpx.Request:
        """Build the POST request carrying *update* to the hub."""
        return self._client.build_request(
            "POST",
            self._hub_url,
            content=encode_update(update),
            headers={
                "Authorization": f"Bearer {token}",
                "Content-type": FORM_CONTENT_TYPE,
            },
        )

    def publish(self, update: Update) -> Coroutine[Any, Any, str]:
        """Start publishing *update*; await the result for the hub's response body.

        The token is fetched and validated before anything is sent, so an
        InvalidToken is raised right here rather than from the awaitable.
        """
        token = self._jwt_provider(update)
        try:
            validate_jwt(token)
        except InvalidToken:
            logger.warning(
                "mercure.token.rejected",
                hub_url=self._hub_url,
                topics=list(update.topics),
            )
            raise

        request = self.build_request(update, token)
        return self._send(request, update)

    async def _send(self, request: httpx.Request, update: Update) -> str:
        topics = list(update.topics)
        if self._client.is_closed:
            msg = f"Publisher for {self._hub_url} is closed"
            raise TransportError(msg, hub_url=self._hub_url)

        logger.debug("mercure.publish.sent", hub_url=self._hub_url, topics=topics)
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            logger.error(
                "mercure.publish.failed",
                hub_url=self._hub_url,
                topics=topics,
                error=str(exc),
            )
            msg = f"Failed to reach Mercure hub at {self._hub_url}: {exc}"
            raise TransportError(msg, hub_url=self._hub_url) from exc

        try:
            await response.aread()
        except httpx.HTTPError as exc:
            logger.error(
                "mercure.publish.failed",
                hub_url=self._hub_url,
                topics=topics,
                error=str(exc),
            )
            msg = f"Failed to read Mercure hub response: {exc}"
            raise TransportError(msg, hub_url=self._hub_url) from exc
        finally:
            await response.aclose()

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "mercure.publish.failed",
                hub_url=self._hub_url,
                topics=topics,
                status_code=response.status_code,
            )
            msg = (
                f"Mercure hub rejected the update: "
                f"{response.status_code} {response.text}"
            )
            raise TransportError(
                msg, hub_url=self._hub_url, status_code=response.status_code
            ) from exc

        logger.info(
            "mercure.publish.succeeded",
            hub_url=self._hub_url,
            topics=topics,
            update_id=response.text,
        )
        return response.text
