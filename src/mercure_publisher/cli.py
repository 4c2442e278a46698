"""Typer CLI for publishing to a Mercure hub."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from mercure_publisher.auth.providers import provider_from_config
from mercure_publisher.auth.validator import is_valid_jwt
from mercure_publisher.config.loader import load_hub_config
from mercure_publisher.config.models import HubConfig
from mercure_publisher.errors import PublishError, TransportError
from mercure_publisher.publisher import Publisher
from mercure_publisher.update import Update

console = Console()
app = typer.Typer(name="mercure", help="Mercure hub publisher CLI")


def _load(
    config_path: str | None,
    hub_url: str | None = None,
    token: str | None = None,
) -> HubConfig:
    overrides: dict[str, Any] = {}
    if hub_url is not None:
        overrides["url"] = hub_url
    if token is not None:
        overrides["jwt"] = {"token": token, "secret": None}
    if config_path is not None and not Path(config_path).exists():
        console.print(f"[red]Config file not found: {config_path}[/red]")
        raise typer.Exit(1)
    try:
        return load_hub_config(config_path, overrides=overrides)
    except (ValueError, TypeError) as exc:
        console.print(f"[red]Config error:[/red] {exc}")
        raise typer.Exit(1) from exc


async def _publish_with_retry(
    config: HubConfig, update: Update, attempts: int
) -> str:
    async with Publisher.from_config(config) as publisher:

        @retry(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=0.5, max=10),
            retry=retry_if_exception_type(TransportError),
            reraise=True,
        )
        async def _send() -> str:
            return await publisher.publish(update)

        return await _send()


@app.command()
def publish(
    topic: list[str] = typer.Option(..., "--topic", "-t", help="Topic (repeatable)"),
    data: str = typer.Option("", "--data", "-d", help="Update payload"),
    private: bool = typer.Option(False, "--private", help="Private update"),
    update_id: str | None = typer.Option(None, "--id", help="Update ID"),
    update_type: str | None = typer.Option(None, "--type", help="SSE event type"),
    retry_ms: int | None = typer.Option(
        None, "--retry", min=0, help="Reconnection delay hint (ms)"
    ),
    config_path: str | None = typer.Option(None, "--config", help="Hub YAML"),
    hub_url: str | None = typer.Option(None, "--hub-url", help="Hub URL"),
    token: str | None = typer.Option(None, "--token", help="Publisher JWT"),
    attempts: int = typer.Option(
        1, "--attempts", min=1, help="Attempts on transport failure"
    ),
) -> None:
    """Publish one update and print the ID assigned by the hub."""
    config = _load(config_path, hub_url, token)
    update = Update(
        topics=tuple(topic),
        data=data,
        private=private,
        id=update_id,
        type=update_type,
        retry=retry_ms,
    )
    try:
        result = asyncio.run(_publish_with_retry(config, update, attempts))
    except PublishError as exc:
        console.print(f"[red]Publish failed:[/red] {exc}")
        raise typer.Exit(1) from exc
    console.print(f"[green]Published[/green] {result}")


@app.command("validate-token")
def validate_token(
    token: str = typer.Argument(..., help="JWT to check"),
) -> None:
    """Check that a token has the compact JWT shape."""
    if not is_valid_jwt(token):
        console.print("[red]Invalid[/red]: not a compact JWT")
        raise typer.Exit(1)
    console.print("[green]Valid[/green]")


@app.command()
def token(
    config_path: str | None = typer.Option(None, "--config", help="Hub YAML"),
    topic: list[str] | None = typer.Option(
        None, "--topic", "-t", help="Topic to scope the token to (repeatable)"
    ),
) -> None:
    """Print the publisher token for the configured credentials."""
    config = _load(config_path)
    provider = provider_from_config(config.jwt)
    update = Update(topics=tuple(topic)) if topic else None
    console.print(provider(update), soft_wrap=True)


@app.command()
def validate(
    config_path: str = typer.Argument(..., help="Path to hub YAML"),
) -> None:
    """Validate a hub configuration file."""
    config = _load(config_path)
    source = "token" if config.jwt.token is not None else "secret"
    console.print(f"[green]Valid[/green]: hub={config.url}")
    console.print(f"  timeout: {config.timeout_seconds}s")
    console.print(f"  jwt:     {source} ({config.jwt.algorithm})")
    if source == "secret":
        scope = config.jwt.publish if config.jwt.publish is not None else "(topics)"
        console.print(f"  publish: {scope}")
