#!/usr/bin/env python3
"""Runnable demo: publish a few updates to a local Mercure hub.

Prerequisites:
    docker run -p 3000:80 -e MERCURE_PUBLISHER_JWT_KEY='!ChangeThisMercureHubJWTSecretKey!' \
        -e MERCURE_SUBSCRIBER_JWT_KEY='!ChangeThisMercureHubJWTSecretKey!' dunglas/mercure
    MERCURE_PUBLISHER_JWT_KEY='!ChangeThisMercureHubJWTSecretKey!' \
        uv run python examples/publish_demo.py
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

from rich.console import Console

from mercure_publisher import PublishError, Publisher, Update
from mercure_publisher.config.loader import load_hub_config

console = Console()


async def main() -> None:
    # 1. Hub URL and publisher key from examples/hub.yaml + environment
    config = load_hub_config(Path(__file__).parent / "hub.yaml")
    console.print("[bold]Hub:[/bold]", config.url)

    async with Publisher.from_config(config) as publisher:
        # 2. A public update fanned out to two topics
        book = Update(
            topics=["https://example.com/books/1", "https://example.com/books"],
            data=json.dumps({"@id": "/books/1", "title": "Les Misérables"}),
        )
        # 3. A private update with SSE metadata
        notice = Update(
            topics="https://example.com/users/dunglas",
            data=json.dumps({"status": "shipped"}),
            private=True,
            type="order",
            retry=5000,
        )

        # 4. Publish both concurrently
        ids = await asyncio.gather(publisher.publish(book), publisher.publish(notice))
        for update, update_id in zip((book, notice), ids, strict=True):
            console.print(f"[green]Published[/green] {update_id} → {update.topics}")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except PublishError as exc:
        console.print(f"[red]Publish failed:[/red] {exc}")
        sys.exit(1)
