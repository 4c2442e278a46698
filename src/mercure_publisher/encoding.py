"""Form encoding of updates into the body a Mercure hub expects."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from urllib.parse import quote_plus

from mercure_publisher.update import Update

FormValue = str | int | Sequence[str] | None


def _pair(key: str, value: str | int) -> str:
    # Keys come from a fixed set of protocol field names and are emitted as-is.
    return f"{key}={quote_plus(str(value))}"


def build_query(fields: Mapping[str, FormValue]) -> str:
    """Encode *fields* as ``application/x-www-form-urlencoded``.

    ``None`` values are skipped.  A list or tuple yields one pair per item,
    in order, under the same key.
    """
    parts: list[str] = []
    for key, value in fields.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            parts.extend(_pair(key, item) for item in value)
            continue
        parts.append(_pair(key, value))  # type: ignore[arg-type]
    return "&".join(parts)


def update_fields(update: Update) -> dict[str, FormValue]:
    """Map an update onto the hub's form fields, in protocol order."""
    return {
        "topic": list(update.topics),
        "data": update.data,
        "private": "on" if update.private else None,
        "id": update.id,
        "type": update.type,
        "retry": update.retry,
    }


def encode_update(update: Update) -> str:
    """Return the request body for publishing *update*."""
    return build_query(update_fields(update))
