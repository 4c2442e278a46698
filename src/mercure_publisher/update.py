"""The Update value published to a Mercure hub."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Update:
    """One message to publish.

    ``topics`` accepts a single topic string or any sequence of topics and is
    stored as a tuple, so instances are hashable and never mutated after
    construction.
    """

    topics: Sequence[str]
    data: str = ""
    private: bool = False
    id: str | None = None
    type: str | None = None
    retry: int | None = None

    def __post_init__(self) -> None:
        topics: str | Sequence[str] = self.topics
        topics = (topics,) if isinstance(topics, str) else tuple(topics)
        if not topics:
            msg = "An update needs at least one topic"
            raise ValueError(msg)
        for topic in topics:
            if not isinstance(topic, str):
                msg = f"Topics must be strings, got {type(topic).__name__}"
                raise TypeError(msg)
        object.__setattr__(self, "topics", topics)

        if self.retry is not None and self.retry < 0:
            msg = f"retry must be non-negative, got {self.retry}"
            raise ValueError(msg)
