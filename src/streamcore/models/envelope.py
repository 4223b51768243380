from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Envelope(BaseModel):
    """Logical content of one SSE message before wire formatting.

    ``event`` and ``id`` are optional; when unset their lines are left out of
    the frame. ``data`` is always sent.
    """

    data: Any
    event: str | None = None
    id: str | int | float | None = None


class ChunkedStreamOptions(BaseModel):
    # Merged over the default headers, matching keys case-insensitively
    headers: dict[str, str] = Field(default_factory=dict)


class SSEStreamOptions(BaseModel):
    headers: dict[str, str] = Field(default_factory=dict)
    # Sent as ": <comment>" before the first event
    initial_comment: str | None = None
