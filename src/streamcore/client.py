from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any

import httpx

from streamcore.models.envelope import Envelope


async def parse_ndjson_stream(response: httpx.Response) -> AsyncIterator[Any]:
    """Decode an NDJSON body, one value per non-blank line.

    Raises ``json.JSONDecodeError`` on a malformed line.
    """
    async for line in response.aiter_lines():
        line = line.strip()
        if line:
            yield json.loads(line)


def _decode_data(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


async def parse_sse_stream(response: httpx.Response) -> AsyncIterator[Envelope]:
    """Assemble SSE frames from a streaming response into envelopes.

    Comment lines are skipped. Multiple ``data:`` lines in one frame are
    joined with newlines before decoding. Ids come back as text.
    """
    event: str | None = None
    event_id: str | None = None
    data_lines: list[str] = []

    async for line in response.aiter_lines():
        if not line:
            if data_lines:
                yield Envelope(
                    data=_decode_data("\n".join(data_lines)),
                    event=event,
                    id=event_id,
                )
            event, event_id, data_lines = None, None, []
            continue

        if line.startswith(":"):
            continue

        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]

        if field == "event":
            event = value
        elif field == "id":
            event_id = value
        elif field == "data":
            data_lines.append(value)

    # Body closed without a trailing blank line
    if data_lines:
        yield Envelope(data=_decode_data("\n".join(data_lines)), event=event, id=event_id)
