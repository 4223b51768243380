from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from streamcore.models.envelope import Envelope
from streamcore.utils.serialization import dumps_compact


def as_envelope(message: Envelope | Mapping[str, Any]) -> Envelope:
    if isinstance(message, Envelope):
        return message
    return Envelope.model_validate(message)


def format_sse_message(message: Envelope | Mapping[str, Any]) -> str:
    """Format one message into an SSE frame.

    >>> format_sse_message(Envelope(data={"count": 1}, event="update", id=1))
    'event: update\\nid: 1\\ndata: {"count":1}\\n\\n'

    Text data is sent verbatim and must not contain newlines; anything else
    is JSON-encoded.
    """
    message = as_envelope(message)
    lines: list[str] = []

    if message.event:
        lines.append(f"event: {message.event}")

    if message.id is not None:
        lines.append(f"id: {message.id}")

    if isinstance(message.data, str):
        payload = message.data
    else:
        payload = dumps_compact(message.data)
    lines.append(f"data: {payload}")

    # Blank line ends the message
    lines.append("")
    lines.append("")
    return "\n".join(lines)


def format_sse_comment(text: str) -> str:
    return f": {text}\n\n"


def format_sse_error(message: str) -> str:
    return format_sse_message(Envelope(data={"error": message}, event="error"))
