from __future__ import annotations

import logging
import random
from collections.abc import AsyncIterator
from datetime import datetime, timezone

from streamcore.models.envelope import Envelope
from streamcore.services.streaming import delay

logger = logging.getLogger("streamcore.demo")


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


async def generate_stream_data(
    count: int = 10,
    initial_delay_s: float = 0.5,
    interval_s: float = 1.0,
) -> AsyncIterator[dict]:
    """Yield ``count`` chunks with simulated generation latency."""
    for i in range(1, count + 1):
        await delay(initial_delay_s)

        yield {
            "iteration": i,
            "timestamp": _timestamp(),
            "message": f"Dynamically generated response {i}",
            "content": (
                f"This is content chunk {i}. In a real scenario, this could be "
                "AI-generated text that's being streamed as it's created."
            ),
            "randomValue": random.randint(0, 99),
        }

        if i < count:
            await delay(interval_s)

    logger.debug("Chunk demo produced %d items", count)


async def generate_sse_events(
    count: int = 10,
    initial_delay_s: float = 0.5,
    interval_s: float = 2.0,
) -> AsyncIterator[Envelope]:
    """Yield alternating notification/update events, then a complete event."""
    for i in range(1, count + 1):
        await delay(initial_delay_s)

        event_type = "update" if i % 2 == 0 else "notification"
        yield Envelope(
            data={
                "iteration": i,
                "timestamp": _timestamp(),
                "message": f"SSE Event {i}",
                "content": (
                    f"This is server-sent event number {i}. "
                    "SSE is great for real-time updates."
                ),
                "eventType": event_type,
                "randomValue": random.randint(0, 99),
            },
            event=event_type,
            id=i,
        )

        if i < count:
            await delay(interval_s)

    # The client closes its EventSource on this event instead of reconnecting
    yield Envelope(data={"status": "Stream completed successfully"}, event="complete")
