from fastapi import APIRouter, Request

from streamcore.config import get_settings
from streamcore.models.envelope import SSEStreamOptions
from streamcore.services.demo import generate_sse_events
from streamcore.services.streaming import build_sse_response

router = APIRouter(prefix="/api", tags=["sse"])


@router.get("/sse")
async def sse(request: Request):
    """Server-Sent Events stream of notification/update events.

    Event ids are emitted but ``Last-Event-ID`` is not honoured on reconnect;
    every connection replays the producer from the start.
    """
    settings = get_settings()
    producer = generate_sse_events(
        count=settings.demo_item_count,
        initial_delay_s=settings.demo_initial_delay_s,
        interval_s=settings.demo_interval_s,
    )
    options = SSEStreamOptions(initial_comment=settings.sse_initial_comment or None)
    return build_sse_response(producer, options, request=request)
