from fastapi import APIRouter, Request

from streamcore.config import get_settings
from streamcore.services.demo import generate_stream_data
from streamcore.services.streaming import build_chunked_response

router = APIRouter(prefix="/api", tags=["stream"])


@router.get("/stream")
async def stream(request: Request):
    """Newline-delimited JSON stream, one object per generated chunk."""
    settings = get_settings()
    producer = generate_stream_data(
        count=settings.demo_item_count,
        initial_delay_s=settings.demo_initial_delay_s,
        interval_s=settings.demo_interval_s,
    )
    return build_chunked_response(producer, request=request)
