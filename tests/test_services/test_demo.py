import pytest

from streamcore.models.envelope import Envelope
from streamcore.services.demo import generate_sse_events, generate_stream_data


@pytest.mark.asyncio
async def test_stream_data_items():
    items = [item async for item in generate_stream_data(count=3, initial_delay_s=0, interval_s=0)]

    assert [item["iteration"] for item in items] == [1, 2, 3]
    for item in items:
        assert item["message"].startswith("Dynamically generated response")
        assert 0 <= item["randomValue"] <= 99
        assert "timestamp" in item


@pytest.mark.asyncio
async def test_sse_events_alternate_and_complete():
    events = [e async for e in generate_sse_events(count=4, initial_delay_s=0, interval_s=0)]

    assert len(events) == 5
    assert all(isinstance(e, Envelope) for e in events)
    assert [e.event for e in events] == ["notification", "update", "notification", "update", "complete"]
    assert [e.id for e in events[:4]] == [1, 2, 3, 4]
    assert events[1].data["eventType"] == "update"

    final = events[-1]
    assert final.id is None
    assert final.data == {"status": "Stream completed successfully"}


@pytest.mark.asyncio
async def test_zero_items():
    assert [i async for i in generate_stream_data(count=0)] == []
    events = [e async for e in generate_sse_events(count=0)]
    assert [e.event for e in events] == ["complete"]
