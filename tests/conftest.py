import asyncio

import pytest

from streamcore.config import Settings, get_settings


class CountingProducer:
    """Async iterator that records every pull and whether it was closed."""

    def __init__(self, items, fail_at=None, latency=0.0, error=None):
        self.items = list(items)
        self.fail_at = fail_at
        self.latency = latency
        self.error = error or RuntimeError("producer failed")
        self.pulls = 0
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self):
        index = self.pulls
        self.pulls += 1
        await asyncio.sleep(self.latency)
        if self.fail_at is not None and index == self.fail_at:
            raise self.error
        if index >= len(self.items):
            raise StopAsyncIteration
        return self.items[index]

    async def aclose(self):
        self.closed = True


@pytest.fixture
def counting_producer():
    return CountingProducer


@pytest.fixture
def settings():
    """Test settings with no demo latency."""
    return Settings(
        demo_item_count=3,
        demo_initial_delay_s=0.0,
        demo_interval_s=0.0,
    )


@pytest.fixture
def fast_settings(monkeypatch):
    monkeypatch.setenv("STREAMCORE_DEMO_ITEM_COUNT", "3")
    monkeypatch.setenv("STREAMCORE_DEMO_INITIAL_DELAY_S", "0")
    monkeypatch.setenv("STREAMCORE_DEMO_INTERVAL_S", "0")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


async def drain(body_iterator) -> bytes:
    return b"".join([chunk async for chunk in body_iterator])


@pytest.fixture
def collect():
    return drain
