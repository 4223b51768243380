from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Mapping
from typing import Any

from fastapi import Request
from fastapi.responses import StreamingResponse

from streamcore.models.envelope import ChunkedStreamOptions, Envelope, SSEStreamOptions
from streamcore.utils.ndjson import format_ndjson_error, format_ndjson_line
from streamcore.utils.serialization import error_message
from streamcore.utils.sse import format_sse_comment, format_sse_error, format_sse_message

logger = logging.getLogger("streamcore.streaming")

SSE_HEADERS = {
    "Content-Type": "text/event-stream",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

CHUNKED_HEADERS = {
    "Content-Type": "application/json",
    "Transfer-Encoding": "chunked",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}

SSE_ERROR_FALLBACK = "Stream error occurred"
CHUNKED_ERROR_FALLBACK = "Stream error"


async def delay(seconds: float) -> None:
    """Suspend the calling producer for ``seconds``."""
    await asyncio.sleep(seconds)


def merge_headers(defaults: Mapping[str, str], overrides: Mapping[str, str] | None) -> dict[str, str]:
    """Apply caller headers over the defaults.

    Header names are case-insensitive, so an override drops the default it
    matches regardless of spelling. Other defaults are kept unchanged.
    """
    if not overrides:
        return dict(defaults)
    overridden = {name.lower() for name in overrides}
    merged = {name: value for name, value in defaults.items() if name.lower() not in overridden}
    merged.update(overrides)
    return merged


class StreamSession:
    """Drains one producer into framed UTF-8 chunks for a single response.

    ``format_item`` turns each produced value into wire text and
    ``format_error`` renders the terminal in-band error frame. The producer
    is pulled only when the consumer asks for the next chunk, and it is
    closed on every exit path: exhaustion, producer error, client
    disconnect or cancellation by the server.
    """

    def __init__(
        self,
        producer: AsyncIterable[Any],
        format_item: Callable[[Any], str],
        format_error: Callable[[str], str],
        *,
        preamble: str | None = None,
        disconnect_check: Callable[[], Awaitable[bool]] | None = None,
        error_fallback: str = CHUNKED_ERROR_FALLBACK,
        encoding: str = "utf-8",
    ):
        self.producer = producer
        self.format_item = format_item
        self.format_error = format_error
        self.preamble = preamble
        self.disconnect_check = disconnect_check
        self.error_fallback = error_fallback
        self.encoding = encoding

        self.closed = False
        self.started = False
        self.items_sent = 0
        self.disconnected = False
        self.error: Exception | None = None

    def _encode(self, text: str) -> bytes:
        return text.encode(self.encoding)

    async def _consumer_gone(self) -> bool:
        if self.disconnect_check is None:
            return False
        if await self.disconnect_check():
            self.disconnected = True
        return self.disconnected

    async def _close_producer(self, iterator: AsyncIterator[Any]) -> None:
        aclose = getattr(iterator, "aclose", None)
        if aclose is None:
            return
        try:
            await aclose()
        except Exception:
            logger.exception("Producer raised while closing")

    async def stream(self) -> AsyncIterator[bytes]:
        if self.started:
            raise RuntimeError("Stream session already consumed; producers cannot be restarted")
        self.started = True

        iterator = aiter(self.producer)
        try:
            if self.preamble is not None:
                yield self._encode(self.preamble)

            while True:
                if await self._consumer_gone():
                    logger.info("Client disconnected after %d items, stopping producer", self.items_sent)
                    break
                try:
                    item = await anext(iterator)
                except StopAsyncIteration:
                    logger.debug("Producer exhausted after %d items", self.items_sent)
                    break
                yield self._encode(self.format_item(item))
                self.items_sent += 1

        except Exception as exc:
            self.error = exc
            logger.warning("Stream failed after %d items: %r", self.items_sent, exc)
            yield self._encode(self.format_error(error_message(exc, self.error_fallback)))

        finally:
            self.closed = True
            await self._close_producer(iterator)


def build_sse_response(
    producer: AsyncIterable[Envelope | Mapping[str, Any]],
    options: SSEStreamOptions | Mapping[str, Any] | None = None,
    *,
    request: Request | None = None,
) -> StreamingResponse:
    """Stream envelopes from ``producer`` as Server-Sent Events.

    A producer failure becomes a final ``event: error`` frame; headers are
    already sent at that point so the status stays 200.
    """
    if not isinstance(options, SSEStreamOptions):
        options = SSEStreamOptions.model_validate(options or {})

    session = StreamSession(
        producer,
        format_sse_message,
        format_sse_error,
        preamble=format_sse_comment(options.initial_comment) if options.initial_comment else None,
        disconnect_check=request.is_disconnected if request is not None else None,
        error_fallback=SSE_ERROR_FALLBACK,
    )
    headers = merge_headers(SSE_HEADERS, options.headers)
    logger.debug("Opening SSE stream")
    return StreamingResponse(session.stream(), headers=headers)


def build_chunked_response(
    producer: AsyncIterable[Any],
    options: ChunkedStreamOptions | Mapping[str, Any] | None = None,
    *,
    request: Request | None = None,
) -> StreamingResponse:
    """Stream values from ``producer`` as newline-delimited JSON.

    A producer failure becomes a final ``{"error": ...}`` line.
    """
    if not isinstance(options, ChunkedStreamOptions):
        options = ChunkedStreamOptions.model_validate(options or {})

    session = StreamSession(
        producer,
        format_ndjson_line,
        format_ndjson_error,
        disconnect_check=request.is_disconnected if request is not None else None,
        error_fallback=CHUNKED_ERROR_FALLBACK,
    )
    headers = merge_headers(CHUNKED_HEADERS, options.headers)
    logger.debug("Opening chunked stream")
    return StreamingResponse(session.stream(), headers=headers)
