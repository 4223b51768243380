import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from streamcore import __version__
from streamcore.config import get_settings
from streamcore.middleware.error_handler import ErrorHandlerMiddleware
from streamcore.routes import health, sse, stream

logger = logging.getLogger("streamcore")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    logger.info(
        "streamcore v%s started | demo_items=%d | interval=%.2fs",
        __version__,
        settings.demo_item_count,
        settings.demo_interval_s,
    )

    yield

    logger.info("streamcore shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title="streamcore",
        description="Incremental HTTP responses as newline-delimited JSON or Server-Sent Events",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(health.router)
    app.include_router(stream.router)
    app.include_router(sse.router)

    return app
