import logging
import traceback

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("streamcore")


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns errors raised before a response starts into a JSON 500.

    Once a stream has sent its headers, failures are reported in-band by the
    stream itself and never reach this middleware.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "Unhandled exception on %s %s: %s\n%s",
                request.method,
                request.url.path,
                exc,
                traceback.format_exc(),
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error": {
                        "message": str(exc) or exc.__class__.__name__,
                        "type": "internal_server_error",
                        "code": 500,
                    }
                },
            )
