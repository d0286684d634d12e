"""
Request-level middleware: timeout, catch-all error handling and access logging.
"""

import asyncio
import logging
import time

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from todo_service.config import settings

logger = logging.getLogger(__name__)

# Liveness checks; successful hits are left out of the access log
QUIET_PATHS = frozenset({"/health"})


class RequestHandlingMiddleware:
    """
    Bound each HTTP request by a timeout and turn crashes into a 500.

    A timed-out handler is cancelled and answered with a bare 408. Errors
    raised after the response has started cannot be rewritten and are
    re-raised. Without an explicit ``timeout`` the current
    ``settings.request_timeout_seconds`` applies.
    """

    def __init__(self, app: ASGIApp, timeout: float | None = None):
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        timeout = self.timeout or settings.request_timeout_seconds
        started = time.perf_counter()
        status_code = None

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        route = f"{scope['method']} {scope['path']}"
        try:
            await asyncio.wait_for(
                self.app(scope, receive, send_wrapper), timeout=timeout
            )
        except asyncio.TimeoutError:
            if status_code is not None:
                raise
            logger.warning(f"{route} timed out after {timeout}s")
            status_code = status.HTTP_408_REQUEST_TIMEOUT
            await Response(status_code=status_code)(scope, receive, send)
        except Exception as e:
            if status_code is not None:
                raise
            logger.exception(f"Unhandled error on {route}")
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
            response = PlainTextResponse(
                f"Unhandled internal error: {e}", status_code=status_code
            )
            await response(scope, receive, send)
        finally:
            if scope["path"] not in QUIET_PATHS or status_code != 200:
                latency_ms = (time.perf_counter() - started) * 1000
                logger.info(f"{route} -> {status_code} in {latency_ms:.1f}ms")


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error"},
    )


def install_request_handling(app: FastAPI, timeout: float | None = None) -> None:
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_middleware(RequestHandlingMiddleware, timeout=timeout)
