from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable

import structlog
from starlette.datastructures import MutableHeaders
from starlette.responses import JSONResponse

REQUEST_ID_HEADER = "X-Request-ID"

access_log = structlog.get_logger("access")
error_log = structlog.get_logger("journal_api")


class RequestContextMiddleware:
    """Tags every HTTP exchange with a request id.

    The id is bound into structlog contextvars for the lifetime of the request,
    echoed in the ``X-Request-ID`` response header, and attached to the access
    line. Exceptions escaping the routes are answered here with a JSON 500, so
    the error response and its log line carry the same id.
    """

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=scope.get("method"),
            path=scope.get("path"),
        )

        start = perf_counter()
        status_code: int | None = None

        async def send_with_request_id(message: dict[str, Any]) -> None:
            nonlocal status_code
            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        except Exception as exc:
            if status_code is not None:
                # headers already sent; nothing left to answer with
                raise
            error_log.exception("unhandled_error", error=str(exc))
            response = JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
            await response(scope, receive, send_with_request_id)
        finally:
            access_log.info(
                "http_request",
                status_code=status_code or 500,
                elapsed_ms=round((perf_counter() - start) * 1000.0, 2),
            )
            structlog.contextvars.clear_contextvars()
