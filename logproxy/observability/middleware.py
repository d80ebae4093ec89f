from __future__ import annotations

from time import perf_counter_ns
from typing import Any

import structlog
from starlette.requests import Request

from logproxy.observability.recorder import ResponseObserver, ResponseRecord
from logproxy.web.asgi import request_uri
from logproxy.web.writer import Handler, Writer


def with_logging(handler: Handler, logger: Any | None = None) -> Handler:
    """Wrap ``handler`` so each call emits one "request completed" record.

    The wrapped handler gets the request untouched and a ResponseObserver in
    place of its writer. The record is emitted once the handler returns, or
    once it raises, in which case the exception still propagates.
    """

    access_logger = logger if logger is not None else structlog.get_logger("access")

    async def logging_handler(request: Request, writer: Writer) -> None:
        start = perf_counter_ns()
        record = ResponseRecord()
        observer = ResponseObserver(writer, record)

        try:
            await handler(request, observer)
        finally:
            duration_ns = perf_counter_ns() - start
            access_logger.info(
                "request completed",
                uri=request_uri(request.scope),
                method=request.method,
                status=record.status,
                duration_ns=duration_ns,
                size=record.bytes_written,
            )

    return logging_handler
