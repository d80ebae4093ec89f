from __future__ import annotations

import logging
from typing import Any

import structlog
from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from structlog.testing import CapturingLogger, LogCapture


class StubWriter:
    """In-memory writer; ``events`` keeps every call in order."""

    def __init__(self, accept: int | None = None, fail_with: Exception | None = None) -> None:
        self.headers = MutableHeaders()
        self.headers_sent = False
        self.events: list[tuple[str, Any]] = []
        self.chunks: list[bytes] = []
        self.finished = False
        self._accept = accept
        self._fail_with = fail_with

    async def set_status(self, status_code: int) -> None:
        self.events.append(("status", status_code))
        self.headers_sent = True

    async def write(self, data: bytes) -> int:
        if self._fail_with is not None:
            raise self._fail_with
        accepted = data if self._accept is None else data[: self._accept]
        self.events.append(("write", bytes(accepted)))
        self.chunks.append(bytes(accepted))
        self.headers_sent = True
        return len(accepted)

    async def finish(self) -> None:
        self.finished = True


class RecordingSend:
    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def body_chunks(self) -> list[bytes]:
        return [m["body"] for m in self.messages if m["type"] == "http.response.body" and m["body"]]

    @property
    def statuses(self) -> list[int]:
        return [m["status"] for m in self.messages if m["type"] == "http.response.start"]


def make_request(method: str = "GET", raw_path: bytes = b"/", query_string: bytes = b"") -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": raw_path.decode("latin-1"),
        "raw_path": raw_path,
        "query_string": query_string,
        "headers": [],
        "server": ("test", 80),
        "client": ("127.0.0.1", 1234),
    }
    return Request(scope)


def capturing_logger() -> tuple[Any, LogCapture]:
    capture = LogCapture()
    logger = structlog.wrap_logger(
        CapturingLogger(),
        processors=[capture],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
    )
    return logger, capture
