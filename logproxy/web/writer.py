from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol

import structlog
from starlette.datastructures import MutableHeaders
from starlette.requests import Request


Send = Callable[[dict[str, Any]], Awaitable[None]]


class Writer(Protocol):
    """What a handler is given to build its response with."""

    @property
    def headers(self) -> MutableHeaders: ...

    @property
    def headers_sent(self) -> bool: ...

    async def set_status(self, status_code: int) -> None: ...

    async def write(self, data: bytes) -> int: ...

    async def finish(self) -> None: ...


Handler = Callable[[Request, Writer], Awaitable[None]]


class ResponseWriter:
    """Writes a response through an ASGI ``send`` callable.

    The status line and headers go out on the first ``set_status`` call, or
    with 200 on the first ``write`` if no status was set. Once they are out,
    further ``set_status`` calls have no effect on the wire.
    """

    def __init__(self, send: Send, logger: Any | None = None) -> None:
        self._send = send
        self._logger = logger if logger is not None else structlog.get_logger("http")
        self._headers = MutableHeaders()
        self._headers_sent = False
        self._finished = False

    @property
    def headers(self) -> MutableHeaders:
        return self._headers

    @property
    def headers_sent(self) -> bool:
        return self._headers_sent

    @property
    def finished(self) -> bool:
        return self._finished

    async def set_status(self, status_code: int) -> None:
        if self._headers_sent:
            self._logger.debug("superfluous set_status call", status=status_code)
            return
        await self._send(
            {
                "type": "http.response.start",
                "status": status_code,
                "headers": self._headers.raw,
            }
        )
        self._headers_sent = True

    async def write(self, data: bytes) -> int:
        if self._finished:
            raise RuntimeError("response already finished")
        if not self._headers_sent:
            await self.set_status(200)
        await self._send({"type": "http.response.body", "body": bytes(data), "more_body": True})
        return len(data)

    async def finish(self) -> None:
        if self._finished:
            return
        if not self._headers_sent:
            await self.set_status(200)
        await self._send({"type": "http.response.body", "body": b"", "more_body": False})
        self._finished = True
