from __future__ import annotations

from dataclasses import dataclass

from starlette.datastructures import MutableHeaders

from logproxy.web.writer import Writer


@dataclass
class ResponseRecord:
    """What one request's handler did to its response.

    ``status`` stays 0 when the handler never set one explicitly; the writer
    then sends its implicit 200, which is not recorded here.
    """

    status: int = 0
    bytes_written: int = 0


class ResponseObserver:
    """Forwards to a writer, recording the status code and byte count."""

    def __init__(self, writer: Writer, record: ResponseRecord) -> None:
        self._writer = writer
        self.record = record

    async def write(self, data: bytes) -> int:
        written = await self._writer.write(data)
        self.record.bytes_written += written
        return written

    async def set_status(self, status_code: int) -> None:
        await self._writer.set_status(status_code)
        # Last call wins, even when the writer already sent its headers.
        self.record.status = status_code

    @property
    def headers(self) -> MutableHeaders:
        return self._writer.headers

    @property
    def headers_sent(self) -> bool:
        return self._writer.headers_sent

    async def finish(self) -> None:
        await self._writer.finish()
