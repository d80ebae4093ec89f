from __future__ import annotations

from typing import Any, Awaitable, Callable, Iterable

from starlette.requests import Request

from logproxy.web.writer import Handler, ResponseWriter


def request_uri(scope: dict[str, Any]) -> str:
    """The request target as the client sent it (not percent-decoded)."""

    raw_path = scope.get("raw_path")
    if raw_path is None:
        raw_path = scope.get("path", "").encode("utf-8")
    # Some servers leave the query string in raw_path.
    path = raw_path.split(b"?", 1)[0].decode("latin-1")
    query = scope.get("query_string", b"")
    if query:
        return f"{path}?{query.decode('latin-1')}"
    return path


class HandlerApp:
    """Serves every HTTP request with one handler."""

    def __init__(self, handler: Handler, on_shutdown: Iterable[Callable[[], Awaitable[None]]] = ()) -> None:
        self.handler = handler
        self._on_shutdown = list(on_shutdown)

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return

        if scope["type"] == "websocket":
            # Closing before accept rejects the handshake.
            await send({"type": "websocket.close", "code": 1000})
            return

        if scope["type"] != "http":
            raise ValueError(f"unsupported ASGI scope type: {scope['type']!r}")

        request = Request(scope, receive)
        writer = ResponseWriter(send)
        await self.handler(request, writer)
        await writer.finish()

    async def _lifespan(self, receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                try:
                    for callback in self._on_shutdown:
                        await callback()
                except Exception as exc:
                    await send({"type": "lifespan.shutdown.failed", "message": repr(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return
