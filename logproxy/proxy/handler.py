from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

import httpx
import structlog
from starlette.requests import Request

from logproxy.web.asgi import request_uri
from logproxy.web.writer import Writer


class InvalidTargetError(ValueError):
    pass


def upstream_url(uri: str) -> str:
    """Turn a raw request URI into the URL to fetch.

    Accepts the absolute form a forward-proxy client sends
    (``http://host/path``) and the same URL behind a leading slash
    (``/http://host/path``).
    """

    for candidate in (uri, uri[1:] if uri.startswith("/") else None):
        if candidate is None:
            continue
        parts = urlsplit(candidate)
        if parts.scheme in ("http", "https") and parts.netloc:
            return candidate
    raise InvalidTargetError(f"not an absolute http(s) URL: {uri!r}")


class ProxyHandler:
    """GETs the URL named by the request URI and relays status and body."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = 30.0,
        logger: Any | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logger if logger is not None else structlog.get_logger("proxy")

    async def __call__(self, request: Request, writer: Writer) -> None:
        uri = request_uri(request.scope)
        try:
            url = upstream_url(uri)
            response = await self._client.get(url)
        except httpx.TimeoutException as exc:
            self._logger.warning("upstream request failed", url=uri, error=repr(exc))
            await writer.set_status(504)
            return
        except (InvalidTargetError, httpx.InvalidURL, httpx.HTTPError) as exc:
            self._logger.warning("upstream request failed", url=uri, error=repr(exc))
            await writer.set_status(502)
            return

        body = response.content
        self._logger.debug("body was parsed", url=url, status=response.status_code, size=len(body))

        await writer.set_status(response.status_code)
        if body:
            await writer.write(body)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
