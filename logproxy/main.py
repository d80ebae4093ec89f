from __future__ import annotations

from typing import Any

import httpx

from logproxy.config import Settings, get_settings
from logproxy.observability.logging import get_logger
from logproxy.observability.middleware import with_logging
from logproxy.proxy.handler import ProxyHandler
from logproxy.web.asgi import HandlerApp


def create_app(
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
    access_logger: Any | None = None,
    proxy_logger: Any | None = None,
) -> HandlerApp:
    """Build the proxy application: every request is proxied and access-logged."""

    settings = settings or get_settings()
    proxy = ProxyHandler(
        client=client,
        timeout=settings.upstream_timeout_or_none,
        logger=proxy_logger or get_logger("proxy"),
    )
    handler = with_logging(proxy, logger=access_logger or get_logger("access"))
    return HandlerApp(handler, on_shutdown=[proxy.aclose])
