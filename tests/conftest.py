from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from structlog.testing import LogCapture

from helpers import capturing_logger
from logproxy.config import Settings, get_settings
from logproxy.main import create_app


def _upstream(request: httpx.Request) -> httpx.Response:
    if request.url.host == "down.test":
        raise httpx.ConnectError("connection refused", request=request)
    if request.url.host == "slow.test":
        raise httpx.ReadTimeout("timed out", request=request)
    if request.url.path == "/hello":
        return httpx.Response(200, content=b"hello")
    if request.url.path == "/method":
        return httpx.Response(200, content=request.method.encode())
    if request.url.path == "/empty":
        return httpx.Response(204)
    return httpx.Response(404, content=b"no such page")


@pytest.fixture(autouse=True)
def clear_settings_cache() -> None:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def access_log() -> tuple[Any, LogCapture]:
    return capturing_logger()


@pytest.fixture
def proxy_log() -> tuple[Any, LogCapture]:
    return capturing_logger()


@pytest.fixture
async def upstream_client() -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=httpx.MockTransport(_upstream)) as client:
        yield client


@pytest.fixture
async def api_client(upstream_client, access_log, proxy_log) -> AsyncIterator[AsyncClient]:
    app = create_app(
        Settings(_env_file=None),
        client=upstream_client,
        access_logger=access_log[0],
        proxy_logger=proxy_log[0],
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
