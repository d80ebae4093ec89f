from __future__ import annotations

import logging
import socket
from typing import Any

import uvicorn
from pydantic import ValidationError

from logproxy.config import get_settings
from logproxy.main import create_app
from logproxy.observability.logging import configure_logging, get_logger, parse_log_level


def bind_socket(host: str, port: int) -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def build_config(app: Any) -> uvicorn.Config:
    # httptools drops the scheme and host of an absolute-form request target; h11 keeps it in raw_path.
    return uvicorn.Config(app, http="h11", lifespan="on", log_config=None, access_log=False)


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as exc:
        configure_logging(logging.INFO)
        get_logger("server").critical("invalid configuration", action="load config", error=str(exc))
        raise SystemExit(1) from exc

    configure_logging(parse_log_level(settings.log_level))
    logger = get_logger("server")

    logger.info("starting server", addr=settings.addr)
    try:
        sock = bind_socket(settings.host, settings.port)
    except OSError as exc:
        logger.critical("failed to start server", action="start server", addr=settings.addr, error=str(exc))
        raise SystemExit(1) from exc

    uvicorn.Server(build_config(create_app(settings))).run(sockets=[sock])


if __name__ == "__main__":
    main()
