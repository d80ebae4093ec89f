from logproxy.web.asgi import HandlerApp, request_uri
from logproxy.web.writer import Handler, ResponseWriter, Writer

__all__ = ["Handler", "HandlerApp", "ResponseWriter", "Writer", "request_uri"]
