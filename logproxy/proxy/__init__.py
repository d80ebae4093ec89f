from logproxy.proxy.handler import InvalidTargetError, ProxyHandler, upstream_url

__all__ = ["InvalidTargetError", "ProxyHandler", "upstream_url"]
