"""Request instrumentation.

A response observer that counts what a handler writes, the decorator that
times a handler and emits one access record per request, and the structlog
setup those records are rendered through.
"""
