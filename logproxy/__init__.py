"""Reverse proxy with structured per-request access logging."""

__version__ = "0.1.0"
