"""Shared helpers: logging setup and pkg-config invocation."""
