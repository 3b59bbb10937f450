"""Request logging helpers.

Correlation ids live in structlog contextvars; handlers tagged with ``logged``
get start, argument, and response (or error) lines sharing one request id.
"""
