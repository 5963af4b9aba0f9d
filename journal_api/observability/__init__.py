"""Logging and request-context helpers.

structlog renders every record as JSON; the request middleware binds a
request id into structlog contextvars so store and access logs correlate.
"""
