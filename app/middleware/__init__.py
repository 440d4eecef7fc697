"""
Middleware modules for the registry API.

Provides request processing middleware for:
- Request ID tracking, injected into log records and error responses
"""

from .correlation import CorrelationIdMiddleware, CorrelationLogFilter, request_id_ctx

__all__ = [
    "CorrelationIdMiddleware",
    "CorrelationLogFilter",
    "request_id_ctx",
]
