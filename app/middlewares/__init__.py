from __future__ import annotations

from .request_id import RequestIdMiddleware, request_id_ctx_var
from .security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestIdMiddleware",
    "SecurityHeadersMiddleware",
    "request_id_ctx_var",
]
