"""HTTP middleware: request size limit and request context (request ID + access log).

Applied in main app; order matters (first added = outermost).
Import and use from app.main.
"""

from app.middleware.request_context import RequestContextMiddleware
from app.middleware.request_size_limit import RequestSizeLimitMiddleware

__all__ = [
    "RequestContextMiddleware",
    "RequestSizeLimitMiddleware",
]
