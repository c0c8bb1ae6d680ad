"""HTTP middleware: timeout, request size limit, request/correlation ID, security headers.

Applied in main app; order matters (last added = outermost).
"""

from tasktracker.middleware.request_id import RequestIDMiddleware
from tasktracker.middleware.request_size_limit import RequestSizeLimitMiddleware
from tasktracker.middleware.security_headers import SecurityHeadersMiddleware
from tasktracker.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
