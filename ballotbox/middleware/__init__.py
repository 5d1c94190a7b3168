"""HTTP middleware."""
from ballotbox.middleware.logging import LoggingMiddleware
from ballotbox.middleware.security import SecurityHeadersMiddleware

__all__ = ["LoggingMiddleware", "SecurityHeadersMiddleware"]
