"""Rate limiting configuration."""
import os
from contextvars import ContextVar

from fastapi import Request
from slowapi import Limiter

from ballotbox.core.config import Settings, settings
from ballotbox.core.identity import get_client_ip


# Create rate limiter instance keyed on the same identity used for deduplication.
# Uses Redis if REDIS_URL is set, falls back to memory for a single node.
# Whether limits apply is decided per application by rate_limiting_disabled.
limiter = Limiter(
    key_func=get_client_ip,
    default_limits=["120/minute"],  # Global default
    storage_uri=os.getenv("REDIS_URL", "memory://"),
    strategy="fixed-window",
)

# Settings of the application serving the current request
_request_settings: ContextVar[Settings] = ContextVar("ballotbox_request_settings", default=settings)


def bind_request_settings(app_settings: Settings):
    """Make ``app_settings`` visible to limit providers for this request."""
    return _request_settings.set(app_settings)


def reset_request_settings(token) -> None:
    _request_settings.reset(token)


def vote_limit() -> str:
    """Vote limit of the application serving the current request."""
    return _request_settings.get().RATE_LIMIT_VOTE


def rate_limiting_disabled(request: Request) -> bool:
    return not request.app.state.settings.RATE_LIMIT_ENABLED


# Rate limit definitions for different endpoint categories
RATE_LIMITS = {
    "vote": vote_limit,
    "results": "240/minute",
}
