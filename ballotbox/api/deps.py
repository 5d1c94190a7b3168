"""Shared API dependencies."""
from fastapi import Request

from ballotbox.core.identity import get_client_ip
from ballotbox.db import get_db


def get_identity(request: Request) -> str:
    """Dependency resolving the voter identity for the request."""
    return get_client_ip(request)


def get_max_option_id(request: Request) -> int:
    """Dependency returning the highest option id in the seeded catalog."""
    return request.app.state.max_option_id


__all__ = ["get_db", "get_identity", "get_max_option_id"]
