"""Client identity resolution."""
from starlette.requests import Request

from ballotbox.core.constants import UNKNOWN_IDENTITY


def get_client_ip(request: Request) -> str:
    """
    Derive the voter identity from request transport metadata.

    The first entry of X-Forwarded-For wins when a reverse proxy supplied
    one; otherwise the peer address of the connection is used. The result is
    opaque to the rest of the application.
    """
    # X-Forwarded-For can contain multiple IPs, take the first one
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    # Fall back to direct connection IP
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_IDENTITY
