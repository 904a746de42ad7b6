"""
Request utilities for extracting client information.

The site runs behind a reverse proxy, so the caller's address comes from
proxy headers rather than the socket peer.
"""

from typing import Optional

from fastapi import Request

UNKNOWN_CLIENT = "unknown"


def get_client_ip(request: Request) -> str:
    """
    Derive the client identity used for per-client rate limiting.

    Headers are checked in order of precedence:
    1. X-Forwarded-For (first address in the list is the original client)
    2. X-Real-IP
    3. The shared "unknown" bucket

    The socket peer is deliberately ignored: behind the proxy it is always
    the proxy itself.

    Args:
        request: FastAPI request object

    Returns:
        Client address, or "unknown" when no proxy header is present
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        first_ip = forwarded_for.split(",")[0].strip()
        if first_ip:
            return first_ip

    real_ip = request.headers.get("X-Real-IP")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return UNKNOWN_CLIENT


def get_user_agent(request: Request) -> Optional[str]:
    """
    Extract the user agent string from the request.

    Truncates to 500 characters so a hostile header cannot bloat the logs.

    Args:
        request: FastAPI request object

    Returns:
        User agent string or None if not present
    """
    user_agent = request.headers.get("User-Agent")
    if user_agent:
        return user_agent[:500]
    return None
