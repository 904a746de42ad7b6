"""
Request correlation IDs.

A short ID ties together the log lines, the Sentry event and the error body
the caller sees for one request.
"""

import uuid
from contextvars import ContextVar

# Request-scoped; each request task gets its own copy
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """
    Generate a short, unique correlation ID.

    Returns:
        8-character hexadecimal string (e.g. "abc123de"), short enough for a
        visitor to read out when reporting a problem.
    """
    return uuid.uuid4().hex[:8]


def get_correlation_id() -> str:
    """Return the current request's correlation ID, or "" outside a request."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """Bind a correlation ID to the current request context."""
    correlation_id_var.set(correlation_id)
