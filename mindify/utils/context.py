"""Request-scoped context variables."""

import contextvars
from typing import Optional

# Context variable for request ID
request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id",
    default=None
)


def get_request_id() -> Optional[str]:
    """Get the current request ID from context.

    Returns:
        Optional[str]: Current request ID or None
    """
    return request_id_var.get()

