from contextvars import ContextVar
from typing import Optional

request_id_context: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Get the request ID of the request currently being handled, if any."""
    return request_id_context.get()


def set_request_id(request_id: str) -> None:
    """Bind a request ID to the current execution context."""
    request_id_context.set(request_id)
