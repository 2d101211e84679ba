"""Context variables carried into every log record.

A planning request runs under its own correlation ID, while the simulation
worker pins ``vehicle_id`` as extra context for everything it logs.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

_extra_context: ContextVar[dict[str, Any] | None] = ContextVar("extra_context", default=None)


def get_correlation_id() -> str:
    """Return the correlation ID of the current context, or an empty string."""
    return correlation_id.get()


def set_correlation_id(value: str) -> None:
    """Bind a correlation ID to the current context."""
    correlation_id.set(value)


def generate_correlation_id() -> str:
    """Bind a fresh correlation ID to the current context.

    Returns:
        The new correlation ID.
    """
    new_id = uuid4().hex
    correlation_id.set(new_id)
    return new_id


@contextmanager
def correlation_scope() -> Iterator[str]:
    """Bind a fresh correlation ID for the duration of a block.

    The previous ID is restored on exit, including when the block raises.

    Yields:
        The correlation ID bound inside the block.
    """
    new_id = uuid4().hex
    token = correlation_id.set(new_id)
    try:
        yield new_id
    finally:
        correlation_id.reset(token)


def get_extra_context() -> dict[str, Any]:
    """Return a copy of the extra fields bound to the current context."""
    fields = _extra_context.get()
    return {} if fields is None else dict(fields)


def set_extra_context(**fields: Any) -> None:
    """Merge fields into the extra context of the current context.

    Args:
        **fields: Key-value pairs added to every subsequent log record.
    """
    merged = get_extra_context()
    merged.update(fields)
    _extra_context.set(merged)


def clear_context() -> None:
    """Drop the correlation ID and all extra fields."""
    correlation_id.set("")
    _extra_context.set(None)
