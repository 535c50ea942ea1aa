"""Scoped propagation of the current request's host context.

The middleware sets the context for the duration of one request and resets
it afterwards, so code without access to the ``Request`` (services, probes)
can still read the resolution.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from tenancy.domain.resolution import HostContext

_current_host_context: ContextVar[HostContext | None] = ContextVar(
    "current_host_context", default=None
)


def get_current_host_context() -> HostContext | None:
    """Return the host context of the request being handled, if any."""
    return _current_host_context.get()


@contextmanager
def host_context_scope(context: HostContext) -> Iterator[HostContext]:
    """Make ``context`` current for the enclosed block."""
    token = _current_host_context.set(context)
    try:
        yield context
    finally:
        _current_host_context.reset(token)
