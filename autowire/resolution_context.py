"""
ResolutionContext

This module tracks the chain of identifiers currently being resolved.
The chain is only used to explain recursion errors: resolution itself is
bounded by the depth budget, not by cycle detection.

The context is stored in a ContextVar, so threads and tasks resolving
concurrently each see their own chain.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, List, Optional

from .entry import Identifier
from .exceptions import describe_identifier


class ResolutionContext:
    """Chain of identifiers in the current resolution.

    Attributes:
        path: Identifiers from the outermost request to the current one,
            variables prefixed with ``$``

    Example (internal usage)::

        ctx = ResolutionContext()
        ctx.path = ["UserHandler", "Repository", "$dsn"]
        ctx.describe()  # "UserHandler -> Repository -> $dsn"
    """

    def __init__(self):
        self.path: List[str] = []

    def describe(self) -> str:
        return " -> ".join(self.path)


# Resolution chain of the current thread/task, None outside of resolution
_resolution_context: ContextVar[Optional[ResolutionContext]] = ContextVar(
    '_AUTOWIRE_RESOLUTION_CONTEXT',
    default=None
)


@contextmanager
def resolving(identifier: Identifier, variable: bool = False) -> Iterator[ResolutionContext]:
    """Push ``identifier`` on the resolution chain for the duration of the block.

    The outermost call creates the context and removes it again on exit.
    """
    ctx = _resolution_context.get()
    token = None
    if ctx is None:
        ctx = ResolutionContext()
        token = _resolution_context.set(ctx)

    label = describe_identifier(identifier)
    ctx.path.append(f"${label}" if variable else label)
    try:
        yield ctx
    finally:
        ctx.path.pop()
        if token is not None:
            _resolution_context.reset(token)


def current_path() -> Optional[str]:
    """Describe the current resolution chain, ``None`` outside of resolution."""
    ctx = _resolution_context.get()
    if ctx is None or not ctx.path:
        return None
    return ctx.describe()
