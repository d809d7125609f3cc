"""
MiddlewareHandler

Continuation-passing composition of request handlers. Every handler but
the last is called as ``handler(request, next)``, where ``next(request)``
runs the remainder of the chain; the last one is called as
``handler(request)``.

Example::

    chain = MiddlewareHandler([
        container.access_log_handler(),
        container.error_handler(),
        container.request_handler(UserHandler),
    ])
    response = chain(request)
"""

from typing import Any, Callable, List, Sequence


class MiddlewareHandler:
    """Composes two or more handler callables into one."""

    def __init__(self, handlers: Sequence[Callable[..., Any]]):
        if len(handlers) < 2:
            raise ValueError(
                f"MiddlewareHandler requires at least 2 handlers, {len(handlers)} given"
            )
        for handler in handlers:
            if not callable(handler):
                raise TypeError(
                    f"Middleware handler must be callable, {type(handler).__name__} given"
                )
        self._handlers: List[Callable[..., Any]] = list(handlers)

    def __call__(self, request: Any) -> Any:
        return self._call(request, 0)

    def _call(self, request: Any, position: int) -> Any:
        if position + 2 >= len(self._handlers):
            return self._handlers[position](request, self._handlers[position + 1])

        return self._handlers[position](
            request, lambda request: self._call(request, position + 1)
        )
