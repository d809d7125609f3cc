"""
Default optional services

``AccessLogHandler`` and ``ErrorHandler`` are the two well-known services
an ``AutowireContainer`` exposes through ``access_log_handler()`` and
``error_handler()``. Both are plain middleware callables taking
``(request, next)``. Bind either class to replace the default.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorResponse:
    """Response produced for an unhandled error."""
    status: int
    reason: str


class AccessLogHandler:
    """Middleware logging one line per request to the ``autowire.access`` logger.

    The line holds the request method and path (when the request has
    them), the response status (when it has one) and the time spent in
    the rest of the chain.
    """

    def __init__(self, access_logger: Optional[logging.Logger] = None):
        self._logger = access_logger or logging.getLogger("autowire.access")

    def __call__(self, request: Any, next: Callable[[Any], Any]) -> Any:
        start = time.perf_counter()
        response = next(request)
        elapsed = time.perf_counter() - start

        self._logger.info(
            '"%s %s" %s %.3f',
            getattr(request, "method", "-"),
            getattr(request, "path", "-"),
            getattr(response, "status", "-"),
            elapsed,
        )
        return response


class ErrorHandler:
    """Middleware turning uncaught exceptions into an ``ErrorResponse``.

    The exception is logged with its traceback before rendering. Override
    ``render()`` to produce a different response.
    """

    def __call__(self, request: Any, next: Callable[[Any], Any]) -> Any:
        try:
            return next(request)
        except Exception as e:
            logger.error("Unhandled error while handling request: %s", e, exc_info=True)
            return self.render(e)

    def render(self, error: Exception) -> ErrorResponse:
        return ErrorResponse(status=500, reason="Internal Server Error")
