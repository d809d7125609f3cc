"""
ServiceLocator

Interface of an external service locator that can replace the binding
map of an ``AutowireContainer``
"""

from typing import Any, Protocol, runtime_checkable

from .entry import Identifier


@runtime_checkable
class ServiceLocator(Protocol):
    """Lookup object providing ready-made services by identifier.

    When a container is backed by a locator it performs no construction
    of its own: handlers and optional services are taken from the locator
    as they are. ``get`` is expected to raise when the identifier is
    unknown; the container wraps that error in ``HandlerLoadFailedError``.

    Example::

        class DictLocator:
            def __init__(self, services):
                self._services = services

            def has(self, identifier):
                return identifier in self._services

            def get(self, identifier):
                try:
                    return self._services[identifier]
                except KeyError:
                    raise LookupError(f"Unable to load {identifier}") from None

        container = AutowireContainer(DictLocator({UserHandler: UserHandler()}))
    """

    def has(self, identifier: Identifier) -> bool:
        ...

    def get(self, identifier: Identifier) -> Any:
        ...
