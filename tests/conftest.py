"""
Test Configuration and Utilities

Common base classes and helper functions for autowire tests
"""

import unittest
from typing import Any, Dict, Optional

from autowire import AutowireContainer
from autowire.resolution_context import _resolution_context


class AutowireTestCase(unittest.TestCase):
    """
    Base test case class for autowire tests.

    Verifies after each test that no resolution chain leaked out of the
    container, whether resolution succeeded or failed.
    """

    def tearDown(self):
        """Resolution context must be cleared after every resolution"""
        self.assertIsNone(_resolution_context.get())


def create_container(entries: Optional[Dict[Any, Any]] = None, **kwargs) -> AutowireContainer:
    """
    Create a container backed by a binding map.

    Args:
        entries: Bindings (optional)
        **kwargs: Passed to AutowireContainer (e.g. max_depth)

    Example:
        >>> container = create_container({Database: lambda: Database()})
        >>> container.resolve(Database)
    """
    return AutowireContainer(dict(entries or {}), **kwargs)


class DictLocator:
    """
    Minimal external service locator backed by a dict.

    Records the identifiers passed to ``has`` and ``get``.
    """

    def __init__(self, services: Optional[Dict[Any, Any]] = None):
        self._services = dict(services or {})
        self.has_calls = []
        self.get_calls = []

    def has(self, identifier) -> bool:
        self.has_calls.append(identifier)
        return identifier in self._services

    def get(self, identifier):
        self.get_calls.append(identifier)
        try:
            return self._services[identifier]
        except KeyError:
            raise LookupError("Unable to load class") from None
