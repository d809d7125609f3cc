"""
BindingStore

Identifier to entry map backing an ``AutowireContainer``.

The store is seeded once, validated eagerly, and then doubles as the
singleton cache: every identifier the container resolves is written back
with its concrete instance (or, for variable factories, its scalar
result). Entries are never removed for the lifetime of the store.
"""

import importlib
import logging
from typing import Any, Dict, Iterator, Mapping, Optional

from .entry import Alias, Identifier, is_factory, is_instance, is_scalar
from .exceptions import InvalidBindingKindError, describe_kind

logger = logging.getLogger(__name__)


def type_name(cls: type) -> str:
    """Dotted name a class can be bound under, e.g. ``"app.handlers.UserHandler"``."""
    return f"{cls.__module__}.{cls.__qualname__}"


def load_type(name: str) -> Optional[type]:
    """Import the class named by a dotted path.

    Nested classes are supported (``"app.models.Outer.Inner"``). Returns
    ``None`` for names without a module part, unknown modules, missing
    attributes and attributes that are not classes.

    Example::

        load_type("collections.OrderedDict")  # <class 'collections.OrderedDict'>
        load_type("name")                     # None
    """
    parts = name.split(".")
    if len(parts) < 2 or not all(parts):
        return None

    for split in range(len(parts) - 1, 0, -1):
        try:
            target: Any = importlib.import_module(".".join(parts[:split]))
        except ImportError:
            continue

        for attribute in parts[split:]:
            target = getattr(target, attribute, None)
            if target is None:
                return None
        return target if isinstance(target, type) else None

    return None


class BindingStore:
    """Identifier to entry map with eager validation and in-place memoization.

    Keys are classes or strings. A string key is either a dotted class
    path or a variable name. Values may be:

    - a scalar (``str``, ``int``, ``float``, ``bool``)
    - a factory (function, lambda, bound method, ``functools.partial``)
    - an alias (``Alias``, or a class)
    - an instance of the class named by the key

    Example::

        store = BindingStore({
            Database: lambda: Database("sqlite://"),
            Repository: SqlRepository,
            "app.cache.Cache": Alias(RedisCache),
            "timeout": 2.5,
        })

    Raises:
        TypeError: When a key is neither a class nor a string
        InvalidBindingKindError: When a value is of any other kind
    """

    def __init__(self, entries: Optional[Mapping[Identifier, Any]] = None):
        self._entries: Dict[Identifier, Any] = {}

        for identifier, value in (entries or {}).items():
            self._validate(identifier, value)
            self._entries[identifier] = value

        logger.debug("Binding store created with %d entries", len(self._entries))

    def _validate(self, identifier: Any, value: Any) -> None:
        if not isinstance(identifier, (str, type)):
            raise TypeError(
                f"Binding identifiers must be of type str|type, "
                f"{describe_kind(identifier)} given"
            )

        if is_scalar(value) or is_factory(value) or isinstance(value, (Alias, type)):
            return

        expected = self.expected_type(identifier)
        if expected is not None and is_instance(value, expected):
            return

        raise InvalidBindingKindError(identifier, describe_kind(value))

    @staticmethod
    def expected_type(identifier: Identifier) -> Optional[type]:
        """Return the class an identifier names, or ``None`` for variable names."""
        if isinstance(identifier, type):
            return identifier
        return load_type(identifier)

    def lookup(self, identifier: Identifier) -> Optional[Identifier]:
        """Find the key an identifier is bound under.

        A class matches a binding keyed by the class itself or by its
        dotted name.
        """
        if identifier in self._entries:
            return identifier
        if isinstance(identifier, type):
            name = type_name(identifier)
            if name in self._entries:
                return name
        return None

    def get(self, key: Identifier) -> Any:
        return self._entries[key]

    def put(self, key: Identifier, value: Any) -> None:
        """Memoize a resolved value in place of its entry."""
        self._entries[key] = value

    def identifiers(self) -> Iterator[Identifier]:
        return iter(self._entries)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)
