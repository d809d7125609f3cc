"""
Entry

Kinds of values that can be bound to an identifier
"""

import functools
import inspect
from dataclasses import dataclass
from typing import Any, Tuple, Type, Union


# Identifier: a class, or a string naming a class (dotted path) or a variable
Identifier = Union[str, Type]

SCALAR_TYPES: Tuple[type, ...] = (str, int, float, bool)


@dataclass(frozen=True)
class Alias:
    """Redirect to another identifier.

    Bind it to make one identifier resolve through another, or return it
    from a factory to redirect resolution::

        AutowireContainer({
            Repository: Alias(SqlRepository),
            Cache: lambda: Alias("app.cache.RedisCache"),
        })
    """
    target: Identifier


def is_scalar(value: Any) -> bool:
    return isinstance(value, SCALAR_TYPES)


def is_factory(value: Any) -> bool:
    """Functions, lambdas, bound methods and partials count as factories.

    Classes and callable instances do not: a class is an alias to itself
    and a callable instance is a literal (request handlers are callable).
    """
    return (
        inspect.isfunction(value)
        or inspect.ismethod(value)
        or isinstance(value, functools.partial)
    )


def alias_target(value: Any, as_type_identifier: bool) -> Any:
    """Return the identifier an entry redirects to, or ``None``.

    Plain strings and classes are aliases only when bound under a type
    identifier; ``Alias`` always is.
    """
    if isinstance(value, Alias):
        return value.target
    if as_type_identifier and (isinstance(value, str) or isinstance(value, type)):
        return value
    return None


def is_instance(value: Any, cls: type) -> bool:
    """``isinstance()`` that accepts any object for a protocol without
    ``@runtime_checkable``, since such a protocol cannot be checked.

    Scalars, ``None``, factories, aliases and classes never match: once
    memoized they would read back as a different kind of entry.
    """
    if getattr(cls, "_is_protocol", False) and not getattr(cls, "_is_runtime_protocol", False):
        return not (
            value is None
            or is_scalar(value)
            or is_factory(value)
            or isinstance(value, (Alias, type))
        )
    return isinstance(value, cls)
