"""
Introspection

Runtime type introspection used by the container: given a class or a
factory function, list the parameters the container has to supply, each
with its name, 1-based position and a classified annotation.

The analysis follows these rules:

- ``self``/``cls`` are skipped for constructors
- collection stops at the first parameter that has a default value, or
  at ``*args``/``**kwargs``; those are left to the callee
- annotations are evaluated with ``typing.get_type_hints()``; when that
  fails, each string annotation is evaluated on its own in the callee's
  module namespace, and left as a string (a type identifier) otherwise
"""

import functools
import inspect
import types
import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from .entry import SCALAR_TYPES
from .type_kind import TypeKind

_NoneType = type(None)
_UNION_ORIGINS = (Union, types.UnionType)


@dataclass(frozen=True)
class ParameterSpec:
    """A parameter the container has to supply."""
    position: int
    name: str
    kind: TypeKind
    annotation: Any
    owner: str
    keyword_only: bool = False

    @property
    def type_description(self) -> str:
        return describe_annotation(self.annotation)


def describe_annotation(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__qualname__
    if isinstance(annotation, str):
        return annotation
    return str(annotation).replace("typing.", "")


def classify(annotation: Any) -> TypeKind:
    """Classify an (evaluated) annotation.

    Example::

        classify(Database)            # TypeKind.CLASS
        classify(Optional[Database])  # TypeKind.NULLABLE
        classify(int | str)           # TypeKind.COMPOSITE
        classify(List[int])           # TypeKind.BUILTIN
    """
    if annotation is inspect.Parameter.empty:
        return TypeKind.UNTYPED
    if annotation is None or annotation is _NoneType:
        return TypeKind.NULLABLE
    if isinstance(annotation, str):
        return TypeKind.CLASS

    origin = typing.get_origin(annotation)
    if origin in _UNION_ORIGINS:
        if _NoneType in typing.get_args(annotation):
            return TypeKind.NULLABLE
        return TypeKind.COMPOSITE

    if annotation in SCALAR_TYPES:
        return TypeKind.SCALAR
    if annotation is Any:
        return TypeKind.BUILTIN
    if origin is not None or not isinstance(annotation, type):
        return TypeKind.BUILTIN
    if annotation.__module__ == "builtins":
        return TypeKind.BUILTIN
    return TypeKind.CLASS


def constructor_of(cls: type) -> Optional[Callable]:
    """Return the function whose signature builds ``cls``, or ``None``."""
    if cls.__init__ is not object.__init__:
        return cls.__init__
    if cls.__new__ is not object.__new__:
        return cls.__new__
    return None


def owner_name(function: Callable) -> str:
    function = _unwrap(function)
    return getattr(function, "__qualname__", None) or repr(function)


def constructor_parameters(cls: type) -> List[ParameterSpec]:
    """Analyze the constructor of ``cls`` (``self``/``cls`` excluded)."""
    constructor = constructor_of(cls)
    if constructor is None:
        return []
    return _parameters(constructor, skip_first=True)


def function_parameters(function: Callable) -> List[ParameterSpec]:
    """Analyze a factory function, bound method or ``functools.partial``."""
    return _parameters(function, skip_first=False)


def _parameters(function: Callable, skip_first: bool) -> List[ParameterSpec]:
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        # builtins and C extensions without signature metadata
        return []

    owner = owner_name(function)
    hints = _resolve_type_hints(function)

    specs: List[ParameterSpec] = []
    parameters = list(signature.parameters.values())
    if skip_first:
        parameters = parameters[1:]

    for position, param in enumerate(parameters, start=1):
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            break
        if param.default is not inspect.Parameter.empty:
            break

        annotation = hints.get(param.name, param.annotation)
        if isinstance(annotation, str):
            annotation = _resolve_string_annotation(function, annotation)

        specs.append(ParameterSpec(
            position=position,
            name=param.name,
            kind=classify(annotation),
            annotation=annotation,
            owner=owner,
            keyword_only=param.kind == inspect.Parameter.KEYWORD_ONLY,
        ))

    return specs


def _unwrap(function: Callable) -> Callable:
    while isinstance(function, functools.partial):
        function = function.func
    return function


def _resolve_type_hints(function: Callable) -> Dict[str, Any]:
    """Resolve type hints using typing.get_type_hints().

    Returns an empty dict when resolution fails, e.g. for a forward
    reference to a class defined locally in a function. Parameters are
    then resolved one by one by ``_resolve_string_annotation``.
    """
    try:
        return typing.get_type_hints(_unwrap(function))
    except (NameError, TypeError, RecursionError):
        return {}


def _resolve_string_annotation(function: Callable, annotation: str) -> Any:
    """Evaluate a string annotation in the callee's module namespace.

    Unresolvable annotations are returned unchanged. The container then
    tries them as a dotted class path and reports ``TypeNotFoundError``
    when that fails too.
    """
    namespace: Dict[str, Any] = dict(getattr(_unwrap(function), "__globals__", {}))
    try:
        return eval(annotation, namespace)  # noqa: S307
    except (NameError, AttributeError, SyntaxError, TypeError):
        return annotation
