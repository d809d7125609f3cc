"""
AutowireContainer

This module provides the resolution engine. Given a request handler
identifier it builds the handler and its whole dependency graph on
demand, using the annotations of constructors and factories to decide
what to inject. It is responsible for:

- Validating and storing bindings (literals, aliases, factories)
- Constructing unbound classes from their constructor annotations
- Injecting scalar variables into factories with strict coercion
- Memoizing every resolved node as a container-wide singleton
- Bounding resolution depth to stop recursive graphs
- Delegating to an external service locator instead, when given one

Example::

    def make_greeter(name: str) -> Greeter:
        return Greeter(name)

    container = AutowireContainer({
        Greeter: make_greeter,
        "name": "Alice",
    })

    greeter = container.resolve(Greeter)
    assert greeter is container.resolve(Greeter)
"""

import enum
import inspect
import logging
import threading
import typing
from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Tuple, Type, TypeVar, Union

from .bindings import BindingStore
from .coercion import coerce
from .entry import Alias, Identifier, alias_target, is_factory, is_instance, is_scalar
from .exceptions import (
    FactoryScalarExpectedError,
    FinalHandlerError,
    HandlerLoadFailedError,
    HandlerNotCallableError,
    InvalidBindingKindError,
    NotInstantiableError,
    RecursiveFactoryError,
    RecursiveParameterError,
    RecursiveVariableError,
    ScalarExpectedError,
    TypeMismatchError,
    TypeNotFoundError,
    UndefinedVariableError,
    UnexpectedFactoryResultError,
    UnsupportedParameterTypeError,
    UntypedParameterError,
    describe_identifier,
    describe_kind,
)
from .handlers import AccessLogHandler, ErrorHandler
from .introspection import ParameterSpec, constructor_parameters, function_parameters
from .locator import ServiceLocator
from .resolution_context import current_path, resolving
from .type_kind import TypeKind

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Default depth budget: the number of class, alias and variable factory
# hops a single resolution may take
DEFAULT_MAX_DEPTH = 64

Arguments = List[Tuple[ParameterSpec, Any]]


class AutowireContainer:
    """Reflective DI container with memoized, depth-bounded resolution.

    The container is backed either by a binding map or by an external
    ``ServiceLocator``:

    - **Binding map**: identifiers (classes, dotted class paths or
      variable names) mapped to literals, aliases or factories. Unbound
      classes are constructed from their constructor annotations. Every
      resolved node is written back to the map and reused afterwards.
    - **Service locator**: handlers and optional services are taken from
      the locator as they are; no construction happens here.

    Attributes:
        _bindings: The BindingStore (``None`` in locator mode)
        _locator: The external locator (``None`` in map mode)
        _max_depth: Depth budget of every top-level resolution
        _lock: Serializes resolutions so each identifier is built once.
            It is held while factories and constructors run, so a factory
            must not wait on another thread that resolves from the same
            container; that thread would block until the factory returns.

    Example::

        container = AutowireContainer({
            Repository: SqlRepository,            # alias to a subclass
            Database: lambda: Database(":memory:"),
            "page_size": "20",                    # coerced for int params
        })
        handler = container.resolve(ListUsersHandler)

    Raises:
        TypeError: When ``loader`` is neither a mapping nor a locator
        ValueError: When ``max_depth`` is not a non-negative int
        InvalidBindingKindError: When a binding has an invalid value
    """

    def __init__(
        self,
        loader: Union[Mapping[Identifier, Any], BindingStore, ServiceLocator, None] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
            raise ValueError(f"max_depth must be a non-negative int, got {max_depth!r}")

        self._bindings: Optional[BindingStore] = None
        self._locator: Optional[ServiceLocator] = None

        if loader is None:
            self._bindings = BindingStore()
        elif isinstance(loader, BindingStore):
            self._bindings = loader
        elif isinstance(loader, Mapping):
            self._bindings = BindingStore(loader)
        elif isinstance(loader, ServiceLocator):
            self._locator = loader
        else:
            raise TypeError(
                f"Argument #1 (loader) must be of type Mapping|ServiceLocator, "
                f"{describe_kind(loader)} given"
            )

        self._max_depth = max_depth
        self._lock = threading.RLock()

    @property
    def bindings(self) -> Optional[BindingStore]:
        return self._bindings

    @property
    def locator(self) -> Optional[ServiceLocator]:
        return self._locator

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def resolve(self, identifier: Union[Type[T], str]) -> T:
        """Resolve an identifier to an instance.

        Args:
            identifier: A class, or a dotted path naming a class, or a
                string key bound in the container

        Returns:
            The resolved instance. Repeated calls return the same instance.

        Raises:
            HandlerLoadFailedError: When the external locator fails
            AutowireError: Any other resolution failure in map mode

        Example::

            handler = container.resolve(UserHandler)
            same = container.resolve("app.handlers.UserHandler")
        """
        if self._locator is not None:
            try:
                return self._locator.get(identifier)
            except Exception as e:
                raise HandlerLoadFailedError(identifier, e) from e

        with self._lock:
            return self._load_object(identifier, self._max_depth)

    def request_handler(self, identifier: Identifier) -> Callable[..., Any]:
        """Build a request handler callable that resolves ``identifier`` lazily.

        The returned function accepts ``(request, next=None)``. On each call
        it resolves the handler (a memoized singleton in map mode), checks
        it is callable, and invokes it as ``handler(request)`` or, when used
        as middleware, ``handler(request, next)``.

        Raises (on call):
            TypeNotFoundError: When, in map mode, the identifier names no class
            HandlerNotCallableError: When the resolved handler is not callable
        """
        def handle(request: Any, next: Optional[Callable[[Any], Any]] = None) -> Any:
            if self._bindings is not None and self._bindings.expected_type(identifier) is None:
                raise TypeNotFoundError(identifier)

            handler = self.resolve(identifier)
            if not callable(handler):
                raise HandlerNotCallableError(identifier)

            if next is None:
                return handler(request)
            return handler(request, next)

        return handle

    def access_log_handler(self) -> AccessLogHandler:
        """Return the access log middleware, the default one unless overridden."""
        return self._optional_service(AccessLogHandler)

    def error_handler(self) -> ErrorHandler:
        """Return the error handling middleware, the default one unless overridden."""
        return self._optional_service(ErrorHandler)

    def _optional_service(self, cls: Type[T]) -> T:
        if self._locator is not None:
            if self._locator.has(cls):
                return self._locator.get(cls)
            return cls()

        with self._lock:
            return self._load_object(cls, self._max_depth)

    def __call__(self, request: Any, next: Optional[Callable[[Any], Any]] = None) -> Any:
        """Forward to ``next``: in a middleware chain the container is a no-op.

        Raises:
            FinalHandlerError: When used as the last handler of a chain
        """
        if next is None:
            raise FinalHandlerError()
        return next(request)

    def _load_object(self, identifier: Identifier, depth: int) -> Any:
        """Resolve an identifier in object position.

        1. A bound entry is resolved (alias, factory) or returned (instance)
        2. An unbound class is constructed from its constructor annotations

        The result is memoized under the key it was found under, or under
        the class when it was constructed.
        """
        key = self._bindings.lookup(identifier)
        cls = self._bindings.expected_type(identifier)
        if key is None and cls is not None and cls is not identifier:
            # "module.Class" may be bound, or memoized, under the class itself
            key = self._bindings.lookup(cls)

        with resolving(identifier):
            if key is not None:
                return self._load_bound(identifier, key, cls, depth)
            if cls is None:
                raise TypeNotFoundError(identifier)
            return self._construct(cls, depth)

    def _load_bound(self, identifier: Identifier, key: Identifier, cls: Optional[type], depth: int) -> Any:
        entry = self._bindings.get(key)

        target = alias_target(entry, as_type_identifier=True)
        if target is not None:
            value = self._follow_alias(identifier, target, depth)
        elif is_factory(entry):
            arguments = self._load_params(function_parameters(entry), depth, allow_variables=True)
            logger.debug("Invoking factory for %s", describe_identifier(identifier))
            value = self._invoke(entry, arguments)
            if isinstance(value, Alias):
                value = self._follow_alias(identifier, value.target, depth)
        elif is_scalar(entry):
            raise InvalidBindingKindError(identifier, describe_kind(entry))
        else:
            # literal instance, validated on binding or memoized earlier
            return entry

        if cls is None or not is_instance(value, cls):
            raise UnexpectedFactoryResultError(identifier, describe_kind(value))

        self._bindings.put(key, value)
        logger.debug("Memoized %s as %s", describe_identifier(identifier), describe_kind(value))
        return value

    def _follow_alias(self, identifier: Identifier, target: Identifier, depth: int) -> Any:
        if depth < 1:
            raise RecursiveFactoryError(identifier, current_path())

        logger.debug(
            "Resolving %s through %s",
            describe_identifier(identifier),
            describe_identifier(target),
        )
        return self._load_object(target, depth - 1)

    def _construct(self, cls: type, depth: int) -> Any:
        modifier = _non_instantiable_kind(cls)
        if modifier is not None:
            raise NotInstantiableError(cls, modifier)

        # constructors only receive objects, never variables
        arguments = self._load_params(constructor_parameters(cls), depth, allow_variables=False)
        logger.debug("Constructing %s with %d argument(s)", cls.__qualname__, len(arguments))
        instance = self._invoke(cls, arguments)

        self._bindings.put(cls, instance)
        return instance

    def _load_params(self, parameters: List[ParameterSpec], depth: int, allow_variables: bool) -> Arguments:
        """Load arguments for analyzed parameters, in declaration order.

        Args:
            parameters: Output of ``constructor_parameters``/``function_parameters``
            depth: Remaining depth budget
            allow_variables: Whether scalar parameters are loaded as variables

        Returns:
            Pairs of parameter and value
        """
        arguments: Arguments = []

        for param in parameters:
            if param.kind is TypeKind.UNTYPED:
                raise UntypedParameterError(param.position, param.name, param.owner)

            if param.kind is TypeKind.NULLABLE:
                arguments.append((param, None))
                continue

            if param.kind is TypeKind.SCALAR and allow_variables:
                arguments.append((param, self._load_variable(param.name, param.annotation, depth)))
                continue

            if param.kind is not TypeKind.CLASS:
                raise UnsupportedParameterTypeError(
                    param.position, param.name, param.owner, param.type_description
                )

            if isinstance(param.annotation, str) and self._bindings.expected_type(param.annotation) is None:
                # forward reference that names no importable class
                raise TypeNotFoundError(param.annotation)

            if depth < 1:
                raise RecursiveParameterError(param.position, param.name, param.owner, current_path())

            arguments.append((param, self._load_object(param.annotation, depth - 1)))

        return arguments

    def _load_variable(self, name: str, target: type, depth: int) -> Any:
        """Load the scalar variable ``name`` coerced to ``target``.

        A factory bound to the variable is invoked once; its result is
        memoized like any other resolved entry.
        """
        with resolving(name, variable=True):
            if name not in self._bindings:
                raise UndefinedVariableError(name)

            value = self._bindings.get(name)
            if is_factory(value):
                if depth < 1:
                    raise RecursiveVariableError(name, current_path())

                arguments = self._load_params(function_parameters(value), depth - 1, allow_variables=True)
                logger.debug("Invoking factory for variable $%s", name)
                value = self._invoke(value, arguments)
                if not is_scalar(value):
                    raise FactoryScalarExpectedError(name, describe_kind(value))

                self._bindings.put(name, value)

            if not is_scalar(value):
                raise ScalarExpectedError(name, describe_kind(value))

            coerced = coerce(value, target)
            if type(coerced) is not target:
                raise TypeMismatchError(name, target.__name__, type(coerced).__name__)

            return coerced

    @staticmethod
    def _invoke(function: Callable[..., Any], arguments: Arguments) -> Any:
        args = [value for param, value in arguments if not param.keyword_only]
        kwargs = {param.name: value for param, value in arguments if param.keyword_only}
        return function(*args, **kwargs)


def _non_instantiable_kind(cls: type) -> Optional[str]:
    if issubclass(cls, enum.Enum):
        return "enum"
    if getattr(cls, "_is_protocol", False) and typing.Protocol in cls.__mro__:
        return "protocol"
    if inspect.isabstract(cls):
        return "abstract class"
    return None
