"""
Autowire Exceptions

Custom exception hierarchy for the autowire resolution engine
"""

from typing import Any, Optional


class AutowireError(Exception):
    """
    Base exception for all autowire errors.

    Every failure raised while validating bindings or resolving a
    dependency graph inherits from this class. Nothing is recovered
    locally: the error aborts the current resolution and propagates to
    the caller. Where an underlying error exists it is chained as
    ``__cause__``.

    Example:
        >>> try:
        ...     handler = container.resolve(UserController)
        ... except AutowireError as e:
        ...     print(f"DI error: {e}")
    """

    pass


def describe_kind(value: Any) -> str:
    """Name the kind of a value for error messages (``int``, ``Response``, ...)."""
    if isinstance(value, type):
        return f"class {value.__qualname__}"
    return type(value).__name__


def describe_identifier(identifier: Any) -> str:
    """Render an identifier (class or string) for error messages."""
    if isinstance(identifier, type):
        return identifier.__qualname__
    return str(identifier)


def describe_parameter(position: int, name: str, owner: str) -> str:
    """Render a parameter reference, e.g. ``Argument 1 (db) of Repo.__init__()``."""
    return f"Argument {position} ({name}) of {owner}()"


class InvalidBindingKindError(AutowireError):
    """
    Raised when a binding holds a value of a kind that cannot be injected.

    A bound value must be a scalar (str, int, float, bool), a factory
    function, an alias, or an instance of the class named by its own key.

    Common causes:
        - Binding a list, dict or ``None``
        - Binding an object under a variable name
        - Binding an object that is not an instance of its key
        - Aliasing a class identifier to a scalar variable

    Solution:
        Wrap non-scalar configuration in a factory that builds the object::

            AutowireContainer({
                Settings: lambda: Settings(hosts=["a", "b"]),
            })
    """

    def __init__(self, identifier: Any, kind: str):
        self.identifier = identifier
        self.kind = kind
        super().__init__(
            f"Map for {describe_identifier(identifier)} contains unexpected {kind}"
        )


class TypeNotFoundError(AutowireError):
    """
    Raised when an identifier does not name a loadable class.

    Common causes:
        - Typo in a dotted path such as ``"app.handlers.UserHandler"``
        - An alias or factory redirect pointing at an unknown name
        - A string annotation that cannot be evaluated

    Solution:
        Pass the class object itself, or a full dotted import path.
    """

    def __init__(self, identifier: Any):
        self.identifier = identifier
        super().__init__(f"Class {describe_identifier(identifier)} not found")


class NotInstantiableError(AutowireError):
    """
    Raised when the target class cannot be constructed directly.

    Abstract classes and protocols have no concrete implementation of
    their own. Bind them to a concrete class instead::

        AutowireContainer({Repository: SqlRepository})
    """

    def __init__(self, identifier: Any, kind: str):
        self.identifier = identifier
        self.kind = kind
        super().__init__(
            f"Cannot instantiate {kind} {describe_identifier(identifier)}"
        )


class UntypedParameterError(AutowireError):
    """
    Raised when a constructor or factory parameter has no annotation.

    Autowiring decides what to inject from annotations only::

        # Bad
        def __init__(self, db): ...

        # Good
        def __init__(self, db: Database): ...
    """

    def __init__(self, position: int, name: str, owner: str):
        self.position = position
        self.name = name
        self.owner = owner
        super().__init__(f"{describe_parameter(position, name, owner)} has no type")


class UnsupportedParameterTypeError(AutowireError):
    """
    Raised when a parameter annotation cannot be injected.

    Unions (other than ``Optional``), containers such as ``list`` or
    ``dict``, generics, ``Any`` and ``object`` are never injected.
    Constructors never receive scalar variables either; only factories do.

    Solution:
        Give the parameter a default value, or move the scalar into a
        factory (a ``def``, since lambdas cannot carry annotations)::

            def make_greeter(name: str) -> Greeter:
                return Greeter(name)

            AutowireContainer({Greeter: make_greeter, "name": "Alice"})
    """

    def __init__(self, position: int, name: str, owner: str, type_description: str):
        self.position = position
        self.name = name
        self.owner = owner
        self.type_description = type_description
        super().__init__(
            f"{describe_parameter(position, name, owner)} "
            f"expects unsupported type {type_description}"
        )


def _with_path(message: str, path: Optional[str]) -> str:
    if path:
        return f"{message}. Resolution path: {path}"
    return message


class RecursiveParameterError(AutowireError):
    """
    Raised when the depth budget runs out while loading a class parameter.

    This usually means two classes depend on each other::

        class ServiceA:
            def __init__(self, b: "ServiceB"): ...

        class ServiceB:
            def __init__(self, a: ServiceA): ...  # Circular!
    """

    def __init__(self, position: int, name: str, owner: str, path: Optional[str] = None):
        self.position = position
        self.name = name
        self.owner = owner
        super().__init__(_with_path(
            f"{describe_parameter(position, name, owner)} is recursive", path
        ))


class RecursiveFactoryError(AutowireError):
    """
    Raised when the depth budget runs out while following aliases.

    Typically an alias points back at itself (``{Cache: Alias(Cache)}``)
    or a chain of aliases loops.
    """

    def __init__(self, identifier: Any, path: Optional[str] = None):
        self.identifier = identifier
        super().__init__(_with_path(
            f"Factory for {describe_identifier(identifier)} is recursive", path
        ))


class RecursiveVariableError(AutowireError):
    """Raised when the depth budget runs out while evaluating variable factories."""

    def __init__(self, name: str, path: Optional[str] = None):
        self.name = name
        super().__init__(_with_path(
            f"Container variable ${name} is recursive", path
        ))


class UnexpectedFactoryResultError(AutowireError):
    """
    Raised when an alias or factory produces a value of the wrong type.

    The value reached for a class identifier must be an instance of that
    class. A factory that wants to redirect to another identifier must
    return ``Alias(...)``; a plain string is not followed.
    """

    def __init__(self, identifier: Any, kind: str):
        self.identifier = identifier
        self.kind = kind
        super().__init__(
            f"Factory for {describe_identifier(identifier)} returned unexpected {kind}"
        )


class UndefinedVariableError(AutowireError):
    """
    Raised when a factory asks for a scalar variable that is not bound.

    Scalar factory parameters are looked up by parameter name::

        def make_client(base_url: str) -> Client: ...

        AutowireContainer({Client: make_client, "base_url": "http://..."})
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Container variable ${name} is not defined")


class ScalarExpectedError(AutowireError):
    """Raised when a variable is bound to something other than a scalar."""

    def __init__(self, name: str, kind: str):
        self.name = name
        self.kind = kind
        super().__init__(
            f"Container variable ${name} expected scalar type, but got {kind}"
        )


class FactoryScalarExpectedError(AutowireError):
    """Raised when a variable factory returns something other than a scalar."""

    def __init__(self, name: str, kind: str):
        self.name = name
        self.kind = kind
        super().__init__(
            f"Container variable ${name} expected scalar type from factory, but got {kind}"
        )


class TypeMismatchError(AutowireError):
    """
    Raised when a variable cannot be coerced to the annotated scalar type.

    Coercion is strict: ``"00"`` is not an ``int`` and ``" 0"`` is not a
    ``float``. See ``autowire.coercion`` for the exact rules.
    """

    def __init__(self, name: str, expected: str, actual: str):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Container variable ${name} expected type {expected}, but got {actual}"
        )


class HandlerLoadFailedError(AutowireError):
    """
    Raised when an external service locator fails to provide a handler.

    The locator's own exception is available as ``__cause__``.
    """

    def __init__(self, identifier: Any, cause: BaseException):
        self.identifier = identifier
        self.cause = cause
        super().__init__(
            f"Request handler class {describe_identifier(identifier)} "
            f"failed to load: {cause}"
        )


class HandlerNotCallableError(AutowireError):
    """
    Raised when a resolved request handler cannot be invoked.

    Request handler classes must implement ``__call__(self, request)``
    or, for middleware, ``__call__(self, request, next)``.
    """

    def __init__(self, identifier: Any):
        self.identifier = identifier
        super().__init__(
            f'Request handler class "{describe_identifier(identifier)}" '
            f"has no __call__() method"
        )


class FinalHandlerError(AutowireError):
    """
    Raised when the container itself is invoked as the last handler of a chain.

    The container only forwards to the next handler when used as
    middleware. Omit it from the chain or add a final request handler
    behind it.
    """

    def __init__(self):
        super().__init__("Container should not be used as final request handler")
