# Public API
from .bindings import BindingStore, load_type, type_name
from .coercion import coerce
from .container import DEFAULT_MAX_DEPTH, AutowireContainer
from .entry import Alias, Identifier
from .exceptions import (
    AutowireError,
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
)
from .handlers import AccessLogHandler, ErrorHandler, ErrorResponse
from .locator import ServiceLocator
from .middleware import MiddlewareHandler

__all__ = [
    "AutowireContainer",
    "BindingStore",
    "ServiceLocator",
    "Alias",
    "Identifier",
    "DEFAULT_MAX_DEPTH",
    "coerce",
    "load_type",
    "type_name",
    # Middleware
    "MiddlewareHandler",
    "AccessLogHandler",
    "ErrorHandler",
    "ErrorResponse",
    # Exceptions
    "AutowireError",
    "InvalidBindingKindError",
    "TypeNotFoundError",
    "NotInstantiableError",
    "UntypedParameterError",
    "UnsupportedParameterTypeError",
    "RecursiveParameterError",
    "RecursiveFactoryError",
    "RecursiveVariableError",
    "UnexpectedFactoryResultError",
    "UndefinedVariableError",
    "ScalarExpectedError",
    "FactoryScalarExpectedError",
    "TypeMismatchError",
    "HandlerLoadFailedError",
    "HandlerNotCallableError",
    "FinalHandlerError",
]

# Version is read from the installed distribution metadata
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("autowire")
except PackageNotFoundError:
    # Fallback for development
    __version__ = '0.0.0'
